"""Tests for configuration loading, paths and logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

from docsmith.domain.company import DEFAULT_COMPANY
from docsmith.runtime.logging import get_logger, level_from_env
from docsmith.runtime.paths import get_paths
from docsmith.runtime.settings import company_from_mapping, load_settings


def test_defaults_without_config_file(tmp_path: Path) -> None:
    settings = load_settings(str(tmp_path / "missing.toml"), environ={})

    assert settings.company == DEFAULT_COMPANY
    assert settings.currency == "KES"
    assert not settings.store.configured


def test_company_toml_overrides_letterhead(tmp_path: Path) -> None:
    config = tmp_path / "company.toml"
    config.write_text(
        'currency = "USD"\n'
        "\n"
        "[company]\n"
        'name = "Lab Supplies Ltd"\n'
        'email = ""\n'
        'bank_details = ["PAY TO LAB SUPPLIES:", "-BANK 123"]\n',
        encoding="utf-8",
    )

    settings = load_settings(
        str(config),
        environ={"DOCSMITH_STORE_URL": "https://db.example.com", "DOCSMITH_STORE_KEY": " key "},
    )

    assert settings.currency == "USD"
    assert settings.company.name == "Lab Supplies Ltd"
    assert settings.company.email == DEFAULT_COMPANY.email
    assert settings.company.bank_details == ("PAY TO LAB SUPPLIES:", "-BANK 123")
    assert settings.store.configured
    assert settings.store.key == "key"


def test_default_config_path_follows_project_home(tmp_path: Path) -> None:
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "company.toml").write_text('[company]\nname = "Home Co"\n', encoding="utf-8")

    assert get_paths().company_profile == tmp_path.resolve() / "config" / "company.toml"
    assert load_settings(environ={}).company.name == "Home Co"


def test_unknown_company_keys_are_ignored() -> None:
    company = company_from_mapping({"name": "X", "fax": "000"})

    assert company.name == "X"
    assert not hasattr(company, "fax")


def test_bank_details_string_is_kept_whole() -> None:
    single = company_from_mapping({"bank_details": "KCB ACC 123"})
    multi = company_from_mapping({"bank_details": "PAY TO LAB SUPPLIES:\n-BANK 123\n"})

    assert single.bank_details == ("KCB ACC 123",)
    assert multi.bank_details == ("PAY TO LAB SUPPLIES:", "-BANK 123")


def test_export_directory_is_created() -> None:
    exports = get_paths().ensure_export_directory()

    assert exports.is_dir()
    assert exports.name == "exports"


def test_loggers_share_the_namespace(monkeypatch) -> None:
    assert get_logger("docsmith.export.exporter").name == "docsmith.export.exporter"
    assert get_logger("scripts.tool").name == "docsmith.scripts.tool"

    monkeypatch.setenv("DOCSMITH_LOG_LEVEL", "debug")
    assert level_from_env() == logging.DEBUG
    monkeypatch.setenv("DOCSMITH_LOG_LEVEL", "chatty")
    assert level_from_env() == logging.INFO

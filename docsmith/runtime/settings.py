"""Company profile overrides, output settings and data-store credentials."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from docsmith.domain.company import DEFAULT_COMPANY
from docsmith.domain.document import CompanyProfile
from docsmith.render.formatting import DEFAULT_CURRENCY
from docsmith.runtime.logging import get_logger
from docsmith.runtime.paths import get_paths

logger = get_logger(__name__)

COMPANY_FIELDS = {f.name for f in fields(CompanyProfile)}


@dataclass(frozen=True)
class StoreSettings:
    url: str = ""
    key: str = ""

    @property
    def configured(self) -> bool:
        return bool(self.url and self.key)


@dataclass(frozen=True)
class Settings:
    company: CompanyProfile = DEFAULT_COMPANY
    currency: str = DEFAULT_CURRENCY
    store: StoreSettings = field(default_factory=StoreSettings)


def _bank_lines(value: Any) -> tuple[str, ...]:
    # A string holds one bank line per text line.
    if isinstance(value, str):
        return tuple(line.strip() for line in value.splitlines() if line.strip())
    return tuple(str(line) for line in value)


def company_from_mapping(data: Mapping[str, Any], base: CompanyProfile = DEFAULT_COMPANY) -> CompanyProfile:
    """
    Overlay known letterhead keys from `data` on `base`.

    Unknown keys are ignored with a warning; empty values keep the base value.
    """
    overrides: dict[str, Any] = {}
    for key, value in data.items():
        if key not in COMPANY_FIELDS:
            logger.warning("Ignoring unknown company setting %r", key)
            continue
        if value in (None, "", [], ()):
            continue
        overrides[key] = _bank_lines(value) if key == "bank_details" else str(value)
    return replace(base, **overrides)


def load_settings(config_path: str | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    """
    Load settings from company.toml and the environment.

    Args:
        config_path: Optional TOML path override. If None, uses the project path.
        environ: Environment mapping; os.environ when omitted.

    Returns:
        Settings with the default letterhead when no file exists.
    """
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    environ = os.environ if environ is None else environ
    path = Path(config_path) if config_path is not None else get_paths().company_profile

    config: dict[str, Any] = {}
    if path.exists():
        with open(path, "rb") as f:
            config = tomllib.load(f)
        logger.debug("Loaded settings from %s", path)

    company = company_from_mapping(config.get("company", {}))
    store = StoreSettings(
        url=environ.get("DOCSMITH_STORE_URL", "").strip(),
        key=environ.get("DOCSMITH_STORE_KEY", "").strip(),
    )
    return Settings(
        company=company,
        currency=str(config.get("currency", DEFAULT_CURRENCY)),
        store=store,
    )

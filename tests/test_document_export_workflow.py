"""Tests for the load -> render -> export workflow results."""

from __future__ import annotations

from datetime import date
from pathlib import Path

from docsmith.application.documents import (
    DocumentRequest,
    load_document,
    run_document_export,
    run_html_render,
)
from docsmith.export import RenderError
from docsmith.runtime.settings import Settings
from docsmith.runtime.store import StoreError

_QUOTATION = {
    "quotation_number": "Q-7",
    "quotation_date": "2024-03-01",
    "customers": {"name": "Kenyatta Lab"},
    "quotation_items": [{"description": "Tube", "quantity": 3, "unit_price": 10}],
}


def test_local_record_is_exported(tmp_path: Path, make_rasterizer) -> None:
    result = run_document_export(
        DocumentRequest(doc_type="quotation", record=_QUOTATION),
        settings=Settings(),
        output_dir=tmp_path,
        rasterizer=make_rasterizer(),
    )

    assert result.status == "exported"
    assert result.path == tmp_path / "Quotation_Q-7.pdf"
    assert result.path.read_bytes().startswith(b"%PDF")
    assert result.exported is not None and result.exported.page_count == 1


def test_default_output_directory_is_project_exports(tmp_path: Path, make_rasterizer) -> None:
    result = run_document_export(
        DocumentRequest(doc_type="quotation", record=_QUOTATION),
        settings=Settings(),
        rasterizer=make_rasterizer(),
    )

    assert result.path == tmp_path.resolve() / "exports" / "Quotation_Q-7.pdf"


def test_store_lookup_without_store_is_reported() -> None:
    result = run_document_export(DocumentRequest(doc_type="invoice", document_id="inv-1"), settings=Settings())

    assert result.status == "store_not_configured"
    assert "DOCSMITH_STORE_URL" in (result.error or "")


def test_store_record_uses_company_from_store(make_store) -> None:
    store = make_store(
        {
            "invoices": [{"id": "inv-1", "invoice_number": "INV-1", "invoice_items": []}],
            "companies": [{"name": "Store Co"}],
        }
    )

    loaded = load_document(DocumentRequest(doc_type="invoice", document_id="inv-1"), settings=Settings(), store=store)

    assert loaded.status == "loaded"
    assert loaded.document is not None and loaded.document.number == "INV-1"
    assert loaded.company is not None and loaded.company.name == "Store Co"


def test_missing_and_failing_store_records(make_store) -> None:
    request = DocumentRequest(doc_type="invoice", document_id="nope")

    missing = load_document(request, settings=Settings(), store=make_store())
    failing = load_document(request, settings=Settings(), store=make_store(error=StoreError("timeout")))
    no_id = load_document(DocumentRequest(doc_type="invoice"), settings=Settings(), store=make_store())

    assert missing.status == "not_found"
    assert failing.status == "store_error"
    assert failing.error == "Data store error: timeout"
    assert no_id.status == "invalid_record"


def test_statement_from_store(make_store) -> None:
    store = make_store(
        {
            "customers": [{"id": "c-1", "customer_code": "C1", "name": "Lab"}],
            "invoices": [{"customer_id": "c-1", "invoice_number": "INV-1", "invoice_date": "2024-01-01", "total_amount": 90}],
        }
    )

    loaded = load_document(
        DocumentRequest(doc_type="statement", document_id="c-1", statement_date=date(2024, 2, 1)),
        settings=Settings(),
        store=store,
    )

    assert loaded.document is not None
    assert loaded.document.number == "STMT-C1-2024-02-01"
    assert loaded.document.totals.total_amount == 90


def test_statement_date_applies_to_local_records() -> None:
    record = {"customer": {"customer_code": "C9"}, "statement_date": "2020-01-01"}

    loaded = load_document(
        DocumentRequest(doc_type="statement", record=record, statement_date=date(2024, 6, 30)),
        settings=Settings(),
    )

    assert loaded.document is not None
    assert loaded.document.date == date(2024, 6, 30)


def test_invalid_line_item_is_reported() -> None:
    record = {**_QUOTATION, "quotation_items": [{"description": "Tube", "quantity": -1, "unit_price": 10}]}

    result = run_document_export(DocumentRequest(doc_type="quotation", record=record), settings=Settings())

    assert result.status == "invalid_record"
    assert (result.error or "").startswith("Invalid line item:")


def test_render_failure_is_reported(make_rasterizer) -> None:
    result = run_document_export(
        DocumentRequest(doc_type="quotation", record=_QUOTATION),
        settings=Settings(),
        rasterizer=make_rasterizer(error=RenderError("Failed to render PDF content: page root element not found")),
    )

    assert result.status == "render_failed"
    assert result.document is not None
    assert "page root" in (result.error or "")


def test_unexpected_export_failure_is_reported(make_rasterizer) -> None:
    result = run_document_export(
        DocumentRequest(doc_type="quotation", record=_QUOTATION),
        settings=Settings(),
        rasterizer=make_rasterizer(error=RuntimeError("Executable doesn't exist at chromium")),
    )

    assert result.status == "render_failed"
    assert result.exported is None
    assert result.error == "Failed to render PDF content: Executable doesn't exist at chromium"


def test_unwritable_output_directory_is_reported(tmp_path: Path, make_rasterizer) -> None:
    blocker = tmp_path / "exports"
    blocker.write_text("not a directory", encoding="utf-8")

    result = run_document_export(
        DocumentRequest(doc_type="quotation", record=_QUOTATION),
        settings=Settings(),
        output_dir=blocker,
        rasterizer=make_rasterizer(),
    )

    assert result.status == "save_failed"
    assert result.exported is not None
    assert (result.error or "").startswith("Could not save Quotation_Q-7.pdf:")


def test_blocked_inline_display_is_reported(make_rasterizer) -> None:
    result = run_document_export(
        DocumentRequest(doc_type="quotation", record=_QUOTATION),
        settings=Settings(),
        disposition="inline",
        rasterizer=make_rasterizer(),
        opener=lambda uri: False,
    )

    assert result.status == "display_blocked"
    assert result.exported is not None


def test_html_render_uses_settings_currency() -> None:
    loaded, html = run_html_render(
        DocumentRequest(doc_type="quotation", record=_QUOTATION),
        settings=Settings(currency="USD"),
    )

    assert loaded.status == "loaded"
    assert html is not None and "USD 30.00" in html

"""Where each document type lives in the store, and how to fetch it."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from docsmith.domain.document import CompanyProfile, DocumentType
from docsmith.runtime.logging import get_logger
from docsmith.runtime.settings import COMPANY_FIELDS, company_from_mapping
from docsmith.runtime.store import DocumentStore, Row, StoreError, select_one

logger = get_logger(__name__)

_PRODUCT = "products(name, product_code, unit_of_measure)"


@dataclass(frozen=True)
class DocumentSource:
    table: str
    columns: str


DOCUMENT_SOURCES: dict[DocumentType, DocumentSource] = {
    "quotation": DocumentSource("quotations", f"*, customers(*), quotation_items(*, {_PRODUCT})"),
    "invoice": DocumentSource("invoices", f"*, customers(*), invoice_items(*, {_PRODUCT})"),
    "proforma": DocumentSource("proforma_invoices", f"*, customers(*), proforma_items(*, {_PRODUCT})"),
    "credit_note": DocumentSource(
        "credit_notes", f"*, customers(*), invoices(invoice_number), credit_note_items(*, {_PRODUCT})"
    ),
    "lpo": DocumentSource("lpos", f"*, suppliers(*), lpo_items(*, {_PRODUCT})"),
    "delivery": DocumentSource(
        "delivery_notes", f"*, customers(*), invoices(invoice_number), delivery_note_items(*, {_PRODUCT})"
    ),
    "receipt": DocumentSource("payments", "*, customers(*), payment_allocations(*, invoices(invoice_number))"),
    "remittance": DocumentSource("remittance_advice", "*, customers(*), remittance_advice_items(*)"),
}


def source_for(doc_type: DocumentType) -> DocumentSource:
    try:
        return DOCUMENT_SOURCES[doc_type]
    except KeyError as exc:
        raise ValueError(f"{doc_type} documents are not fetched by id") from exc


def fetch_document_record(store: DocumentStore, doc_type: DocumentType, document_id: str) -> Row:
    """Fetch one document row with its embedded party and item relations."""
    source = source_for(doc_type)
    return select_one(store, source.table, source.columns, {"id": document_id})


def fetch_statement_record(
    store: DocumentStore,
    customer_id: str,
    statement_date: date | None = None,
) -> dict[str, Any]:
    """Gather a customer and their invoices, payments and delivery notes."""
    customer = select_one(store, "customers", "*", {"id": customer_id})
    filters = {"customer_id": customer_id}
    record: dict[str, Any] = {
        "customer": customer,
        "invoices": store.select("invoices", "*", filters),
        "payments": store.select("payments", "*", filters),
        "delivery_notes": store.select("delivery_notes", "id, invoice_id, delivery_number", filters),
    }
    if statement_date is not None:
        record["statement_date"] = statement_date.isoformat()
    return record


def load_company_profile(store: DocumentStore, base: CompanyProfile) -> CompanyProfile:
    """
    Letterhead from the first ``companies`` row, overlaid on `base`.

    Falls back to `base` when the table is empty or unreadable; a missing
    letterhead must not block printing.
    """
    try:
        rows = store.select("companies", "*", limit=1)
    except StoreError as e:
        logger.warning("Could not load company profile, using configured default: %s", e)
        return base
    if not rows:
        return base
    known = {key: value for key, value in rows[0].items() if key in COMPANY_FIELDS}
    return company_from_mapping(known, base)

"""Map store records of any document type onto the canonical Document."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Any

from docsmith.domain.company import DEFAULT_COMPANY
from docsmith.domain.document import (
    EMPTY_TOTALS,
    ZERO,
    CompanyProfile,
    DeliveryInfo,
    DeliveryLine,
    Document,
    DocumentType,
    LineItem,
)
from docsmith.domain.tax import apply_line_amounts, calculate_document_totals
from docsmith.normalize.aliases import (
    DELIVERY_LINE_FIELDS,
    LINE_ITEM_FIELDS,
    DocumentAliases,
    aliases_for,
)
from docsmith.normalize.fields import (
    Record,
    lookup,
    resolve_collection,
    resolve_date,
    resolve_decimal,
    resolve_optional_decimal,
    resolve_text,
    to_bool,
    with_collection_aliases,
)
from docsmith.normalize.party import resolve_party
from docsmith.normalize.payments import normalize_receipt, normalize_remittance
from docsmith.normalize.statement import normalize_statement

logger = logging.getLogger(__name__)

PRICED_TYPES: frozenset[DocumentType] = frozenset({"quotation", "invoice", "proforma", "credit_note", "lpo"})
DELIVERY_ITEM_COLLECTIONS = ("delivery_note_items", "delivery_items")


def normalize_line_item(row: Record) -> LineItem:
    """Map one stored item row to a LineItem with freshly computed amounts."""
    f = LINE_ITEM_FIELDS
    discount_percentage = resolve_decimal(row, f["discount_percentage"])
    discount_amount = resolve_optional_decimal(row, f["discount_amount"])
    # A stored discount_amount next to a percentage is derived data; the
    # percentage governs. A zero amount means no explicit discount.
    if discount_percentage > ZERO or (discount_amount is not None and discount_amount == ZERO):
        discount_amount = None

    item = LineItem(
        description=resolve_text(row, f["description"], default="Unknown Item"),
        quantity=resolve_decimal(row, f["quantity"]),
        unit_price=resolve_decimal(row, f["unit_price"]),
        discount_percentage=discount_percentage,
        discount_amount=discount_amount,
        tax_percentage=resolve_decimal(row, f["tax_percentage"]),
        tax_inclusive=to_bool(lookup(row, f["tax_inclusive"][0])),
        product_name=resolve_text(row, f["product_name"]),
        product_code=resolve_text(row, f["product_code"]),
        unit_of_measure=resolve_text(row, f["unit_of_measure"], default="pcs"),
    )
    return apply_line_amounts(item)


def _normalize_priced(
    record: Record,
    doc_type: DocumentType,
    aliases: DocumentAliases,
    company: CompanyProfile,
) -> Document:
    f = aliases.fields
    items = [normalize_line_item(row) for row in resolve_collection(record, aliases.item_collections)]

    paid_amount = resolve_decimal(record, f["paid_amount"]) if "paid_amount" in f else None
    applied_amount = resolve_decimal(record, f["applied_amount"]) if "applied_amount" in f else None
    totals = calculate_document_totals(items, paid_amount=paid_amount, applied_amount=applied_amount)

    notes = resolve_text(record, f["notes"])
    terms = resolve_text(record, f["terms_and_conditions"])
    if doc_type in ("invoice", "proforma") and company.invoice_terms:
        terms = company.invoice_terms
    lpo_number = resolve_text(record, f["lpo_number"]) if "lpo_number" in f else ""

    if doc_type == "lpo":
        contact_person = resolve_text(record, f["contact_person"])
        contact_phone = resolve_text(record, f["contact_phone"])
        if contact_person:
            notes += f"\n\nContact Person: {contact_person}"
        if contact_phone:
            notes += f"\nContact Phone: {contact_phone}"
        notes = notes.strip()

    if doc_type == "credit_note":
        invoice_number = resolve_text(record, f["invoice_number"])
        if invoice_number and not lpo_number:
            lpo_number = f"Related Invoice: {invoice_number}"

    return Document(
        type=doc_type,
        number=resolve_text(record, f["number"]),
        date=resolve_date(record, f["date"]),
        party=resolve_party(record, aliases),
        items=items,
        totals=totals,
        notes=notes,
        terms_and_conditions=terms,
        due_date=resolve_date(record, f["due_date"]) if "due_date" in f else None,
        valid_until=resolve_date(record, f["valid_until"]) if "valid_until" in f else None,
        lpo_number=lpo_number,
        company=company,
    )


def related_invoice_number(record: Record) -> str:
    """Resolve the invoice a delivery note belongs to, or ``N/A``."""
    f = aliases_for("delivery").fields
    invoice_number = resolve_text(record, f["invoice_number"])
    if invoice_number:
        return invoice_number
    invoice_id = resolve_text(record, f["invoice_id"])
    if invoice_id:
        return f"INV-{invoice_id[-8:]}"
    return "N/A"


def normalize_delivery_line(row: Record, invoice_number: str) -> DeliveryLine:
    f = DELIVERY_LINE_FIELDS
    description = resolve_text(row, f["description"], default="Unknown Item")
    if invoice_number != "N/A":
        description = f"{description} (From Invoice: {invoice_number})"
    return DeliveryLine(
        description=description,
        quantity_ordered=resolve_decimal(row, f["quantity_ordered"]),
        quantity_delivered=resolve_decimal(row, f["quantity_delivered"]),
        unit_of_measure=resolve_text(row, f["unit_of_measure"], default="pcs"),
    )


def _normalize_delivery(record: Record, aliases: DocumentAliases, company: CompanyProfile) -> Document:
    f = aliases.fields
    invoice_number = related_invoice_number(record)
    delivery_date = resolve_date(record, f["date"])
    info = DeliveryInfo(
        delivery_date=delivery_date,
        delivery_address=resolve_text(record, f["delivery_address"]),
        delivery_method=resolve_text(record, f["delivery_method"]),
        carrier=resolve_text(record, f["carrier"]),
        tracking_number=resolve_text(record, f["tracking_number"]),
        delivered_by=resolve_text(record, f["delivered_by"]),
        received_by=resolve_text(record, f["received_by"]),
        invoice_number=invoice_number,
    )
    lines = [
        normalize_delivery_line(row, invoice_number) for row in resolve_collection(record, aliases.item_collections)
    ]
    return Document(
        type="delivery",
        number=resolve_text(record, f["number"]),
        date=delivery_date,
        party=resolve_party(record, aliases),
        totals=EMPTY_TOTALS,
        notes=resolve_text(record, f["notes"]) or f"Items delivered as per Invoice {invoice_number}",
        lpo_number=f"Related Invoice: {invoice_number}",
        company=company,
        delivery=info,
        delivery_lines=lines,
    )


def map_delivery_note_for_display(record: Record) -> dict[str, Any]:
    """
    Expose a stored delivery note under the names display code expects.

    `delivery_number` is surfaced as `delivery_note_number` and the item rows
    are available under both collection names.
    """
    mapped = with_collection_aliases(record, DELIVERY_ITEM_COLLECTIONS)
    mapped["delivery_note_number"] = resolve_text(record, ("delivery_number", "delivery_note_number"))
    invoice_number = resolve_text(record, ("invoices.invoice_number", "invoice_number"))
    if invoice_number:
        mapped["invoice_number"] = invoice_number
    return mapped


def map_delivery_note_for_storage(record: Record) -> dict[str, Any]:
    """Inverse of the display mapping: `delivery_note_number` -> `delivery_number`."""
    mapped = dict(record)
    mapped["delivery_number"] = mapped.pop("delivery_note_number", None)
    return mapped


def recompute_document(document: Document) -> Document:
    """
    Recompute line amounts and totals of an already-canonical document.

    Only documents built from priced line items carry derived money fields;
    other types are returned unchanged.
    """
    if document.type not in PRICED_TYPES:
        return document
    items = [apply_line_amounts(item) for item in document.items]
    totals = calculate_document_totals(
        items,
        paid_amount=document.totals.paid_amount,
        applied_amount=document.totals.applied_amount,
    )
    return replace(document, items=items, totals=totals)


def normalize_document(
    record: Record | Document,
    doc_type: DocumentType,
    *,
    company: CompanyProfile | None = None,
    today: date | None = None,
) -> Document:
    """
    Map a store record onto the canonical Document for `doc_type`.

    Derived money fields are always recomputed rather than trusted.
    Passing an existing Document recomputes it in place of re-mapping.

    Args:
        record: Raw record (with embedded relations) or a canonical Document.
        doc_type: Document type tag.
        company: Letterhead to attach; the built-in default when omitted.
        today: Reference date for generated numbers and statements.
    """
    if isinstance(record, Document):
        if record.type != doc_type:
            raise ValueError(f"Document is a {record.type}, not a {doc_type}")
        return recompute_document(record)

    company = company or DEFAULT_COMPANY
    today = today or date.today()
    aliases = aliases_for(doc_type)

    if doc_type in PRICED_TYPES:
        document = _normalize_priced(record, doc_type, aliases, company)
    elif doc_type == "delivery":
        document = _normalize_delivery(record, aliases, company)
    elif doc_type == "receipt":
        document = normalize_receipt(record, aliases, company, today)
    elif doc_type == "remittance":
        document = normalize_remittance(record, aliases, company, today)
    else:
        document = normalize_statement(record, aliases, company, today)

    logger.debug("Normalized %s %s (%d rows)", doc_type, document.number, _row_count(document))
    return document


def _row_count(document: Document) -> int:
    return len(document.items) + len(document.delivery_lines) + len(document.statement_lines) + len(
        document.allocations
    )

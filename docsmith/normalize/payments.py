"""Payment receipts and remittance advices."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from docsmith.domain.document import ZERO, CompanyProfile, Document, LineItem, RemittanceLine
from docsmith.domain.tax import apply_line_amounts, calculate_document_totals, fixed_totals
from docsmith.normalize.aliases import PAYMENT_ALLOCATION_FIELDS, REMITTANCE_LINE_FIELDS, DocumentAliases
from docsmith.normalize.fields import (
    Record,
    resolve_collection,
    resolve_date,
    resolve_decimal,
    resolve_optional_decimal,
    resolve_text,
)
from docsmith.normalize.party import resolve_party

RECEIPT_TERMS = "Thank you for your payment. This receipt confirms that payment has been received and processed."
REMITTANCE_TERMS = "This remittance advice details payments made to your account."
REMITTANCE_NOTES = "Remittance advice for payments made"

_REMITTANCE_TYPE_LABELS = {"invoice": "Invoice", "credit_note": "Credit Note"}


def _payment_line(description: str, amount: Decimal) -> LineItem:
    return apply_line_amounts(LineItem(description=description, quantity=Decimal(1), unit_price=amount))


def normalize_receipt(record: Record, aliases: DocumentAliases, company: CompanyProfile, today: date) -> Document:
    """
    Build a payment receipt: one row per invoice allocation, or a single
    ``Payment received`` row when the payment was not allocated.

    Any part of the payment not covered by allocations is shown as an
    unallocated row so the receipt total always equals the amount paid.
    """
    f = aliases.fields
    amount = resolve_decimal(record, f["amount"])
    reference = resolve_text(record, f["reference_number"])
    allocations = resolve_collection(record, aliases.item_collections)

    items: list[LineItem] = []
    first_invoice = ""
    for allocation in allocations:
        invoice_number = resolve_text(allocation, PAYMENT_ALLOCATION_FIELDS["invoice_number"], default="N/A")
        first_invoice = first_invoice or invoice_number
        allocated = resolve_decimal(allocation, PAYMENT_ALLOCATION_FIELDS["amount"])
        items.append(_payment_line(f"Payment to Invoice {invoice_number}", allocated))

    if items:
        unallocated = amount - sum((item.line_total for item in items), ZERO)
        if unallocated > ZERO:
            items.append(_payment_line("Unallocated amount", unallocated))
    else:
        suffix = f" (Ref: {reference})" if reference else ""
        items.append(_payment_line(f"Payment received{suffix}", amount))

    method = resolve_text(record, f["method"]).replace("_", " ") or "Unknown method"
    notes = (
        f"Payment received via {method}\n\n"
        f"Reference: {reference or 'N/A'}\n"
        f"Invoice: {first_invoice or 'N/A'}"
    )

    return Document(
        type="receipt",
        number=resolve_text(record, f["number"]) or f"REC-{today:%Y%m%d}",
        date=resolve_date(record, f["date"]) or today,
        party=resolve_party(record, aliases),
        items=items,
        totals=calculate_document_totals(items),
        notes=notes,
        terms_and_conditions=RECEIPT_TERMS,
        company=company,
    )


def normalize_remittance_line(row: Record) -> RemittanceLine:
    """Map one remittance allocation row, deriving type/number from legacy shapes."""
    f = REMITTANCE_LINE_FIELDS
    document_number = resolve_text(row, f["document_number"])
    if document_number:
        raw_type = resolve_text(row, f["document_type"])
        document_type = _REMITTANCE_TYPE_LABELS.get(raw_type, "Payment")
    else:
        description = resolve_text(row, f["description"])
        if ":" in description:
            label, _, number = description.partition(":")
            document_type, document_number = label.strip(), number.strip()
        else:
            document_type = "Payment"
            document_number = (
                resolve_text(row, f["invoice_reference"]) or resolve_text(row, f["credit_reference"]) or description
            )

    return RemittanceLine(
        document_date=resolve_date(row, f["document_date"]),
        document_type=document_type,
        document_number=document_number,
        invoice_amount=resolve_optional_decimal(row, f["invoice_amount"]),
        credit_amount=resolve_optional_decimal(row, f["credit_amount"]),
        payment_amount=resolve_decimal(row, f["payment_amount"]),
    )


def normalize_remittance(record: Record, aliases: DocumentAliases, company: CompanyProfile, today: date) -> Document:
    """Build a remittance advice with one row per allocated document."""
    f = aliases.fields
    lines = [normalize_remittance_line(row) for row in resolve_collection(record, aliases.item_collections)]
    total = resolve_optional_decimal(record, f["total_payment"])
    if total is None:
        total = sum((line.payment_amount for line in lines), ZERO)

    return Document(
        type="remittance",
        number=resolve_text(record, f["number"]) or f"REM-{today:%Y%m%d}",
        date=resolve_date(record, f["date"]) or today,
        party=resolve_party(record, aliases),
        totals=fixed_totals(total),
        notes=resolve_text(record, f["notes"]) or REMITTANCE_NOTES,
        terms_and_conditions=REMITTANCE_TERMS,
        company=company,
        allocations=lines,
    )

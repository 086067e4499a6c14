"""Per-type layout configuration consumed by the single HTML builder.

Each document type differs from the shared skeleton only in its table
columns, a handful of labels and which optional blocks are present.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from docsmith.domain.document import DocumentType

RowKind = Literal["line_item", "receipt", "delivery", "statement", "remittance"]

QUOTATION_FOOTER = (
    "We trust that you will look at this quote satisfactorily........, "
    "looking forward to the order. Thank you for Your business!"
)


@dataclass(frozen=True)
class Column:
    """One table column: the cell key the builder fills and its header."""

    key: str
    header: str
    width: int
    # Row attribute that must be non-zero/non-empty on some row for the
    # column to be shown at all.
    visible_when: str | None = None


@dataclass(frozen=True)
class DocumentTemplate:
    row_kind: RowKind
    columns: tuple[Column, ...]
    party_label: str = "Client"
    date_label: str = "Date"
    due_date_label: str = "Due Date"
    amount_label: str = "Amount"
    total_label: str = "TOTAL:"
    show_totals: bool = True
    show_payment_rows: bool = False
    show_credit_rows: bool = False
    watermark: str = ""
    terms_on_new_page: bool = False
    show_bank_details: bool = False
    show_delivery_info: bool = False
    show_signatures: bool = False
    show_aging: bool = False
    # Closing remark drawn in a reserved band at the bottom of every page.
    footer_text: str = ""


_LINE_ITEM_COLUMNS = (
    Column("index", "Item Number", 12),
    Column("product_name", "Item Name", 18),
    Column("description", "Description", 30),
    Column("units", "Units", 10),
    Column("unit_price", "Unit Price", 14),
    Column("line_total", "Line Total", 16),
)

# Discount and tax breakdown appear only when some item carries a value.
_LINE_ITEM_COLUMNS_WITH_BREAKDOWN = (
    *_LINE_ITEM_COLUMNS[:5],
    Column("discount_percentage", "Disc %", 8, visible_when="discount_percentage"),
    Column("discount_amount", "Discount", 10, visible_when="discount_amount"),
    Column("tax_percentage", "Tax %", 8, visible_when="tax_percentage"),
    Column("tax_amount", "Tax Amount", 10, visible_when="tax_amount"),
    _LINE_ITEM_COLUMNS[5],
)

_RECEIPT_COLUMNS = (
    Column("index", "#", 8),
    Column("description", "Description", 62),
    Column("line_total", "Amount", 30),
)

_DELIVERY_COLUMNS = (
    Column("index", "#", 5),
    Column("description", "Item Description", 40),
    Column("quantity_ordered", "Ordered Qty", 15),
    Column("quantity_delivered", "Delivered Qty", 15),
    Column("unit_of_measure", "Unit", 15),
    Column("status", "Status", 10),
)

_STATEMENT_COLUMNS = (
    Column("transaction_date", "Date", 13),
    Column("reference", "Reference", 15),
    Column("lpo_number", "LPO No.", 12, visible_when="lpo_number"),
    Column("description", "Description", 24),
    Column("debit", "Debit", 12),
    Column("credit", "Credit", 12),
    Column("balance", "Balance", 12),
)

_REMITTANCE_COLUMNS = (
    Column("document_date", "Date", 15),
    Column("document_type", "Document Type", 15),
    Column("document_number", "Document Number", 20),
    Column("invoice_amount", "Invoice Amount", 16),
    Column("credit_amount", "Credit Amount", 16),
    Column("payment_amount", "Payment Amount", 18),
)

TEMPLATES: dict[DocumentType, DocumentTemplate] = {
    "quotation": DocumentTemplate(
        row_kind="line_item",
        columns=_LINE_ITEM_COLUMNS,
        footer_text=QUOTATION_FOOTER,
    ),
    "invoice": DocumentTemplate(
        row_kind="line_item",
        columns=_LINE_ITEM_COLUMNS,
        show_payment_rows=True,
        terms_on_new_page=True,
        show_bank_details=True,
    ),
    "proforma": DocumentTemplate(
        row_kind="line_item",
        columns=_LINE_ITEM_COLUMNS_WITH_BREAKDOWN,
        show_payment_rows=True,
        watermark="Proforma",
        terms_on_new_page=True,
        show_bank_details=True,
    ),
    "credit_note": DocumentTemplate(
        row_kind="line_item",
        columns=_LINE_ITEM_COLUMNS_WITH_BREAKDOWN,
        show_credit_rows=True,
    ),
    "lpo": DocumentTemplate(
        row_kind="line_item",
        columns=_LINE_ITEM_COLUMNS_WITH_BREAKDOWN,
        party_label="Supplier",
        date_label="Order Date",
        due_date_label="Expected Delivery",
        amount_label="Order Total",
    ),
    "delivery": DocumentTemplate(
        row_kind="delivery",
        columns=_DELIVERY_COLUMNS,
        show_totals=False,
        show_delivery_info=True,
        show_signatures=True,
    ),
    "statement": DocumentTemplate(
        row_kind="statement",
        columns=_STATEMENT_COLUMNS,
        total_label="TOTAL OUTSTANDING:",
        show_aging=True,
    ),
    "receipt": DocumentTemplate(
        row_kind="receipt",
        columns=_RECEIPT_COLUMNS,
        amount_label="Amount Paid",
    ),
    "remittance": DocumentTemplate(
        row_kind="remittance",
        columns=_REMITTANCE_COLUMNS,
        amount_label="Total Payment",
    ),
}


def template_for(doc_type: DocumentType) -> DocumentTemplate:
    try:
        return TEMPLATES[doc_type]
    except KeyError as exc:
        raise ValueError(f"Unknown document type: {doc_type}") from exc

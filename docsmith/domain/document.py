"""Data models for financial documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Literal

DocumentType = Literal[
    "quotation",
    "invoice",
    "proforma",
    "credit_note",
    "delivery",
    "statement",
    "receipt",
    "remittance",
    "lpo",
]

DOCUMENT_TYPES: tuple[DocumentType, ...] = (
    "quotation",
    "invoice",
    "proforma",
    "credit_note",
    "delivery",
    "statement",
    "receipt",
    "remittance",
    "lpo",
)

# Display titles are part of the printed output and the download filename.
DOCUMENT_TITLES: dict[DocumentType, str] = {
    "quotation": "Quotation",
    "invoice": "Invoice",
    "proforma": "Proforma Invoice",
    "credit_note": "Credit Note",
    "delivery": "Delivery Note",
    "statement": "Customer Statement",
    "receipt": "Payment Receipt",
    "remittance": "Remittance Advice",
    "lpo": "Purchase Order",
}

ZERO = Decimal("0")


def document_title(doc_type: DocumentType) -> str:
    """Return the printed title for a document type tag."""
    return DOCUMENT_TITLES[doc_type]


@dataclass(frozen=True)
class Party:
    """Counterparty printed on a document (customer or supplier)."""

    name: str
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    country: str = ""


@dataclass(frozen=True)
class CompanyProfile:
    """Letterhead data merged into every rendered document."""

    name: str
    address: str = ""
    city: str = ""
    country: str = ""
    phone: str = ""
    email: str = ""
    tax_number: str = ""
    registration_number: str = ""
    logo_url: str = ""
    bank_details: tuple[str, ...] = ()
    invoice_terms: str = ""


@dataclass
class LineItem:
    """A single billable row on a financial document."""

    description: str
    quantity: Decimal
    unit_price: Decimal
    discount_percentage: Decimal = ZERO
    # None means "derive from discount_percentage".
    discount_amount: Decimal | None = None
    tax_percentage: Decimal = ZERO
    tax_inclusive: bool = False
    tax_amount: Decimal = ZERO
    line_total: Decimal = ZERO
    product_name: str = ""
    product_code: str = ""
    unit_of_measure: str = "pcs"


@dataclass(frozen=True)
class LineAmounts:
    """Computed money fields for one line item (unrounded)."""

    base_amount: Decimal
    discount_total: Decimal
    taxable_amount: Decimal
    tax_amount: Decimal
    line_total: Decimal

    @property
    def net_amount(self) -> Decimal:
        # Post-discount amount excluding tax, for both pricing conventions.
        return self.line_total - self.tax_amount


@dataclass(frozen=True)
class DocumentTotals:
    """Aggregate money fields of a document (unrounded)."""

    subtotal: Decimal
    tax_total: Decimal
    total_amount: Decimal
    paid_amount: Decimal | None = None
    balance_due: Decimal | None = None
    applied_amount: Decimal | None = None
    balance: Decimal | None = None


EMPTY_TOTALS = DocumentTotals(subtotal=ZERO, tax_total=ZERO, total_amount=ZERO)


@dataclass(frozen=True)
class DeliveryInfo:
    """Shipping metadata printed on delivery notes."""

    delivery_date: date | None = None
    delivery_address: str = ""
    delivery_method: str = ""
    carrier: str = ""
    tracking_number: str = ""
    delivered_by: str = ""
    received_by: str = ""
    invoice_number: str = ""


@dataclass(frozen=True)
class DeliveryLine:
    """Ordered vs delivered quantity for one delivered product."""

    description: str
    quantity_ordered: Decimal
    quantity_delivered: Decimal
    unit_of_measure: str = "pcs"

    @property
    def is_complete(self) -> bool:
        return self.quantity_delivered >= self.quantity_ordered


@dataclass(frozen=True)
class StatementLine:
    """One invoice (debit) or payment (credit) row of a customer statement."""

    transaction_date: date | None
    transaction_type: Literal["invoice", "payment"]
    reference: str
    description: str
    debit: Decimal
    credit: Decimal
    balance: Decimal
    lpo_number: str = ""
    delivery_note_number: str = ""
    invoice_number: str = ""
    due_date: date | None = None
    days_overdue: int = 0


@dataclass(frozen=True)
class AgingSummary:
    """Outstanding invoice amounts bucketed by days overdue."""

    current: Decimal = ZERO
    days_1_30: Decimal = ZERO
    days_31_60: Decimal = ZERO
    days_61_90: Decimal = ZERO
    over_90: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.current + self.days_1_30 + self.days_31_60 + self.days_61_90 + self.over_90


@dataclass(frozen=True)
class RemittanceLine:
    """One allocation row on a remittance advice."""

    document_date: date | None
    document_type: str
    document_number: str
    invoice_amount: Decimal | None
    credit_amount: Decimal | None
    payment_amount: Decimal


@dataclass
class Document:
    """Canonical in-memory representation shared by all document types."""

    type: DocumentType
    number: str
    date: date | None
    party: Party
    items: list[LineItem] = field(default_factory=list)
    totals: DocumentTotals = EMPTY_TOTALS
    notes: str = ""
    terms_and_conditions: str = ""
    due_date: date | None = None
    valid_until: date | None = None
    lpo_number: str = ""
    company: CompanyProfile | None = None
    # Type-specific sections
    delivery: DeliveryInfo | None = None
    delivery_lines: list[DeliveryLine] = field(default_factory=list)
    statement_lines: list[StatementLine] = field(default_factory=list)
    aging: AgingSummary | None = None
    allocations: list[RemittanceLine] = field(default_factory=list)

    @property
    def title(self) -> str:
        return document_title(self.type)

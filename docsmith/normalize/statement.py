"""Customer statement of account built from invoices and payments."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from docsmith.domain.document import (
    ZERO,
    AgingSummary,
    CompanyProfile,
    Document,
    StatementLine,
)
from docsmith.domain.tax import fixed_totals, quantize_money
from docsmith.normalize.aliases import (
    STATEMENT_DELIVERY_FIELDS,
    STATEMENT_INVOICE_FIELDS,
    STATEMENT_PAYMENT_FIELDS,
    DocumentAliases,
)
from docsmith.normalize.fields import Record, resolve_collection, resolve_date, resolve_decimal, resolve_text
from docsmith.normalize.party import resolve_party

STATEMENT_TERMS = (
    "Please remit payment for any outstanding amounts. "
    "Contact us if you have any questions about this statement."
)


def days_overdue(due_date: date | None, as_of: date) -> int:
    if due_date is None:
        return 0
    return max(0, (as_of - due_date).days)


def aging_summary(invoices: list[Record], as_of: date) -> AgingSummary:
    """
    Bucket each invoice's outstanding amount by days past its due date.

    Invoices without a due date count as current; settled invoices are
    skipped.
    """
    buckets = {"current": ZERO, "days_1_30": ZERO, "days_31_60": ZERO, "days_61_90": ZERO, "over_90": ZERO}
    f = STATEMENT_INVOICE_FIELDS
    for invoice in invoices:
        outstanding = resolve_decimal(invoice, f["total_amount"]) - resolve_decimal(invoice, f["paid_amount"])
        if outstanding <= ZERO:
            continue
        overdue = days_overdue(resolve_date(invoice, f["due_date"]), as_of)
        if overdue == 0:
            key = "current"
        elif overdue <= 30:
            key = "days_1_30"
        elif overdue <= 60:
            key = "days_31_60"
        elif overdue <= 90:
            key = "days_61_90"
        else:
            key = "over_90"
        buckets[key] += outstanding
    return AgingSummary(**buckets)


def _delivery_numbers_by_invoice(delivery_notes: list[Record]) -> dict[str, str]:
    numbers: dict[str, str] = {}
    for note in delivery_notes:
        invoice_id = resolve_text(note, STATEMENT_DELIVERY_FIELDS["invoice_id"])
        number = resolve_text(note, STATEMENT_DELIVERY_FIELDS["number"])
        if invoice_id and number:
            numbers.setdefault(invoice_id, number)
    return numbers


def _transactions(invoices: list[Record], payments: list[Record], delivery_notes: list[Record], as_of: date):
    delivery_numbers = _delivery_numbers_by_invoice(delivery_notes)
    fi = STATEMENT_INVOICE_FIELDS
    for invoice in invoices:
        number = resolve_text(invoice, fi["number"])
        due_date = resolve_date(invoice, fi["due_date"])
        yield {
            "transaction_date": resolve_date(invoice, fi["date"]),
            "transaction_type": "invoice",
            "reference": number,
            "description": f"Invoice {number}",
            "debit": resolve_decimal(invoice, fi["total_amount"]),
            "credit": ZERO,
            "lpo_number": resolve_text(invoice, fi["lpo_number"]),
            "delivery_note_number": delivery_numbers.get(resolve_text(invoice, fi["id"]), ""),
            "invoice_number": number,
            "due_date": due_date,
            "days_overdue": days_overdue(due_date, as_of),
        }

    fp = STATEMENT_PAYMENT_FIELDS
    for payment in payments:
        method = resolve_text(payment, fp["method"], default="Cash").replace("_", " ")
        yield {
            "transaction_date": resolve_date(payment, fp["date"]),
            "transaction_type": "payment",
            "reference": resolve_text(payment, fp["reference"], default="PMT"),
            "description": f"Payment - {method}",
            "debit": ZERO,
            "credit": resolve_decimal(payment, fp["amount"]),
        }


def build_statement_lines(
    invoices: list[Record],
    payments: list[Record],
    delivery_notes: list[Record],
    as_of: date,
) -> list[StatementLine]:
    """
    Merge invoices (debits) and payments (credits) in date order with a
    running balance. Undated rows sort last; ties keep invoices first.
    """
    transactions = sorted(
        _transactions(invoices, payments, delivery_notes, as_of),
        key=lambda row: (row["transaction_date"] is None, row["transaction_date"] or date.min),
    )
    running = ZERO
    lines: list[StatementLine] = []
    for row in transactions:
        running += row["debit"] - row["credit"]
        lines.append(StatementLine(balance=running, **row))
    return lines


def _aging_notes(statement_date: date, aging: AgingSummary) -> str:
    rows = [
        ("Current", aging.current),
        ("1-30 Days", aging.days_1_30),
        ("31-60 Days", aging.days_31_60),
        ("61-90 Days", aging.days_61_90),
        ("Over 90 Days", aging.over_90),
    ]
    summary = "\n".join(f"{label}: {quantize_money(amount):,.2f}" for label, amount in rows)
    return (
        f"Statement of Account as of {statement_date:%d/%m/%Y}\n\n"
        "This statement shows all transactions including invoices (debits) "
        "and payments (credits) with running balance.\n\n"
        f"Aging Summary for Outstanding Invoices:\n{summary}"
    )


def normalize_statement(record: Record, aliases: DocumentAliases, company: CompanyProfile, today: date) -> Document:
    """
    Build a customer statement from ``{customer, invoices, payments,
    statement_date, delivery_notes}``.

    Days overdue and aging are measured against the statement date. The
    statement total is the closing running balance.
    """
    f = aliases.fields
    statement_date = resolve_date(record, f["statement_date"]) or today
    invoices = resolve_collection(record, aliases.item_collections)
    payments = resolve_collection(record, aliases.extra["payments"])
    delivery_notes = resolve_collection(record, aliases.extra["delivery_notes"])

    lines = build_statement_lines(invoices, payments, delivery_notes, statement_date)
    closing: Decimal = lines[-1].balance if lines else ZERO
    aging = aging_summary(invoices, statement_date)
    customer_code = resolve_text(record, f["customer_code"], default="UNKNOWN")

    return Document(
        type="statement",
        number=f"STMT-{customer_code}-{statement_date.isoformat()}",
        date=statement_date,
        party=resolve_party(record, aliases),
        totals=fixed_totals(closing),
        notes=_aging_notes(statement_date, aging),
        terms_and_conditions=STATEMENT_TERMS,
        company=company,
        statement_lines=lines,
        aging=aging,
    )

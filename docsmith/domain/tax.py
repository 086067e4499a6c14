"""Tax, discount and total computation for document line items.

All values stay unrounded; `quantize_money` is applied only when a value is
displayed, so rounding error does not compound across many line items.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal

from docsmith.domain.document import ZERO, DocumentTotals, LineAmounts, LineItem

HUNDRED = Decimal("100")
CENT = Decimal("0.01")


class LineItemValidationError(ValueError):
    """Raised when a line item carries values the calculator refuses."""


def quantize_money(value: Decimal) -> Decimal:
    """Round a money value to cents for display."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _check_percentage(name: str, value: Decimal) -> None:
    if value < ZERO or value > HUNDRED:
        raise LineItemValidationError(f"{name} must be between 0 and 100, got {value}")


def validate_line_item(item: LineItem) -> None:
    """Reject negative amounts and out-of-range percentages."""
    if item.quantity < ZERO:
        raise LineItemValidationError(f"quantity must not be negative, got {item.quantity}")
    if item.unit_price < ZERO:
        raise LineItemValidationError(f"unit_price must not be negative, got {item.unit_price}")
    if item.discount_amount is not None and item.discount_amount < ZERO:
        raise LineItemValidationError(f"discount_amount must not be negative, got {item.discount_amount}")
    _check_percentage("discount_percentage", item.discount_percentage)
    _check_percentage("tax_percentage", item.tax_percentage)


def calculate_line(item: LineItem) -> LineAmounts:
    """
    Compute base, discount, taxable, tax and total amounts for one line item.

    An explicit `discount_amount` wins over `discount_percentage`. For
    tax-inclusive items the entered price already contains tax, so tax is
    extracted from the taxable amount instead of being added on top.

    Raises:
        LineItemValidationError: On negative amounts or percentages outside [0, 100].
    """
    validate_line_item(item)

    base_amount = item.quantity * item.unit_price
    if item.discount_amount is not None:
        discount_total = item.discount_amount
    else:
        discount_total = base_amount * item.discount_percentage / HUNDRED
    taxable_amount = max(base_amount - discount_total, ZERO)

    rate = item.tax_percentage
    if item.tax_inclusive:
        tax_amount = taxable_amount * rate / (HUNDRED + rate) if rate else ZERO
        line_total = taxable_amount
    else:
        tax_amount = taxable_amount * rate / HUNDRED
        line_total = taxable_amount + tax_amount

    return LineAmounts(
        base_amount=base_amount,
        discount_total=discount_total,
        taxable_amount=taxable_amount,
        tax_amount=tax_amount,
        line_total=line_total,
    )


def apply_line_amounts(item: LineItem) -> LineItem:
    """Return a copy of `item` with `tax_amount` and `line_total` recomputed."""
    amounts = calculate_line(item)
    return replace(item, tax_amount=amounts.tax_amount, line_total=amounts.line_total)


def calculate_document_totals(
    items: Iterable[LineItem],
    *,
    paid_amount: Decimal | None = None,
    applied_amount: Decimal | None = None,
) -> DocumentTotals:
    """
    Aggregate line items into document totals.

    `subtotal` is post-discount and net of tax for every document type, so
    `total_amount == subtotal + tax_total == sum(line_total)` holds for both
    pricing conventions. Balances are not clamped: an overpayment yields a
    negative `balance_due` (or credit note `balance`).
    """
    subtotal = ZERO
    tax_total = ZERO
    for item in items:
        amounts = calculate_line(item)
        subtotal += amounts.net_amount
        tax_total += amounts.tax_amount

    total_amount = subtotal + tax_total
    return DocumentTotals(
        subtotal=subtotal,
        tax_total=tax_total,
        total_amount=total_amount,
        paid_amount=paid_amount,
        balance_due=total_amount - paid_amount if paid_amount is not None else None,
        applied_amount=applied_amount,
        balance=total_amount - applied_amount if applied_amount is not None else None,
    )


def fixed_totals(
    total_amount: Decimal,
    *,
    subtotal: Decimal | None = None,
    tax_total: Decimal = ZERO,
) -> DocumentTotals:
    """Totals for documents whose amount is not derived from priced lines."""
    return DocumentTotals(
        subtotal=total_amount - tax_total if subtotal is None else subtotal,
        tax_total=tax_total,
        total_amount=total_amount,
    )

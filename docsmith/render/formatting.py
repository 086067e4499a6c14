"""Display formatting for money, dates and quantities."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from docsmith.domain.tax import quantize_money

DEFAULT_CURRENCY = "KES"


def format_currency(amount: Decimal | None, currency: str = DEFAULT_CURRENCY) -> str:
    """
    Format a money value as ``KES 1,234.56``.

    Rounding to cents happens here and nowhere earlier. Negative values keep
    their sign after the currency code (``KES -50.00``).
    """
    value = quantize_money(amount if amount is not None else Decimal(0))
    return f"{currency} {value:,.2f}"


def format_date(value: date | None) -> str:
    """Format a date as ``dd/mm/yyyy``; missing dates render empty."""
    if value is None:
        return ""
    return value.strftime("%d/%m/%Y")


def format_quantity(value: Decimal) -> str:
    """Drop a trailing ``.0`` style fraction from whole quantities."""
    if value == value.to_integral_value():
        return str(value.to_integral_value())
    return f"{value.normalize():f}"

"""Tests for text sanitizing and display formatting."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from docsmith.render import (
    format_currency,
    format_date,
    format_quantity,
    sanitize_text,
)


def test_sanitize_text_replaces_typographic_punctuation() -> None:
    raw = "\u201cSterile\u201d tips \u2014 it\u2019s 5\xa0ml\u2026"

    assert sanitize_text(raw) == "\"Sterile\" tips - it's 5 ml..."


def test_sanitize_text_repairs_replacement_characters() -> None:
    assert sanitize_text("Seller\ufffd\ufffds") == "Seller's"
    assert sanitize_text(None) == ""
    assert sanitize_text(12) == "12"


def test_format_currency() -> None:
    assert format_currency(Decimal("1234.565")) == "KES 1,234.57"
    assert format_currency(None) == "KES 0.00"
    assert format_currency(Decimal("-50"), "USD") == "USD -50.00"


def test_format_date() -> None:
    assert format_date(date(2024, 3, 1)) == "01/03/2024"
    assert format_date(None) == ""


def test_format_quantity() -> None:
    assert format_quantity(Decimal("2.00")) == "2"
    assert format_quantity(Decimal("100")) == "100"
    assert format_quantity(Decimal("2.50")) == "2.5"

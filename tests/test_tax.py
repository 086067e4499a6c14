"""Tests for line-item and document total computation."""

from __future__ import annotations

import random
from decimal import Decimal

import pytest

from docsmith.domain.document import LineItem
from docsmith.domain.tax import (
    CENT,
    LineItemValidationError,
    apply_line_amounts,
    calculate_document_totals,
    calculate_line,
    quantize_money,
)


def _item(**kwargs) -> LineItem:
    fields = {"description": "Pipette tips", "quantity": Decimal("1"), "unit_price": Decimal("0")}
    fields.update(kwargs)
    return LineItem(**fields)


def test_simple_exclusive_invoice_line() -> None:
    item = _item(quantity=Decimal("2"), unit_price=Decimal("100.00"), tax_percentage=Decimal("16"))

    amounts = calculate_line(item)
    totals = calculate_document_totals([item])

    assert quantize_money(amounts.tax_amount) == Decimal("32.00")
    assert quantize_money(amounts.line_total) == Decimal("232.00")
    assert quantize_money(totals.subtotal) == Decimal("200.00")
    assert quantize_money(totals.tax_total) == Decimal("32.00")
    assert quantize_money(totals.total_amount) == Decimal("232.00")


def test_tax_inclusive_line_extracts_tax() -> None:
    item = _item(unit_price=Decimal("116.00"), tax_percentage=Decimal("16"), tax_inclusive=True)

    amounts = calculate_line(item)

    assert quantize_money(amounts.tax_amount) == Decimal("16.00")
    assert quantize_money(amounts.line_total) == Decimal("116.00")
    assert quantize_money(amounts.net_amount) == Decimal("100.00")


def test_exclusive_line_total_is_taxable_times_rate() -> None:
    rng = random.Random(7)
    for _ in range(200):
        rate = Decimal(rng.randint(0, 10000)) / 100
        item = _item(
            quantity=Decimal(rng.randint(0, 500)) / 10,
            unit_price=Decimal(rng.randint(0, 1_000_000)) / 100,
            discount_percentage=Decimal(rng.randint(0, 100)),
            tax_percentage=rate,
        )
        amounts = calculate_line(item)
        expected = amounts.taxable_amount * (1 + rate / 100)
        assert abs(amounts.line_total - expected) < Decimal("1e-9")


def test_inclusive_tax_matches_extraction_formula() -> None:
    rng = random.Random(11)
    for _ in range(200):
        rate = Decimal(rng.randint(0, 10000)) / 100
        item = _item(
            quantity=Decimal(rng.randint(1, 50)),
            unit_price=Decimal(rng.randint(0, 100_000)) / 100,
            tax_percentage=rate,
            tax_inclusive=True,
        )
        amounts = calculate_line(item)
        expected_tax = amounts.taxable_amount - amounts.taxable_amount / (1 + rate / 100)
        assert abs(amounts.tax_amount - expected_tax) < Decimal("1e-9")
        assert amounts.line_total == amounts.taxable_amount


def test_document_total_equals_sum_of_line_totals() -> None:
    rng = random.Random(3)
    for _ in range(50):
        items = [
            _item(
                quantity=Decimal(rng.randint(0, 1000)) / 10,
                unit_price=Decimal(rng.randint(0, 500_000)) / 100,
                discount_percentage=Decimal(rng.randint(0, 30)),
                tax_percentage=Decimal(rng.choice([0, 8, 16])),
                tax_inclusive=rng.random() < 0.5,
            )
            for _ in range(rng.randint(1, 50))
        ]
        totals = calculate_document_totals(items)
        line_sum = sum(calculate_line(item).line_total for item in items)
        assert abs(totals.total_amount - line_sum) <= CENT
        assert totals.total_amount == totals.subtotal + totals.tax_total


def test_explicit_discount_amount_wins_over_percentage() -> None:
    item = _item(
        quantity=Decimal("4"),
        unit_price=Decimal("25"),
        discount_percentage=Decimal("50"),
        discount_amount=Decimal("10"),
    )

    amounts = calculate_line(item)

    assert amounts.discount_total == Decimal("10")
    assert amounts.taxable_amount == Decimal("90")


def test_discount_larger_than_base_clamps_taxable_to_zero() -> None:
    item = _item(unit_price=Decimal("5"), discount_amount=Decimal("8"), tax_percentage=Decimal("16"))

    amounts = calculate_line(item)

    assert amounts.taxable_amount == Decimal("0")
    assert amounts.line_total == Decimal("0")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"quantity": Decimal("-1")},
        {"unit_price": Decimal("-0.01")},
        {"discount_amount": Decimal("-3")},
        {"discount_percentage": Decimal("101")},
        {"tax_percentage": Decimal("-16")},
    ],
)
def test_invalid_line_items_are_rejected(kwargs) -> None:
    with pytest.raises(LineItemValidationError):
        calculate_line(_item(**kwargs))


def test_overpayment_leaves_negative_balance() -> None:
    item = _item(unit_price=Decimal("100"))

    invoice = calculate_document_totals([item], paid_amount=Decimal("150"))
    credit = calculate_document_totals([item], applied_amount=Decimal("120"))

    assert invoice.balance_due == Decimal("-50")
    assert credit.balance == Decimal("-20")


def test_apply_line_amounts_is_idempotent() -> None:
    item = _item(quantity=Decimal("3"), unit_price=Decimal("19.99"), tax_percentage=Decimal("16"))

    once = apply_line_amounts(item)
    twice = apply_line_amounts(once)

    assert once == twice
    assert once.line_total == calculate_line(item).line_total


def test_quantize_money_rounds_half_up() -> None:
    assert quantize_money(Decimal("0.125")) == Decimal("0.13")
    assert quantize_money(Decimal("2.675")) == Decimal("2.68")

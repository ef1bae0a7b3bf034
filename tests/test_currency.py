from decimal import Decimal

import pytest

from utils.currency import (
    ZERO,
    format_amount,
    format_currency,
    format_signed,
    group_indian,
    to_json_number,
    to_money,
)


@pytest.mark.parametrize("raw, expected", [
    (None, ZERO),
    ("", ZERO),
    (0.1, Decimal("0.10")),
    ("2.675", Decimal("2.68")),
    (Decimal("2.675"), Decimal("2.68")),
    (1500, Decimal("1500.00")),
    ("-3.005", Decimal("-3.01")),
])
def test_to_money(raw, expected):
    assert to_money(raw) == expected


def test_to_json_number_is_float():
    assert to_json_number(Decimal("99.999")) == 100.0
    assert isinstance(to_json_number(Decimal("1")), float)


@pytest.mark.parametrize("digits, expected", [
    ("0", "0"),
    ("999", "999"),
    ("1000", "1,000"),
    ("100000", "1,00,000"),
    ("1234567", "12,34,567"),
    ("12345678", "1,23,45,678"),
])
def test_group_indian(digits, expected):
    assert group_indian(digits) == expected


def test_format_currency():
    assert format_currency(Decimal("1234567.89")) == "₹12,34,567.89"
    assert format_currency(0) == "₹0.00"
    assert format_currency("-1500.5") == "-₹1,500.50"
    assert format_currency(10, symbol="$") == "$10.00"


def test_format_amount_and_signed():
    assert format_amount(1234.5) == "1234.50"
    assert format_signed(300) == "+₹300.00"
    assert format_signed(-42) == "-₹42.00"

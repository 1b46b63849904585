"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from savetrack.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1500", Decimal("1500.00")),
        ("1500.5", Decimal("1500.50")),
        ("$1,500.00", Decimal("1500.00")),
        ("€ 20", Decimal("20.00")),
        ("-20.00", Decimal("-20.00")),
        ("(20.00)", Decimal("-20.00")),
        ("0.005", Decimal("0.01")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "twenty", "NaN", "Infinity"])
def test_parse_amount_invalid(text):
    with pytest.raises(ValueError):
        parse_amount(text)

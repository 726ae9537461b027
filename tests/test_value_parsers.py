"""Tests for amount and yes/no flag parsing."""

import pytest
from decimal import Decimal

from charitycomply.utils.amount_parser import parse_amount
from charitycomply.utils.flag_parser import parse_flag


@pytest.mark.parametrize(
    "value,expected",
    [
        ("123.45", Decimal("123.45")),
        ("£1,234.56", Decimal("1234.56")),
        ("1234.56 GBP", Decimal("1234.56")),
        ("(50.00)", Decimal("-50.00")),
        ("10", Decimal("10.00")),
        ("2.345", Decimal("2.34")),
    ],
)
def test_parse_amount(value, expected):
    assert parse_amount(value) == expected


def test_parse_amount_invalid():
    with pytest.raises(ValueError):
        parse_amount("")
    with pytest.raises(ValueError):
        parse_amount("twelve pounds")


@pytest.mark.parametrize("value", ["yes", "Y", "true", "1", " x "])
def test_parse_flag_true(value):
    assert parse_flag(value) is True


@pytest.mark.parametrize("value", ["no", "N", "False", "0"])
def test_parse_flag_false(value):
    assert parse_flag(value) is False


def test_parse_flag_empty_is_unknown():
    assert parse_flag(None) is None
    assert parse_flag("") is None
    assert parse_flag("  ") is None


def test_parse_flag_invalid():
    with pytest.raises(ValueError):
        parse_flag("maybe")

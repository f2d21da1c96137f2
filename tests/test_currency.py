"""Tests for currency formatting."""

from decimal import Decimal

import pytest

from monzoledger.domain.currency import find_currency, format_money, minor_to_major
from monzoledger.domain.errors import CurrencyNotFoundError


def test_minor_to_major():
    assert minor_to_major(-500) == Decimal("-5.00")
    assert minor_to_major(1234, 0) == Decimal("1234")


@pytest.mark.parametrize(
    "amount,code,expected",
    [
        (10000, "GBP", "£100.00"),
        (-1234, "USD", "-$12.34"),
        (1250, "eur", "€12.50"),
        (1500, "JPY", "¥1,500"),
        (123456789, "GBP", "£1,234,567.89"),
    ],
)
def test_format_money(amount, code, expected):
    assert format_money(amount, code) == expected


def test_unknown_currency_raises():
    with pytest.raises(CurrencyNotFoundError, match="XYZ"):
        find_currency("XYZ")

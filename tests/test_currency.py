"""Tests for the currency formatter."""

from decimal import Decimal

import pytest

from bizbooks.domain.value_objects import Currency
from bizbooks.services.currency import CURRENCY_SYMBOLS, CurrencyFormatter


class TestCurrencyFormatter:
    def test_default_is_kes(self) -> None:
        formatter = CurrencyFormatter()
        assert formatter.currency == "KES"
        assert formatter.format(Decimal("1500")) == "KSh 1,500.00"

    @pytest.mark.parametrize(
        ("currency", "expected"),
        [
            (Currency.USD, "$1,234,567.89"),
            (Currency.EUR, "€1,234,567.89"),
            (Currency.UGX, "USh 1,234,567.89"),
            ("gbp", "£1,234,567.89"),
        ],
    )
    def test_symbols(self, currency: Currency | str, expected: str) -> None:
        assert CurrencyFormatter(currency).format(Decimal("1234567.89")) == expected

    def test_unknown_currency_uses_code(self) -> None:
        formatter = CurrencyFormatter("xof")
        assert formatter.symbol == "XOF "
        assert formatter.format(10) == "XOF 10.00"

    def test_negative_amount(self) -> None:
        assert CurrencyFormatter("USD").format(Decimal("-5.5")) == "-$5.50"

    def test_accepts_strings_and_floats(self) -> None:
        formatter = CurrencyFormatter("KES")
        assert formatter.format("250") == "KSh 250.00"
        assert formatter.format(99.5) == "KSh 99.50"

    def test_non_numeric_passes_through(self) -> None:
        assert CurrencyFormatter().format("n/a") == "n/a"
        assert CurrencyFormatter().format("NaN") == "NaN"

    def test_every_currency_has_a_symbol(self) -> None:
        for currency in Currency:
            assert currency.value in CURRENCY_SYMBOLS

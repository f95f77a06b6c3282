"""Unit tests for currency normalization."""

import pytest

from shipping_rates import CurrencyNormalizer, CurrencyProvider, StaticCurrencyProvider


class BrokenProvider(CurrencyProvider):
    def current_currency(self):
        return "EUR"

    def exchange_rate(self, currency):
        raise RuntimeError("rates service down")


class TestCurrencyNormalizer:
    def test_divides_by_rate(self):
        n = CurrencyNormalizer(StaticCurrencyProvider("EUR", {"EUR": 35.0}))
        assert n.to_working_currency(350.0) == pytest.approx(10.0)

    @pytest.mark.parametrize("rates", [{}, {"EUR": 0}, {"EUR": -2.5}, {"EUR": None}, {"EUR": "abc"}])
    def test_unusable_rate_is_neutral(self, rates):
        n = CurrencyNormalizer(StaticCurrencyProvider("EUR", rates))
        assert n.exchange_rate() == 1.0
        assert n.to_working_currency(155.71) == 155.71

    def test_numeric_string_rate(self):
        n = CurrencyNormalizer(StaticCurrencyProvider("USD", {"USD": "2"}))
        assert n.to_working_currency(10) == 5

    def test_provider_error_is_neutral(self):
        n = CurrencyNormalizer(BrokenProvider())
        assert n.to_working_currency(42.0) == 42.0

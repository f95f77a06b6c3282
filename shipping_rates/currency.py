import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

log = logging.getLogger(__name__)

NEUTRAL_RATE = 1.0


class CurrencyProvider(ABC):
    """Active shop currency and its exchange rate against the reference currency."""

    @abstractmethod
    def current_currency(self) -> str:
        ...

    @abstractmethod
    def exchange_rate(self, currency: str) -> Optional[float]:
        ...


class StaticCurrencyProvider(CurrencyProvider):
    def __init__(self, currency: str, rates: Optional[Dict[str, float]] = None):
        self.currency = currency
        self.rates = dict(rates or {})

    def current_currency(self) -> str:
        return self.currency

    def exchange_rate(self, currency: str) -> Optional[float]:
        return self.rates.get(currency)


class CurrencyNormalizer:
    """Converts reference-currency costs into the shop's working currency."""

    def __init__(self, provider: CurrencyProvider):
        self.provider = provider

    def exchange_rate(self) -> float:
        """Rate for the active currency; anything unusable degrades to 1."""
        currency = None
        try:
            currency = self.provider.current_currency()
            raw = self.provider.exchange_rate(currency)
        except Exception as e:
            log.exception("Exchange rate lookup failed for %s: %s; using neutral rate", currency, e)
            return NEUTRAL_RATE

        if raw is None:
            log.debug("No exchange rate for %s; using neutral rate", currency)
            return NEUTRAL_RATE
        try:
            rate = float(raw)
        except (TypeError, ValueError):
            log.warning("Bad exchange rate %r for %s; using neutral rate", raw, currency)
            return NEUTRAL_RATE
        if not rate > 0:
            log.warning("Non-positive exchange rate %r for %s; using neutral rate", raw, currency)
            return NEUTRAL_RATE
        return rate

    def to_working_currency(self, base_cost: float) -> float:
        return base_cost / self.exchange_rate()

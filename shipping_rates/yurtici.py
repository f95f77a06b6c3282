# shipping_rates/yurtici.py
import logging
from typing import Optional

from .base import Cart, Carrier, ShippingQuote
from .config import CarrierSettings
from .currency import CurrencyNormalizer, CurrencyProvider
from .dimensions import DimensionResolver
from .tariff import TariffTable, YURTICI_TARIFF, base_cost
from .weight import total_chargeable_weight

log = logging.getLogger(__name__)

CARRIER_CODE = "yurticishipping"
METHOD_CODE = "yurticishipping_standard"


class RateAssembler:
    def __init__(self, settings: CarrierSettings, normalizer: CurrencyNormalizer):
        self.settings = settings
        self.normalizer = normalizer

    def assemble(self, total_base_cost: float) -> ShippingQuote:
        title = self.settings.get_config_data("title") or ""
        return ShippingQuote(
            carrier_code=CARRIER_CODE,
            carrier_title=title,
            method_code=METHOD_CODE,
            method_title=title,
            description=self.settings.get_config_data("description") or "",
            price=self.normalizer.to_working_currency(total_base_cost),
            base_price=total_base_cost,
        )


class YurticiCarrier(Carrier):
    """
    Yurtici Kargo rate: chargeable weight of the whole cart priced on the
    weight-bracket tariff, converted from TRY into the shop currency.
    """

    code = CARRIER_CODE

    def __init__(self, settings: CarrierSettings, catalog, currency_provider: CurrencyProvider,
                 tariff: Optional[TariffTable] = None):
        self.settings = settings
        self.resolver = DimensionResolver(catalog)
        self.normalizer = CurrencyNormalizer(currency_provider)
        self.assembler = RateAssembler(settings, self.normalizer)
        self.tariff = tariff or YURTICI_TARIFF

    def is_available(self) -> bool:
        return bool(self.settings.get_config_data("active"))

    def calculate(self, cart: Cart) -> Optional[ShippingQuote]:
        if not self.is_available():
            log.debug("Carrier %s inactive; no rate", self.code)
            return None

        total_weight = total_chargeable_weight(cart.items, self.resolver)
        cost = base_cost(total_weight, self.tariff)
        quote = self.assembler.assemble(cost)
        log.debug("RATE carrier=%s items=%d weight=%.3f base=%.2f %s price=%.2f",
                  self.code, len(cart.items), total_weight, cost, self.tariff.currency, quote.price)
        return quote

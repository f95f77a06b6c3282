from .base import Cart, CartItem, Carrier, Dimensions, Product, ShippingQuote
from .catalog import CatalogClient, CatalogLookupError, LookupResult
from .config import CarrierSettings, Settings
from .currency import CurrencyNormalizer, CurrencyProvider, StaticCurrencyProvider
from .dimensions import DimensionResolver
from .tariff import TariffSheetError, TariffTable, YURTICI_TARIFF, base_cost, load_tariff_sheet
from .weight import chargeable_weight, total_chargeable_weight, volumetric_weight
from .yurtici import RateAssembler, YurticiCarrier

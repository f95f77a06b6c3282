"""
Carrier plugin interface.
Each carrier exposes `is_available()` and `calculate(cart)`; `calculate` returns a
ShippingQuote, or None when the carrier does not offer a rate for this cart.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

DIMENSION_FIELDS = ("height", "width", "length", "weight")
DEFAULT_DIMENSION = 1.0

COMPOSITE_TYPE = "configurable"


@dataclass(frozen=True)
class Dimensions:
    height: float = DEFAULT_DIMENSION
    width: float = DEFAULT_DIMENSION
    length: float = DEFAULT_DIMENSION
    weight: float = DEFAULT_DIMENSION


@dataclass
class Product:
    id: Any
    type: str = "simple"
    height: Optional[float] = None
    width: Optional[float] = None
    length: Optional[float] = None
    weight: Optional[float] = None

    @property
    def is_composite(self) -> bool:
        return (self.type or "").strip().lower() == COMPOSITE_TYPE


@dataclass
class CartItem:
    product: Product
    quantity: int = 1
    variant_product_id: Optional[Any] = None


@dataclass
class Cart:
    items: List[CartItem] = field(default_factory=list)


@dataclass(frozen=True)
class ShippingQuote:
    carrier_code: str
    carrier_title: str
    method_code: str
    method_title: str
    description: str
    price: float
    base_price: float

    def to_dict(self) -> Dict[str, Any]:
        """Checkout rate shape."""
        return {
            "carrier": self.carrier_code,
            "carrier_title": self.carrier_title,
            "method": self.method_code,
            "method_title": self.method_title,
            "method_description": self.description,
            "price": self.price,
            "base_price": self.base_price,
        }


def positive_or_none(value) -> Optional[float]:
    """Float value of a dimension field, or None when missing, non-numeric or not > 0."""
    if value is None or value == "":
        return None
    try:
        v = float(value)
    except (TypeError, ValueError):
        return None
    # NaN fails the comparison too
    return v if v > 0 else None


def merge_dimensions(*sources: Dict[str, Any]) -> Dimensions:
    """First positive value per field across `sources`, else the default of 1."""
    values = {}
    for name in DIMENSION_FIELDS:
        chosen = None
        for src in sources:
            chosen = positive_or_none((src or {}).get(name))
            if chosen is not None:
                break
        values[name] = chosen if chosen is not None else DEFAULT_DIMENSION
    return Dimensions(**values)


def product_fields(product: Product) -> Dict[str, Any]:
    return {name: getattr(product, name, None) for name in DIMENSION_FIELDS}


class Carrier(ABC):
    """Capability contract a checkout calls to offer a shipping option."""

    code = "base"

    @abstractmethod
    def is_available(self) -> bool:
        ...

    @abstractmethod
    def calculate(self, cart: Cart) -> Optional[ShippingQuote]:
        ...

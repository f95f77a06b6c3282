from typing import Iterable

from .base import CartItem, Dimensions

# cm^3 per kg
VOLUMETRIC_DIVISOR = 3000


def volumetric_weight(d: Dimensions) -> float:
    return (d.width * d.height * d.length) / VOLUMETRIC_DIVISOR


def chargeable_weight(d: Dimensions) -> float:
    """Greater of actual and volumetric weight, in kg."""
    return max(d.weight, volumetric_weight(d))


def total_chargeable_weight(items: Iterable[CartItem], resolver) -> float:
    return sum(
        chargeable_weight(resolver.resolve(item.product, item)) * item.quantity
        for item in items
    )

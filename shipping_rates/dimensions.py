import logging
from typing import Any, Dict, Optional

from .base import CartItem, Dimensions, Product, merge_dimensions, product_fields

log = logging.getLogger(__name__)


def find_variant(variants: Any, variant_id) -> Optional[Dict[str, Any]]:
    """Variant dict whose id matches `variant_id`; ids compared as strings."""
    if variant_id is None or not isinstance(variants, (list, tuple)):
        return None
    wanted = str(variant_id).strip()
    for v in variants:
        if isinstance(v, dict) and str(v.get("id", "")).strip() == wanted:
            return v
    return None


class DimensionResolver:
    """
    Physical dimensions of a cart line.
    Simple products use their own fields. Composite products ask the catalog for
    variant data and fall back to the product fields when it is unavailable.
    """

    def __init__(self, catalog):
        self.catalog = catalog

    def resolve(self, product: Product, item: CartItem) -> Dimensions:
        own = product_fields(product)
        if not product.is_composite:
            return merge_dimensions(own)

        result = self.catalog.fetch_product(product.id)
        if not result.ok:
            log.warning("Product %s not found in catalog (%s); using product dimensions",
                        product.id, result.error.reason if result.error else "empty payload")
            return merge_dimensions(own)

        variant = find_variant(result.data.get("variants"), item.variant_product_id)
        if variant is None:
            log.debug("No catalog variant %s for product %s", item.variant_product_id, product.id)
        return merge_dimensions(variant or {}, own)

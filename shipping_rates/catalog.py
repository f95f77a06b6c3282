"""
Product catalog lookup over HTTP.

`GET {base_url}/api/v1/products/{product_id}` returns `{"data": {..., "variants": [...]}}`.
One attempt per call, bounded by `timeout`. Failures come back as a LookupResult
carrying a CatalogLookupError instead of being raised.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

log = logging.getLogger(__name__)

PRODUCT_PATH = "/api/v1/products/{product_id}"


class CatalogLookupError(Exception):
    def __init__(self, product_id, reason: str, status: Optional[int] = None):
        super().__init__(f"Catalog lookup failed for product {product_id}: {reason}")
        self.product_id = product_id
        self.reason = reason
        self.status = status


@dataclass(frozen=True)
class LookupResult:
    data: Optional[Dict[str, Any]] = None
    error: Optional[CatalogLookupError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.data)

    @classmethod
    def success(cls, data: Dict[str, Any]) -> "LookupResult":
        return cls(data=data)

    @classmethod
    def failure(cls, error: CatalogLookupError) -> "LookupResult":
        return cls(error=error)


class CatalogClient:
    def __init__(self, base_url: str, timeout: float = 5.0, verify: bool = True,
                 session: Optional[requests.Session] = None):
        self.base_url = (base_url or "").rstrip("/")
        self.timeout = timeout
        self.verify = verify
        self.session = session or requests.Session()

    def product_url(self, product_id) -> str:
        return self.base_url + PRODUCT_PATH.format(product_id=product_id)

    def fetch_product(self, product_id) -> LookupResult:
        url = self.product_url(product_id)
        try:
            resp = self.session.get(url, timeout=self.timeout, verify=self.verify)
        except requests.RequestException as e:
            log.error("Catalog request failed for product %s (%s): %s", product_id, url, e)
            return LookupResult.failure(CatalogLookupError(product_id, str(e)))

        if not resp.ok:
            return LookupResult.failure(
                CatalogLookupError(product_id, f"HTTP {resp.status_code}", status=resp.status_code))

        try:
            body = resp.json()
        except ValueError as e:
            log.error("Catalog returned non-JSON body for product %s: %s", product_id, e)
            return LookupResult.failure(
                CatalogLookupError(product_id, "malformed body", status=resp.status_code))

        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict) or not data:
            return LookupResult.failure(
                CatalogLookupError(product_id, "empty payload", status=resp.status_code))

        variants = data.get("variants")
        if variants is not None and not isinstance(variants, list):
            log.error("Catalog returned non-list variants for product %s: %r", product_id, variants)
            return LookupResult.failure(
                CatalogLookupError(product_id, "malformed body", status=resp.status_code))

        log.debug("Catalog product %s: %d variants", product_id, len(variants or []))
        return LookupResult.success(data)

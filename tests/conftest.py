"""Shared fixtures for shipping rate tests."""

import pytest

from shipping_rates import CarrierSettings, LookupResult, Settings, StaticCurrencyProvider
from shipping_rates.catalog import CatalogLookupError


class FakeCatalog:
    """Catalog double returning canned product payloads, recording calls."""

    def __init__(self, products=None):
        self.products = products or {}
        self.calls = []

    def fetch_product(self, product_id):
        self.calls.append(product_id)
        data = self.products.get(product_id)
        if not data:
            return LookupResult.failure(CatalogLookupError(product_id, "HTTP 404", status=404))
        return LookupResult.success(data)


@pytest.fixture
def fake_catalog():
    return FakeCatalog()


@pytest.fixture
def carrier_settings():
    return CarrierSettings(title="Yurtici Kargo", description="2-3 business days")


@pytest.fixture
def neutral_currency():
    return StaticCurrencyProvider("TRY", {"TRY": 1.0})


@pytest.fixture
def settings(tmp_path):
    return Settings(
        db_path=str(tmp_path / "shipping.db"),
        upload_dir=str(tmp_path / "uploads"),
        catalog_base_url="http://catalog.test",
        catalog_timeout=1.0,
    )

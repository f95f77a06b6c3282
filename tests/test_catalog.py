"""Unit tests for the HTTP catalog client."""

from unittest.mock import Mock

import pytest
import requests

from shipping_rates import (Cart, CarrierSettings, CatalogClient, CartItem, Dimensions, DimensionResolver,
                            Product, StaticCurrencyProvider, YurticiCarrier)


def make_response(status=200, body=None, json_error=None):
    resp = Mock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = body
    return resp


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


class TestCatalogClient:
    def test_success_returns_data(self, session):
        payload = {"id": 7, "variants": [{"id": 71, "weight": 4}]}
        session.get.return_value = make_response(body={"data": payload})
        client = CatalogClient("http://shop.test/", timeout=2.5, verify=False, session=session)

        result = client.fetch_product(7)

        assert result.ok
        assert result.data == payload
        session.get.assert_called_once_with("http://shop.test/api/v1/products/7", timeout=2.5, verify=False)

    def test_not_found(self, session):
        session.get.return_value = make_response(status=404, body={"message": "nope"})

        result = CatalogClient("http://shop.test", session=session).fetch_product(7)

        assert not result.ok
        assert result.error.status == 404
        assert result.error.product_id == 7

    @pytest.mark.parametrize("exc", [requests.Timeout("timed out"), requests.ConnectionError("refused")])
    def test_transport_errors(self, session, exc):
        session.get.side_effect = exc

        result = CatalogClient("http://shop.test", session=session).fetch_product(7)

        assert not result.ok
        assert result.error.status is None

    def test_malformed_body(self, session):
        session.get.return_value = make_response(json_error=ValueError("no json"))

        result = CatalogClient("http://shop.test", session=session).fetch_product(7)

        assert not result.ok
        assert result.error.reason == "malformed body"

    @pytest.mark.parametrize("body", [{}, {"data": {}}, {"data": []}, ["not", "a", "dict"]])
    def test_empty_payload(self, session, body):
        session.get.return_value = make_response(body=body)

        assert not CatalogClient("http://shop.test", session=session).fetch_product(7).ok

    @pytest.mark.parametrize("variants", [5, True, "71", {"id": 71}])
    def test_non_list_variants_is_malformed(self, session, variants):
        session.get.return_value = make_response(body={"data": {"id": 7, "variants": variants}})

        result = CatalogClient("http://shop.test", session=session).fetch_product(7)

        assert not result.ok
        assert result.error.reason == "malformed body"

    def test_missing_variants_key_is_accepted(self, session):
        session.get.return_value = make_response(body={"data": {"id": 7}})

        assert CatalogClient("http://shop.test", session=session).fetch_product(7).ok


class TestMalformedVariantsStillQuotes:
    def test_carrier_falls_back_to_product_dimensions(self):
        session = Mock(spec=requests.Session)
        session.get.return_value = make_response(body={"data": {"id": 7, "variants": 5}})
        p = Product(id=7, type="configurable", height=10, width=10, length=10, weight=12)
        carrier = YurticiCarrier(CarrierSettings(), CatalogClient("http://x", session=session),
                                 StaticCurrencyProvider("TRY"))

        quote = carrier.calculate(Cart([CartItem(p, variant_product_id=71)]))

        assert quote.base_price == 185.95


class TestTimeoutMatchesNotFound:
    def test_timeout_and_404_resolve_identically(self):
        p = Product(id=7, type="configurable", height=10, width=20, length=30, weight=2)
        item = CartItem(p, variant_product_id=71)

        timeout_session = Mock(spec=requests.Session)
        timeout_session.get.side_effect = requests.Timeout("timed out")
        missing_session = Mock(spec=requests.Session)
        missing_session.get.return_value = make_response(status=404)

        via_timeout = DimensionResolver(CatalogClient("http://x", session=timeout_session)).resolve(p, item)
        via_404 = DimensionResolver(CatalogClient("http://x", session=missing_session)).resolve(p, item)

        assert via_timeout == via_404 == Dimensions(height=10, width=20, length=30, weight=2)

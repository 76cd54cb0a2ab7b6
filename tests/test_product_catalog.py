from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
import requests
from pydantic import ValidationError

from storefront.data.models.product import ProductModel
from storefront.data.seed import PRODUCTS, seed
from storefront.repos.product_repo import ProductRepo
from storefront.services.product_client import ProductClient


def _response(status_code, payload=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error", response=resp)
    return resp


class TestProductRepo:
    def test_find_by_id(self, catalog):
        product = catalog.find_by_id("prod-watch")

        assert product.name == "Leather Watch"
        assert product.cost == Decimal("60")

    def test_unknown_id(self, catalog):
        assert catalog.find_by_id("nope") is None


class TestProductClient:
    @patch("storefront.services.product_client.requests.get")
    def test_fetches_product(self, mock_get):
        mock_get.return_value = _response(200, {"id": "p1", "name": "Mouse", "cost": "49.50"})

        product = ProductClient(base_url="http://catalog/").find_by_id("p1")

        assert product.cost == Decimal("49.50")
        mock_get.assert_called_once_with("http://catalog/products/p1", timeout=2)

    @patch("storefront.services.product_client.requests.get")
    def test_404_is_none(self, mock_get):
        mock_get.return_value = _response(404)

        assert ProductClient(base_url="http://catalog").find_by_id("p1") is None
        assert mock_get.call_count == 1

    @patch("storefront.services.product_client.requests.get")
    def test_retries_then_reraises(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("refused")
        client = ProductClient(base_url="http://catalog")

        with pytest.raises(requests.ConnectionError):
            client.find_by_id("p1")

        assert mock_get.call_count == 3

    @patch("storefront.services.product_client.requests.get")
    def test_server_error_is_retried(self, mock_get):
        mock_get.return_value = _response(503)

        with pytest.raises(requests.HTTPError):
            ProductClient(base_url="http://catalog").find_by_id("p1")

        assert mock_get.call_count == 3

    @patch("storefront.services.product_client.requests.get")
    def test_client_error_is_not_retried(self, mock_get):
        mock_get.return_value = _response(400)

        with pytest.raises(requests.HTTPError):
            ProductClient(base_url="http://catalog").find_by_id("p1")

        assert mock_get.call_count == 1

    @patch("storefront.services.product_client.requests.get")
    def test_malformed_body_is_not_retried(self, mock_get):
        mock_get.return_value = _response(200, {"id": 1, "name": "Keyboard", "price": 199.99})

        with pytest.raises(ValidationError):
            ProductClient(base_url="http://catalog").find_by_id("p1")

        assert mock_get.call_count == 1


class TestSeed:
    def test_seeds_empty_catalog_once(self, engine):
        from sqlalchemy.orm import sessionmaker

        factory = sessionmaker(bind=engine)

        assert seed(factory) == len(PRODUCTS)
        assert seed(factory) == 0

        with factory() as s:
            assert s.query(ProductModel).count() == len(PRODUCTS)
            assert ProductRepo(s).find_by_id(PRODUCTS[0]["id"]).cost == PRODUCTS[0]["cost"]

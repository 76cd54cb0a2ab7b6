# storefront/services/product_client.py
import requests

from storefront.domain.schemas import ProductRead
from storefront.utils.logging import get_logger
from storefront.utils.retry import http_retry
from storefront.utils.settings import PRODUCT_SERVICE_URL

logger = get_logger(__name__)


class ProductClient:
    """Catalog served by the external product-service over HTTP."""

    def __init__(self, base_url: str | None = None, timeout: int = 2):
        self.base_url = (base_url or PRODUCT_SERVICE_URL).rstrip("/")
        self.timeout = timeout

    @http_retry()
    def find_by_id(self, product_id: str) -> ProductRead | None:
        url = f"{self.base_url}/products/{product_id}"
        logger.info(f"ProductClient GET {url}")

        resp = requests.get(url, timeout=self.timeout)
        # 404 to odpowiedz, nie blad - nie ponawiamy
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return ProductRead.model_validate(resp.json())

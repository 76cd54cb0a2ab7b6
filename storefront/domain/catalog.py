# storefront/domain/catalog.py
from typing import Protocol

from storefront.domain.schemas import ProductRead


class ProductCatalog(Protocol):
    """Read-only product lookup. Returns None for an unknown id."""

    def find_by_id(self, product_id: str) -> ProductRead | None:
        ...

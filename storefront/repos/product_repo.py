from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.schemas import ProductRead


class ProductRepo:
    """Catalog backed by the products table of the service database."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, product_id: str) -> ProductRead | None:
        product = self.db.get(ProductModel, product_id)
        if product is None:
            return None
        return ProductRead.model_validate(product)

from sqlalchemy import CheckConstraint, Column, Integer, Numeric, String

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=True)
    cost = Column(Numeric(12, 2), nullable=False)
    rating = Column(Integer, nullable=True)
    image = Column(String(512), nullable=True)

    __table_args__ = (CheckConstraint("cost >= 0", name="ck_products_cost_non_negative"),)

# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import SessionLocal
from storefront.data.models.product import ProductModel
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS = [
    {"id": "BW0jAAeDJmlZCF8i", "name": "UNIFACTOR Mens Running Shoes", "category": "Fashion", "cost": Decimal("50"), "rating": 5},
    {"id": "KCRwjF7lN97HnEaY", "name": "YONEX Smash Badminton Racquet", "category": "Sports", "cost": Decimal("100"), "rating": 5},
    {"id": "PmInA797xJhMIPti", "name": "Tan Leatherette Weekender Duffle", "category": "Fashion", "cost": Decimal("150"), "rating": 4},
    {"id": "upLK9JbQ4rMhTwt4", "name": "The Minimalist Slim Leather Watch", "category": "Electronics", "cost": Decimal("60"), "rating": 5},
    {"id": "v4sLtEcMpzabRyfx", "name": "Atomberg 1200mm BLDC ceiling fan", "category": "Home & Kitchen", "cost": Decimal("80"), "rating": 3},
]


def seed(session_factory=SessionLocal) -> int:
    db = session_factory()
    try:
        # tylko jesli tabela pusta
        if db.query(ProductModel).first():
            return 0
        db.add_all(ProductModel(**p) for p in PRODUCTS)
        db.commit()
        logger.info(f"Seeded {len(PRODUCTS)} products")
        return len(PRODUCTS)
    finally:
        db.close()


if __name__ == "__main__":
    seed()

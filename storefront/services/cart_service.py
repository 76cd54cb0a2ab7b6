# storefront/services/cart_service.py
from decimal import Decimal
from typing import Any, Dict, Iterable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.catalog import ProductCatalog
from storefront.domain.errors import (
    AlreadyExistsError,
    InternalError,
    InvalidRequestError,
    NotFoundError,
)
from storefront.repos.cart_repo import CartRepo
from storefront.utils.logging import get_logger
from storefront.utils.settings import CommerceConfig
from storefront.utils.storage import classify_storage_errors

logger = get_logger(__name__)

NO_CART = "User does not have a cart"
NO_CART_FOR_UPDATE = "User does not have a cart. Use POST to create cart and add a product"
PRODUCT_ALREADY_IN_CART = (
    "Product already in cart. Use the cart sidebar to update or remove product from cart"
)
PRODUCT_NOT_IN_CATALOG = "Product doesn't exist in database"
PRODUCT_NOT_IN_CART = "Product not in cart"


def cart_total(items: Iterable[CartItemModel]) -> Decimal:
    # cena z chwili dodania do koszyka, katalog nie jest odpytywany ponownie
    return sum((Decimal(i.cost) * i.quantity for i in items), Decimal("0.00"))


class CartService:
    """
    Use cases for the cart domain.
    commands (add, update, remove) go through catalog validation and a versioned save,
    query (get) only reads.
    """

    def __init__(self, db: Session, catalog: ProductCatalog, config: CommerceConfig):
        self.db = db
        self.repo = CartRepo(db)
        self.catalog = catalog
        self.config = config

    #query
    @classify_storage_errors("Failed to load cart")
    def get_cart(self, user) -> Dict[str, Any]:
        cart = self.repo.find_by_owner(user.email)
        if not cart:
            raise NotFoundError(NO_CART)
        return self._cart_view(cart)

    #commands
    @classify_storage_errors("Failed to add product to cart")
    def add_item(self, user, product_id: str, quantity: int) -> Dict[str, Any]:
        if quantity <= 0:
            raise InvalidRequestError("Quantity must be greater than 0")

        cart = self._get_or_create_cart(user.email)

        if self.repo.get_cart_item(cart.id, product_id):
            logger.info(f"Product {product_id} already in cart of {user.email}")
            raise InvalidRequestError(PRODUCT_ALREADY_IN_CART)

        product = self.catalog.find_by_id(product_id)
        if product is None:
            logger.info(f"Product {product_id} not found in catalog")
            raise InvalidRequestError(PRODUCT_NOT_IN_CATALOG)

        try:
            self.repo.add_cart_item(
                CartItemModel(
                    cart_id=cart.id,
                    product_id=product.id,
                    name=product.name,
                    cost=product.cost,
                    quantity=quantity,
                )
            )
        except IntegrityError:
            # rownolegly request dodal ten sam produkt pomiedzy select a insert
            self.repo.rollback()
            logger.info(f"Product {product_id} added concurrently to cart of {user.email}")
            raise InvalidRequestError(PRODUCT_ALREADY_IN_CART)
        self._persist(cart)

        logger.info(
            f"Added product {product_id} x{quantity} to cart of {user.email}, "
            f"version {cart.version}"
        )
        return self._cart_view(cart)

    @classify_storage_errors("Failed to update product in cart")
    def update_item(self, user, product_id: str, quantity: int) -> Dict[str, Any]:
        if quantity <= 0:
            raise InvalidRequestError("Quantity must be greater than 0")

        cart = self.repo.find_by_owner(user.email)
        if not cart:
            raise InvalidRequestError(NO_CART_FOR_UPDATE)

        if self.catalog.find_by_id(product_id) is None:
            raise InvalidRequestError(PRODUCT_NOT_IN_CATALOG)

        item = self.repo.get_cart_item(cart.id, product_id)
        if item is None:
            raise InvalidRequestError(PRODUCT_NOT_IN_CART)

        logger.info(
            f"Updating product {product_id} in cart of {user.email}: "
            f"quantity {item.quantity} -> {quantity}"
        )
        item.quantity = quantity
        self._persist(cart)

        return self._cart_view(cart)

    @classify_storage_errors("Failed to remove product from cart")
    def remove_item(self, user, product_id: str) -> Dict[str, Any]:
        cart = self.repo.find_by_owner(user.email)
        if not cart:
            raise InvalidRequestError(NO_CART)

        if self.repo.get_cart_item(cart.id, product_id) is None:
            raise InvalidRequestError(PRODUCT_NOT_IN_CART)

        self.repo.delete_cart_item(cart.id, product_id)
        self._persist(cart)

        logger.info(f"Removed product {product_id} from cart of {user.email}")
        return self._cart_view(cart)

    def _get_or_create_cart(self, email: str) -> CartModel:
        # koszyk tworzony leniwie przy pierwszym dodaniu produktu
        try:
            cart = self.repo.get_or_create(email, self.config.default_payment_option)
            self.repo.commit()
        except (AlreadyExistsError, SQLAlchemyError) as e:
            self.repo.rollback()
            logger.error(f"Failed to create cart for {email}: {e!r}")
            raise InternalError("Failed to create cart") from e
        return cart

    def _persist(self, cart: CartModel):
        # optimistic locking na wersji koszyka, potem commit
        self.repo.save(cart)
        self.repo.commit()

    def _cart_view(self, cart: CartModel) -> Dict[str, Any]:
        items = self.repo.get_cart_items(cart.id)
        return {
            "email": cart.email,
            "payment_option": cart.payment_option,
            "items": [
                {
                    "product_id": i.product_id,
                    "name": i.name,
                    "cost": i.cost,
                    "quantity": i.quantity,
                }
                for i in items
            ],
            "total": cart_total(items),
        }

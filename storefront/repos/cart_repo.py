# storefront/repos/cart_repo.py
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import AlreadyExistsError


class ConcurrentModificationError(Exception):
    """Compare-and-set on the cart version matched no row."""


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def find_by_owner(self, email: str) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.email == email)
        ).scalar_one_or_none()

    def create(self, email: str, payment_option: str) -> CartModel:
        cart = CartModel(email=email, payment_option=payment_option, version=1)
        try:
            # savepoint - nieudany insert nie psuje reszty transakcji
            with self.db.begin_nested():
                self.db.add(cart)
                self.db.flush()
        except IntegrityError as e:
            raise AlreadyExistsError(f"Cart already exists for {email}") from e
        return cart

    def get_or_create(self, email: str, payment_option: str) -> CartModel:
        cart = self.find_by_owner(email)
        if cart:
            return cart

        try:
            return self.create(email, payment_option)
        except AlreadyExistsError:
            # inny request utworzyl koszyk pomiedzy select a insert
            cart = self.find_by_owner(email)
            if cart is None:
                raise
            return cart

    def update_cart_version(self, cart_id: int, old_version: int, new_data: dict) -> int:
        # UPDATE carts SET version = 2 WHERE id = 1 AND version = 1
        result = self.db.execute(
            update(CartModel)
            .where(CartModel.id == cart_id, CartModel.version == old_version)
            .values(**new_data)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def save(self, cart: CartModel) -> None:
        old_version = cart.version
        rowcount = self.update_cart_version(
            cart_id=cart.id,
            old_version=old_version,
            new_data={
                "version": old_version + 1,
                "payment_option": cart.payment_option,
            },
        )
        if rowcount == 0:
            raise ConcurrentModificationError(
                f"Cart {cart.id} changed since version {old_version}"
            )
        # nowa wersja doczytana z bazy przy nastepnym dostepie
        self.db.expire(cart)

    #items
    def get_cart_items(self, cart_id: int) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.cart_id == cart_id)
                .order_by(CartItemModel.id)
            ).scalars()
        )

    def get_cart_item(self, cart_id: int, product_id: str) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_cart_item(self, cart_id: int, product_id: str) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        )
        return result.rowcount

    def clear_items(self, cart_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(CartItemModel.cart_id == cart_id)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

# storefront/services/checkout_service.py
import enum
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.settlement import SettlementModel
from storefront.data.models.user import UserModel
from storefront.domain.errors import InvalidRequestError, NotFoundError, ServiceError
from storefront.repos.cart_repo import CartRepo
from storefront.repos.settlement_repo import SettlementRepo
from storefront.repos.user_repo import UserRepo
from storefront.services.cart_service import NO_CART, cart_total
from storefront.utils.logging import get_logger
from storefront.utils.settings import CommerceConfig
from storefront.utils.storage import classify_storage_errors

logger = get_logger(__name__)

EMPTY_CART = "Cart does not have any products"
DEFAULT_ADDRESS_SET = "User must set a non-default address to checkout"
INSUFFICIENT_BALANCE = "User does not have enough balance to checkout"


class CheckoutState(str, enum.Enum):
    PENDING = "PENDING"
    VALIDATED = "VALIDATED"
    SETTLED = "SETTLED"
    REJECTED = "REJECTED"


class CheckoutService:
    """
    Settles a cart against the user's wallet.

    PENDING -> VALIDATED -> SETTLED, or PENDING -> REJECTED with no side effects.
    Settlement (wallet debit, cart clear, settlement record) is one database
    transaction: it commits as a whole or the session is rolled back.
    """

    def __init__(self, db: Session, config: CommerceConfig):
        self.db = db
        self.carts = CartRepo(db)
        self.users = UserRepo(db)
        self.settlements = SettlementRepo(db)
        self.config = config

    @classify_storage_errors("Checkout failed, no changes were made")
    def checkout(self, user) -> Dict[str, Any]:
        state = CheckoutState.PENDING
        logger.info(f"Checkout {state.value} for {user.email}")

        try:
            cart = self.carts.find_by_owner(user.email)
            if not cart:
                raise NotFoundError(NO_CART)

            items = self.carts.get_cart_items(cart.id)
            if not items:
                raise InvalidRequestError(EMPTY_CART)

            # blokada wiersza usera do konca transakcji, saldo czytane na swiezo
            account = self.users.get_user_for_update(user.id)
            if account is None:
                raise NotFoundError("User not found")

            if not self.has_non_default_address(account):
                raise InvalidRequestError(DEFAULT_ADDRESS_SET)

            total = cart_total(items)
            if Decimal(account.wallet_money) < total:
                raise InvalidRequestError(INSUFFICIENT_BALANCE)
        except ServiceError as e:
            logger.info(f"Checkout {CheckoutState.REJECTED.value} for {user.email}: {e.message}")
            raise

        state = CheckoutState.VALIDATED
        logger.info(f"Checkout {state.value} for {user.email}, total {total}")

        self._settle(account, cart, total, len(items))

        state = CheckoutState.SETTLED
        logger.info(
            f"Checkout {state.value} for {user.email}: charged {total}, "
            f"wallet now {account.wallet_money}"
        )
        return {"success": True}

    def has_non_default_address(self, account: UserModel) -> bool:
        address = (account.address or "").strip()
        return bool(address) and address != self.config.default_address

    def _settle(self, account: UserModel, cart: CartModel, total: Decimal, item_count: int):
        # UPDATE z warunkiem wallet >= total, rownolegly checkout nie zejdzie ponizej zera
        if self.users.debit_wallet(account, total) == 0:
            logger.warning(f"Wallet of {account.email} changed during checkout")
            raise InvalidRequestError(INSUFFICIENT_BALANCE)

        self.carts.clear_items(cart.id)
        self.carts.save(cart)
        self.settlements.add_settlement(
            SettlementModel(
                user_id=account.id,
                email=account.email,
                total=total,
                item_count=item_count,
            )
        )

        # jeden commit dla usera, koszyka i zapisu rozliczenia
        self.db.commit()

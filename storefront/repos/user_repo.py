from decimal import Decimal

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_user_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(func.lower(UserModel.email) == email.strip().lower())
        ).scalar_one_or_none()

    def get_user_for_update(self, user_id: int) -> UserModel | None:
        # SELECT ... FOR UPDATE, blokada wiersza do konca transakcji
        return self.db.execute(
            select(UserModel)
            .where(UserModel.id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def debit_wallet(self, user: UserModel, amount: Decimal) -> int:
        # warunek wallet >= amount w samym UPDATE, saldo nigdy nie spadnie ponizej 0
        result = self.db.execute(
            update(UserModel)
            .where(UserModel.id == user.id, UserModel.wallet_money >= amount)
            .values(wallet_money=UserModel.wallet_money - amount)
            .execution_options(synchronize_session=False)
        )
        self.db.expire(user, ["wallet_money", "updated_at"])
        return result.rowcount

    def set_address(self, user: UserModel, address: str) -> UserModel:
        user.address = address
        self.db.commit()
        self.db.refresh(user)
        return user

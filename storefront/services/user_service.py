from typing import Any, Dict

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.errors import AlreadyExistsError, NotFoundError
from storefront.domain.schemas import UserCreate, UserRead
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger
from storefront.utils.settings import CommerceConfig
from storefront.utils.storage import classify_storage_errors

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session, config: CommerceConfig):
        self.db = db
        self.repo = UserRepo(db)
        self.config = config

    @classify_storage_errors("Failed to create user")
    def create_user(self, payload: UserCreate) -> UserRead:
        email = payload.email.strip().lower()
        if self.repo.get_user_by_email(email):
            raise AlreadyExistsError("Email already taken")

        user = UserModel(
            name=payload.name,
            email=email,
            wallet_money=self.config.default_wallet_money,
            address=self.config.default_address,
        )
        try:
            created = self.repo.create_user(user)
        except IntegrityError as e:
            # rownolegla rejestracja na ten sam email
            raise AlreadyExistsError("Email already taken") from e

        logger.info(f"Registered user {created.id} <{created.email}>")
        return UserRead.model_validate(created)

    @classify_storage_errors("Failed to load user")
    def get_user(self, user_id: int) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return UserRead.model_validate(user)

    @classify_storage_errors("Failed to load user")
    def get_user_by_email(self, email: str) -> UserRead:
        user = self.repo.get_user_by_email(email)
        if not user:
            raise NotFoundError("User not found")
        return UserRead.model_validate(user)

    @classify_storage_errors("Failed to load user")
    def get_address(self, user_id: int) -> Dict[str, Any]:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return {"id": user.id, "email": user.email, "address": user.address}

    @classify_storage_errors("Failed to update address")
    def set_address(self, user_id: int, address: str) -> str:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")

        self.repo.set_address(user, address.strip())
        logger.info(f"Address updated for user {user_id}")
        return user.address

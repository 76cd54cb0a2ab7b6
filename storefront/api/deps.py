# storefront/api/deps.py
from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.catalog import ProductCatalog
from storefront.domain.errors import NotFoundError
from storefront.domain.schemas import UserRead
from storefront.repos.product_repo import ProductRepo
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService
from storefront.services.product_client import ProductClient
from storefront.services.user_service import UserService
from storefront.utils.settings import CATALOG_BACKEND, CommerceConfig


def get_config() -> CommerceConfig:
    return CommerceConfig.from_env()


def get_catalog(db: Session = Depends(get_db)) -> ProductCatalog:
    if CATALOG_BACKEND == "http":
        return ProductClient()
    return ProductRepo(db)


def get_user_service(
    db: Session = Depends(get_db),
    config: CommerceConfig = Depends(get_config),
) -> UserService:
    return UserService(db, config)


def get_cart_service(
    db: Session = Depends(get_db),
    catalog: ProductCatalog = Depends(get_catalog),
    config: CommerceConfig = Depends(get_config),
) -> CartService:
    return CartService(db, catalog, config)


def get_checkout_service(
    db: Session = Depends(get_db),
    config: CommerceConfig = Depends(get_config),
) -> CheckoutService:
    return CheckoutService(db, config)


def get_current_user(
    x_user_id: int = Header(...),
    users: UserService = Depends(get_user_service),
) -> UserRead:
    # tokeny obsluguje gateway, tutaj dostajemy juz id uwierzytelnionego usera
    try:
        return users.get_user(x_user_id)
    except NotFoundError:
        raise HTTPException(status_code=401, detail="Please authenticate")

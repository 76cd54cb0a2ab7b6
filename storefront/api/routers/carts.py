#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends

from storefront.api.deps import get_cart_service, get_checkout_service, get_current_user
from storefront.api.errors import to_http
from storefront.domain.errors import ServiceError
from storefront.domain.schemas import CartOut, CheckoutOut, ItemIn, ItemUpdate, UserRead
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("/", response_model=CartOut)
def get_cart(
    user: UserRead = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.get_cart(user)
    except ServiceError as e:
        raise to_http(e)


@router.post("/", response_model=CartOut, status_code=201)
def add_item(
    payload: ItemIn,
    user: UserRead = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.add_item(user, payload.product_id, payload.quantity)
    except ServiceError as e:
        raise to_http(e)


@router.put("/", response_model=CartOut)
def update_item(
    payload: ItemUpdate,
    user: UserRead = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        #quantity 0 usuwa produkt z koszyka
        if payload.quantity == 0:
            return svc.remove_item(user, payload.product_id)
        return svc.update_item(user, payload.product_id, payload.quantity)
    except ServiceError as e:
        raise to_http(e)


@router.delete("/items/{product_id}", response_model=CartOut)
def remove_item(
    product_id: str,
    user: UserRead = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.remove_item(user, product_id)
    except ServiceError as e:
        raise to_http(e)


@router.put("/checkout", response_model=CheckoutOut)
def checkout(
    user: UserRead = Depends(get_current_user),
    svc: CheckoutService = Depends(get_checkout_service),
):
    try:
        return svc.checkout(user)
    except ServiceError as e:
        raise to_http(e)

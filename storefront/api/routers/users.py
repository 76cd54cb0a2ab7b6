# storefront/api/routers/users.py
from typing import Union

from fastapi import APIRouter, Depends, HTTPException, Query

from storefront.api.deps import get_current_user, get_user_service
from storefront.api.errors import to_http
from storefront.domain.errors import ServiceError
from storefront.domain.schemas import AddressIn, AddressOut, UserCreate, UserRead
from storefront.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


def _check_owner(user_id: int, current: UserRead):
    if current.id != user_id:
        raise HTTPException(status_code=403, detail="User not authorized to access this resource")


@router.post("/", response_model=UserRead, status_code=201)
def create_user(payload: UserCreate, service: UserService = Depends(get_user_service)):
    try:
        return service.create_user(payload)
    except ServiceError as e:
        raise to_http(e)


@router.get("/{user_id}", response_model=Union[UserRead, AddressOut])
def get_user(
    user_id: int,
    q: str | None = Query(None),
    current: UserRead = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    _check_owner(user_id, current)
    try:
        if q == "address":
            return AddressOut(**service.get_address(user_id))
        return service.get_user(user_id)
    except ServiceError as e:
        raise to_http(e)


@router.put("/{user_id}/address", response_model=AddressOut)
def set_address(
    user_id: int,
    payload: AddressIn,
    current: UserRead = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    _check_owner(user_id, current)
    try:
        service.set_address(user_id, payload.address)
        return AddressOut(**service.get_address(user_id))
    except ServiceError as e:
        raise to_http(e)

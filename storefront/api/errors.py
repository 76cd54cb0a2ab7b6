# storefront/api/errors.py
from fastapi import HTTPException

from storefront.domain.errors import (
    AlreadyExistsError,
    InternalError,
    InvalidRequestError,
    NotFoundError,
    ServiceError,
)

STATUS_CODES = {
    NotFoundError: 404,
    InvalidRequestError: 400,
    AlreadyExistsError: 409,
    InternalError: 500,
}


def to_http(error: ServiceError) -> HTTPException:
    status_code = STATUS_CODES.get(type(error), 500)
    if status_code == 500:
        # szczegoly sa w logach, klient dostaje ogolny komunikat
        return HTTPException(status_code=500, detail="Internal server error")
    return HTTPException(status_code=status_code, detail=error.message)

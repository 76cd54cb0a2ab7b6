# storefront/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductRead(BaseModel):
    """Product as seen by the cart, whichever catalog it came from."""

    id: str
    name: str
    cost: Decimal = Field(..., ge=0)
    category: str | None = None
    rating: int | None = None
    image: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ItemIn(BaseModel):
    """Schema for adding a product to the cart."""

    product_id: str = Field(..., min_length=1, max_length=64)
    quantity: int = Field(..., gt=0, description="Must be greater than 0")


class ItemUpdate(BaseModel):
    """Schema for changing a line item quantity. 0 removes the product."""

    product_id: str = Field(..., min_length=1, max_length=64)
    quantity: int = Field(..., ge=0)


class CartItemOut(BaseModel):
    product_id: str
    name: str
    cost: Decimal
    quantity: int


class CartOut(BaseModel):
    email: str
    payment_option: str
    items: List[CartItemOut]
    total: Decimal

    model_config = ConfigDict(from_attributes=True)


class CheckoutOut(BaseModel):
    success: bool


class UserCreate(BaseModel):
    """Schema for registration."""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    wallet_money: Decimal
    address: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class AddressIn(BaseModel):
    address: str = Field(..., min_length=20, max_length=128)


class AddressOut(BaseModel):
    id: int
    email: str
    address: str

    model_config = ConfigDict(from_attributes=True)

"""Customer-related models."""

from datetime import datetime
from uuid import uuid4

from pydantic import EmailStr, Field

from src.models.base import ApiModel


class Customer(ApiModel):
    """Customer profile."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    phone: str | None = None
    email: EmailStr | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)


class CustomerCreate(ApiModel):
    """Payload for creating a customer profile."""

    name: str
    phone: str | None = None
    email: EmailStr | None = None


class CustomerUpdate(ApiModel):
    """Profile changes; unset fields are left alone."""

    name: str | None = None
    phone: str | None = None
    email: EmailStr | None = None


class UserAddress(ApiModel):
    """Saved delivery address."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    title: str
    address: str
    details: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    is_default: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow)


class AddressCreate(ApiModel):
    """Payload for saving an address."""

    title: str
    address: str
    details: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    is_default: bool = False


class AddressUpdate(ApiModel):
    """Partial address update."""

    title: str | None = None
    address: str | None = None
    details: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    is_default: bool | None = None


class Rating(ApiModel):
    """Customer review of a delivered order, pending moderation."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    order_id: str
    restaurant_id: str
    customer_name: str
    customer_phone: str = ""
    rating: int = Field(ge=1, le=5)
    comment: str | None = None
    is_approved: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow)


class ReviewCreate(ApiModel):
    """Payload for reviewing an order."""

    rating: int | None = None
    comment: str | None = None

"""Restaurant models."""

from datetime import datetime
from typing import Any
from uuid import uuid4

from pydantic import Field, field_validator

from src.models.base import ApiModel


def _as_text(value: Any) -> Any:
    # Fees arrive as numbers from some clients; keep the raw text
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class Restaurant(ApiModel):
    """Restaurant with its delivery terms."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    delivery_fee: str | None = None
    minimum_order: str | None = None
    delivery_time: str | None = None
    phone: str | None = None
    address: str | None = None
    is_open: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @field_validator("delivery_fee", "minimum_order", mode="before")
    @classmethod
    def amounts_as_text(cls, v: Any) -> Any:
        return _as_text(v)


class RestaurantCreate(ApiModel):
    """Payload for adding a restaurant."""

    name: str
    delivery_fee: str | None = None
    minimum_order: str | None = None
    delivery_time: str | None = None
    phone: str | None = None
    address: str | None = None
    is_open: bool = True

    @field_validator("delivery_fee", "minimum_order", mode="before")
    @classmethod
    def amounts_as_text(cls, v: Any) -> Any:
        return _as_text(v)

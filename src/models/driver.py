"""Driver and delivery models."""

from datetime import datetime
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.models.base import ApiModel
from src.models.order import Order
from src.utils.money import ZERO, Money


class Location(BaseModel):
    """Geographic location."""

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class Driver(ApiModel):
    """Delivery driver profile."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    phone: str
    email: EmailStr | None = None
    vehicle_type: str = "car"
    is_available: bool = False
    is_active: bool = True
    current_location: Location | None = None
    current_order_id: str | None = None
    total_deliveries: int = 0
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_is_none(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @property
    def has_active_order(self) -> bool:
        """Check if the driver is carrying an order right now."""
        return self.current_order_id is not None

    @property
    def can_take_orders(self) -> bool:
        """Check if new orders may be offered to this driver."""
        return self.is_active and self.is_available and not self.has_active_order


class DriverCreate(ApiModel):
    """Payload for registering a driver."""

    name: str
    phone: str
    email: EmailStr | None = None
    vehicle_type: str = "car"
    is_available: bool = False

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_is_none(cls, v: Any) -> Any:
        return _blank_to_none(v)


class DriverUpdate(ApiModel):
    """Profile and availability changes; unset fields are left alone."""

    name: str | None = None
    phone: str | None = None
    email: EmailStr | None = None
    vehicle_type: str | None = None
    current_location: Location | None = None
    is_available: bool | None = None


class DriverStats(ApiModel):
    """Lifetime and monthly delivery figures for a driver."""

    total_orders: int = 0
    completed_orders: int = 0
    total_earnings: Money = ZERO
    monthly_orders: int = 0
    monthly_earnings: Money = ZERO
    success_rate: int = 0


class DashboardStats(ApiModel):
    """Today's figures shown at the top of the driver app."""

    today_orders: int = 0
    today_earnings: Money = ZERO
    completed_today: int = 0
    total_orders: int = 0
    total_earnings: Money = ZERO


class DriverDashboard(ApiModel):
    """Everything the driver app needs on one screen."""

    stats: DashboardStats
    available_orders: list[Order] = Field(default_factory=list)
    current_orders: list[Order] = Field(default_factory=list)

"""Order-related data models."""

import json
import time
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any
from uuid import uuid4

from pydantic import BeforeValidator, EmailStr, Field, PlainSerializer, field_validator

from src.errors import InvalidTransition
from src.models.base import ApiModel
from src.utils.money import ZERO, Money, format_decimal, try_parse_decimal


class OrderStatus(str, Enum):
    """Canonical order status progression."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    ON_WAY = "on_way"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# Driver-app spellings of the same states
STATUS_ALIASES: dict[str, OrderStatus] = {
    "ready": OrderStatus.PREPARING,
    "picked_up": OrderStatus.ON_WAY,
}

TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})


def normalize_status(value: str | OrderStatus) -> OrderStatus:
    """Map either status vocabulary onto the canonical enum."""
    if isinstance(value, OrderStatus):
        return value

    key = str(value).strip().lower()
    if key in STATUS_ALIASES:
        return STATUS_ALIASES[key]

    try:
        return OrderStatus(key)
    except ValueError:
        raise InvalidTransition(f"Unknown order status '{value}'", status=value) from None


def _alias_status(value: Any) -> Any:
    if isinstance(value, str):
        return STATUS_ALIASES.get(value.strip().lower(), value)
    return value


def _format_optional(value: Decimal | None) -> str | None:
    return None if value is None else format_decimal(value)


OptionalMoney = Annotated[
    Decimal | None,
    BeforeValidator(try_parse_decimal),
    PlainSerializer(_format_optional, return_type=str | None, when_used="json"),
]


def generate_order_number() -> str:
    """Human-readable order number from the current epoch milliseconds."""
    return f"ORD{int(time.time() * 1000)}"


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _items_from_text(value: Any) -> Any:
    # Items travel as serialized JSON text in older clients
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            return []
    if value is None:
        return []
    return value


class PaymentMethod(str, Enum):
    """Accepted payment methods."""

    CASH = "cash"
    WALLET = "wallet"
    DIGITAL = "digital"
    CARD = "card"


class PaymentStatus(str, Enum):
    """Payment settlement state."""

    PAID = "paid"
    UNPAID = "unpaid"


class OrderItem(ApiModel):
    """Individual item in an order."""

    name: str
    price: Money = ZERO
    quantity: int = Field(default=1, ge=1)
    restaurant_id: str | None = None

    @property
    def line_total(self) -> Decimal:
        """Price multiplied by quantity."""
        return self.price * self.quantity


class Order(ApiModel):
    """Complete order details."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    order_number: str = Field(default_factory=generate_order_number)

    # Customer
    customer_id: str | None = None
    customer_name: str
    customer_phone: str
    customer_email: EmailStr | None = None

    # Assignments
    restaurant_id: str
    driver_id: str | None = None

    # Items
    items: list[OrderItem] = Field(default_factory=list)

    # Pricing
    subtotal: Money = ZERO
    delivery_fee: Money = ZERO
    discount_amount: Money = ZERO
    total: Money = ZERO
    total_amount: Money = ZERO
    driver_earnings: OptionalMoney = None

    # Status
    status: OrderStatus = OrderStatus.PENDING
    payment_method: PaymentMethod = PaymentMethod.CASH
    payment_status: PaymentStatus = PaymentStatus.UNPAID

    # Delivery details
    delivery_address: str
    customer_location_lat: float | None = None
    customer_location_lng: float | None = None
    notes: str | None = None
    delivery_date: str | None = None
    delivery_time_slot: str | None = None

    # Timing
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    actual_delivery_time: datetime | None = None

    @field_validator("status", mode="before")
    @classmethod
    def accept_status_alias(cls, v: Any) -> Any:
        """Store driver-app status spellings canonically."""
        return _alias_status(v)

    @field_validator("items", mode="before")
    @classmethod
    def parse_items(cls, v: Any) -> Any:
        """Accept items as a list or as serialized JSON text."""
        return _items_from_text(v)

    @field_validator("customer_email", mode="before")
    @classmethod
    def empty_email_is_none(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @property
    def is_terminal(self) -> bool:
        """Check if the order can no longer change status."""
        return self.status in TERMINAL_STATUSES

    @property
    def has_driver(self) -> bool:
        """Check if a driver has claimed the order."""
        return self.driver_id is not None

    @property
    def is_active_delivery(self) -> bool:
        """Check if a driver is currently carrying the order."""
        return self.status == OrderStatus.ON_WAY and self.has_driver


class OrderCreate(ApiModel):
    """Payload for placing an order."""

    customer_id: str | None = None
    customer_name: str = ""
    customer_phone: str = ""
    customer_email: EmailStr | None = None
    restaurant_id: str = ""
    items: list[OrderItem] = Field(default_factory=list)
    discount_amount: Money = ZERO
    payment_method: PaymentMethod = PaymentMethod.CASH
    delivery_address: str = ""
    customer_location_lat: float | None = None
    customer_location_lng: float | None = None
    notes: str | None = None
    delivery_date: str | None = None
    delivery_time_slot: str | None = None

    @field_validator("items", mode="before")
    @classmethod
    def parse_items(cls, v: Any) -> Any:
        return _items_from_text(v)

    @field_validator("customer_email", mode="before")
    @classmethod
    def empty_email_is_none(cls, v: Any) -> Any:
        return _blank_to_none(v)


class OrderUpdate(ApiModel):
    """Admin update of an order; status goes through the lifecycle rules."""

    status: str | None = None
    notes: str | None = None
    payment_status: PaymentStatus | None = None
    delivery_address: str | None = None
    customer_phone: str | None = None
    delivery_date: str | None = None
    delivery_time_slot: str | None = None


class AssignDriverRequest(ApiModel):
    """Claim request for an unassigned order."""

    driver_id: str


class DriverStatusUpdate(ApiModel):
    """Status change reported from the driver app."""

    status: str

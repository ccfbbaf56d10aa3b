"""Data models for the marketplace."""

from src.models.customer import (
    AddressCreate,
    AddressUpdate,
    Customer,
    CustomerCreate,
    CustomerUpdate,
    Rating,
    ReviewCreate,
    UserAddress,
)
from src.models.driver import (
    DashboardStats,
    Driver,
    DriverCreate,
    DriverDashboard,
    DriverStats,
    DriverUpdate,
    Location,
)
from src.models.order import (
    STATUS_ALIASES,
    AssignDriverRequest,
    DriverStatusUpdate,
    Order,
    OrderCreate,
    OrderItem,
    OrderStatus,
    OrderUpdate,
    PaymentMethod,
    PaymentStatus,
    normalize_status,
)
from src.models.restaurant import Restaurant, RestaurantCreate

__all__ = [
    # Customer
    "Customer",
    "CustomerCreate",
    "CustomerUpdate",
    "UserAddress",
    "AddressCreate",
    "AddressUpdate",
    "Rating",
    "ReviewCreate",
    # Driver
    "Driver",
    "DriverCreate",
    "DriverUpdate",
    "Location",
    "DriverStats",
    "DashboardStats",
    "DriverDashboard",
    # Order
    "Order",
    "OrderCreate",
    "OrderItem",
    "OrderStatus",
    "OrderUpdate",
    "AssignDriverRequest",
    "DriverStatusUpdate",
    "PaymentMethod",
    "PaymentStatus",
    "STATUS_ALIASES",
    "normalize_status",
    # Restaurant
    "Restaurant",
    "RestaurantCreate",
]

"""Business services."""

from src.services.availability import DriverAvailability
from src.services.checkout import OrderCheckout
from src.services.customers import CustomerService
from src.services.lifecycle import OrderLifecycleService

__all__ = [
    "OrderLifecycleService",
    "OrderCheckout",
    "DriverAvailability",
    "CustomerService",
]

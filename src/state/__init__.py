"""State management modules."""

from src.state.manager import StateManager
from src.state.store import (
    AddressStore,
    CustomerStore,
    DriverStore,
    OrderStore,
    RatingStore,
    RestaurantStore,
)
from src.state.workflow import OrderTransitions

__all__ = [
    "StateManager",
    "OrderStore",
    "DriverStore",
    "RestaurantStore",
    "CustomerStore",
    "AddressStore",
    "RatingStore",
    "OrderTransitions",
]

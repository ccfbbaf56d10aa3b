"""FastAPI dependencies wiring services to the shared state manager."""

from fastapi import Depends

from src.services import CustomerService, DriverAvailability, OrderCheckout, OrderLifecycleService
from src.state.manager import StateManager, get_state_manager
from src.state.store import RestaurantStore


async def get_lifecycle(
    state_manager: StateManager = Depends(get_state_manager),
) -> OrderLifecycleService:
    return OrderLifecycleService(state_manager)


async def get_checkout(
    state_manager: StateManager = Depends(get_state_manager),
) -> OrderCheckout:
    return OrderCheckout(state_manager)


async def get_availability(
    state_manager: StateManager = Depends(get_state_manager),
) -> DriverAvailability:
    return DriverAvailability(state_manager)


async def get_customers(
    state_manager: StateManager = Depends(get_state_manager),
) -> CustomerService:
    return CustomerService(state_manager)


async def get_restaurants(
    state_manager: StateManager = Depends(get_state_manager),
) -> RestaurantStore:
    return RestaurantStore(state_manager)

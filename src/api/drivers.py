"""Driver endpoints: profile, availability and the delivery app."""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_availability, get_lifecycle
from src.models.driver import Driver, DriverCreate, DriverDashboard, DriverStats, DriverUpdate
from src.models.order import DriverStatusUpdate, Order
from src.services import DriverAvailability, OrderLifecycleService

router = APIRouter()


@router.get("", response_model=list[Driver])
async def list_drivers(
    available: bool | None = None,
    availability: DriverAvailability = Depends(get_availability),
) -> list[Driver]:
    """List drivers, optionally only those accepting orders."""
    return await availability.list_drivers(available=available)


@router.post("", response_model=Driver, status_code=status.HTTP_201_CREATED)
async def register_driver(
    payload: DriverCreate,
    availability: DriverAvailability = Depends(get_availability),
) -> Driver:
    """Register a driver."""
    return await availability.register_driver(payload)


@router.get("/{driver_id}", response_model=Driver)
async def get_driver(
    driver_id: str,
    availability: DriverAvailability = Depends(get_availability),
) -> Driver:
    """Get a driver profile. Clients should re-read this on each session."""
    return await availability.get_driver(driver_id)


@router.put("/{driver_id}", response_model=Driver)
async def update_driver(
    driver_id: str,
    payload: DriverUpdate,
    availability: DriverAvailability = Depends(get_availability),
) -> Driver:
    """Update availability or profile fields."""
    return await availability.update_driver(driver_id, payload)


@router.get("/{driver_id}/available-orders", response_model=list[Order])
async def available_orders(
    driver_id: str,
    availability: DriverAvailability = Depends(get_availability),
) -> list[Order]:
    """Unassigned orders this driver may accept right now."""
    return await availability.list_available_orders(driver_id)


@router.get("/{driver_id}/orders", response_model=list[Order])
async def driver_orders(
    driver_id: str,
    order_status: str | None = Query(default=None, alias="status"),
    availability: DriverAvailability = Depends(get_availability),
) -> list[Order]:
    """Orders handled by the driver, newest first."""
    return await availability.driver_orders(driver_id, status=order_status)


@router.put("/{driver_id}/orders/{order_id}/status", response_model=Order)
async def update_order_status(
    driver_id: str,
    order_id: str,
    payload: DriverStatusUpdate,
    lifecycle: OrderLifecycleService = Depends(get_lifecycle),
) -> Order:
    """Status update from the driver holding the order."""
    return await lifecycle.update_status_as_driver(order_id, driver_id, payload.status)


@router.get("/{driver_id}/dashboard", response_model=DriverDashboard)
async def dashboard(
    driver_id: str,
    availability: DriverAvailability = Depends(get_availability),
) -> DriverDashboard:
    """Today's figures with available and current orders."""
    return await availability.dashboard(driver_id)


@router.get("/{driver_id}/stats", response_model=DriverStats)
async def stats(
    driver_id: str,
    availability: DriverAvailability = Depends(get_availability),
) -> DriverStats:
    """Lifetime and monthly delivery statistics."""
    return await availability.stats(driver_id)

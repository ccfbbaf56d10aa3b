"""Order endpoints used by checkout, the admin dashboard and the driver app."""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_checkout, get_lifecycle
from src.models.order import AssignDriverRequest, Order, OrderCreate, OrderUpdate
from src.services import OrderCheckout, OrderLifecycleService
from src.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post("", response_model=Order, status_code=status.HTTP_201_CREATED)
async def place_order(
    payload: OrderCreate,
    checkout: OrderCheckout = Depends(get_checkout),
) -> Order:
    """
    Place a new order.

    Totals are recomputed from the items; the order starts as pending.
    """
    return await checkout.place_order(payload)


@router.get("", response_model=list[Order])
async def list_orders(
    order_status: str | None = Query(default=None, alias="status"),
    driver_id: str | None = Query(default=None, alias="driverId"),
    has_driver: bool | None = Query(default=None, alias="hasDriver"),
    customer_id: str | None = Query(default=None, alias="customerId"),
    search: str | None = None,
    lifecycle: OrderLifecycleService = Depends(get_lifecycle),
) -> list[Order]:
    """List orders newest first, filtered by any combination of predicates."""
    return await lifecycle.list_orders(
        status=order_status,
        driver_id=driver_id,
        has_driver=has_driver,
        customer_id=customer_id,
        search=search,
    )


@router.get("/stats")
async def order_stats(
    lifecycle: OrderLifecycleService = Depends(get_lifecycle),
) -> dict[str, int]:
    """Order counts per status for the admin dashboard."""
    return await lifecycle.order_stats()


@router.get("/{order_id}", response_model=Order)
async def get_order(
    order_id: str,
    lifecycle: OrderLifecycleService = Depends(get_lifecycle),
) -> Order:
    """Get order details."""
    return await lifecycle.get_order(order_id)


@router.put("/{order_id}", response_model=Order)
async def update_order(
    order_id: str,
    payload: OrderUpdate,
    lifecycle: OrderLifecycleService = Depends(get_lifecycle),
) -> Order:
    """Update status and editable fields of an order."""
    return await lifecycle.update_order(order_id, payload)


@router.put("/{order_id}/assign-driver", response_model=Order)
async def assign_driver(
    order_id: str,
    payload: AssignDriverRequest,
    lifecycle: OrderLifecycleService = Depends(get_lifecycle),
) -> Order:
    """
    Claim an order for a driver.

    Fails with 400 when the order is already taken, is not awaiting a
    driver, or the driver is still on another delivery.
    """
    return await lifecycle.assign_driver(order_id, payload.driver_id)


@router.post("/{order_id}/cancel", response_model=Order)
async def cancel_order(
    order_id: str,
    lifecycle: OrderLifecycleService = Depends(get_lifecycle),
) -> Order:
    """Cancel an order that has not left the restaurant."""
    order = await lifecycle.cancel(order_id)
    logger.info("order_cancelled_via_api", order_id=order_id)
    return order

"""Driver availability gate, driver profiles and driver-facing order views."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable

from src.config import Settings, get_settings
from src.errors import NotFound
from src.models.driver import (
    DashboardStats,
    Driver,
    DriverCreate,
    DriverDashboard,
    DriverStats,
    DriverUpdate,
)
from src.models.order import Order, OrderStatus
from src.state.manager import StateManager
from src.state.queries import filter_orders, newest_first
from src.state.store import DriverStore, OrderStore
from src.state.workflow import OrderTransitions
from src.utils.logging import get_logger
from src.utils.money import ZERO, parse_decimal

logger = get_logger(__name__)


def _earnings(orders: Iterable[Order]) -> Decimal:
    return sum((parse_decimal(order.driver_earnings) for order in orders), ZERO)


class DriverAvailability:
    """
    Controls which drivers are offered new orders.

    Availability is a read-side gate: a driver who is unavailable,
    deactivated or still carrying a delivery sees no available orders.
    The claim itself is guarded again inside the lifecycle transaction.
    """

    def __init__(self, state_manager: StateManager, settings: Settings | None = None):
        self.state = state_manager
        self.settings = settings or get_settings()
        self.drivers = DriverStore(state_manager)
        self.orders = OrderStore(state_manager)

    # Profiles

    async def register_driver(self, payload: DriverCreate) -> Driver:
        """Create a driver profile."""
        driver = Driver(**payload.model_dump())
        await self.drivers.create(driver)
        return driver

    async def get_driver(self, driver_id: str) -> Driver:
        """Retrieve a driver or raise NotFound."""
        return await self.drivers.require(driver_id)

    async def list_drivers(self, available: bool | None = None) -> list[Driver]:
        """All drivers, optionally only those currently accepting orders."""
        drivers = await self.drivers.list()
        if available is None:
            return drivers
        return [driver for driver in drivers if driver.can_take_orders == available]

    async def update_driver(self, driver_id: str, update: DriverUpdate) -> Driver:
        """
        Apply profile and availability changes.

        Runs as a transaction so a concurrent claim setting the driver's
        current order is never overwritten.
        """
        key = self.drivers.key(driver_id)
        fields = update.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        outcome: dict[str, Driver] = {}

        def mutate(current: dict[str, Any]) -> dict[str, Any]:
            if not current[key]:
                raise NotFound(f"Driver {driver_id} not found", id=driver_id)
            data = {**current[key], **fields}
            outcome["driver"] = self.drivers.load(data)
            return {key: self.drivers.dump(outcome["driver"])}

        await self.state.atomic_update([key], mutate)

        driver = outcome["driver"]
        logger.info(
            "driver_updated",
            driver_id=driver_id,
            fields=sorted(fields),
            is_available=driver.is_available,
        )
        return driver

    async def set_availability(self, driver_id: str, is_available: bool) -> Driver:
        """Flip the driver's availability flag."""
        return await self.update_driver(driver_id, DriverUpdate(is_available=is_available))

    # Order views

    async def list_available_orders(self, driver_id: str | None = None) -> list[Order]:
        """
        Unassigned orders waiting for a driver, newest first.

        Args:
            driver_id: When given, the list is empty unless this driver can
                take a new order right now

        Returns:
            At most ``available_orders_limit`` orders
        """
        if driver_id is not None:
            driver = await self.drivers.require(driver_id)
            if not driver.can_take_orders:
                logger.debug(
                    "available_orders_gated",
                    driver_id=driver_id,
                    is_available=driver.is_available,
                    current_order_id=driver.current_order_id,
                )
                return []

        orders = await self.orders.list()
        waiting = [
            order
            for order in orders
            if OrderTransitions.is_claimable(order.status) and not order.has_driver
        ]
        return newest_first(waiting)[: self.settings.available_orders_limit]

    async def driver_orders(self, driver_id: str, status: str | None = None) -> list[Order]:
        """Orders handled by a driver, newest first."""
        await self.drivers.require(driver_id)
        orders = await self.orders.list()
        return newest_first(filter_orders(orders, status=status, driver_id=driver_id))

    async def active_orders(self, driver_id: str) -> list[Order]:
        """Deliveries the driver is carrying right now."""
        return await self.driver_orders(driver_id, status=OrderStatus.ON_WAY)

    async def dashboard(self, driver_id: str, now: datetime | None = None) -> DriverDashboard:
        """Today's figures with available and current orders."""
        now = now or datetime.utcnow()
        orders = await self.driver_orders(driver_id)

        today = [order for order in orders if order.created_at.date() == now.date()]
        completed_today = [order for order in today if order.status == OrderStatus.DELIVERED]
        delivered = [order for order in orders if order.status == OrderStatus.DELIVERED]

        stats = DashboardStats(
            today_orders=len(today),
            today_earnings=_earnings(completed_today),
            completed_today=len(completed_today),
            total_orders=len(orders),
            total_earnings=_earnings(delivered),
        )
        return DriverDashboard(
            stats=stats,
            available_orders=await self.list_available_orders(driver_id),
            current_orders=[order for order in orders if order.status == OrderStatus.ON_WAY],
        )

    async def stats(self, driver_id: str, now: datetime | None = None) -> DriverStats:
        """Lifetime and current-month delivery figures."""
        now = now or datetime.utcnow()
        orders = await self.driver_orders(driver_id)
        delivered = [order for order in orders if order.status == OrderStatus.DELIVERED]

        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        monthly = [order for order in delivered if order.created_at >= month_start]

        success_rate = 0
        if orders:
            ratio = Decimal(len(delivered) * 100) / Decimal(len(orders))
            success_rate = int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

        return DriverStats(
            total_orders=len(orders),
            completed_orders=len(delivered),
            total_earnings=_earnings(delivered),
            monthly_orders=len(monthly),
            monthly_earnings=_earnings(monthly),
            success_rate=success_rate,
        )

"""Order lifecycle - status transitions and driver claims."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Callable

from src.config import Settings, get_settings
from src.errors import (
    AlreadyAssigned,
    ConcurrentUpdate,
    DriverBusy,
    Forbidden,
    InvalidState,
    InvalidTransition,
    MarketplaceError,
    NotFound,
)
from src.models.driver import Driver
from src.models.order import Order, OrderStatus, OrderUpdate, normalize_status
from src.services.pricing import compute_driver_earnings
from src.state.manager import StateManager
from src.state.queries import count_by_status, filter_orders, newest_first
from src.state.store import DriverStore, OrderStore
from src.state.workflow import OrderTransitions
from src.utils.logging import OrderEventLogger

Change = Callable[[Order, Driver | None], None]


# Transition rules. Each mutates the order in place or raises.


def cancel_order(order: Order) -> None:
    """Cancel an order that no driver has picked up yet."""
    if not OrderTransitions.can_cancel(order.status):
        raise InvalidTransition(
            f"Order in status '{order.status.value}' cannot be cancelled",
            status=order.status.value,
        )
    order.status = OrderStatus.CANCELLED


def claim_order(order: Order, driver: Driver, commission_rate: Decimal) -> None:
    """Hand an unassigned order to a driver and start the delivery."""
    if order.driver_id is not None:
        raise AlreadyAssigned(
            "Order has already been accepted by another driver",
            driver_id=order.driver_id,
        )
    if not OrderTransitions.is_claimable(order.status):
        raise InvalidState(
            f"Order in status '{order.status.value}' cannot be assigned",
            status=order.status.value,
        )
    if not driver.is_active:
        raise InvalidState("Driver account is deactivated", driver_id=driver.id)
    if driver.has_active_order:
        raise DriverBusy(
            "Driver already has an active delivery",
            driver_id=driver.id,
            current_order_id=driver.current_order_id,
        )

    order.driver_id = driver.id
    order.status = OrderStatus.ON_WAY
    order.driver_earnings = compute_driver_earnings(order.delivery_fee, commission_rate)
    driver.current_order_id = order.id


def deliver_order(order: Order, driver: Driver | None, commission_rate: Decimal) -> None:
    """Complete a delivery and release the driver."""
    if order.status != OrderStatus.ON_WAY:
        raise InvalidTransition(
            f"Order in status '{order.status.value}' cannot be marked delivered",
            status=order.status.value,
        )

    order.status = OrderStatus.DELIVERED
    order.actual_delivery_time = datetime.utcnow()

    if order.driver_id is not None and order.driver_earnings is None:
        order.driver_earnings = compute_driver_earnings(order.delivery_fee, commission_rate)

    if driver is not None:
        if driver.current_order_id == order.id:
            driver.current_order_id = None
        driver.total_deliveries += 1


def advance_order(
    order: Order,
    target: OrderStatus,
    driver: Driver | None,
    commission_rate: Decimal,
) -> None:
    """Move an order one step along its lifecycle."""
    if order.is_terminal:
        raise InvalidTransition(
            f"Order is already {order.status.value}",
            status=order.status.value,
        )

    if target == OrderStatus.CANCELLED:
        cancel_order(order)
        return

    if not OrderTransitions.can_transition(order.status, target):
        raise InvalidTransition(
            f"Cannot move order from '{order.status.value}' to '{target.value}'",
            status=order.status.value,
            target=target.value,
        )

    if target == OrderStatus.DELIVERED:
        deliver_order(order, driver, commission_rate)
    else:
        order.status = target


class OrderLifecycleService:
    """
    Applies lifecycle rules to stored orders.

    Every mutation runs as one optimistic transaction over the order and,
    when a driver is involved, the driver record. Two drivers racing for the
    same order therefore cannot both win, and a driver cannot end up holding
    two active deliveries.
    """

    def __init__(self, state_manager: StateManager, settings: Settings | None = None):
        self.state = state_manager
        self.settings = settings or get_settings()
        self.orders = OrderStore(state_manager)
        self.drivers = DriverStore(state_manager)
        self.events = OrderEventLogger("order_lifecycle")

    @property
    def commission_rate(self) -> Decimal:
        return self.settings.driver_commission_rate

    # Queries

    async def get_order(self, order_id: str) -> Order:
        """Retrieve an order or raise NotFound."""
        return await self.orders.require(order_id)

    async def list_orders(
        self,
        status: str | None = None,
        driver_id: str | None = None,
        has_driver: bool | None = None,
        customer_id: str | None = None,
        search: str | None = None,
    ) -> list[Order]:
        """Filtered orders, newest first."""
        orders = await self.orders.list()
        matching = filter_orders(
            orders,
            status=status,
            driver_id=driver_id,
            has_driver=has_driver,
            customer_id=customer_id,
            search=search,
        )
        return newest_first(matching)

    async def order_stats(self) -> dict[str, int]:
        """Order counts per status plus the overall total."""
        orders = await self.orders.list()
        counts = count_by_status(orders)
        counts["total"] = len(orders)
        return counts

    # Transitions

    async def advance(self, order_id: str, target: str | OrderStatus) -> Order:
        """
        Move an order to the next status.

        Args:
            order_id: Order to move
            target: Immediate successor of the current status, in either
                status vocabulary. Cancelled is accepted where cancelling is.

        Returns:
            The updated order
        """
        target = normalize_status(target)
        releases_driver = target == OrderStatus.DELIVERED
        driver_id = await self._current_driver(order_id) if releases_driver else None

        return await self._transact(
            order_id,
            "advance",
            lambda order, driver: advance_order(order, target, driver, self.commission_rate),
            driver_id=driver_id,
            expect_driver=releases_driver,
        )

    async def cancel(self, order_id: str) -> Order:
        """Cancel a pending, confirmed or preparing order."""
        return await self._transact(
            order_id,
            "cancel",
            lambda order, driver: cancel_order(order),
        )

    async def assign_driver(self, order_id: str, driver_id: str) -> Order:
        """
        Atomically claim an unassigned order for a driver.

        Raises:
            NotFound: Unknown order or driver
            AlreadyAssigned: Another driver holds the order
            InvalidState: Order is not awaiting a driver, or the driver is
                deactivated
            DriverBusy: Driver is still carrying another order
        """
        order = await self._transact(
            order_id,
            "assign_driver",
            lambda order, driver: claim_order(order, driver, self.commission_rate),
            driver_id=driver_id,
        )

        self.events.log_claim(
            order.id,
            driver_id,
            earnings=str(order.driver_earnings),
        )
        return order

    async def mark_delivered(self, order_id: str, driver_id: str | None = None) -> Order:
        """
        Complete a delivery.

        When ``driver_id`` is given, only that driver may complete the order.
        """
        as_driver = driver_id is not None
        if not as_driver:
            driver_id = await self._current_driver(order_id)

        def change(order: Order, driver: Driver | None) -> None:
            if as_driver:
                self._check_holder(order, driver)
            deliver_order(order, driver, self.commission_rate)

        return await self._transact(
            order_id,
            "mark_delivered",
            change,
            driver_id=driver_id,
            expect_driver=not as_driver,
        )

    async def update_order(self, order_id: str, update: OrderUpdate) -> Order:
        """
        Apply an admin update.

        A status different from the current one goes through the lifecycle
        rules; repeating the current status is a no-op. The remaining fields
        are written in the same transaction.
        """
        target = normalize_status(update.status) if update.status else None
        fields = update.model_dump(exclude_unset=True, exclude_none=True, exclude={"status"})
        releases_driver = target == OrderStatus.DELIVERED
        driver_id = await self._current_driver(order_id) if releases_driver else None

        def change(order: Order, driver: Driver | None) -> None:
            if target is not None and target != order.status:
                advance_order(order, target, driver, self.commission_rate)
            for name, value in fields.items():
                setattr(order, name, value)

        return await self._transact(
            order_id,
            "update",
            change,
            driver_id=driver_id,
            expect_driver=releases_driver,
        )

    async def update_status_as_driver(
        self,
        order_id: str,
        driver_id: str,
        status: str,
    ) -> Order:
        """Status change reported by the driver holding the order."""
        target = normalize_status(status)

        def change(order: Order, driver: Driver | None) -> None:
            self._check_holder(order, driver)
            if target != order.status:
                advance_order(order, target, driver, self.commission_rate)

        return await self._transact(order_id, "driver_status", change, driver_id=driver_id)

    # Internals

    @staticmethod
    def _check_holder(order: Order, driver: Driver | None) -> None:
        if driver is None or order.driver_id != driver.id:
            raise Forbidden("Order is not assigned to this driver", order_id=order.id)

    async def _current_driver(self, order_id: str) -> str | None:
        # Completing a delivery also releases the driver, so their record
        # has to join the transaction
        order = await self.orders.require(order_id)
        return order.driver_id

    async def _transact(
        self,
        order_id: str,
        action: str,
        change: Change,
        driver_id: str | None = None,
        expect_driver: bool = False,
    ) -> Order:
        order_key = self.orders.key(order_id)
        driver_key = self.drivers.key(driver_id) if driver_id else None
        keys = [order_key] + ([driver_key] if driver_key else [])
        outcome: dict[str, Any] = {}

        def mutate(current: dict[str, Any]) -> dict[str, Any]:
            if not current[order_key]:
                raise NotFound(f"Order {order_id} not found", id=order_id)
            order = self.orders.load(current[order_key])

            driver = None
            if driver_key:
                if not current[driver_key]:
                    raise NotFound(f"Driver {driver_id} not found", id=driver_id)
                driver = self.drivers.load(current[driver_key])

            # driver_id was read before the transaction started
            if expect_driver and order.driver_id != driver_id:
                raise ConcurrentUpdate("Order changed while updating, please retry")

            outcome["from"] = order.status
            change(order, driver)
            order.updated_at = datetime.utcnow()
            outcome["order"] = order

            updates = {order_key: self.orders.dump(order)}
            if driver is not None:
                updates[driver_key] = self.drivers.dump(driver)
            return updates

        try:
            await self.state.atomic_update(keys, mutate)
        except MarketplaceError as exc:
            self.events.log_rejection(action, order_id, exc.message, error_code=exc.code)
            raise

        order = outcome["order"]
        if order.status != outcome["from"]:
            self.events.log_transition(
                order.id,
                outcome["from"].value,
                order.status.value,
                action=action,
                driver_id=order.driver_id,
            )
        return order

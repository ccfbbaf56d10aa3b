"""Tests for the driver availability gate and driver views."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from src.config import get_settings
from src.errors import NotFound
from src.models.driver import Driver, DriverCreate, DriverUpdate, Location
from src.models.order import OrderStatus
from src.services.availability import DriverAvailability
from src.services.lifecycle import OrderLifecycleService


@pytest.mark.asyncio
async def test_register_and_fetch_driver(availability: DriverAvailability) -> None:
    driver = await availability.register_driver(
        DriverCreate(name="New Driver", phone="+966544444444", email="")
    )

    fetched = await availability.get_driver(driver.id)
    assert fetched.name == "New Driver"
    assert fetched.email is None
    assert fetched.is_available is False
    assert fetched.is_active is True


@pytest.mark.asyncio
async def test_unknown_driver(availability: DriverAvailability) -> None:
    with pytest.raises(NotFound):
        await availability.get_driver("ghost")


@pytest.mark.asyncio
async def test_available_driver_sees_claimable_orders(
    availability: DriverAvailability,
    order_factory,
    sample_driver: Driver,
) -> None:
    confirmed = await order_factory(OrderStatus.CONFIRMED)
    preparing = await order_factory(OrderStatus.PREPARING)
    await order_factory(OrderStatus.PENDING)
    await order_factory(OrderStatus.DELIVERED)
    await order_factory(OrderStatus.PREPARING, driver_id="someone-else")

    orders = await availability.list_available_orders(sample_driver.id)

    assert {order.id for order in orders} == {confirmed.id, preparing.id}


@pytest.mark.asyncio
async def test_unavailable_driver_sees_nothing(
    availability: DriverAvailability,
    confirmed_order,
    sample_driver: Driver,
) -> None:
    await availability.set_availability(sample_driver.id, False)

    assert await availability.list_available_orders(sample_driver.id) == []

    await availability.set_availability(sample_driver.id, True)

    orders = await availability.list_available_orders(sample_driver.id)
    assert [order.id for order in orders] == [confirmed_order.id]


@pytest.mark.asyncio
async def test_busy_driver_sees_nothing(
    availability: DriverAvailability,
    lifecycle: OrderLifecycleService,
    order_factory,
    sample_driver: Driver,
) -> None:
    first = await order_factory()
    await order_factory()
    await lifecycle.assign_driver(first.id, sample_driver.id)

    assert await availability.list_available_orders(sample_driver.id) == []


@pytest.mark.asyncio
async def test_available_orders_newest_first_and_limited(
    availability: DriverAvailability,
    order_factory,
    sample_driver: Driver,
) -> None:
    limit = get_settings().available_orders_limit
    start = datetime(2026, 1, 1, 12, 0)
    for minute in range(limit + 2):
        await order_factory(created_at=start + timedelta(minutes=minute))

    orders = await availability.list_available_orders(sample_driver.id)

    assert len(orders) == limit
    assert orders[0].created_at == start + timedelta(minutes=limit + 1)
    assert orders == sorted(orders, key=lambda order: order.created_at, reverse=True)


@pytest.mark.asyncio
async def test_update_driver_keeps_current_order(
    availability: DriverAvailability,
    lifecycle: OrderLifecycleService,
    confirmed_order,
    sample_driver: Driver,
) -> None:
    await lifecycle.assign_driver(confirmed_order.id, sample_driver.id)

    driver = await availability.update_driver(
        sample_driver.id,
        DriverUpdate(vehicle_type="motorcycle", current_location=Location(lat=24.7, lng=46.6)),
    )

    assert driver.vehicle_type == "motorcycle"
    assert driver.current_location == Location(lat=24.7, lng=46.6)
    assert driver.current_order_id == confirmed_order.id
    assert driver.is_available is True


@pytest.mark.asyncio
async def test_list_drivers_filters_on_readiness(
    availability: DriverAvailability,
    sample_driver: Driver,
    second_driver: Driver,
) -> None:
    await availability.set_availability(second_driver.id, False)

    ready = await availability.list_drivers(available=True)
    everyone = await availability.list_drivers()

    assert [driver.id for driver in ready] == [sample_driver.id]
    assert len(everyone) == 2


@pytest.mark.asyncio
async def test_dashboard_and_stats(
    availability: DriverAvailability,
    lifecycle: OrderLifecycleService,
    order_factory,
    sample_driver: Driver,
) -> None:
    now = datetime.utcnow()
    delivered = await order_factory(created_at=now)
    await lifecycle.assign_driver(delivered.id, sample_driver.id)
    await lifecycle.mark_delivered(delivered.id)

    active = await order_factory(created_at=now)
    await lifecycle.assign_driver(active.id, sample_driver.id)

    waiting = await order_factory(created_at=now)

    dashboard = await availability.dashboard(sample_driver.id, now=now)

    assert dashboard.stats.today_orders == 2
    assert dashboard.stats.completed_today == 1
    assert dashboard.stats.today_earnings == Decimal("7")
    assert dashboard.stats.total_earnings == Decimal("7")
    assert [order.id for order in dashboard.current_orders] == [active.id]
    # Carrying a delivery, so nothing new is offered
    assert dashboard.available_orders == []
    assert waiting.driver_id is None

    stats = await availability.stats(sample_driver.id, now=now)

    assert stats.total_orders == 2
    assert stats.completed_orders == 1
    assert stats.total_earnings == Decimal("7")
    assert stats.monthly_orders == 1
    assert stats.success_rate == 50


@pytest.mark.asyncio
async def test_driver_orders_filtered_by_status(
    availability: DriverAvailability,
    lifecycle: OrderLifecycleService,
    confirmed_order,
    sample_driver: Driver,
) -> None:
    await lifecycle.assign_driver(confirmed_order.id, sample_driver.id)

    on_way = await availability.driver_orders(sample_driver.id, status="picked_up")
    delivered = await availability.driver_orders(sample_driver.id, status="delivered")

    assert [order.id for order in on_way] == [confirmed_order.id]
    assert delivered == []


@pytest.mark.asyncio
async def test_success_rate_rounds_half_up(
    availability: DriverAvailability,
    order_factory,
    sample_driver: Driver,
) -> None:
    await order_factory(OrderStatus.DELIVERED, driver_id=sample_driver.id, driver_earnings="7")
    for _ in range(7):
        await order_factory(OrderStatus.ON_WAY, driver_id=sample_driver.id)

    stats = await availability.stats(sample_driver.id)

    # 1 of 8 is 12.5%
    assert stats.total_orders == 8
    assert stats.success_rate == 13


@pytest.mark.asyncio
async def test_profile_update_cannot_deactivate_driver(
    availability: DriverAvailability,
    sample_driver: Driver,
) -> None:
    update = DriverUpdate.model_validate({"isActive": False, "vehicleType": "bicycle"})

    driver = await availability.update_driver(sample_driver.id, update)

    assert driver.vehicle_type == "bicycle"
    assert driver.is_active is True

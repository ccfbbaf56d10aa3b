"""Tests for the order status state machine."""

import pytest

from src.errors import InvalidTransition
from src.models.order import Order, OrderStatus, normalize_status
from src.state.workflow import OrderTransitions


def test_forward_chain() -> None:
    status = OrderStatus.PENDING
    visited = [status]
    while (status := OrderTransitions.next_status(status)) is not None:
        visited.append(status)

    assert visited == [
        OrderStatus.PENDING,
        OrderStatus.CONFIRMED,
        OrderStatus.PREPARING,
        OrderStatus.ON_WAY,
        OrderStatus.DELIVERED,
    ]


@pytest.mark.parametrize(
    ("from_state", "to_state"),
    [
        (OrderStatus.PENDING, OrderStatus.DELIVERED),
        (OrderStatus.PENDING, OrderStatus.PREPARING),
        (OrderStatus.CONFIRMED, OrderStatus.PENDING),
        (OrderStatus.DELIVERED, OrderStatus.ON_WAY),
        (OrderStatus.CANCELLED, OrderStatus.PENDING),
    ],
)
def test_skips_and_reversals_are_rejected(from_state: OrderStatus, to_state: OrderStatus) -> None:
    assert OrderTransitions.can_transition(from_state, to_state) is False


def test_cancel_only_before_pickup() -> None:
    assert OrderTransitions.can_cancel(OrderStatus.PENDING)
    assert OrderTransitions.can_cancel(OrderStatus.CONFIRMED)
    assert OrderTransitions.can_cancel(OrderStatus.PREPARING)
    assert not OrderTransitions.can_cancel(OrderStatus.ON_WAY)
    assert not OrderTransitions.can_cancel(OrderStatus.DELIVERED)
    assert not OrderTransitions.can_transition(OrderStatus.ON_WAY, OrderStatus.CANCELLED)


def test_terminal_statuses_have_no_successor() -> None:
    assert OrderTransitions.next_status(OrderStatus.DELIVERED) is None
    assert OrderTransitions.next_status(OrderStatus.CANCELLED) is None


def test_claimable_statuses() -> None:
    assert OrderTransitions.is_claimable(OrderStatus.CONFIRMED)
    assert OrderTransitions.is_claimable(OrderStatus.PREPARING)
    assert not OrderTransitions.is_claimable(OrderStatus.PENDING)
    assert not OrderTransitions.is_claimable(OrderStatus.ON_WAY)


def test_driver_app_aliases_normalize() -> None:
    assert normalize_status("ready") == OrderStatus.PREPARING
    assert normalize_status("picked_up") == OrderStatus.ON_WAY
    assert normalize_status(" Delivered ") == OrderStatus.DELIVERED


def test_unknown_status_is_rejected() -> None:
    with pytest.raises(InvalidTransition):
        normalize_status("lost")


def test_order_model_stores_aliases_canonically() -> None:
    order = Order(
        customer_name="A",
        customer_phone="1",
        restaurant_id="r1",
        delivery_address="Somewhere",
        status="picked_up",
    )

    assert order.status == OrderStatus.ON_WAY

"""Delivery fee, total and driver commission rules."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable

from src.models.order import OrderItem
from src.models.restaurant import Restaurant
from src.utils.money import ZERO, parse_decimal, try_parse_decimal

DEFAULT_DELIVERY_FEE = Decimal("5")
DRIVER_COMMISSION_RATE = Decimal("0.70")


def resolve_delivery_fee(
    restaurant: Restaurant | None,
    item_count: int,
    default_fee: Decimal = DEFAULT_DELIVERY_FEE,
) -> Decimal:
    """
    Pick the delivery fee for an order.

    The restaurant's own fee wins when it parses to a non-negative number.
    Otherwise the flat default applies to non-empty orders, and empty
    orders cost nothing.
    """
    if restaurant is not None:
        fee = try_parse_decimal(restaurant.delivery_fee)
        if fee is not None and fee >= 0:
            return fee

    return default_fee if item_count > 0 else ZERO


def compute_subtotal(items: Iterable[OrderItem]) -> Decimal:
    """Sum of price times quantity over all items."""
    return sum((item.line_total for item in items), ZERO)


def compute_total(subtotal: Any, delivery_fee: Any, discount: Any) -> Decimal:
    """Subtotal plus fee minus discount, never below zero."""
    total = parse_decimal(subtotal) + parse_decimal(delivery_fee) - parse_decimal(discount)
    return max(ZERO, total)


def compute_driver_earnings(
    delivery_fee: Any,
    rate: Decimal = DRIVER_COMMISSION_RATE,
) -> Decimal:
    """Driver's share of the delivery fee, rounded half-up to a whole unit."""
    share = parse_decimal(delivery_fee) * rate
    return share.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def meets_minimum_order(subtotal: Any, restaurant: Restaurant | None) -> bool:
    """Check the subtotal against the restaurant's minimum order, if it has one."""
    if restaurant is None:
        return True

    minimum = try_parse_decimal(restaurant.minimum_order)
    if minimum is None:
        return True

    return parse_decimal(subtotal) >= minimum

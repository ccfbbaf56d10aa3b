"""In-memory filters and orderings over listed records."""

from collections import Counter
from typing import Sequence, TypeVar

from src.models.customer import UserAddress
from src.models.order import Order, OrderStatus, normalize_status

T = TypeVar("T")


def filter_orders(
    orders: Sequence[Order],
    status: str | OrderStatus | None = None,
    driver_id: str | None = None,
    has_driver: bool | None = None,
    customer_id: str | None = None,
    search: str | None = None,
) -> list[Order]:
    """
    Apply the order list predicates.

    Args:
        orders: Orders to filter
        status: Status in either vocabulary
        driver_id: Only orders held by this driver
        has_driver: Only assigned (True) or unassigned (False) orders
        customer_id: Only orders placed by this customer
        search: Case-insensitive match on customer name, phone or order number

    Returns:
        Matching orders, input order preserved
    """
    wanted = normalize_status(status) if status else None
    needle = search.strip().lower() if search else ""

    result = []
    for order in orders:
        if wanted is not None and order.status != wanted:
            continue
        if driver_id is not None and order.driver_id != driver_id:
            continue
        if has_driver is not None and order.has_driver != has_driver:
            continue
        if customer_id is not None and order.customer_id != customer_id:
            continue
        if needle and not _matches(order, needle):
            continue
        result.append(order)

    return result


def _matches(order: Order, needle: str) -> bool:
    haystack = (order.customer_name, order.customer_phone, order.order_number)
    return any(needle in (value or "").lower() for value in haystack)


def newest_first(orders: Sequence[Order]) -> list[Order]:
    """Sort orders by creation time, newest first."""
    return sorted(orders, key=lambda order: order.created_at, reverse=True)


def sort_addresses(addresses: Sequence[UserAddress]) -> list[UserAddress]:
    """Default address first, the rest newest first."""
    return sorted(
        addresses,
        key=lambda address: (not address.is_default, -address.created_at.timestamp()),
    )


def paginate(items: Sequence[T], page: int = 1, limit: int = 10) -> list[T]:
    """Slice one 1-based page out of a sequence."""
    page = max(page, 1)
    limit = max(limit, 0)
    start = (page - 1) * limit
    return list(items[start:start + limit])


def count_by_status(orders: Sequence[Order]) -> dict[str, int]:
    """Number of orders in each canonical status, zeros included."""
    counts = Counter(order.status for order in orders)
    return {status.value: counts.get(status, 0) for status in OrderStatus}

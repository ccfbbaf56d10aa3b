"""Order lifecycle state machine."""

from src.models.order import TERMINAL_STATUSES, OrderStatus


class OrderTransitions:
    """Valid order status transitions."""

    # Forward edges; each non-terminal status has exactly one successor
    FORWARD = {
        OrderStatus.PENDING: OrderStatus.CONFIRMED,
        OrderStatus.CONFIRMED: OrderStatus.PREPARING,
        OrderStatus.PREPARING: OrderStatus.ON_WAY,
        OrderStatus.ON_WAY: OrderStatus.DELIVERED,
    }

    CANCELLABLE = frozenset(
        {OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PREPARING}
    )

    # Unassigned orders in these states are offered to drivers
    CLAIMABLE = frozenset({OrderStatus.CONFIRMED, OrderStatus.PREPARING})

    TERMINAL = TERMINAL_STATUSES

    @classmethod
    def next_status(cls, current: OrderStatus) -> OrderStatus | None:
        """Return the forward successor, or None for terminal statuses."""
        return cls.FORWARD.get(current)

    @classmethod
    def can_transition(cls, from_state: OrderStatus, to_state: OrderStatus) -> bool:
        """Check if a state transition is valid."""
        if to_state == OrderStatus.CANCELLED:
            return from_state in cls.CANCELLABLE
        return cls.FORWARD.get(from_state) == to_state

    @classmethod
    def can_cancel(cls, status: OrderStatus) -> bool:
        return status in cls.CANCELLABLE

    @classmethod
    def is_claimable(cls, status: OrderStatus) -> bool:
        return status in cls.CLAIMABLE

"""Checkout - validates a cart and places the order."""

from src.config import Settings, get_settings
from src.errors import MinimumOrderNotMet, ValidationError
from src.models.order import Order, OrderCreate, OrderStatus, PaymentStatus
from src.services.pricing import (
    compute_subtotal,
    compute_total,
    meets_minimum_order,
    resolve_delivery_fee,
)
from src.state.manager import StateManager
from src.state.store import OrderStore, RestaurantStore
from src.utils.logging import get_logger
from src.utils.money import ZERO

logger = get_logger(__name__)


class OrderCheckout:
    """
    Turns a customer's cart into a pending order.

    Responsibilities:
    - Reject incomplete contact details and empty carts
    - Check every item belongs to the ordering restaurant
    - Recompute subtotal, delivery fee and total from the items
    - Enforce the restaurant's minimum order
    """

    def __init__(self, state_manager: StateManager, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.orders = OrderStore(state_manager)
        self.restaurants = RestaurantStore(state_manager)

    @staticmethod
    def _require(value: str | None, message: str, field: str) -> None:
        if not value or not value.strip():
            raise ValidationError(message, field=field)

    async def place_order(self, payload: OrderCreate) -> Order:
        """
        Validate and persist a new order with status pending.

        Args:
            payload: Cart contents and delivery details

        Returns:
            The stored order

        Raises:
            ValidationError: Missing details, empty cart or unknown restaurant
            MinimumOrderNotMet: Subtotal below the restaurant minimum
        """
        self._require(payload.customer_name, "Customer name is required", "customerName")
        self._require(payload.customer_phone, "Phone number is required", "customerPhone")
        self._require(payload.delivery_address, "Delivery address is required", "deliveryAddress")

        if not payload.items:
            raise ValidationError("Cart is empty, add items before ordering", field="items")

        self._require(payload.restaurant_id, "Restaurant is required", "restaurantId")
        restaurant = await self.restaurants.get(payload.restaurant_id)
        if restaurant is None:
            raise ValidationError(
                f"Restaurant {payload.restaurant_id} not found",
                field="restaurantId",
            )

        foreign = [
            item.name
            for item in payload.items
            if item.restaurant_id and item.restaurant_id != restaurant.id
        ]
        if foreign:
            raise ValidationError(
                "All items must come from the same restaurant",
                field="items",
                items=foreign,
            )

        negative = [item.name for item in payload.items if item.price < 0]
        if negative:
            raise ValidationError(
                "Item prices cannot be negative",
                field="items",
                items=negative,
            )

        subtotal = compute_subtotal(payload.items)
        if not meets_minimum_order(subtotal, restaurant):
            raise MinimumOrderNotMet(
                f"Minimum order at {restaurant.name} is {restaurant.minimum_order}",
                subtotal=str(subtotal),
                minimum=restaurant.minimum_order,
            )

        delivery_fee = resolve_delivery_fee(
            restaurant,
            len(payload.items),
            self.settings.default_delivery_fee,
        )
        discount = max(ZERO, payload.discount_amount)
        total = compute_total(subtotal, delivery_fee, discount)

        order = Order(
            **payload.model_dump(exclude={"discount_amount"}),
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            discount_amount=discount,
            total=total,
            total_amount=total,
            status=OrderStatus.PENDING,
            payment_status=PaymentStatus.UNPAID,
        )
        await self.orders.create(order)

        logger.info(
            "order_placed",
            order_id=order.id,
            order_number=order.order_number,
            restaurant_id=restaurant.id,
            customer_id=order.customer_id,
            total=str(total),
        )
        return order

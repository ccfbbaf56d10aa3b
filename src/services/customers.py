"""Customer profile, saved addresses, order history and reviews."""

from src.errors import Forbidden, InvalidState, NotFound, ValidationError
from src.models.customer import (
    AddressCreate,
    AddressUpdate,
    Customer,
    CustomerUpdate,
    Rating,
    ReviewCreate,
    UserAddress,
)
from src.models.order import Order, OrderStatus
from src.state.manager import StateManager
from src.state.queries import filter_orders, newest_first, paginate, sort_addresses
from src.state.store import AddressStore, CustomerStore, OrderStore, RatingStore
from src.utils.logging import get_logger

logger = get_logger(__name__)


class CustomerService:
    """Customer-facing account operations."""

    def __init__(self, state_manager: StateManager):
        self.customers = CustomerStore(state_manager)
        self.addresses = AddressStore(state_manager)
        self.orders = OrderStore(state_manager)
        self.ratings = RatingStore(state_manager)

    # Profile

    async def create_customer(self, customer: Customer) -> Customer:
        return await self.customers.create(customer)

    async def get_profile(self, customer_id: str) -> Customer:
        return await self.customers.require(customer_id)

    async def update_profile(self, customer_id: str, update: CustomerUpdate) -> Customer:
        customer = await self.customers.require(customer_id)
        changes = update.model_dump(exclude_unset=True, exclude_none=True)
        customer = customer.model_copy(update=changes)
        await self.customers.save(customer)

        logger.info("customer_updated", customer_id=customer_id, fields=sorted(changes))
        return customer

    # Addresses

    async def list_addresses(self, customer_id: str) -> list[UserAddress]:
        """Saved addresses, default first then newest first."""
        return sort_addresses(await self.addresses.list_for_user(customer_id))

    async def _clear_default(self, customer_id: str, keep_id: str | None = None) -> None:
        for address in await self.addresses.list_for_user(customer_id):
            if address.is_default and address.id != keep_id:
                address.is_default = False
                await self.addresses.save(address)

    async def _owned_address(self, customer_id: str, address_id: str) -> UserAddress:
        address = await self.addresses.get(address_id)
        if address is None or address.user_id != customer_id:
            raise NotFound(
                "Address not found or does not belong to this customer",
                id=address_id,
            )
        return address

    async def add_address(self, customer_id: str, payload: AddressCreate) -> UserAddress:
        """Save an address; a new default replaces the previous one."""
        address = UserAddress(user_id=customer_id, **payload.model_dump())
        if address.is_default:
            await self._clear_default(customer_id)
        return await self.addresses.create(address)

    async def update_address(
        self,
        customer_id: str,
        address_id: str,
        payload: AddressUpdate,
    ) -> UserAddress:
        address = await self._owned_address(customer_id, address_id)
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        address = address.model_copy(update=changes)

        if address.is_default:
            await self._clear_default(customer_id, keep_id=address.id)
        return await self.addresses.save(address)

    async def delete_address(self, customer_id: str, address_id: str) -> None:
        address = await self._owned_address(customer_id, address_id)
        await self.addresses.delete(address)

    # Orders

    async def order_history(self, customer_id: str, page: int = 1, limit: int = 10) -> list[Order]:
        """One page of the customer's orders, newest first."""
        orders = await self.orders.list()
        mine = newest_first(filter_orders(orders, customer_id=customer_id))
        return paginate(mine, page, limit)

    async def review_order(
        self,
        customer_id: str,
        order_id: str,
        payload: ReviewCreate,
    ) -> Rating:
        """
        Rate a delivered order.

        Raises:
            NotFound: Unknown order or customer
            Forbidden: Order belongs to another customer
            ValidationError: Rating outside 1..5
            InvalidState: Order has not been delivered
        """
        order = await self.orders.require(order_id)
        if order.customer_id != customer_id:
            raise Forbidden("You can only review your own orders", order_id=order_id)

        if payload.rating is None or not 1 <= payload.rating <= 5:
            raise ValidationError("Rating must be between 1 and 5", field="rating")

        if order.status != OrderStatus.DELIVERED:
            raise InvalidState(
                "Only delivered orders can be reviewed",
                status=order.status.value,
            )

        customer = await self.customers.require(customer_id)

        rating = Rating(
            order_id=order.id,
            restaurant_id=order.restaurant_id,
            customer_name=customer.name,
            customer_phone=customer.phone or "",
            rating=payload.rating,
            comment=payload.comment or None,
        )
        await self.ratings.create(rating)

        logger.info(
            "order_reviewed",
            order_id=order_id,
            restaurant_id=order.restaurant_id,
            rating=rating.rating,
        )
        return rating

"""Typed record stores on top of the state manager."""

from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

from src.errors import NotFound
from src.models.customer import Customer, Rating, UserAddress
from src.models.driver import Driver
from src.models.order import Order
from src.models.restaurant import Restaurant
from src.state.manager import StateManager
from src.utils.logging import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class RecordStore(Generic[ModelT]):
    """
    Get/list/create/save/delete for one record type.

    Records live at ``<kind>:<id>`` as JSON. Creation order is kept in a
    sorted set scored by ``created_at`` so listing never scans the keyspace.
    """

    kind: ClassVar[str]
    model: ClassVar[type[BaseModel]]
    label: ClassVar[str] = "Record"

    def __init__(self, state_manager: StateManager):
        self.state = state_manager

    def key(self, record_id: str) -> str:
        """Storage key for a record id."""
        return f"{self.kind}:{record_id}"

    def index_key(self, record: ModelT) -> str:
        """Sorted set that lists this record."""
        return f"index:{self.kind}"

    def load(self, data: dict[str, Any]) -> ModelT:
        return self.model.model_validate(data)

    def dump(self, record: ModelT) -> dict[str, Any]:
        return record.model_dump(mode="json")

    async def get(self, record_id: str) -> ModelT | None:
        """Retrieve a record by ID."""
        data = await self.state.get(self.key(record_id))
        if not data:
            return None
        return self.load(data)

    async def require(self, record_id: str) -> ModelT:
        """Retrieve a record by ID or raise NotFound."""
        record = await self.get(record_id)
        if record is None:
            raise NotFound(f"{self.label} {record_id} not found", id=record_id)
        return record

    async def _list_index(self, index_key: str) -> list[ModelT]:
        ids = await self.state.zrange(index_key)
        values = await self.state.mget([self.key(record_id) for record_id in ids])
        return [self.load(value) for value in values if value]

    async def list(self) -> list[ModelT]:
        """All records in creation order."""
        return await self._list_index(f"index:{self.kind}")

    async def create(self, record: ModelT) -> ModelT:
        """Persist a new record and index it."""
        await self.state.set(self.key(record.id), self.dump(record))
        await self.state.zadd(
            self.index_key(record),
            {record.id: record.created_at.timestamp()},
        )
        logger.info("record_created", kind=self.kind, id=record.id)
        return record

    async def save(self, record: ModelT) -> ModelT:
        """Overwrite an existing record."""
        await self.state.set(self.key(record.id), self.dump(record))
        return record

    async def delete(self, record: ModelT) -> None:
        """Remove a record and its index entry."""
        await self.state.delete(self.key(record.id))
        await self.state.zrem(self.index_key(record), record.id)
        logger.info("record_deleted", kind=self.kind, id=record.id)


class OrderStore(RecordStore[Order]):
    """Persisted orders."""

    kind = "order"
    model = Order
    label = "Order"


class DriverStore(RecordStore[Driver]):
    """Persisted drivers. Drivers are deactivated, never deleted."""

    kind = "driver"
    model = Driver
    label = "Driver"


class RestaurantStore(RecordStore[Restaurant]):
    """Persisted restaurants."""

    kind = "restaurant"
    model = Restaurant
    label = "Restaurant"


class CustomerStore(RecordStore[Customer]):
    """Persisted customer profiles."""

    kind = "customer"
    model = Customer
    label = "Customer"


class AddressStore(RecordStore[UserAddress]):
    """Saved addresses, indexed per customer."""

    kind = "address"
    model = UserAddress
    label = "Address"

    def index_key(self, record: UserAddress) -> str:
        return f"index:address:{record.user_id}"

    async def list_for_user(self, user_id: str) -> list[UserAddress]:
        """Addresses saved by one customer, in creation order."""
        return await self._list_index(f"index:address:{user_id}")


class RatingStore(RecordStore[Rating]):
    """Customer reviews awaiting moderation."""

    kind = "rating"
    model = Rating
    label = "Rating"

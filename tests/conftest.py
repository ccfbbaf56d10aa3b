"""Pytest configuration and fixtures."""

from decimal import Decimal
from typing import AsyncGenerator

import fakeredis
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.config import get_settings
from src.main import app
from src.models.customer import Customer
from src.models.driver import Driver
from src.models.order import Order, OrderItem, OrderStatus
from src.models.restaurant import Restaurant
from src.services import CustomerService, DriverAvailability, OrderCheckout, OrderLifecycleService
from src.state.manager import StateManager, get_state_manager
from src.state.store import CustomerStore, DriverStore, OrderStore, RestaurantStore


@pytest.fixture
def redis_server() -> fakeredis.FakeServer:
    """In-process Redis server shared by every client in a test."""
    return fakeredis.FakeServer()


@pytest_asyncio.fixture
async def state_manager(redis_server: fakeredis.FakeServer) -> AsyncGenerator[StateManager, None]:
    """State manager backed by an in-process Redis."""
    client = fakeredis.FakeAsyncRedis(server=redis_server, decode_responses=True)
    manager = StateManager(redis_client=client)
    yield manager
    await manager.disconnect()


@pytest.fixture
def order_store(state_manager: StateManager) -> OrderStore:
    return OrderStore(state_manager)


@pytest.fixture
def driver_store(state_manager: StateManager) -> DriverStore:
    return DriverStore(state_manager)


@pytest.fixture
def restaurant_store(state_manager: StateManager) -> RestaurantStore:
    return RestaurantStore(state_manager)


@pytest.fixture
def customer_store(state_manager: StateManager) -> CustomerStore:
    return CustomerStore(state_manager)


@pytest.fixture
def lifecycle(state_manager: StateManager) -> OrderLifecycleService:
    return OrderLifecycleService(state_manager, get_settings())


@pytest.fixture
def checkout(state_manager: StateManager) -> OrderCheckout:
    return OrderCheckout(state_manager, get_settings())


@pytest.fixture
def availability(state_manager: StateManager) -> DriverAvailability:
    return DriverAvailability(state_manager, get_settings())


@pytest.fixture
def customer_service(state_manager: StateManager) -> CustomerService:
    return CustomerService(state_manager)


@pytest_asyncio.fixture
async def test_client(state_manager: StateManager) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client talking to the app with the test state manager."""

    async def override_state_manager() -> StateManager:
        return state_manager

    app.dependency_overrides[get_state_manager] = override_state_manager
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


# Sample data fixtures


@pytest_asyncio.fixture
async def sample_restaurant(restaurant_store: RestaurantStore) -> Restaurant:
    """Restaurant with its own fee and a minimum order."""
    restaurant = Restaurant(
        name="Test Grill",
        delivery_fee="10",
        minimum_order="20",
        delivery_time="30-45 min",
    )
    return await restaurant_store.create(restaurant)


@pytest_asyncio.fixture
async def sample_customer(customer_store: CustomerStore) -> Customer:
    customer = Customer(name="Test Customer", phone="+966500000000", email="test@example.com")
    return await customer_store.create(customer)


@pytest_asyncio.fixture
async def sample_driver(driver_store: DriverStore) -> Driver:
    """Active driver accepting orders."""
    driver = Driver(name="Test Driver", phone="+966511111111", is_available=True)
    return await driver_store.create(driver)


@pytest_asyncio.fixture
async def second_driver(driver_store: DriverStore) -> Driver:
    driver = Driver(name="Second Driver", phone="+966522222222", is_available=True)
    return await driver_store.create(driver)


def make_order(
    restaurant: Restaurant,
    status: OrderStatus = OrderStatus.CONFIRMED,
    customer: Customer | None = None,
    **overrides: object,
) -> Order:
    """Build an order as checkout would have stored it."""
    fields: dict = {
        "customer_id": customer.id if customer else None,
        "customer_name": customer.name if customer else "Walk-in Customer",
        "customer_phone": "+966500000000",
        "restaurant_id": restaurant.id,
        "items": [OrderItem(name="Shawarma", price=Decimal("12.50"), quantity=2)],
        "subtotal": Decimal("25.00"),
        "delivery_fee": Decimal("10"),
        "total": Decimal("35.00"),
        "total_amount": Decimal("35.00"),
        "delivery_address": "King Fahd Rd, Riyadh",
        "status": status,
    }
    fields.update(overrides)
    return Order(**fields)


@pytest.fixture
def order_factory(order_store: OrderStore, sample_restaurant: Restaurant):
    """Store orders for the sample restaurant."""

    async def create(status: OrderStatus = OrderStatus.CONFIRMED, **overrides: object) -> Order:
        return await order_store.create(make_order(sample_restaurant, status, **overrides))

    return create


@pytest_asyncio.fixture
async def confirmed_order(order_store: OrderStore, sample_restaurant: Restaurant) -> Order:
    """Unassigned order waiting for a driver."""
    return await order_store.create(make_order(sample_restaurant))


@pytest_asyncio.fixture
async def pending_order(order_store: OrderStore, sample_restaurant: Restaurant) -> Order:
    return await order_store.create(make_order(sample_restaurant, OrderStatus.PENDING))

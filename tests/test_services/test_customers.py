"""Tests for customer profile, addresses, history and reviews."""

from datetime import datetime, timedelta

import pytest

from src.errors import Forbidden, InvalidState, NotFound, ValidationError
from src.models.customer import AddressCreate, AddressUpdate, Customer, CustomerUpdate, ReviewCreate
from src.models.order import OrderStatus
from src.services.customers import CustomerService


@pytest.mark.asyncio
async def test_update_profile_keeps_unset_fields(
    customer_service: CustomerService,
    sample_customer: Customer,
) -> None:
    updated = await customer_service.update_profile(
        sample_customer.id, CustomerUpdate(name="Renamed")
    )

    assert updated.name == "Renamed"
    assert updated.phone == sample_customer.phone
    assert (await customer_service.get_profile(sample_customer.id)).name == "Renamed"


@pytest.mark.asyncio
async def test_new_default_address_replaces_previous(
    customer_service: CustomerService,
    sample_customer: Customer,
) -> None:
    home = await customer_service.add_address(
        sample_customer.id, AddressCreate(title="Home", address="Street 1", is_default=True)
    )
    work = await customer_service.add_address(
        sample_customer.id, AddressCreate(title="Work", address="Street 2", is_default=True)
    )

    addresses = await customer_service.list_addresses(sample_customer.id)

    assert [address.id for address in addresses] == [work.id, home.id]
    assert [address.is_default for address in addresses] == [True, False]


@pytest.mark.asyncio
async def test_update_address_to_default(
    customer_service: CustomerService,
    sample_customer: Customer,
) -> None:
    home = await customer_service.add_address(
        sample_customer.id, AddressCreate(title="Home", address="Street 1", is_default=True)
    )
    work = await customer_service.add_address(
        sample_customer.id, AddressCreate(title="Work", address="Street 2")
    )

    await customer_service.update_address(
        sample_customer.id, work.id, AddressUpdate(is_default=True)
    )

    addresses = await customer_service.list_addresses(sample_customer.id)
    defaults = [address.id for address in addresses if address.is_default]
    assert defaults == [work.id]
    assert home.id in {address.id for address in addresses}


@pytest.mark.asyncio
async def test_cannot_touch_someone_elses_address(
    customer_service: CustomerService,
    sample_customer: Customer,
) -> None:
    address = await customer_service.add_address(
        sample_customer.id, AddressCreate(title="Home", address="Street 1")
    )

    with pytest.raises(NotFound):
        await customer_service.delete_address("intruder", address.id)

    await customer_service.delete_address(sample_customer.id, address.id)
    assert await customer_service.list_addresses(sample_customer.id) == []


@pytest.mark.asyncio
async def test_order_history_is_paginated_newest_first(
    customer_service: CustomerService,
    order_factory,
    sample_customer: Customer,
) -> None:
    start = datetime(2026, 3, 1, 9, 0)
    created = [
        await order_factory(customer_id=sample_customer.id, created_at=start + timedelta(hours=hour))
        for hour in range(5)
    ]
    await order_factory(customer_id="someone-else")

    first_page = await customer_service.order_history(sample_customer.id, page=1, limit=2)
    last_page = await customer_service.order_history(sample_customer.id, page=3, limit=2)

    assert [order.id for order in first_page] == [created[4].id, created[3].id]
    assert [order.id for order in last_page] == [created[0].id]


@pytest.mark.asyncio
async def test_review_delivered_order(
    customer_service: CustomerService,
    order_factory,
    sample_customer: Customer,
) -> None:
    order = await order_factory(OrderStatus.DELIVERED, customer_id=sample_customer.id)

    rating = await customer_service.review_order(
        sample_customer.id, order.id, ReviewCreate(rating=5, comment="Hot and fast")
    )

    assert rating.rating == 5
    assert rating.restaurant_id == order.restaurant_id
    assert rating.customer_name == sample_customer.name
    assert rating.is_approved is False


@pytest.mark.asyncio
async def test_review_rules(
    customer_service: CustomerService,
    order_factory,
    sample_customer: Customer,
) -> None:
    undelivered = await order_factory(OrderStatus.PREPARING, customer_id=sample_customer.id)
    delivered = await order_factory(OrderStatus.DELIVERED, customer_id=sample_customer.id)

    with pytest.raises(NotFound):
        await customer_service.review_order(sample_customer.id, "missing", ReviewCreate(rating=4))
    with pytest.raises(Forbidden):
        await customer_service.review_order("intruder", delivered.id, ReviewCreate(rating=4))
    with pytest.raises(ValidationError):
        await customer_service.review_order(sample_customer.id, delivered.id, ReviewCreate(rating=6))
    with pytest.raises(InvalidState):
        await customer_service.review_order(
            sample_customer.id, undelivered.id, ReviewCreate(rating=4)
        )

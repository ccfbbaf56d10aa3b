"""Customer account endpoints."""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_customers
from src.models.customer import (
    AddressCreate,
    AddressUpdate,
    Customer,
    CustomerCreate,
    CustomerUpdate,
    Rating,
    ReviewCreate,
    UserAddress,
)
from src.models.order import Order
from src.services import CustomerService

router = APIRouter()


@router.post("", response_model=Customer, status_code=status.HTTP_201_CREATED)
async def create_customer(
    payload: CustomerCreate,
    customers: CustomerService = Depends(get_customers),
) -> Customer:
    """Create a customer profile."""
    return await customers.create_customer(Customer(**payload.model_dump()))


@router.get("/{customer_id}", response_model=Customer)
async def get_profile(
    customer_id: str,
    customers: CustomerService = Depends(get_customers),
) -> Customer:
    return await customers.get_profile(customer_id)


@router.put("/{customer_id}", response_model=Customer)
async def update_profile(
    customer_id: str,
    payload: CustomerUpdate,
    customers: CustomerService = Depends(get_customers),
) -> Customer:
    return await customers.update_profile(customer_id, payload)


@router.get("/{customer_id}/addresses", response_model=list[UserAddress])
async def list_addresses(
    customer_id: str,
    customers: CustomerService = Depends(get_customers),
) -> list[UserAddress]:
    """Saved addresses, default first."""
    return await customers.list_addresses(customer_id)


@router.post(
    "/{customer_id}/addresses",
    response_model=UserAddress,
    status_code=status.HTTP_201_CREATED,
)
async def add_address(
    customer_id: str,
    payload: AddressCreate,
    customers: CustomerService = Depends(get_customers),
) -> UserAddress:
    return await customers.add_address(customer_id, payload)


@router.put("/{customer_id}/addresses/{address_id}", response_model=UserAddress)
async def update_address(
    customer_id: str,
    address_id: str,
    payload: AddressUpdate,
    customers: CustomerService = Depends(get_customers),
) -> UserAddress:
    return await customers.update_address(customer_id, address_id, payload)


@router.delete("/{customer_id}/addresses/{address_id}")
async def delete_address(
    customer_id: str,
    address_id: str,
    customers: CustomerService = Depends(get_customers),
) -> dict[str, bool]:
    await customers.delete_address(customer_id, address_id)
    return {"success": True}


@router.get("/{customer_id}/orders", response_model=list[Order])
async def order_history(
    customer_id: str,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    customers: CustomerService = Depends(get_customers),
) -> list[Order]:
    """The customer's orders, newest first, one page at a time."""
    return await customers.order_history(customer_id, page=page, limit=limit)


@router.post(
    "/{customer_id}/orders/{order_id}/review",
    response_model=Rating,
    status_code=status.HTTP_201_CREATED,
)
async def review_order(
    customer_id: str,
    order_id: str,
    payload: ReviewCreate,
    customers: CustomerService = Depends(get_customers),
) -> Rating:
    """Rate a delivered order. Reviews await moderation before display."""
    return await customers.review_order(customer_id, order_id, payload)

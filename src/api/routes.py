"""API routes for the marketplace."""

from fastapi import APIRouter

from src.api import customers, drivers, orders, restaurants

router = APIRouter()

router.include_router(orders.router, prefix="/orders", tags=["orders"])
router.include_router(drivers.router, prefix="/drivers", tags=["drivers"])
router.include_router(restaurants.router, prefix="/restaurants", tags=["restaurants"])
router.include_router(customers.router, prefix="/customers", tags=["customers"])

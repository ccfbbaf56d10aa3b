"""Restaurant catalogue endpoints."""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_restaurants
from src.models.restaurant import Restaurant, RestaurantCreate
from src.state.store import RestaurantStore

router = APIRouter()


@router.get("", response_model=list[Restaurant])
async def list_restaurants(
    restaurants: RestaurantStore = Depends(get_restaurants),
) -> list[Restaurant]:
    return await restaurants.list()


@router.post("", response_model=Restaurant, status_code=status.HTTP_201_CREATED)
async def create_restaurant(
    payload: RestaurantCreate,
    restaurants: RestaurantStore = Depends(get_restaurants),
) -> Restaurant:
    return await restaurants.create(Restaurant(**payload.model_dump()))


@router.get("/{restaurant_id}", response_model=Restaurant)
async def get_restaurant(
    restaurant_id: str,
    restaurants: RestaurantStore = Depends(get_restaurants),
) -> Restaurant:
    return await restaurants.require(restaurant_id)

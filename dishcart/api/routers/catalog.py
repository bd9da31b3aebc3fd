# dishcart/api/routers/catalog.py
from fastapi import APIRouter, Depends, Path

from dishcart.api.deps import get_store
from dishcart.domain.schemas import (
    MAX_DB_ID,
    DishCreate,
    DishOut,
    RestaurantCreate,
    RestaurantOut,
    RestaurantUpdate,
)
from dishcart.services.catalog_service import CatalogService

router = APIRouter(tags=["catalog"])


def get_service(store=Depends(get_store)) -> CatalogService:
    return CatalogService(store)


@router.post("/restaurants", response_model=RestaurantOut, status_code=201)
def create_restaurant(payload: RestaurantCreate, svc: CatalogService = Depends(get_service)):
    return svc.create_restaurant(payload)


@router.patch("/restaurants/{restaurant_id}", response_model=RestaurantOut)
def update_restaurant(
    *,
    restaurant_id: int = Path(..., gt=0, le=MAX_DB_ID),
    payload: RestaurantUpdate,
    svc: CatalogService = Depends(get_service),
):
    return svc.update_restaurant(restaurant_id, payload)


@router.get("/restaurants/by-slug/{slug}", response_model=RestaurantOut)
def restaurant_by_slug(slug: str, svc: CatalogService = Depends(get_service)):
    return svc.restaurant_by_slug(slug)


@router.post("/dishes", response_model=DishOut, status_code=201)
def create_dish(payload: DishCreate, svc: CatalogService = Depends(get_service)):
    return svc.create_dish(payload)


@router.get("/dishes/{dish_id}", response_model=DishOut)
def get_dish(dish_id: int = Path(..., gt=0, le=MAX_DB_ID), svc: CatalogService = Depends(get_service)):
    return svc.get_dish(dish_id)

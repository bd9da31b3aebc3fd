# dishcart/services/catalog_service.py
from dishcart.domain.entities import DISH, RESTAURANT
from dishcart.domain.errors import NotFound
from dishcart.domain.ports import EntityStore
from dishcart.domain.schemas import (
    DishCreate,
    DishOut,
    RestaurantCreate,
    RestaurantOut,
    RestaurantUpdate,
)
from dishcart.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogService:
    """
    Restauracje i dania.
    Slug restauracji liczy warstwa danych przy kazdym zapisie nazwy.
    """

    def __init__(self, store: EntityStore):
        self.store = store

    def create_restaurant(self, payload: RestaurantCreate) -> RestaurantOut:
        created = self.store.create(RESTAURANT, payload.model_dump())
        logger.info(f"Restaurant {created['id']} created with slug {created['slug']}")
        return RestaurantOut(**created)

    def update_restaurant(self, restaurant_id: int, payload: RestaurantUpdate) -> RestaurantOut:
        updated = self.store.update(RESTAURANT, restaurant_id, payload.model_dump(exclude_none=True))
        return RestaurantOut(**updated)

    def restaurant_by_slug(self, slug: str) -> RestaurantOut:
        found = self.store.find_one(RESTAURANT, {"slug": slug})
        if not found:
            raise NotFound(f"Restaurant '{slug}' not found")
        return RestaurantOut(**found)

    def create_dish(self, payload: DishCreate) -> DishOut:
        return DishOut(**self.store.create(DISH, payload.model_dump()))

    def get_dish(self, dish_id: int) -> DishOut:
        found = self.store.find_one(DISH, {"id": dish_id})
        if not found:
            raise NotFound(f"Dish {dish_id} not found")
        return DishOut(**found)

from contextlib import contextmanager
from typing import Iterable, Tuple

from dishcart.domain.entities import CART, Cart
from dishcart.domain.errors import DishcartError, EntityConflict, NotAuthenticated
from dishcart.domain.ports import CartLock, EntityStore
from dishcart.utils.logging import get_logger

logger = get_logger(__name__)


class CartManager:
    """
    Use case'y koszyka: find-or-create, add, remove, clear.

    Jeden koszyk na usera. Kazda komenda to: lock usera -> wczytaj albo utworz
    koszyk -> policz nowy zbior dan -> zapisz tylko jesli cos sie zmienilo.
    Dzieki temu komendy sa idempotentne, a swiezo utworzony koszyk nie jest
    od razu nadpisywany drugim zapisem.

    Bez retry: bledy store ida do wywolujacego z ustawionym ``operation``.
    """

    def __init__(self, store: EntityStore, lock_service: CartLock):
        self.store = store
        self.lock_service = lock_service

    #query (tworzy pusty koszyk jesli brak)
    def find_or_create(self, user_id: int) -> Cart:
        with self._operation("find_or_create", user_id):
            cart, _ = self._load_or_create(user_id)
            return cart

    #commands
    def add_dish(self, user_id: int, dish_id: int) -> Cart:
        with self._operation("add_dish", user_id):
            cart, created = self._load_or_create(user_id, dishes=(dish_id,))

            #nowy koszyk powstal juz z tym daniem
            if created or dish_id in cart.dishes:
                return cart

            return self._save(cart, cart.dishes | {dish_id})

    def remove_dish(self, user_id: int, dish_id: int) -> Cart:
        with self._operation("remove_dish", user_id):
            cart, created = self._load_or_create(user_id)

            if created or dish_id not in cart.dishes:
                return cart

            return self._save(cart, cart.dishes - {dish_id})

    def clear(self, user_id: int) -> Cart:
        with self._operation("clear", user_id):
            cart, created = self._load_or_create(user_id)

            if created or not cart.dishes:
                return cart

            return self._save(cart, frozenset())

    #helpers
    def _load_or_create(self, user_id: int, dishes: Iterable[int] = ()) -> Tuple[Cart, bool]:
        existing = self.store.find_one(CART, {"owner": user_id})
        if existing:
            return Cart.from_entity(existing), False

        try:
            created = self.store.create(CART, {"owner": user_id, "dishes": sorted(set(dishes))})
        except EntityConflict:
            #koszyk utworzony przez inny proces poza naszym lockiem
            winner = self.store.find_one(CART, {"owner": user_id})
            if winner is None:
                raise
            logger.info(f"Cart for user {user_id} created concurrently, using cart {winner['id']}")
            return Cart.from_entity(winner), False

        logger.info(f"Created cart {created['id']} for user {user_id}")
        return Cart.from_entity(created), True

    def _save(self, cart: Cart, dishes: frozenset) -> Cart:
        updated = self.store.update(CART, cart.id, {"dishes": sorted(dishes)})
        logger.info(f"Cart {cart.id} of user {cart.owner} now holds {len(dishes)} dishes")
        return Cart.from_entity(updated)

    @contextmanager
    def _operation(self, name: str, user_id: int):
        operation = f"cart.{name}"
        if user_id is None:
            raise NotAuthenticated(operation=operation)
        try:
            with self.lock_service.cart_lock(user_id):
                yield
        except DishcartError as e:
            e.operation = e.operation or operation
            logger.warning(f"{operation} failed for user {user_id}: {e}")
            raise

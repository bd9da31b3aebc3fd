# dishcart/services/order_service.py
from typing import List, Sequence

from dishcart.domain.entities import (
    ORDER,
    CheckoutAttempt,
    CheckoutResult,
    CheckoutState,
    Order,
)
from dishcart.domain.errors import CheckoutError, DishcartError, NotFound
from dishcart.domain.ports import EntityStore
from dishcart.services.checkout import CheckoutAuthorizer
from dishcart.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domenę zamówień.
    Separacja od CartManager: nie czyta ani nie zmienia koszyka.
    """

    def __init__(self, store: EntityStore, authorizer: CheckoutAuthorizer):
        self.store = store
        self.authorizer = authorizer

    def create_order(self, user_id: int | None, address: str, amount, dishes: Sequence[int]) -> CheckoutResult:
        """
        Use Case: Checkout.

        1. Autoryzacja platnosci (albo pominiecie gdy brak bramki)
        2. Jeden zapis zamowienia z tokenem w danych poczatkowych
        Blad autoryzacji konczy checkout, zamowienie nie powstaje.
        """
        attempt = CheckoutAttempt()
        attempt.advance(CheckoutState.AUTHORIZATION_PENDING)

        try:
            token = self.authorizer.authorize(address, amount, dishes)
        except CheckoutError:
            attempt.advance(CheckoutState.AUTHORIZATION_FAILED)
            logger.warning(f"Checkout for user {user_id} ended in {attempt.state.value}, no order stored")
            raise

        attempt.advance(CheckoutState.AUTHORIZED if token else CheckoutState.SKIPPED)

        try:
            created = self.store.create(
                ORDER,
                {
                    "owner": user_id,
                    "address": address,
                    "amount": amount,
                    "dishes": list(dishes),
                    "token": token or "",
                },
            )
        except DishcartError as e:
            e.operation = e.operation or "checkout.persist_order"
            raise

        attempt.advance(CheckoutState.ORDER_PERSISTED)
        order = Order.from_entity(created)

        logger.info(f"Order {order.id} created for user {user_id} ({'authorized' if token else 'unauthorized'})")

        return CheckoutResult(order=order, state=attempt.state)

    def get_order(self, order_id: int, user_id: int) -> Order:
        """
        Use Case: Pobranie zamówienia (Query).
        Cudze zamowienie wyglada jak nieistniejace.
        """
        found = self.store.find_one(ORDER, {"id": order_id, "owner": user_id})
        if not found:
            raise NotFound(f"Order {order_id} not found")
        return Order.from_entity(found)

    def list_orders(self, user_id: int) -> List[Order]:
        return [Order.from_entity(o) for o in self.store.find_many(ORDER, {"owner": user_id})]

"""Domain objects shared by the cart manager and the checkout flow.

The entity store exchanges plain dicts; these dataclasses are what the
services hand back to their callers.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Tuple

CART = "cart"
ORDER = "order"
USER = "user"
DISH = "dish"
RESTAURANT = "restaurant"


@dataclass(frozen=True)
class Cart:
    """A user's single active cart.

    Attributes:
        id: Identifier assigned by the store.
        owner: Id of the user owning the cart.
        dishes: Dish ids in the cart. Membership only, no duplicates.
    """

    id: int
    owner: int
    dishes: frozenset = field(default_factory=frozenset)

    @classmethod
    def from_entity(cls, entity: Mapping[str, Any]) -> "Cart":
        return cls(
            id=entity["id"],
            owner=entity["owner"],
            dishes=frozenset(entity.get("dishes") or ()),
        )

    def as_dict(self) -> dict:
        return {"id": self.id, "owner": self.owner, "dishes": sorted(self.dishes)}


@dataclass(frozen=True)
class Order:
    """A placed order.

    ``dishes`` keeps the submitted order and duplicates. ``token`` is the
    payment authorization secret, empty when checkout ran without a gateway.
    """

    id: int
    owner: int | None
    address: str
    amount: Decimal
    dishes: Tuple[int, ...]
    token: str = ""
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, entity: Mapping[str, Any]) -> "Order":
        return cls(
            id=entity["id"],
            owner=entity.get("owner"),
            address=entity["address"],
            amount=Decimal(str(entity["amount"])),
            dishes=tuple(entity.get("dishes") or ()),
            token=entity.get("token") or "",
            created_at=entity.get("created_at"),
        )

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "owner": self.owner,
            "address": self.address,
            "amount": self.amount,
            "dishes": list(self.dishes),
            "token": self.token,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class PaymentAuthorization:
    """What the payment processor returns for an authorization request."""

    id: str | None
    client_secret: str


class CheckoutState(str, Enum):
    REQUESTED = "REQUESTED"
    AUTHORIZATION_PENDING = "AUTHORIZATION_PENDING"
    AUTHORIZED = "AUTHORIZED"
    SKIPPED = "SKIPPED"
    AUTHORIZATION_FAILED = "AUTHORIZATION_FAILED"
    ORDER_PERSISTED = "ORDER_PERSISTED"


_TRANSITIONS = {
    CheckoutState.REQUESTED: {CheckoutState.AUTHORIZATION_PENDING},
    CheckoutState.AUTHORIZATION_PENDING: {
        CheckoutState.AUTHORIZED,
        CheckoutState.SKIPPED,
        CheckoutState.AUTHORIZATION_FAILED,
    },
    CheckoutState.AUTHORIZED: {CheckoutState.ORDER_PERSISTED},
    CheckoutState.SKIPPED: {CheckoutState.ORDER_PERSISTED},
    CheckoutState.AUTHORIZATION_FAILED: set(),
    CheckoutState.ORDER_PERSISTED: set(),
}


@dataclass
class CheckoutAttempt:
    """Tracks one checkout request through its states."""

    state: CheckoutState = CheckoutState.REQUESTED

    def advance(self, new_state: CheckoutState) -> None:
        if new_state not in _TRANSITIONS[self.state]:
            raise ValueError(f"Illegal checkout transition {self.state.value} -> {new_state.value}")
        self.state = new_state


@dataclass(frozen=True)
class CheckoutResult:
    order: Order
    state: CheckoutState

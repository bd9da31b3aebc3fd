"""Ports (protocols) for the collaborators of the cart and checkout services.

Concrete stores live in dishcart/repos, the payment gateway in
dishcart/services/payment_gateway.py and the cart locks in
dishcart/services/lock_service.py.
"""

from contextlib import AbstractContextManager
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple

from .entities import PaymentAuthorization

Entity = Dict[str, Any]

FILTER_OPERATORS = ("eq", "in", "contains")


def parse_filter_key(key: str) -> Tuple[str, str]:
    """Split ``"dishes__contains"`` into ``("dishes", "contains")``.

    A key without a suffix is an equality filter.
    """
    field, _, op = key.partition("__")
    op = op or "eq"
    if op not in FILTER_OPERATORS:
        raise ValueError(f"Unsupported filter operator: {op}")
    return field, op


class EntityStore(Protocol):
    """Generic storage of typed entities exchanged as plain dicts.

    Filters map field names to expected values:
        ``{"owner": 7}``               equality
        ``{"id__in": [1, 2]}``         value is one of the given ids
        ``{"dishes__contains": 3}``    relation field contains the id
    """

    def find_one(self, entity_type: str, filters: Optional[Mapping[str, Any]] = None) -> Optional[Entity]:
        ...

    def find_many(self, entity_type: str, filters: Optional[Mapping[str, Any]] = None) -> List[Entity]:
        ...

    def create(self, entity_type: str, data: Mapping[str, Any]) -> Entity:
        ...

    def update(self, entity_type: str, entity_id: int, data: Mapping[str, Any]) -> Entity:
        ...


class PaymentGateway(Protocol):
    def create_authorization(
        self,
        amount_minor_units: int,
        currency: str,
        metadata: Mapping[str, str],
    ) -> PaymentAuthorization:
        """Request a payment authorization; exactly one call per checkout."""
        ...


class CartLock(Protocol):
    def cart_lock(self, user_id: int) -> AbstractContextManager:
        """Serialize cart mutations of a single user."""
        ...

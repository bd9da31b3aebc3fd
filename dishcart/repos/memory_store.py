from __future__ import annotations

import copy
import itertools
import threading
from collections import defaultdict
from typing import Any, Dict, List, Mapping, Optional

from dishcart.domain.entities import CART
from dishcart.domain.errors import EntityConflict, NotFound
from dishcart.domain.ports import Entity, parse_filter_key


def _matches(entity: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
    for key, expected in filters.items():
        name, op = parse_filter_key(key)
        value = entity.get(name)
        if op == "eq" and value != expected:
            return False
        if op == "in" and value not in expected:
            return False
        if op == "contains" and expected not in (value or ()):
            return False
    return True


class MemoryEntityStore:
    """In-process EntityStore for local runs and tests.

    Same filter semantics as the SQL store and the same one-cart-per-owner
    rule. Referenced ids are not validated. Entities are copied in and out.
    """

    def __init__(self) -> None:
        self._tables: Dict[str, Dict[int, Entity]] = defaultdict(dict)
        self._ids = defaultdict(lambda: itertools.count(1))
        self._lock = threading.RLock()

    def find_one(self, entity_type: str, filters: Optional[Mapping[str, Any]] = None) -> Optional[Entity]:
        found = self.find_many(entity_type, filters)
        return found[0] if found else None

    def find_many(self, entity_type: str, filters: Optional[Mapping[str, Any]] = None) -> List[Entity]:
        with self._lock:
            table = self._tables[entity_type]
            return [
                copy.deepcopy(table[key])
                for key in sorted(table)
                if _matches(table[key], filters or {})
            ]

    def create(self, entity_type: str, data: Mapping[str, Any]) -> Entity:
        with self._lock:
            entity = self._normalize(entity_type, dict(data))
            if entity_type == CART and self.find_one(CART, {"owner": entity.get("owner")}):
                raise EntityConflict(f"owner {entity.get('owner')} already has a cart")
            entity_id = entity.get("id") or next(self._ids[entity_type])
            if entity_id in self._tables[entity_type]:
                raise EntityConflict(f"{entity_type} {entity_id} already exists")
            entity["id"] = entity_id
            self._tables[entity_type][entity_id] = entity
            return copy.deepcopy(entity)

    def update(self, entity_type: str, entity_id: int, data: Mapping[str, Any]) -> Entity:
        with self._lock:
            current = self._tables[entity_type].get(entity_id)
            if current is None:
                raise NotFound(f"{entity_type} {entity_id} does not exist")
            updated = self._normalize(entity_type, {**current, **data, "id": entity_id})
            self._tables[entity_type][entity_id] = updated
            return copy.deepcopy(updated)

    def ping(self) -> None:
        return None

    @staticmethod
    def _normalize(entity_type: str, entity: Entity) -> Entity:
        if "dishes" in entity:
            dishes = list(entity["dishes"] or [])
            #koszyk = zbior, zamowienie = sekwencja
            entity["dishes"] = sorted(set(dishes)) if entity_type == CART else dishes
        return entity

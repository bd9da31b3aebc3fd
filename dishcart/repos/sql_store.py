# dishcart/repos/sql_store.py
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session

from dishcart.data.models import (
    CartModel,
    DishModel,
    OrderDishModel,
    OrderModel,
    RestaurantModel,
    UserModel,
)
from dishcart.domain.entities import CART, DISH, ORDER, RESTAURANT, USER
from dishcart.domain.errors import EntityConflict, InvalidReference, NotFound, StoreUnavailable
from dishcart.domain.ports import Entity, parse_filter_key
from dishcart.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class _Mapping:
    model: type
    #pole publiczne -> atrybut modelu
    columns: Dict[str, str]
    #pole publiczne -> model do ktorego wskazuje (walidacja referencji)
    references: Dict[str, type] = field(default_factory=dict)
    #"set" (koszyk) albo "sequence" (zamowienie) dla pola dishes
    dishes: Optional[str] = None


_MAPPINGS: Dict[str, _Mapping] = {
    USER: _Mapping(UserModel, {"id": "id", "name": "name"}),
    RESTAURANT: _Mapping(
        RestaurantModel,
        {"id": "id", "name": "name", "slug": "slug", "description": "description"},
    ),
    DISH: _Mapping(
        DishModel,
        {"id": "id", "name": "name", "price": "price", "restaurant": "restaurant_id"},
        references={"restaurant": RestaurantModel},
    ),
    CART: _Mapping(
        CartModel,
        {"id": "id", "owner": "user_id"},
        references={"owner": UserModel},
        dishes="set",
    ),
    ORDER: _Mapping(
        OrderModel,
        {
            "id": "id",
            "owner": "user_id",
            "address": "address",
            "amount": "amount",
            "token": "token",
            "created_at": "created_at",
        },
        references={"owner": UserModel},
        dishes="sequence",
    ),
}


def _mapping(entity_type: str) -> _Mapping:
    try:
        return _MAPPINGS[entity_type]
    except KeyError:
        raise ValueError(f"Unknown entity type: {entity_type}") from None


class SqlEntityStore:
    """
    Store encji na SQLAlchemy.
    Kazde create/update to jedna transakcja: commit albo rollback w calosci.
    Encje wymieniane jako dicty, tak jak w EntityStore.
    """

    def __init__(self, db: Session):
        self.db = db

    #query
    def find_one(self, entity_type: str, filters: Optional[Mapping[str, Any]] = None) -> Optional[Entity]:
        found = self._find(entity_type, filters, limit=1)
        return found[0] if found else None

    def find_many(self, entity_type: str, filters: Optional[Mapping[str, Any]] = None) -> List[Entity]:
        return self._find(entity_type, filters)

    #commands
    def create(self, entity_type: str, data: Mapping[str, Any]) -> Entity:
        mapping = _mapping(entity_type)
        with self._transaction(f"create {entity_type}"):
            obj = mapping.model()
            self._assign(mapping, obj, data)
            self.db.add(obj)
            self.db.commit()
            self.db.refresh(obj)
            logger.debug(f"Created {entity_type} {obj.id}")
            return self._serialize(mapping, obj)

    def update(self, entity_type: str, entity_id: int, data: Mapping[str, Any]) -> Entity:
        mapping = _mapping(entity_type)
        with self._transaction(f"update {entity_type} {entity_id}"):
            obj = self.db.get(mapping.model, entity_id)
            if obj is None:
                raise NotFound(f"{entity_type} {entity_id} does not exist")
            self._assign(mapping, obj, data)
            self.db.commit()
            self.db.refresh(obj)
            return self._serialize(mapping, obj)

    def ping(self) -> None:
        with self._transaction("ping"):
            self.db.execute(select(1))

    #helpers
    def _find(self, entity_type, filters, limit=None) -> List[Entity]:
        mapping = _mapping(entity_type)
        stmt = select(mapping.model).where(*self._conditions(mapping, filters or {}))
        stmt = stmt.order_by(mapping.model.id)
        if limit:
            stmt = stmt.limit(limit)
        with self._transaction(f"find {entity_type}"):
            rows = self.db.execute(stmt).scalars().all()
            return [self._serialize(mapping, row) for row in rows]

    def _conditions(self, mapping: _Mapping, filters: Mapping[str, Any]) -> list:
        conditions = []
        for key, expected in filters.items():
            name, op = parse_filter_key(key)

            if name == "dishes" and mapping.dishes:
                if op != "contains":
                    raise ValueError("dishes supports only the __contains filter")
                if mapping.dishes == "set":
                    conditions.append(mapping.model.dishes.any(DishModel.id == expected))
                else:
                    conditions.append(mapping.model.lines.any(OrderDishModel.dish_id == expected))
                continue

            if name not in mapping.columns:
                raise ValueError(f"Unknown filter field: {name}")
            column = getattr(mapping.model, mapping.columns[name])
            if op == "eq":
                conditions.append(column == expected)
            elif op == "in":
                conditions.append(column.in_(list(expected)))
            else:
                raise ValueError(f"{name} does not support the __{op} filter")
        return conditions

    def _assign(self, mapping: _Mapping, obj, data: Mapping[str, Any]) -> None:
        for name, value in data.items():
            if name == "dishes" and mapping.dishes:
                self._assign_dishes(mapping, obj, value or [])
                continue
            if name not in mapping.columns:
                raise ValueError(f"Unknown field for {mapping.model.__tablename__}: {name}")
            target = mapping.references.get(name)
            if target is not None and value is not None and self.db.get(target, value) is None:
                raise InvalidReference(f"{name} {value} does not exist")
            setattr(obj, mapping.columns[name], value)

    def _assign_dishes(self, mapping: _Mapping, obj, dish_ids) -> None:
        dishes = self._load_dishes(dish_ids)
        if mapping.dishes == "set":
            obj.dishes = list(dishes.values())
        else:
            obj.lines = [
                OrderDishModel(position=position, dish_id=dish_id)
                for position, dish_id in enumerate(dish_ids)
            ]

    def _load_dishes(self, dish_ids) -> Dict[int, DishModel]:
        wanted = set(dish_ids)
        if not wanted:
            return {}
        rows = self.db.execute(select(DishModel).where(DishModel.id.in_(wanted))).scalars().all()
        found = {d.id: d for d in rows}
        missing = sorted(wanted - found.keys())
        if missing:
            raise InvalidReference(f"dishes {missing} do not exist")
        return found

    @staticmethod
    def _serialize(mapping: _Mapping, obj) -> Entity:
        entity = {name: getattr(obj, attr) for name, attr in mapping.columns.items()}
        if mapping.dishes == "set":
            entity["dishes"] = sorted(d.id for d in obj.dishes)
        elif mapping.dishes == "sequence":
            entity["dishes"] = [line.dish_id for line in obj.lines]
        return entity

    @contextmanager
    def _transaction(self, action: str):
        try:
            yield
        except IntegrityError as e:
            self.db.rollback()
            raise EntityConflict(f"{action} violates a uniqueness rule") from e
        except DBAPIError as e:
            self.db.rollback()
            logger.error(f"Store failure during {action}: {e}")
            raise StoreUnavailable(f"{action} failed: store unavailable") from e
        except Exception:
            self.db.rollback()
            raise

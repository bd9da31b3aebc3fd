from decimal import Decimal
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from dishcart.domain.entities import CART, DISH, ORDER, USER
from dishcart.domain.errors import EntityConflict, InvalidReference, NotFound, StoreUnavailable


def test_cart_dishes_behave_as_a_set(sql_store):
    cart = sql_store.create(CART, {"owner": 1, "dishes": [3, 1, 3]})

    assert cart["owner"] == 1
    assert cart["dishes"] == [1, 3]


def test_second_cart_for_owner_is_a_conflict(sql_store):
    sql_store.create(CART, {"owner": 1, "dishes": []})

    with pytest.raises(EntityConflict):
        sql_store.create(CART, {"owner": 1, "dishes": []})

    assert len(sql_store.find_many(CART, {"owner": 1})) == 1


def test_unknown_dish_is_invalid_reference_and_nothing_is_written(sql_store):
    with pytest.raises(InvalidReference):
        sql_store.create(CART, {"owner": 1, "dishes": [1, 42]})

    assert sql_store.find_one(CART, {"owner": 1}) is None


def test_unknown_owner_is_invalid_reference(sql_store):
    with pytest.raises(InvalidReference):
        sql_store.create(CART, {"owner": 77, "dishes": []})


def test_update_replaces_cart_dishes(sql_store):
    cart = sql_store.create(CART, {"owner": 2, "dishes": [1]})

    updated = sql_store.update(CART, cart["id"], {"dishes": [2, 3]})

    assert updated["dishes"] == [2, 3]
    assert sql_store.find_one(CART, {"owner": 2})["dishes"] == [2, 3]


def test_update_of_missing_entity_is_not_found(sql_store):
    with pytest.raises(NotFound):
        sql_store.update(CART, 404, {"dishes": []})


def test_order_dishes_keep_sequence_and_duplicates(sql_store):
    order = sql_store.create(
        ORDER,
        {"owner": 1, "address": "Bulevar 5", "amount": Decimal("7.30"), "dishes": [2, 1, 2], "token": ""},
    )

    assert order["dishes"] == [2, 1, 2]
    assert order["amount"] == Decimal("7.30")
    assert order["created_at"] is not None


def test_filters(sql_store):
    sql_store.create(CART, {"owner": 1, "dishes": [1, 2]})
    sql_store.create(CART, {"owner": 2, "dishes": [3]})

    assert [c["owner"] for c in sql_store.find_many(CART, {"dishes__contains": 2})] == [1]
    assert [d["name"] for d in sql_store.find_many(DISH, {"id__in": [1, 3]})] == ["Burek", "Pljeskavica"]
    assert sql_store.find_one(USER, {"name": "Marko"})["id"] == 2


def test_order_filter_on_dishes(sql_store):
    sql_store.create(ORDER, {"owner": 1, "address": "A", "amount": 1, "dishes": [1, 1], "token": ""})
    sql_store.create(ORDER, {"owner": 2, "address": "B", "amount": 1, "dishes": [3], "token": ""})

    assert [o["owner"] for o in sql_store.find_many(ORDER, {"dishes__contains": 1})] == [1]


def test_unknown_filter_field_is_rejected(sql_store):
    with pytest.raises(ValueError):
        sql_store.find_many(CART, {"colour": "red"})
    with pytest.raises(ValueError):
        sql_store.find_many(CART, {"owner__startswith": 1})


def test_database_outage_is_store_unavailable(sql_store, db_session):
    outage = OperationalError("SELECT", {}, Exception("database is locked"))

    with patch.object(db_session, "execute", side_effect=outage):
        with pytest.raises(StoreUnavailable):
            sql_store.find_one(CART, {"owner": 1})

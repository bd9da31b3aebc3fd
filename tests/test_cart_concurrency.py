import threading
import time
from contextlib import nullcontext

from dishcart.domain.entities import CART
from dishcart.repos.memory_store import MemoryEntityStore
from dishcart.services.cart_manager import CartManager
from dishcart.services.lock_service import LocalLockService


class SlowStore(MemoryEntityStore):
    """Widens the gap between "no cart yet" and "create cart"."""

    def find_one(self, entity_type, filters=None):
        found = super().find_one(entity_type, filters)
        time.sleep(0.05)
        return found


class NoLock:
    def cart_lock(self, user_id):
        return nullcontext()


def run_concurrently(*calls):
    barrier = threading.Barrier(len(calls))
    errors = []

    def worker(call):
        barrier.wait()
        try:
            call()
        except Exception as e:  # pragma: no cover - reported below
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(c,)) for c in calls]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)
    assert not errors, errors


def test_first_time_adds_for_same_user_produce_one_cart():
    store = SlowStore()
    manager = CartManager(store=store, lock_service=LocalLockService(wait=5))

    run_concurrently(lambda: manager.add_dish(7, 1), lambda: manager.add_dish(7, 2))

    carts = store.find_many(CART, {"owner": 7})
    assert len(carts) == 1
    assert carts[0]["dishes"] == [1, 2]


def test_many_concurrent_adds_keep_every_dish():
    store = SlowStore()
    manager = CartManager(store=store, lock_service=LocalLockService(wait=5))

    run_concurrently(*[(lambda d=d: manager.add_dish(3, d)) for d in range(1, 6)])

    carts = store.find_many(CART, {"owner": 3})
    assert len(carts) == 1
    assert carts[0]["dishes"] == [1, 2, 3, 4, 5]


def test_unique_owner_rule_recovers_when_lock_is_bypassed():
    store = SlowStore()
    manager = CartManager(store=store, lock_service=NoLock())

    run_concurrently(lambda: manager.add_dish(9, 1), lambda: manager.add_dish(9, 2))

    carts = store.find_many(CART, {"owner": 9})
    assert len(carts) == 1
    assert carts[0]["dishes"] == [1, 2]

from unittest.mock import MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from dishcart.domain.errors import CartLockTimeout, StoreUnavailable
from dishcart.services.lock_service import LocalLockService, LockService, build_lock_service


def make_service(redis_client, wait=0.2):
    return LockService(ttl=10, wait=wait, client=redis_client)


def test_cart_lock_sets_key_and_releases_own_token():
    client = MagicMock()
    client.set.return_value = True
    svc = make_service(client)

    with svc.cart_lock(5):
        kwargs = client.set.call_args.kwargs
        assert kwargs["name"] == "cart:5:lock"
        assert kwargs["nx"] is True
        assert kwargs["ex"] == 10

    token = client.set.call_args.kwargs["value"]
    client.eval.assert_called_once()
    assert client.eval.call_args.args[1:] == (1, "cart:5:lock", token)


def test_cart_lock_waits_then_acquires():
    client = MagicMock()
    client.set.side_effect = [False, False, True]
    svc = make_service(client, wait=2)

    with svc.cart_lock(5):
        pass

    assert client.set.call_count == 3


def test_cart_lock_times_out_when_held_elsewhere():
    client = MagicMock()
    client.set.return_value = False
    svc = make_service(client, wait=0.1)

    with pytest.raises(CartLockTimeout):
        with svc.cart_lock(5):
            pass

    client.eval.assert_not_called()


def test_redis_outage_is_store_unavailable():
    client = MagicMock()
    client.set.side_effect = RedisConnectionError("down")
    svc = make_service(client)

    with pytest.raises(StoreUnavailable):
        with svc.cart_lock(5):
            pass


def test_lock_is_released_when_body_fails():
    client = MagicMock()
    client.set.return_value = True
    svc = make_service(client)

    with pytest.raises(RuntimeError):
        with svc.cart_lock(5):
            raise RuntimeError("boom")

    client.eval.assert_called_once()


def test_local_lock_times_out_for_same_user():
    locks = LocalLockService(wait=0.05)

    with locks.cart_lock(1):
        with pytest.raises(CartLockTimeout):
            with locks.cart_lock(1):
                pass
        with locks.cart_lock(2):
            pass


def test_local_lock_forgets_released_users():
    locks = LocalLockService(wait=0.05)

    for user_id in range(1, 50):
        with locks.cart_lock(user_id):
            assert user_id in locks._locks

    assert locks._locks == {}


def test_local_lock_entry_survives_while_held_and_goes_after_timeout():
    locks = LocalLockService(wait=0.05)

    with locks.cart_lock(1):
        with pytest.raises(CartLockTimeout):
            with locks.cart_lock(1):
                pass
        assert list(locks._locks) == [1]

    assert locks._locks == {}


def test_build_lock_service():
    assert isinstance(build_lock_service("local"), LocalLockService)
    with pytest.raises(ValueError):
        build_lock_service("zookeeper")

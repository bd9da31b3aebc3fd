import threading
import uuid
from contextlib import contextmanager
from typing import Dict

import redis
from redis.exceptions import RedisError
from tenacity import RetryError

from dishcart.domain.errors import CartLockTimeout, StoreUnavailable
from dishcart.utils.retry import redis_retry, wait_until_true
from dishcart.utils.settings import (
    CART_LOCK_TTL_SECONDS,
    CART_LOCK_WAIT_SECONDS,
    LOCK_BACKEND,
    REDIS_URL,
)
from dishcart.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje atomowo przez lua, skrypt dziala jako jedna nieprzerywalna operacja
#nie mozna wcisnac sie miedzy GET a DEL, wiec usuwamy tylko wlasny lock


def _cart_key(user_id: int) -> str:
    return f"cart:{user_id}:lock"


class LockService:
    """
    -lock koszyka per user (find-or-create + zapis jako jedna sekcja krytyczna)
    -czekanie na lock przez tenacity
    -zwalnianie atomowo przez lua
    """

    def __init__(
        self,
        url: str | None = None,
        ttl: int = CART_LOCK_TTL_SECONDS,
        wait: float = CART_LOCK_WAIT_SECONDS,
        client: redis.Redis | None = None,
    ):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl
        self.wait = wait

    @redis_retry()
    def _try_acquire(self, key: str, token: str) -> bool:
        #SET cart:1:lock "<token>" NX EX 10
        return bool(
            self.redis.set(
                name=key,
                value=token,
                nx=True, #tylko jesli nikt inny nie trzyma locka
                ex=self.ttl, #lock wygasa sam, gdy worker padnie w trakcie
            )
        )

    def acquire_cart_lock(self, user_id: int) -> str:
        key = _cart_key(user_id)
        token = uuid.uuid4().hex
        try:
            wait_until_true(self.wait)(self._try_acquire, key, token)
        except RetryError as e:
            raise CartLockTimeout(f"Cart of user {user_id} is locked by another request") from e
        except RedisError as e:
            raise StoreUnavailable(f"Lock backend unavailable: {e}") from e
        logger.debug(f"Acquired lock {key}")
        return token

    @redis_retry()
    def release_cart_lock(self, user_id: int, token: str) -> bool:
        key = _cart_key(user_id)
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)

    @contextmanager
    def cart_lock(self, user_id: int):
        token = self.acquire_cart_lock(user_id)
        try:
            yield
        finally:
            try:
                self.release_cart_lock(user_id, token)
            except RedisError as e:
                #klucz i tak wygasnie po ttl
                logger.warning(f"Failed to release lock for user {user_id}: {e}")


class LocalLockService:
    """Locki w procesie, dla jednego workera i testow."""

    def __init__(self, wait: float = CART_LOCK_WAIT_SECONDS):
        self.wait = wait
        self._guard = threading.Lock()
        #user_id -> [lock, liczba requestow ktore go trzymaja albo czekaja]
        self._locks: Dict[int, list] = {}

    def _enter(self, user_id: int) -> threading.Lock:
        with self._guard:
            entry = self._locks.setdefault(user_id, [threading.Lock(), 0])
            entry[1] += 1
            return entry[0]

    def _leave(self, user_id: int) -> None:
        with self._guard:
            entry = self._locks[user_id]
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[user_id]

    @contextmanager
    def cart_lock(self, user_id: int):
        lock = self._enter(user_id)
        try:
            if not lock.acquire(timeout=self.wait):
                raise CartLockTimeout(f"Cart of user {user_id} is locked by another request")
            try:
                yield
            finally:
                lock.release()
        finally:
            self._leave(user_id)


def build_lock_service(backend: str = LOCK_BACKEND):
    if backend == "local":
        return LocalLockService()
    if backend == "redis":
        return LockService()
    raise ValueError(f"Unknown LOCK_BACKEND: {backend}")

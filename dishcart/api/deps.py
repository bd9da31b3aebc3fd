# dishcart/api/deps.py
from functools import lru_cache

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from dishcart.data.database import get_db
from dishcart.domain.errors import NotAuthenticated
from dishcart.repos.sql_store import SqlEntityStore
from dishcart.services.cart_manager import CartManager
from dishcart.services.checkout import CheckoutAuthorizer
from dishcart.services.lock_service import build_lock_service
from dishcart.services.order_service import OrderService
from dishcart.services.payment_gateway import build_gateway
from dishcart.domain.schemas import MAX_DB_ID


def parse_user_id(raw: str | None) -> int | None:
    """ID z naglowka X-User-Id albo None gdy brak, nie liczba, albo poza zakresem ID w bazie."""
    if not raw or not raw.strip().isdigit():
        return None
    user_id = int(raw)
    if not 0 < user_id <= MAX_DB_ID:
        return None
    return user_id


def get_current_user_id(x_user_id: str | None = Header(default=None)) -> int:
    """
    Tozsamosc usera ustawia proxy uwierzytelniajace w naglowku X-User-Id.
    Brak albo smieci -> 401, zanim cokolwiek dotknie store.
    """
    user_id = parse_user_id(x_user_id)
    if user_id is None:
        raise NotAuthenticated()
    return user_id


def get_store(db: Session = Depends(get_db)) -> SqlEntityStore:
    return SqlEntityStore(db)


#jeden lock service i jedna bramka na proces
@lru_cache
def get_lock_service():
    return build_lock_service()


@lru_cache
def get_gateway():
    return build_gateway()


def get_cart_manager(
    store=Depends(get_store),
    lock_service=Depends(get_lock_service),
) -> CartManager:
    return CartManager(store=store, lock_service=lock_service)


def get_order_service(
    store=Depends(get_store),
    gateway=Depends(get_gateway),
) -> OrderService:
    return OrderService(store=store, authorizer=CheckoutAuthorizer(gateway))

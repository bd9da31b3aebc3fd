# dishcart/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, Path

from dishcart.api.deps import get_current_user_id, get_order_service
from dishcart.domain.schemas import MAX_DB_ID, OrderCreate, OrderOut
from dishcart.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreate,
    user_id: int = Depends(get_current_user_id),
    svc: OrderService = Depends(get_order_service),
):
    """
    Autoryzuje platnosc i tworzy zamowienie.
    Odmowa bramki -> 402, bramka niedostepna -> 502, zamowienie nie powstaje.
    """
    result = svc.create_order(user_id, payload.address, payload.amount, payload.dishes)
    return result.order.as_dict()


@router.get("", response_model=List[OrderOut])
def list_orders(
    user_id: int = Depends(get_current_user_id),
    svc: OrderService = Depends(get_order_service),
):
    return [o.as_dict() for o in svc.list_orders(user_id)]


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int = Path(..., gt=0, le=MAX_DB_ID),
    user_id: int = Depends(get_current_user_id),
    svc: OrderService = Depends(get_order_service),
):
    return svc.get_order(order_id, user_id).as_dict()

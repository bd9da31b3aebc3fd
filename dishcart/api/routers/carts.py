#dishcart/api/routers/carts.py
from fastapi import APIRouter, Depends, Path

from dishcart.api.deps import get_cart_manager, get_current_user_id
from dishcart.domain.schemas import MAX_DB_ID, AddDishIn, CartOut
from dishcart.services.cart_manager import CartManager

router = APIRouter(prefix="/cart", tags=["cart"])

#user_id jako pierwsza zaleznosc: 401 zanim powstanie sesja store


@router.get("", response_model=CartOut)
def get_cart(
    user_id: int = Depends(get_current_user_id),
    svc: CartManager = Depends(get_cart_manager),
):
    return svc.find_or_create(user_id).as_dict()


@router.post("/dishes", response_model=CartOut)
def add_to_cart(
    payload: AddDishIn,
    user_id: int = Depends(get_current_user_id),
    svc: CartManager = Depends(get_cart_manager),
):
    return svc.add_dish(user_id, payload.dish).as_dict()


@router.delete("/dishes/{dish_id}", response_model=CartOut)
def remove_from_cart(
    dish_id: int = Path(..., gt=0, le=MAX_DB_ID),
    user_id: int = Depends(get_current_user_id),
    svc: CartManager = Depends(get_cart_manager),
):
    return svc.remove_dish(user_id, dish_id).as_dict()


@router.delete("", response_model=CartOut)
def clear_cart(
    user_id: int = Depends(get_current_user_id),
    svc: CartManager = Depends(get_cart_manager),
):
    return svc.clear(user_id).as_dict()

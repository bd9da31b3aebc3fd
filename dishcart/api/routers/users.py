from fastapi import APIRouter, Depends, Path
from dishcart.api.deps import get_store
from dishcart.services.user_service import UserService
from dishcart.domain.schemas import MAX_DB_ID, UserCreate, UserRead

router = APIRouter(prefix="/users", tags=["users"])

@router.post("", response_model=UserRead)
def create_user(payload: UserCreate, store=Depends(get_store)):
    return UserService(store).create_user(payload)

@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int = Path(..., gt=0, le=MAX_DB_ID), store=Depends(get_store)):
    return UserService(store).get_user(user_id)

# dishcart/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Annotated, List
from decimal import Decimal
from datetime import datetime

#najwieksze ID mieszczace sie w 64-bitowym INTEGER bazy
MAX_DB_ID = 2**63 - 1

EntityId = Annotated[int, Field(gt=0, le=MAX_DB_ID)]


class AddDishIn(BaseModel):
    """Schema dla dodawania dania do koszyka."""

    dish: int = Field(..., gt=0, le=MAX_DB_ID, description="ID dania (musi być > 0)")


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    id: int
    owner: int
    dishes: List[int]

    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseModel):
    """Schema dla tworzenia użytkownika."""

    id: int = Field(..., gt=0, le=MAX_DB_ID, description="ID użytkownika (musi być > 0)")
    name: str = Field(..., min_length=1, max_length=100, description="Imię użytkownika")


class UserRead(BaseModel):
    """Schema dla użytkownika (response)."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class OrderCreate(BaseModel):
    """Schema dla tworzenia zamówienia."""

    address: str = Field(..., min_length=1, max_length=500, description="Adres dostawy")
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, description="Kwota w głównej jednostce waluty")
    dishes: List[EntityId] = Field(default_factory=list, description="ID dań, kolejność zachowana")


class OrderOut(BaseModel):
    """Schema dla zamówienia (response)."""

    id: int
    owner: int | None
    address: str
    amount: Decimal
    dishes: List[int]
    token: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class RestaurantCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None


class RestaurantUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None


class RestaurantOut(BaseModel):
    id: int
    name: str
    slug: str
    description: str | None = None


class DishCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    restaurant: int | None = Field(default=None, gt=0, le=MAX_DB_ID)


class DishOut(BaseModel):
    id: int
    name: str
    price: Decimal
    restaurant: int | None = None

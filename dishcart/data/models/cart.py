#dishcart/data/models/cart.py
from sqlalchemy import Column, Integer, ForeignKey, Table
from sqlalchemy.orm import relationship

from dishcart.data.database import Base

#tabela laczaca, PK (cart_id, dish_id) = zbior bez duplikatow
cart_dishes = Table(
    "cart_dishes",
    Base.metadata,
    Column("cart_id", Integer, ForeignKey("carts.id", ondelete="CASCADE"), primary_key=True),
    Column("dish_id", Integer, ForeignKey("dishes.id", ondelete="CASCADE"), primary_key=True),
)


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True)
    #unique: jeden koszyk na usera, ostatnia linia obrony przy wyscigu find-or-create
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)

    dishes = relationship("DishModel", secondary=cart_dishes, order_by="DishModel.id")

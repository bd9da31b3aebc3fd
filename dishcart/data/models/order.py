from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Numeric, Text
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from dishcart.data.database import Base

class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    address = Column(Text, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    #client secret z bramki platnosci, pusty gdy checkout bez bramki
    token = Column(String, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    lines = relationship(
        "OrderDishModel",
        order_by="OrderDishModel.position",
        cascade="all, delete-orphan",
    )


class OrderDishModel(Base):
    """Pozycja zamowienia: kolejnosc zachowana, duplikaty dozwolone."""

    __tablename__ = "order_dishes"

    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), primary_key=True)
    position = Column(Integer, primary_key=True)
    dish_id = Column(Integer, ForeignKey("dishes.id"), nullable=False)

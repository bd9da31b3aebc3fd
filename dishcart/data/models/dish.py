from sqlalchemy import Column, Integer, ForeignKey, String, Numeric

from dishcart.data.database import Base


class DishModel(Base):
    __tablename__ = "dishes"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=True)

from sqlalchemy import Column, Integer, String, Text, event

from dishcart.data.database import Base
from dishcart.utils.slugs import slugify


class RestaurantModel(Base):
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)


#slug zawsze liczony z nazwy przy kazdym insert/update
@event.listens_for(RestaurantModel, "before_insert")
@event.listens_for(RestaurantModel, "before_update")
def _derive_slug(mapper, connection, target):
    target.slug = slugify(target.name)

#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from dishcart.data.models.user import UserModel
from dishcart.data.models.restaurant import RestaurantModel
from dishcart.data.models.dish import DishModel
from dishcart.data.models.cart import CartModel, cart_dishes
from dishcart.data.models.order import OrderModel, OrderDishModel

__all__ = [
    "UserModel",
    "RestaurantModel",
    "DishModel",
    "CartModel",
    "cart_dishes",
    "OrderModel",
    "OrderDishModel",
]

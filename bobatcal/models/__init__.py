# Import all models here so they're registered with SQLAlchemy
from bobatcal.models.user import User, Role
from bobatcal.models.shop import Shop
from bobatcal.models.drink import Drink
from bobatcal.models.rating import Rating

__all__ = ['User', 'Role', 'Shop', 'Drink', 'Rating']

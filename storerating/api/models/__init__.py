# user
from .usersModel import User, UserRoleEnum

# store
from .storeModel import Store

# rating
from .ratingModel import Rating


__all__ = [
    # user
    "User",
    "UserRoleEnum",
    # store
    "Store",
    # rating
    "Rating",
]

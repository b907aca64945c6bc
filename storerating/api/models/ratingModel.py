from datetime import datetime
from typing import TYPE_CHECKING, Literal, Optional, Union
from pydantic import StrictFloat, StrictInt
from sqlmodel import CheckConstraint, Field, Relationship, SQLModel, UniqueConstraint

from storerating.api.models.baseModel import CamelSchema, TimeStampedModel

if TYPE_CHECKING:
    from storerating.api.models import Store, User

MIN_RATING = 1
MAX_RATING = 5


class Rating(TimeStampedModel, table=True):
    __tablename__: Literal["ratings"] = "ratings"
    # one rating per user per store
    __table_args__ = (
        UniqueConstraint("user_id", "store_id", name="uix_user_store"),
        CheckConstraint(
            f"rating >= {MIN_RATING} AND rating <= {MAX_RATING}",
            name="ck_rating_range",
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    store_id: int = Field(foreign_key="stores.id", ondelete="CASCADE", index=True)
    rating: int

    user: Optional["User"] = Relationship(back_populates="ratings")
    store: Optional["Store"] = Relationship(back_populates="ratings")


class RatingSubmit(SQLModel):
    # any JSON number; the ledger checks the store first, then integer and range
    rating: Union[StrictInt, StrictFloat]


class UserRatingRead(CamelSchema):
    rating: Optional[int] = None


class StoreRatingEntry(CamelSchema):
    user_id: int
    user_name: str
    user_email: str
    user_address: str
    rating: int
    rated_at: datetime


class RatingDistribution(CamelSchema):
    five_star: int = 0
    four_star: int = 0
    three_star: int = 0
    two_star: int = 0
    one_star: int = 0


class StoreStats(CamelSchema):
    store_id: int
    store_name: str
    average_rating: float
    total_ratings: int
    rating_distribution: RatingDistribution

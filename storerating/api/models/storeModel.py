from datetime import datetime
from typing import TYPE_CHECKING, List, Literal, Optional
from pydantic import EmailStr, field_validator, Field as PydanticField
from sqlmodel import Field, Relationship

from storerating.api.models.baseModel import (
    CamelSchema,
    TimeStampedModel,
    TimeStampReadModel,
)

if TYPE_CHECKING:
    from storerating.api.models import Rating, User


class Store(TimeStampedModel, table=True):
    __tablename__: Literal["stores"] = "stores"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100, index=True)
    email: str = Field(max_length=255, unique=True, index=True)
    address: str = Field(max_length=400)
    owner_id: Optional[int] = Field(
        default=None, foreign_key="users.id", ondelete="CASCADE", index=True
    )

    owner: Optional["User"] = Relationship(back_populates="stores")
    ratings: List["Rating"] = Relationship(back_populates="store")


# ---------- CREATE ----------
class StoreCreate(CamelSchema):
    name: str = PydanticField(min_length=1, max_length=100)
    email: EmailStr
    address: str = PydanticField(min_length=1, max_length=400)
    owner_id: Optional[int] = None

    @field_validator("owner_id", mode="before")
    @classmethod
    def blank_owner_is_none(cls, v):
        # the admin form posts "" when no owner is picked
        if v == "":
            return None
        return v


# ---------- READ ----------
class StoreRead(TimeStampReadModel):
    id: int
    name: str
    email: EmailStr
    address: str
    owner_id: Optional[int] = None


class AdminStoreListItem(CamelSchema):
    id: int
    name: str
    email: str
    address: str
    created_at: datetime
    owner_id: Optional[int] = None
    owner_name: Optional[str] = None
    owner_email: Optional[str] = None
    average_rating: float
    total_ratings: int


class UserStoreListItem(CamelSchema):
    id: int
    name: str
    address: str
    created_at: datetime
    average_rating: float
    total_ratings: int
    user_rating: Optional[int] = None


class OwnerStoreRead(CamelSchema):
    id: int
    name: str
    email: str
    address: str
    average_rating: float
    total_ratings: int

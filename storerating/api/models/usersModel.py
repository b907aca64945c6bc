import re
from enum import Enum
from typing import TYPE_CHECKING, List, Optional
from pydantic import EmailStr, field_validator, Field as PydanticField
from sqlmodel import Field, Relationship, SQLModel

from storerating.api.models.baseModel import (
    CamelSchema,
    TimeStampedModel,
    TimeStampReadModel,
)

if TYPE_CHECKING:
    from storerating.api.models import Rating, Store


class UserRoleEnum(str, Enum):
    admin = "admin"
    user = "user"
    store_owner = "store_owner"


SPECIAL_CHARACTER = re.compile(r"[^A-Za-z0-9]")


def check_password_strength(value: str) -> str:
    if not any(ch.isupper() for ch in value):
        raise ValueError("Password must contain at least one uppercase letter")
    if not SPECIAL_CHARACTER.search(value):
        raise ValueError("Password must contain at least one special character")
    return value


class User(TimeStampedModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=60)
    email: str = Field(max_length=255, unique=True, index=True)
    password: str = Field(max_length=255)
    address: str = Field(max_length=400)
    role: UserRoleEnum = Field(default=UserRoleEnum.user, index=True)

    # relationships
    stores: List["Store"] = Relationship(back_populates="owner")
    ratings: List["Rating"] = Relationship(back_populates="user")

    def token_claims(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
        }


class RegisterUser(CamelSchema):
    name: str = PydanticField(min_length=20, max_length=60)
    email: EmailStr
    password: str = PydanticField(min_length=8, max_length=16)
    address: str = PydanticField(min_length=1, max_length=400)

    @field_validator("password")
    @classmethod
    def password_strength(cls, v):
        return check_password_strength(v)


class UserCreate(RegisterUser):
    role: UserRoleEnum = UserRoleEnum.user


class UserRead(TimeStampReadModel):
    id: int
    name: str
    email: EmailStr
    address: str
    role: UserRoleEnum


class LoginRequest(SQLModel):
    email: EmailStr
    password: str


class ChangePasswordRequest(CamelSchema):
    current_password: str
    new_password: str = PydanticField(min_length=8, max_length=16)

    @field_validator("new_password")
    @classmethod
    def password_strength(cls, v):
        return check_password_strength(v)

from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlmodel import Field, SQLModel


class TimeStampedModel(SQLModel):
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: Optional[datetime] = None


class CamelSchema(BaseModel):
    """
    Request/response schema exchanged with the client in camelCase.
    Fields are declared in snake_case; `jsonable_encoder` dumps by alias.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class TimeStampReadModel(CamelSchema):
    created_at: datetime
    updated_at: Optional[datetime] = None

from __future__ import annotations

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


class ORMBaseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class PersonCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("name must not be blank")
        return stripped

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped = value.strip().lower()
        return stripped or None


class PersonSchema(ORMBaseSchema):
    id: int
    name: str
    email: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ResultsList(BaseModel, Generic[T]):
    """One page of records plus the metadata needed to request the next."""

    results: list[T] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    limit: int = Field(default=20, ge=1)
    offset: int = Field(default=0, ge=0)


__all__ = [
    "ORMBaseSchema",
    "PersonCreate",
    "PersonSchema",
    "ResultsList",
]

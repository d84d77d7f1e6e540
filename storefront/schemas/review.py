# storefront/schemas/review.py
import uuid
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class ReviewCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    product_id: uuid.UUID
    rating: int = Field(ge=1, le=5)
    comment: str | None = Field(default=None, max_length=2000)

    @field_validator("comment")
    @classmethod
    def normalize_comment(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class ReviewRead(SQLModel):
    id: uuid.UUID
    user_id: uuid.UUID
    product_id: uuid.UUID
    rating: int
    comment: str | None
    created_at: datetime


class ReviewWithAuthorRead(ReviewRead):
    """Review plus the public fields of its author."""

    username: str | None = None
    avatar_url: str | None = None

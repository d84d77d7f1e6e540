# storefront/schemas/favorite.py
import uuid
from datetime import datetime

from pydantic import ConfigDict, model_validator
from sqlmodel import SQLModel


class FavoriteCreate(SQLModel):
    """
    Payload for bookmarking a product or a service.

    Exactly one of product_id / service_id must be given.
    """

    model_config = ConfigDict(extra="forbid")

    product_id: uuid.UUID | None = None
    service_id: uuid.UUID | None = None

    @model_validator(mode="after")
    def exactly_one_target(self) -> "FavoriteCreate":
        if self.product_id is None and self.service_id is None:
            raise ValueError("product_id or service_id is required")
        if self.product_id is not None and self.service_id is not None:
            raise ValueError("provide either product_id or service_id, not both")
        return self


class FavoriteRead(SQLModel):
    id: uuid.UUID
    user_id: uuid.UUID
    product_id: uuid.UUID | None
    service_id: uuid.UUID | None
    created_at: datetime


class FavoriteDeleted(SQLModel):
    message: str
    deleted_count: int

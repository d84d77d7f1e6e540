# storefront/models/favorite.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class Favorite(SQLModel, table=True):
    """
    Bookmark of a product or a service by an account.

    Exactly one of product_id / service_id is set. At most one row exists
    per (user, product) and per (user, service); NULLs do not collide, so
    both constraints coexist on the same table.
    """

    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_favorites_user_product"),
        UniqueConstraint("user_id", "service_id", name="uq_favorites_user_service"),
    )

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)

    product_id: uuid.UUID | None = Field(
        default=None,
        foreign_key="products.id",
        index=True,
    )
    service_id: uuid.UUID | None = Field(
        default=None,
        foreign_key="services.id",
        index=True,
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

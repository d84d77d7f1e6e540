# storefront/models/user.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field

USER_ROLES = ("user", "admin", "super_admin")
ADMIN_ROLES = frozenset({"admin", "super_admin"})


class User(SQLModel, table=True):
    """
    Registered storefront account.

    Role:
      - "user" | "admin" | "super_admin"
      - anonymous visitors have no row.
      - only a super admin may change a role; self-service profile
        updates never touch it.

    `password_hash` is a bcrypt string and is never serialized to clients.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    username: str = Field(
        max_length=50,
        unique=True,
        index=True,
        description="Unique public handle (min 3 chars)",
    )

    email: str = Field(
        unique=True,
        index=True,
        description="Unique login email, stored lower-cased",
    )

    password_hash: str = Field(description="bcrypt hash of the password")

    role: str = Field(
        default="user",
        index=True,
        description="Application role: user | admin | super_admin",
    )

    phone: str | None = None
    avatar_url: str | None = None

    # Kenya location of the customer (county > sub-county > area)
    county: str | None = None
    sub_county: str | None = None
    area: str | None = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES

    @property
    def is_super_admin(self) -> bool:
        return self.role == "super_admin"

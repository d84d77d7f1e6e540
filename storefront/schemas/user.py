# storefront/schemas/user.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field

# App-level roles. Anonymous visitors have no token, so they are not listed.
Role = Literal["user", "admin", "super_admin"]


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("field cannot be empty")
    return v


def _strip_optional(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    return v or None


class RegisterRequest(SQLModel):
    """
    Payload for account registration.

    Role is never accepted here: every new account starts as "user".
    """

    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    phone: str | None = None

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str) -> str:
        v = _strip_required(v)
        if len(v) < 3:
            raise ValueError("username must be at least 3 characters")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("phone")
    @classmethod
    def normalize_phone(cls, v: str | None) -> str | None:
        return _strip_optional(v)


class LoginRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserRead(SQLModel):
    """Public account representation (never includes the password hash)."""

    id: uuid.UUID
    username: str
    email: str
    role: Role
    phone: str | None = None
    avatar_url: str | None = None
    county: str | None = None
    sub_county: str | None = None
    area: str | None = None
    created_at: datetime


class AuthResponse(SQLModel):
    """Returned by register and login."""

    message: str
    token: str
    user: UserRead


class ProfileUpdate(SQLModel):
    """
    Self-service profile update.

    Unknown fields (notably `role`, `email`, `password`) are silently
    dropped rather than rejected, so a client echoing the whole profile
    back cannot escalate its own privileges.
    """

    model_config = ConfigDict(extra="ignore")

    username: str | None = Field(default=None, min_length=3, max_length=50)
    phone: str | None = None
    avatar_url: str | None = None
    county: str | None = None
    sub_county: str | None = None
    area: str | None = None

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _strip_required(v)

    @field_validator("phone", "avatar_url", "county", "sub_county", "area")
    @classmethod
    def normalize_optional(cls, v: str | None) -> str | None:
        return _strip_optional(v)


class ProfileUpdateResponse(SQLModel):
    message: str
    user: UserRead


class UserRoleUpdate(SQLModel):
    """
    Super-admin-only role update schema.
    """

    model_config = ConfigDict(extra="forbid")
    role: Role


class AvatarUploadResponse(SQLModel):
    url: str
    user: UserRead


# ----- Email change workflow -----


class EmailChangeCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    new_email: EmailStr

    @field_validator("new_email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class EmailChangeReview(SQLModel):
    """Admin decision on a pending request."""

    model_config = ConfigDict(extra="forbid")
    status: Literal["approved", "rejected"]


class EmailChangeRead(SQLModel):
    id: uuid.UUID
    user_id: uuid.UUID
    new_email: str
    status: Literal["pending", "approved", "rejected"]
    created_at: datetime
    reviewed_at: datetime | None = None

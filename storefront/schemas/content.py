# storefront/schemas/content.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, EmailStr, field_validator
from sqlmodel import SQLModel, Field

NewsType = Literal["news", "offer"]


def _not_empty(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("field cannot be empty")
    return v


# ----- News & offers -----


class NewsCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(max_length=255)
    content: str
    type: NewsType = "news"
    is_urgent: bool = False
    image_url: str | None = None
    author_name: str | None = None

    @field_validator("title", "content")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return _not_empty(v)


class NewsUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, max_length=255)
    content: str | None = None
    type: NewsType | None = None
    is_urgent: bool | None = None
    image_url: str | None = None
    author_name: str | None = None

    @field_validator("title", "content")
    @classmethod
    def not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _not_empty(v)


class NewsRead(SQLModel):
    id: uuid.UUID
    title: str
    content: str
    type: NewsType
    is_urgent: bool
    image_url: str | None
    author_name: str | None
    created_at: datetime


# ----- Pages -----


class PageCreate(SQLModel):
    """
    - slug is optional: if omitted, generated from `title`.
    """

    model_config = ConfigDict(extra="forbid")

    title: str = Field(max_length=255)
    slug: str | None = None
    content: str = ""
    image_url: str | None = None
    is_published: bool = True

    @field_validator("title")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return _not_empty(v)

    @field_validator("slug")
    @classmethod
    def normalize_slug(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("slug cannot be empty if provided")
        return v


class PageUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, max_length=255)
    slug: str | None = None
    content: str | None = None
    image_url: str | None = None
    is_published: bool | None = None

    @field_validator("title", "slug")
    @classmethod
    def not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _not_empty(v)


class PageRead(SQLModel):
    id: uuid.UUID
    title: str
    slug: str
    content: str
    image_url: str | None
    is_published: bool
    created_at: datetime


# ----- Site settings -----


class SiteSettingsRead(SQLModel):
    default_whatsapp_number: str
    show_urgent_banner: bool
    updated_at: datetime


class SiteSettingsUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    default_whatsapp_number: str | None = None
    show_urgent_banner: bool | None = None

    @field_validator("default_whatsapp_number")
    @classmethod
    def not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _not_empty(v)


# ----- Newsletter -----


class NewsletterSubscribe(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


# ----- Locations -----


class CountyRead(SQLModel):
    id: uuid.UUID
    name: str
    code: str | None


class SubCountyRead(SQLModel):
    id: uuid.UUID
    county_id: uuid.UUID
    name: str


class AreaRead(SQLModel):
    id: uuid.UUID
    sub_county_id: uuid.UUID
    name: str


# ----- Generic -----


class MessageResponse(SQLModel):
    message: str

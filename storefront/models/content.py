# storefront/models/content.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class News(SQLModel, table=True):
    """
    News article or promotional offer shown on the storefront.

    `is_urgent` items feed the site-wide urgent banner.
    """

    __tablename__ = "news"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    title: str = Field(max_length=255)
    content: str

    # news | offer
    type: str = Field(default="news", index=True)

    is_urgent: bool = Field(default=False, index=True)
    image_url: str | None = None
    author_name: str | None = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class Page(SQLModel, table=True):
    """
    Admin-managed static content page addressed by slug.
    """

    __tablename__ = "pages"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    title: str = Field(max_length=255)
    slug: str = Field(
        max_length=255,
        unique=True,
        index=True,
        description="URL-friendly identifier (unique)",
    )
    content: str = ""
    image_url: str | None = None
    is_published: bool = Field(default=True, index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class SiteSettings(SQLModel, table=True):
    """
    Singleton row of storefront-wide settings.
    """

    __tablename__ = "site_settings"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
    )

    default_whatsapp_number: str
    show_urgent_banner: bool = True

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class NewsletterSubscriber(SQLModel, table=True):
    __tablename__ = "newsletter_subscribers"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
    )

    email: str = Field(unique=True, index=True)
    is_active: bool = True

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

# storefront/models/product.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field

PRODUCT_CATEGORIES = (
    "Immune Boosters",
    "Sport Fit",
    "Women's Beauty",
    "Heart & Blood Fit",
    "Smart Kids",
    "Men's Power",
    "Suma Fit",
    "Suma Living",
)

SERVICE_CATEGORIES = ("Consultation", "Training", "Checkups")


class Product(SQLModel, table=True):
    """
    Health product sold through the storefront.

    `rating` and `reviews_count` are derived from reviews and are only
    written by the review service.
    """

    __tablename__ = "products"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        max_length=255,
        index=True,
        description="Display name of the product",
    )

    description: str = Field(description="Long description")

    price: float = Field(
        ge=0,
        description="Unit price (KES)",
    )

    category: str = Field(
        index=True,
        description="One of PRODUCT_CATEGORIES",
    )

    images: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )
    features: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )
    benefits: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )

    is_featured: bool = Field(default=False, index=True)
    is_trending: bool = Field(default=False, index=True)

    rating: float = Field(default=0, ge=0, le=5)
    reviews_count: int = Field(default=0, ge=0)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )


class Service(SQLModel, table=True):
    """
    In-person medical service that can be booked as an appointment.
    """

    __tablename__ = "services"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(max_length=255, index=True)
    description: str
    category: str | None = Field(
        default=None,
        description="One of SERVICE_CATEGORIES",
    )

    benefits: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )
    images: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )

    is_featured: bool = Field(default=False, index=True)
    is_trending: bool = Field(default=False, index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class ServiceOffice(SQLModel, table=True):
    """
    Physical office where booked services are delivered.
    """

    __tablename__ = "service_offices"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str
    address: str | None = None
    county: str | None = None
    sub_county: str | None = None
    area: str | None = None
    phone: str | None = None

    is_active: bool = Field(
        default=True,
        index=True,
        description="Inactive offices are hidden from booking",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

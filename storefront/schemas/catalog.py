# storefront/schemas/catalog.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

ProductCategory = Literal[
    "Immune Boosters",
    "Sport Fit",
    "Women's Beauty",
    "Heart & Blood Fit",
    "Smart Kids",
    "Men's Power",
    "Suma Fit",
    "Suma Living",
]

ServiceCategory = Literal["Consultation", "Training", "Checkups"]


def _not_empty(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("field cannot be empty")
    return v


def _clean_list(v: list[str] | None) -> list[str] | None:
    if v is None:
        return v
    return [item.strip() for item in v if item and item.strip()]


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------


class ProductCreate(SQLModel):
    """
    Payload for creating a product (admin).

    rating / reviews_count are derived from reviews and cannot be set.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=255)
    description: str
    price: float = Field(ge=0)
    category: ProductCategory
    images: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    is_featured: bool = False
    is_trending: bool = False

    @field_validator("name", "description")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return _not_empty(v)

    @field_validator("images", "features", "benefits")
    @classmethod
    def clean_list(cls, v: list[str]) -> list[str]:
        return _clean_list(v)


class ProductUpdate(SQLModel):
    """
    Partial update payload for products.
    All fields are optional.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    category: ProductCategory | None = None
    images: list[str] | None = None
    features: list[str] | None = None
    benefits: list[str] | None = None
    is_featured: bool | None = None
    is_trending: bool | None = None

    @field_validator("name", "description")
    @classmethod
    def not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _not_empty(v)

    @field_validator("images", "features", "benefits")
    @classmethod
    def clean_list(cls, v: list[str] | None) -> list[str] | None:
        return _clean_list(v)


class ProductRead(SQLModel):
    id: uuid.UUID
    name: str
    description: str
    price: float
    category: str
    images: list[str]
    features: list[str]
    benefits: list[str]
    is_featured: bool
    is_trending: bool
    rating: float
    reviews_count: int
    created_at: datetime


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------


class ServiceCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=255)
    description: str
    category: ServiceCategory | None = None
    benefits: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    is_featured: bool = False
    is_trending: bool = False

    @field_validator("name", "description")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return _not_empty(v)

    @field_validator("images", "benefits")
    @classmethod
    def clean_list(cls, v: list[str]) -> list[str]:
        return _clean_list(v)


class ServiceUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    category: ServiceCategory | None = None
    benefits: list[str] | None = None
    images: list[str] | None = None
    is_featured: bool | None = None
    is_trending: bool | None = None

    @field_validator("name", "description")
    @classmethod
    def not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _not_empty(v)

    @field_validator("images", "benefits")
    @classmethod
    def clean_list(cls, v: list[str] | None) -> list[str] | None:
        return _clean_list(v)


class ServiceRead(SQLModel):
    id: uuid.UUID
    name: str
    description: str
    category: str | None
    benefits: list[str]
    images: list[str]
    is_featured: bool
    is_trending: bool
    created_at: datetime


# ---------------------------------------------------------------------------
# Service offices
# ---------------------------------------------------------------------------


class ServiceOfficeCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    address: str | None = None
    county: str | None = None
    sub_county: str | None = None
    area: str | None = None
    phone: str | None = None
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return _not_empty(v)


class ServiceOfficeUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    address: str | None = None
    county: str | None = None
    sub_county: str | None = None
    area: str | None = None
    phone: str | None = None
    is_active: bool | None = None

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _not_empty(v)


class ServiceOfficeRead(SQLModel):
    id: uuid.UUID
    name: str
    address: str | None
    county: str | None
    sub_county: str | None
    area: str | None
    phone: str | None
    is_active: bool
    created_at: datetime

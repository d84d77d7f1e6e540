# storefront/models/location.py
import uuid

from sqlmodel import SQLModel, Field


class KenyaCounty(SQLModel, table=True):
    """
    Reference data: Kenya county. Loaded by an external import, read-only here.
    """

    __tablename__ = "kenya_counties"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(unique=True, index=True)
    code: str | None = None


class KenyaSubCounty(SQLModel, table=True):
    __tablename__ = "kenya_sub_counties"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    county_id: uuid.UUID = Field(foreign_key="kenya_counties.id", index=True)
    name: str = Field(index=True)


class KenyaArea(SQLModel, table=True):
    __tablename__ = "kenya_areas"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    sub_county_id: uuid.UUID = Field(foreign_key="kenya_sub_counties.id", index=True)
    name: str = Field(index=True)

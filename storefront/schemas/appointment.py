# storefront/schemas/appointment.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel

from storefront.schemas.catalog import ServiceOfficeRead, ServiceRead

AppointmentStatus = Literal["pending", "confirmed", "cancelled"]


class AppointmentCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    service_id: uuid.UUID
    office_id: uuid.UUID
    date: datetime
    location: str | None = None

    @field_validator("location")
    @classmethod
    def normalize_location(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class AppointmentRead(SQLModel):
    id: uuid.UUID
    user_id: uuid.UUID | None
    service_id: uuid.UUID
    office_id: uuid.UUID
    date: datetime
    location: str | None
    status: AppointmentStatus
    created_at: datetime


class AppointmentDetailRead(AppointmentRead):
    """Appointment with its service and office populated."""

    service: ServiceRead | None = None
    office: ServiceOfficeRead | None = None


class AppointmentStatusUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    status: AppointmentStatus

# storefront/models/appointment.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Appointment(SQLModel, table=True):
    """
    Booking of an in-person service at a service office.
    """

    __tablename__ = "appointments"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID | None = Field(
        default=None,
        foreign_key="users.id",
        index=True,
    )

    service_id: uuid.UUID = Field(foreign_key="services.id", index=True)
    office_id: uuid.UUID = Field(foreign_key="service_offices.id", index=True)

    date: datetime = Field(description="Requested appointment date/time")

    location: str | None = Field(
        default=None,
        description="Customer's own location",
    )

    # pending | confirmed | cancelled
    status: str = Field(default="pending", index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

# storefront/models/email_change.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field

EMAIL_CHANGE_STATUSES = ("pending", "approved", "rejected")


class EmailChangeRequest(SQLModel, table=True):
    """
    An account holder's request to move their login email.

    Profile updates never touch `email`; the address only changes when an
    admin approves one of these. Status: pending -> approved | rejected,
    reviewed once.
    """

    __tablename__ = "email_change_requests"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)
    new_email: str = Field(index=True, description="Requested address, lower-cased")

    status: str = Field(default="pending", index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    reviewed_at: datetime | None = None

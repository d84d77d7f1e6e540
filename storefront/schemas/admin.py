# storefront/schemas/admin.py
from datetime import datetime

from sqlmodel import SQLModel


class AdminAnalytics(SQLModel):
    """
    Totals shown on the admin dashboard.
    """

    total_users: int
    total_products: int
    total_services: int
    total_orders: int
    total_appointments: int
    total_revenue: float


class UploadRead(SQLModel):
    """Returned after a successful upload."""

    url: str
    absolute_url: str


class UploadedFileRead(SQLModel):
    filename: str
    url: str
    size: int
    created_at: datetime

# storefront/services/stats_service.py
from sqlmodel import Session

from storefront.models.appointment import Appointment
from storefront.models.order import Order
from storefront.models.product import Product, Service
from storefront.models.user import User
from storefront.repositories.stats_repo import StatsRepository
from storefront.schemas.admin import AdminAnalytics


class StatsService:
    def __init__(self, repo: StatsRepository):
        self.repo = repo

    def get_analytics(self, session: Session) -> AdminAnalytics:
        """
        Dashboard totals. Revenue excludes cancelled orders.
        """
        return AdminAnalytics(
            total_users=self.repo.count(session, User),
            total_products=self.repo.count(session, Product),
            total_services=self.repo.count(session, Service),
            total_orders=self.repo.count(session, Order),
            total_appointments=self.repo.count(session, Appointment),
            total_revenue=self.repo.total_revenue(session),
        )

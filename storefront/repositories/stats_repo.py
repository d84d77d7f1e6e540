# storefront/repositories/stats_repo.py
from sqlalchemy import func
from sqlmodel import Session, SQLModel, select

from storefront.models.order import Order


class StatsRepository:
    """
    Read-only aggregated queries for the admin dashboard.
    """

    def count(self, session: Session, model: type[SQLModel]) -> int:
        stmt = select(func.count()).select_from(model)
        # SQLModel's Session.exec() -> ScalarResult -> use .one()
        value = session.exec(stmt).one()
        return int(value or 0)

    def total_revenue(self, session: Session) -> float:
        """
        Sum of total_amount for all non-cancelled orders.
        """
        stmt = (
            select(func.coalesce(func.sum(Order.total_amount), 0.0))
            .where(Order.status != "cancelled")
        )
        value = session.exec(stmt).one()
        return float(value or 0.0)

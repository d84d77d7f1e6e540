# storefront/repositories/review_repo.py
import uuid

from sqlalchemy import func
from sqlmodel import Session, select

from storefront.models.review import Review
from storefront.models.user import User


class ReviewRepository:

    def list_for_product_with_authors(
        self, session: Session, product_id: uuid.UUID
    ) -> list[tuple[Review, User | None]]:
        """Reviews of a product, newest first, joined with their authors."""
        stmt = (
            select(Review, User)
            .join(User, User.id == Review.user_id, isouter=True)
            .where(Review.product_id == product_id)
            .order_by(Review.created_at.desc())
        )
        return session.exec(stmt).all()

    def rating_stats(self, session: Session, product_id: uuid.UUID) -> tuple[float, int]:
        """
        Return (average rating, review count) for a product.
        """
        stmt = select(
            func.coalesce(func.avg(Review.rating), 0.0),
            func.count(Review.id),
        ).where(Review.product_id == product_id)
        avg_rating, count = session.exec(stmt).one()
        return float(avg_rating or 0.0), int(count or 0)

    def list_product_ids_for_user(self, session: Session, user_id: uuid.UUID) -> list[uuid.UUID]:
        stmt = select(Review.product_id).where(Review.user_id == user_id).distinct()
        return session.exec(stmt).all()

    def create(self, session: Session, review: Review) -> Review:
        session.add(review)
        session.commit()
        session.refresh(review)
        return review

    def delete_for_user(self, session: Session, user_id: uuid.UUID) -> None:
        for row in session.exec(select(Review).where(Review.user_id == user_id)).all():
            session.delete(row)
        session.commit()

    def delete_for_product(self, session: Session, product_id: uuid.UUID) -> None:
        for row in session.exec(select(Review).where(Review.product_id == product_id)).all():
            session.delete(row)
        session.commit()

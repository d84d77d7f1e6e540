# storefront/repositories/favorite_repo.py
import uuid

from sqlmodel import Session, select, or_

from storefront.models.favorite import Favorite


class FavoriteRepository:

    # Get favorites for a user
    def list_for_user(self, session: Session, user_id: uuid.UUID) -> list[Favorite]:
        stmt = (
            select(Favorite)
            .where(Favorite.user_id == user_id)
            .order_by(Favorite.created_at)
        )
        return session.exec(stmt).all()

    def find(
        self,
        session: Session,
        user_id: uuid.UUID,
        product_id: uuid.UUID | None = None,
        service_id: uuid.UUID | None = None,
    ) -> Favorite | None:
        stmt = select(Favorite).where(Favorite.user_id == user_id)
        if product_id is not None:
            stmt = stmt.where(Favorite.product_id == product_id)
        if service_id is not None:
            stmt = stmt.where(Favorite.service_id == service_id)
        return session.exec(stmt).first()

    def create(self, session: Session, favorite: Favorite) -> Favorite:
        session.add(favorite)
        session.commit()
        session.refresh(favorite)
        return favorite

    def delete_for_item(
        self, session: Session, user_id: uuid.UUID, item_id: uuid.UUID
    ) -> int:
        """
        Delete the user's favorites pointing at `item_id` (product or service).

        Returns:
            Number of rows deleted.
        """
        stmt = select(Favorite).where(
            Favorite.user_id == user_id,
            or_(Favorite.product_id == item_id, Favorite.service_id == item_id),
        )
        rows = session.exec(stmt).all()
        for row in rows:
            session.delete(row)
        session.commit()
        return len(rows)

    def delete_for_user(self, session: Session, user_id: uuid.UUID) -> None:
        for row in self.list_for_user(session, user_id):
            session.delete(row)
        session.commit()

    def delete_for_target(
        self,
        session: Session,
        product_id: uuid.UUID | None = None,
        service_id: uuid.UUID | None = None,
    ) -> None:
        """Drop every account's favorite of a catalog item being deleted."""
        stmt = select(Favorite)
        if product_id is not None:
            stmt = stmt.where(Favorite.product_id == product_id)
        if service_id is not None:
            stmt = stmt.where(Favorite.service_id == service_id)
        for row in session.exec(stmt).all():
            session.delete(row)
        session.commit()

# storefront/services/favorite_service.py
import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from storefront.core.errors import NotFound
from storefront.models.favorite import Favorite
from storefront.repositories.catalog_repo import ProductRepository, ServiceRepository
from storefront.repositories.favorite_repo import FavoriteRepository
from storefront.schemas.favorite import FavoriteCreate

logger = logging.getLogger(__name__)


class FavoriteService:
    """
    Server of record for favorites.

    Rules:
      - at most one favorite per (account, product) and (account, service)
      - adding an existing favorite returns the existing row (idempotent)
      - removing a favorite that does not exist is a 404
    """

    def __init__(
        self,
        repo: FavoriteRepository,
        product_repo: ProductRepository,
        service_repo: ServiceRepository,
    ):
        self.repo = repo
        self.product_repo = product_repo
        self.service_repo = service_repo

    def list_favorites(self, session: Session, user_id: uuid.UUID) -> list[Favorite]:
        return self.repo.list_for_user(session, user_id)

    def add_favorite(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: FavoriteCreate,
    ) -> tuple[Favorite, bool]:
        """
        Bookmark a product or service.

        Returns:
            (favorite, created) where created is False when the favorite
            already existed.
        """
        if payload.product_id is not None:
            if not self.product_repo.get_by_id(session, payload.product_id):
                raise NotFound("Product not found")
        elif not self.service_repo.get_by_id(session, payload.service_id):
            raise NotFound("Service not found")

        existing = self.repo.find(
            session,
            user_id,
            product_id=payload.product_id,
            service_id=payload.service_id,
        )
        if existing:
            return existing, False

        favorite = Favorite(
            user_id=user_id,
            product_id=payload.product_id,
            service_id=payload.service_id,
        )
        try:
            return self.repo.create(session, favorite), True
        except IntegrityError:
            # A concurrent request inserted the same pair first.
            session.rollback()
            existing = self.repo.find(
                session,
                user_id,
                product_id=payload.product_id,
                service_id=payload.service_id,
            )
            if existing is None:
                raise
            return existing, False

    def remove_favorite(
        self,
        session: Session,
        user_id: uuid.UUID,
        item_id: uuid.UUID,
    ) -> int:
        """
        Remove the caller's favorite of a product or service.

        Raises:
            NotFound(404): nothing was bookmarked under that id.
        """
        deleted = self.repo.delete_for_item(session, user_id, item_id)
        if not deleted:
            raise NotFound("Favorite not found")
        logger.debug("Removed %d favorite(s) of %s for %s", deleted, item_id, user_id)
        return deleted

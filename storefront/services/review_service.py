# storefront/services/review_service.py
import logging
import uuid

from sqlmodel import Session

from storefront.core.errors import NotFound
from storefront.models.product import Product
from storefront.models.review import Review
from storefront.repositories.catalog_repo import ProductRepository
from storefront.repositories.review_repo import ReviewRepository
from storefront.schemas.review import ReviewCreate, ReviewWithAuthorRead

logger = logging.getLogger(__name__)


class ReviewService:
    """
    Business logic for product reviews.

    Creating a review and refreshing the product's rating are two separate
    commits; a failure between them leaves the rating stale until the next
    review recomputes it from scratch.
    """

    def __init__(self, repo: ReviewRepository, product_repo: ProductRepository):
        self.repo = repo
        self.product_repo = product_repo

    def _get_product(self, session: Session, product_id: uuid.UUID) -> Product:
        product = self.product_repo.get_by_id(session, product_id)
        if not product:
            raise NotFound("Product not found")
        return product

    def list_for_product(
        self, session: Session, product_id: uuid.UUID
    ) -> list[ReviewWithAuthorRead]:
        rows = self.repo.list_for_product_with_authors(session, product_id)
        return [
            ReviewWithAuthorRead(
                id=review.id,
                user_id=review.user_id,
                product_id=review.product_id,
                rating=review.rating,
                comment=review.comment,
                created_at=review.created_at,
                username=author.username if author else None,
                avatar_url=author.avatar_url if author else None,
            )
            for review, author in rows
        ]

    def add_review(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: ReviewCreate,
    ) -> Review:
        """
        Store a review, then recompute the product's rating and count.
        """
        self._get_product(session, payload.product_id)

        review = self.repo.create(
            session,
            Review(
                user_id=user_id,
                product_id=payload.product_id,
                rating=payload.rating,
                comment=payload.comment,
            ),
        )
        self.recompute_rating(session, payload.product_id)
        return review

    def recompute_rating(self, session: Session, product_id: uuid.UUID) -> Product | None:
        """
        Set product.rating to the mean of its reviews and product.reviews_count
        to their number (0 / 0 when none remain).
        """
        product = self.product_repo.get_by_id(session, product_id)
        if product is None:
            return None

        avg_rating, count = self.repo.rating_stats(session, product_id)
        product.rating = round(avg_rating, 2)
        product.reviews_count = count
        return self.product_repo.update(session, product)

    def delete_reviews_by_user(self, session: Session, user_id: uuid.UUID) -> None:
        product_ids = self.repo.list_product_ids_for_user(session, user_id)
        self.repo.delete_for_user(session, user_id)
        for product_id in product_ids:
            self.recompute_rating(session, product_id)
        if product_ids:
            logger.info("Recomputed ratings of %d products", len(product_ids))

# storefront/routers/reviews.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from storefront.core.auth import require_auth
from storefront.core.ids import parse_id
from storefront.database import get_session
from storefront.models.user import User
from storefront.repositories.catalog_repo import ProductRepository
from storefront.repositories.review_repo import ReviewRepository
from storefront.schemas.review import ReviewCreate, ReviewRead, ReviewWithAuthorRead
from storefront.services.review_service import ReviewService

router = APIRouter(prefix="/reviews", tags=["Reviews"])

repo = ReviewRepository()
service = ReviewService(repo, ProductRepository())


@router.get("/{product_id}", response_model=list[ReviewWithAuthorRead])
def list_reviews(product_id: str, session: Session = Depends(get_session)):
    """
    Reviews of a product, newest first, with each reviewer's username.
    """
    return service.list_for_product(session, parse_id(product_id, "Product"))


@router.post(
    "",
    response_model=ReviewRead,
    status_code=status.HTTP_201_CREATED,
)
def add_review(
    payload: ReviewCreate,
    current_user: User = Depends(require_auth),
    session: Session = Depends(get_session),
):
    """
    Add a review; the product's rating and review count are recomputed.
    """
    return service.add_review(session, current_user.id, payload)

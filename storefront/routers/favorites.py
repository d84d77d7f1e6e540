# storefront/routers/favorites.py
from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from storefront.core.auth import require_auth
from storefront.core.ids import parse_id
from storefront.database import get_session
from storefront.models.user import User
from storefront.repositories.catalog_repo import ProductRepository, ServiceRepository
from storefront.repositories.favorite_repo import FavoriteRepository
from storefront.schemas.favorite import FavoriteCreate, FavoriteDeleted, FavoriteRead
from storefront.services.favorite_service import FavoriteService

router = APIRouter(prefix="/favorites", tags=["Favorites"])

repo = FavoriteRepository()
service = FavoriteService(repo, ProductRepository(), ServiceRepository())

# Favorites are re-fetched after every toggle; a cached list would defeat that.
NO_STORE = "no-store, no-cache, must-revalidate"


@router.get("", response_model=list[FavoriteRead])
def list_favorites(
    response: Response,
    current_user: User = Depends(require_auth),
    session: Session = Depends(get_session),
):
    response.headers["Cache-Control"] = NO_STORE
    return service.list_favorites(session, current_user.id)


@router.post("", response_model=FavoriteRead, status_code=status.HTTP_201_CREATED)
def add_favorite(
    payload: FavoriteCreate,
    response: Response,
    current_user: User = Depends(require_auth),
    session: Session = Depends(get_session),
):
    """
    Bookmark a product or service.

    - New favorite => 201.
    - Already a favorite => 200 with the existing record.
    """
    favorite, created = service.add_favorite(session, current_user.id, payload)
    if not created:
        response.status_code = status.HTTP_200_OK
    response.headers["Cache-Control"] = NO_STORE
    return favorite


@router.delete("/{item_id}", response_model=FavoriteDeleted)
def remove_favorite(
    item_id: str,
    response: Response,
    current_user: User = Depends(require_auth),
    session: Session = Depends(get_session),
):
    """
    Remove the caller's favorite of the product or service with this id.
    """
    deleted = service.remove_favorite(session, current_user.id, parse_id(item_id, "Favorite"))
    response.headers["Cache-Control"] = NO_STORE
    return FavoriteDeleted(message="Favorite removed", deleted_count=deleted)

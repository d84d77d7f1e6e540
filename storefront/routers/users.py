# storefront/routers/users.py
from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlmodel import Session

from storefront.core.auth import require_auth
from storefront.core.config import Settings, get_app_settings
from storefront.database import get_session
from storefront.models.user import User
from storefront.repositories.catalog_repo import ProductRepository
from storefront.repositories.email_change_repo import EmailChangeRepository
from storefront.repositories.favorite_repo import FavoriteRepository
from storefront.repositories.order_repo import AppointmentRepository, OrderRepository
from storefront.repositories.review_repo import ReviewRepository
from storefront.repositories.user_repo import UserRepository
from storefront.schemas.user import (
    AvatarUploadResponse,
    ProfileUpdate,
    ProfileUpdateResponse,
    UserRead,
)
from storefront.services.review_service import ReviewService
from storefront.services.upload_service import UploadService
from storefront.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

repo = UserRepository()
service = UserService(
    repo,
    FavoriteRepository(),
    OrderRepository(),
    AppointmentRepository(),
    ReviewService(ReviewRepository(), ProductRepository()),
    EmailChangeRepository(),
)


@router.get("/profile", response_model=UserRead)
def read_profile(current_user: User = Depends(require_auth)):
    """
    Return the currently authenticated user's profile.
    """
    return service.get_me(current_user)


@router.put("/profile", response_model=ProfileUpdateResponse)
def update_profile(
    payload: ProfileUpdate,
    current_user: User = Depends(require_auth),
    session: Session = Depends(get_session),
):
    """
    Update the current user's profile.

    Only username, phone, avatar_url and location fields are editable;
    anything else in the body (including `role`) is ignored.
    """
    user = service.update_me(session, current_user, payload)
    return ProfileUpdateResponse(
        message="Profile updated",
        user=UserRead.model_validate(user),
    )


def get_avatar_upload_service(settings: Settings = Depends(get_app_settings)) -> UploadService:
    return UploadService.for_avatars(settings.UPLOAD_DIR)


@router.post(
    "/avatar",
    response_model=AvatarUploadResponse,
    status_code=status.HTTP_201_CREATED,
)
def upload_avatar(
    avatar: UploadFile = File(...),
    current_user: User = Depends(require_auth),
    session: Session = Depends(get_session),
    uploads: UploadService = Depends(get_avatar_upload_service),
):
    """
    Replace the current user's profile picture.

    - multipart field `avatar`: JPEG, PNG or WEBP, at most 2MB.
    - Returns the new public URL and the updated profile.
    """
    url = uploads.store(avatar.content_type, avatar.file.read())
    user = service.set_avatar(session, current_user, url)
    return AvatarUploadResponse(url=url, user=UserRead.model_validate(user))

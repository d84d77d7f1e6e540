# storefront/services/user_service.py
import logging
import uuid

from sqlmodel import Session

from storefront.core.errors import Conflict, NotFound, ValidationError
from storefront.models.user import User
from storefront.repositories.email_change_repo import EmailChangeRepository
from storefront.repositories.favorite_repo import FavoriteRepository
from storefront.repositories.order_repo import AppointmentRepository, OrderRepository
from storefront.repositories.review_repo import ReviewRepository
from storefront.repositories.user_repo import UserRepository
from storefront.schemas.user import ProfileUpdate, UserRoleUpdate
from storefront.services.review_service import ReviewService

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic for accounts.

    Responsibilities:
      - self-service profile edits (role is never editable here)
      - super-admin role changes and account deletion
    """

    def __init__(
        self,
        repo: UserRepository,
        favorite_repo: FavoriteRepository,
        order_repo: OrderRepository,
        appointment_repo: AppointmentRepository,
        review_service: ReviewService,
        email_change_repo: EmailChangeRepository,
    ):
        self.repo = repo
        self.favorite_repo = favorite_repo
        self.order_repo = order_repo
        self.appointment_repo = appointment_repo
        self.review_service = review_service
        self.email_change_repo = email_change_repo

    # ----- Self profile -----

    def get_me(self, current_user: User) -> User:
        """Return the current authenticated user."""
        return current_user

    def update_me(
        self,
        session: Session,
        current_user: User,
        payload: ProfileUpdate,
    ) -> User:
        """
        Partial update for profile edits.

        Editable: username, phone, avatar_url, county, sub_county, area.
        Any other field in the request body was already dropped by the
        schema, so `role` cannot be changed through this path.
        """
        changes = payload.model_dump(exclude_unset=True)

        new_username = changes.get("username")
        if new_username and new_username != current_user.username:
            taken = self.repo.get_by_username(session, new_username)
            if taken is not None and taken.id != current_user.id:
                raise Conflict("Username already exists")

        for field, value in changes.items():
            if field == "username" and not value:
                continue
            setattr(current_user, field, value)

        return self.repo.update(session, current_user)

    def set_avatar(self, session: Session, current_user: User, url: str) -> User:
        current_user.avatar_url = url
        return self.repo.update(session, current_user)

    # ----- Admin operations -----

    def list_users(self, session: Session, skip: int, limit: int) -> list[User]:
        """List users with pagination (admin only)."""
        return self.repo.list_users(session, skip=skip, limit=limit)

    def get_user(self, session: Session, user_id: uuid.UUID) -> User:
        """
        Get a user by id.

        Raises:
            NotFound(404): if not found.
        """
        user = self.repo.get_by_id(session, user_id)
        if not user:
            raise NotFound("User not found")
        return user

    def update_role(
        self,
        session: Session,
        actor: User,
        user_id: uuid.UUID,
        payload: UserRoleUpdate,
    ) -> User:
        """
        Change a user's role (super admin only).

        Role validation is enforced by the schema (Literal). A super admin
        cannot demote themselves, so the store always keeps at least the
        acting super admin.
        """
        user = self.get_user(session, user_id)
        if user.id == actor.id and payload.role != user.role:
            raise ValidationError("You cannot change your own role")

        user.role = payload.role
        user = self.repo.update(session, user)
        logger.info("Account %s role set to %s by %s", user.id, user.role, actor.id)
        return user

    def delete_user(self, session: Session, actor: User, user_id: uuid.UUID) -> None:
        """
        Delete an account (super admin only).

        Favorites, reviews and email change requests go with the account
        (affected product ratings are recomputed); orders and appointments
        are kept but unlinked.
        """
        user = self.get_user(session, user_id)
        if user.id == actor.id:
            raise ValidationError("You cannot delete your own account")

        self.favorite_repo.delete_for_user(session, user.id)
        self.email_change_repo.delete_for_user(session, user.id)
        self.review_service.delete_reviews_by_user(session, user.id)
        self.order_repo.detach_user(session, user.id)
        self.appointment_repo.detach_user(session, user.id)
        self.repo.delete(session, user)
        logger.info("Account %s deleted by %s", user_id, actor.id)

# storefront/services/email_change_service.py
import logging
import uuid
from datetime import datetime, timezone

from sqlmodel import Session

from storefront.core.errors import Conflict, NotFound, ValidationError
from storefront.models.email_change import EmailChangeRequest
from storefront.models.user import User
from storefront.repositories.email_change_repo import EmailChangeRepository
from storefront.repositories.user_repo import UserRepository
from storefront.schemas.user import EmailChangeCreate, EmailChangeReview

logger = logging.getLogger(__name__)


class EmailChangeService:
    """
    Admin-reviewed email changes.

    Rules:
      - one pending request per account
      - the new address must differ from the current one and be free
      - approval re-checks availability, then moves the login email
      - a request is reviewed exactly once
    """

    def __init__(self, repo: EmailChangeRepository, user_repo: UserRepository):
        self.repo = repo
        self.user_repo = user_repo

    def _ensure_email_free(self, session: Session, email: str, user_id: uuid.UUID) -> None:
        holder = self.user_repo.get_by_email(session, email)
        if holder is not None and holder.id != user_id:
            raise Conflict("Email already in use")

    def request_change(
        self,
        session: Session,
        current_user: User,
        payload: EmailChangeCreate,
    ) -> EmailChangeRequest:
        if payload.new_email == current_user.email:
            raise ValidationError("New email must differ from the current one")
        self._ensure_email_free(session, payload.new_email, current_user.id)
        if self.repo.get_pending_for_user(session, current_user.id) is not None:
            raise Conflict("An email change request is already pending")

        request = self.repo.save(
            session,
            EmailChangeRequest(user_id=current_user.id, new_email=payload.new_email),
        )
        logger.info("Account %s requested an email change", current_user.id)
        return request

    def list_requests(self, session: Session) -> list[EmailChangeRequest]:
        return self.repo.list_all(session)

    def review(
        self,
        session: Session,
        request_id: uuid.UUID,
        payload: EmailChangeReview,
    ) -> EmailChangeRequest:
        """
        Approve or reject a pending request.

        Raises:
            NotFound(404): unknown request, or its account no longer exists.
            ValidationError(400): already reviewed.
            Conflict(400): approving an address taken in the meantime.
        """
        request = self.repo.get_by_id(session, request_id)
        if request is None:
            raise NotFound("Request not found")
        if request.status != "pending":
            raise ValidationError("Request has already been reviewed")

        if payload.status == "approved":
            user = self.user_repo.get_by_id(session, request.user_id)
            if user is None:
                raise NotFound("User not found")
            self._ensure_email_free(session, request.new_email, user.id)
            user.email = request.new_email
            self.user_repo.update(session, user)

        request.status = payload.status
        request.reviewed_at = datetime.now(timezone.utc)
        request = self.repo.save(session, request)
        logger.info("Email change %s %s", request.id, request.status)
        return request

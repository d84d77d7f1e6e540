# storefront/routers/email_change.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from storefront.core.auth import require_admin, require_auth
from storefront.core.ids import parse_id
from storefront.database import get_session
from storefront.models.user import User
from storefront.repositories.email_change_repo import EmailChangeRepository
from storefront.repositories.user_repo import UserRepository
from storefront.schemas.user import EmailChangeCreate, EmailChangeRead, EmailChangeReview
from storefront.services.email_change_service import EmailChangeService

router = APIRouter(prefix="/email-change", tags=["Email change"])

repo = EmailChangeRepository()
service = EmailChangeService(repo, UserRepository())


@router.post(
    "/request",
    response_model=EmailChangeRead,
    status_code=status.HTTP_201_CREATED,
)
def request_email_change(
    payload: EmailChangeCreate,
    current_user: User = Depends(require_auth),
    session: Session = Depends(get_session),
):
    """
    Ask for a new login email. An admin must approve it.
    """
    return service.request_change(session, current_user, payload)


@router.get(
    "",
    response_model=list[EmailChangeRead],
    dependencies=[Depends(require_admin)],
)
def list_email_change_requests(session: Session = Depends(get_session)):
    return service.list_requests(session)


@router.post(
    "/{request_id}/review",
    response_model=EmailChangeRead,
    dependencies=[Depends(require_admin)],
)
def review_email_change(
    request_id: str,
    payload: EmailChangeReview,
    session: Session = Depends(get_session),
):
    return service.review(session, parse_id(request_id, "Request"), payload)

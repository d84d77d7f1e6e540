# storefront/routers/appointments.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from storefront.core.auth import get_current_user, require_auth
from storefront.database import get_session
from storefront.models.user import User
from storefront.repositories.catalog_repo import ServiceRepository
from storefront.repositories.order_repo import AppointmentRepository
from storefront.schemas.appointment import (
    AppointmentCreate,
    AppointmentDetailRead,
    AppointmentRead,
)
from storefront.services.order_service import AppointmentService

router = APIRouter(prefix="/appointments", tags=["Appointments"])

repo = AppointmentRepository()
service = AppointmentService(repo, ServiceRepository())


@router.post(
    "",
    response_model=AppointmentRead,
    status_code=status.HTTP_201_CREATED,
)
def book_appointment(
    payload: AppointmentCreate,
    current_user: User | None = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """
    Book a service at an office. Authentication is optional.
    """
    user_id = current_user.id if current_user else None
    return service.book(session, user_id, payload)


@router.get("", response_model=list[AppointmentDetailRead])
def list_my_appointments(
    current_user: User = Depends(require_auth),
    session: Session = Depends(get_session),
):
    return service.list_user_appointments(session, current_user.id)

# storefront/routers/admin.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from storefront.core.auth import require_admin, require_super_admin
from storefront.core.ids import parse_id
from storefront.database import get_session
from storefront.models.user import User
from storefront.repositories.catalog_repo import ProductRepository, ServiceRepository
from storefront.repositories.email_change_repo import EmailChangeRepository
from storefront.repositories.favorite_repo import FavoriteRepository
from storefront.repositories.order_repo import AppointmentRepository, OrderRepository
from storefront.repositories.review_repo import ReviewRepository
from storefront.repositories.stats_repo import StatsRepository
from storefront.repositories.user_repo import UserRepository
from storefront.schemas.admin import AdminAnalytics
from storefront.schemas.appointment import (
    AppointmentDetailRead,
    AppointmentRead,
    AppointmentStatusUpdate,
)
from storefront.schemas.content import MessageResponse
from storefront.schemas.order import OrderRead, OrderStatusUpdate
from storefront.schemas.user import UserRead, UserRoleUpdate
from storefront.services.order_service import AppointmentService, OrderService
from storefront.services.review_service import ReviewService
from storefront.services.stats_service import StatsService
from storefront.services.user_service import UserService

router = APIRouter(prefix="/admin", tags=["Admin"])

order_repo = OrderRepository()
appointment_repo = AppointmentRepository()

user_service = UserService(
    UserRepository(),
    FavoriteRepository(),
    order_repo,
    appointment_repo,
    ReviewService(ReviewRepository(), ProductRepository()),
    EmailChangeRepository(),
)
order_service = OrderService(order_repo)
appointment_service = AppointmentService(appointment_repo, ServiceRepository())
stats_service = StatsService(StatsRepository())


# -------- Accounts --------


@router.get(
    "/users",
    response_model=list[UserRead],
    dependencies=[Depends(require_admin)],
)
def list_users(
    skip: int = 0,
    limit: int = 50,
    session: Session = Depends(get_session),
):
    """
    List accounts (admin only). Password hashes are never returned.
    """
    return user_service.list_users(session, skip=skip, limit=limit)


@router.put("/users/{user_id}/role", response_model=UserRead)
def change_user_role(
    user_id: str,
    payload: UserRoleUpdate,
    actor: User = Depends(require_super_admin),
    session: Session = Depends(get_session),
):
    """
    Change a user's role (super admin only).
    """
    return user_service.update_role(session, actor, parse_id(user_id, "User"), payload)


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    actor: User = Depends(require_super_admin),
    session: Session = Depends(get_session),
):
    user_service.delete_user(session, actor, parse_id(user_id, "User"))
    return MessageResponse(message="User deleted")


# -------- Orders --------


@router.get(
    "/orders",
    response_model=list[OrderRead],
    dependencies=[Depends(require_admin)],
)
def list_all_orders(
    skip: int = 0,
    limit: int = 50,
    session: Session = Depends(get_session),
):
    return order_service.list_all_orders(session, skip, limit)


@router.patch(
    "/orders/{order_id}/status",
    response_model=OrderRead,
    dependencies=[Depends(require_admin)],
)
def update_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    session: Session = Depends(get_session),
):
    """
    Change order status (admin only).

    Allowed transitions:
      - pending -> completed, cancelled
    """
    return order_service.update_status(session, parse_id(order_id, "Order"), payload)


# -------- Appointments --------


@router.get(
    "/appointments",
    response_model=list[AppointmentDetailRead],
    dependencies=[Depends(require_admin)],
)
def list_all_appointments(
    skip: int = 0,
    limit: int = 50,
    session: Session = Depends(get_session),
):
    return appointment_service.list_all(session, skip, limit)


@router.patch(
    "/appointments/{appointment_id}/status",
    response_model=AppointmentRead,
    dependencies=[Depends(require_admin)],
)
def update_appointment_status(
    appointment_id: str,
    payload: AppointmentStatusUpdate,
    session: Session = Depends(get_session),
):
    """
    Allowed transitions:
      - pending -> confirmed, cancelled
      - confirmed -> cancelled
    """
    return appointment_service.update_status(
        session, parse_id(appointment_id, "Appointment"), payload
    )


# -------- Dashboard --------


@router.get(
    "/analytics",
    response_model=AdminAnalytics,
    dependencies=[Depends(require_admin)],
)
def analytics(session: Session = Depends(get_session)):
    """
    Dashboard totals (admin only).
    """
    return stats_service.get_analytics(session)

# storefront/routers/orders.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from storefront.core.auth import get_current_user, require_auth
from storefront.database import get_session
from storefront.models.user import User
from storefront.repositories.order_repo import OrderRepository
from storefront.schemas.order import OrderCreate, OrderRead
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])

repo = OrderRepository()
service = OrderService(repo)


@router.post(
    "",
    response_model=OrderRead,
    status_code=status.HTTP_201_CREATED,
)
def create_order(
    payload: OrderCreate,
    current_user: User | None = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """
    Submit the client-held cart as an order.

    - Guests may order; signed-in customers get the order linked to
      their account.
    - total_amount is computed here from the submitted lines.
    """
    user_id = current_user.id if current_user else None
    return service.create_order(session, user_id, payload)


@router.get("", response_model=list[OrderRead])
def list_my_orders(
    skip: int = 0,
    limit: int = 50,
    current_user: User = Depends(require_auth),
    session: Session = Depends(get_session),
):
    """
    List the current user's orders, newest first.
    """
    return service.list_user_orders(session, current_user.id, skip, limit)

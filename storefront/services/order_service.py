# storefront/services/order_service.py
import logging
import uuid

from sqlmodel import Session

from storefront.core.errors import NotFound, ValidationError
from storefront.models.appointment import Appointment
from storefront.models.order import Order
from storefront.repositories.catalog_repo import ServiceRepository
from storefront.repositories.order_repo import AppointmentRepository, OrderRepository
from storefront.schemas.appointment import (
    AppointmentCreate,
    AppointmentDetailRead,
    AppointmentRead,
    AppointmentStatusUpdate,
)
from storefront.schemas.catalog import ServiceOfficeRead, ServiceRead
from storefront.schemas.order import OrderCreate, OrderStatusUpdate

logger = logging.getLogger(__name__)

# Allowed status transitions (same status is always a no-op).
ORDER_TRANSITIONS: dict[str, set[str]] = {
    "pending": {"completed", "cancelled"},
    "completed": set(),
    "cancelled": set(),
}

APPOINTMENT_TRANSITIONS: dict[str, set[str]] = {
    "pending": {"confirmed", "cancelled"},
    "confirmed": {"cancelled"},
    "cancelled": set(),
}


def _check_transition(
    transitions: dict[str, set[str]], current: str, new: str
) -> None:
    if current not in transitions or new not in transitions[current]:
        raise ValidationError(f"Invalid status transition: {current} -> {new}")


class OrderService:
    """
    Business logic for orders.

    The cart lives on the client; checkout submits it once. The server
    recomputes every line total and the order total from the submitted
    quantities and snapshot prices instead of trusting a client total.
    """

    def __init__(self, repo: OrderRepository):
        self.repo = repo

    # -------- Customer-facing operations --------

    def create_order(
        self,
        session: Session,
        user_id: uuid.UUID | None,
        payload: OrderCreate,
    ) -> Order:
        """
        Record a checkout.

        Steps:
          1. Snapshot each line with its line_total.
          2. total_amount = sum(line_total).
          3. Persist with status 'pending', linked to the account if any.
        """
        items: list[dict] = []
        total = 0.0
        for line in payload.items:
            line_total = line.price * line.quantity
            total += line_total
            items.append(
                {
                    "product_id": line.product_id,
                    "name": line.name,
                    "quantity": line.quantity,
                    "price": line.price,
                    "image": line.image,
                    "line_total": line_total,
                }
            )

        order = Order(
            user_id=user_id,
            items=items,
            total_amount=total,
            delivery_info=payload.delivery_info.model_dump(),
            status="pending",
        )
        order = self.repo.save(session, order)
        logger.info(
            "Order %s placed (%d lines, total %.2f, account=%s)",
            order.id,
            len(items),
            total,
            user_id or "guest",
        )
        return order

    def list_user_orders(
        self,
        session: Session,
        user_id: uuid.UUID,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Order]:
        return self.repo.list_for_user(session, user_id, skip, limit)

    # -------- Admin operations --------

    def list_all_orders(self, session: Session, skip: int = 0, limit: int = 50) -> list[Order]:
        return self.repo.list_all(session, skip, limit)

    def update_status(
        self,
        session: Session,
        order_id: uuid.UUID,
        payload: OrderStatusUpdate,
    ) -> Order:
        """
        Admin-only status update with simple state machine:

          pending   -> completed, cancelled
          completed -> (no change)
          cancelled -> (no change)

        Any invalid transition raises 400.
        """
        order = self.repo.get_by_id(session, order_id)
        if not order:
            raise NotFound("Order not found")

        if order.status == payload.status:
            return order

        _check_transition(ORDER_TRANSITIONS, order.status, payload.status)
        order.status = payload.status
        return self.repo.save(session, order)


class AppointmentService:
    """
    Business logic for service appointments.
    """

    def __init__(self, repo: AppointmentRepository, service_repo: ServiceRepository):
        self.repo = repo
        self.service_repo = service_repo

    def book(
        self,
        session: Session,
        user_id: uuid.UUID | None,
        payload: AppointmentCreate,
    ) -> Appointment:
        """
        Book a service at an office.

        Rules:
          - the service must exist
          - the office must exist and be active
        """
        if not self.service_repo.get_by_id(session, payload.service_id):
            raise NotFound("Service not found")

        office = self.service_repo.get_office(session, payload.office_id)
        if not office or not office.is_active:
            raise NotFound("Service office not found")

        appointment = Appointment(
            user_id=user_id,
            service_id=payload.service_id,
            office_id=payload.office_id,
            date=payload.date,
            location=payload.location,
            status="pending",
        )
        appointment = self.repo.save(session, appointment)
        logger.info("Appointment %s booked (account=%s)", appointment.id, user_id or "guest")
        return appointment

    def list_user_appointments(
        self, session: Session, user_id: uuid.UUID
    ) -> list[AppointmentDetailRead]:
        """The caller's appointments with service and office populated."""
        return [
            self._with_details(session, a)
            for a in self.repo.list_for_user(session, user_id)
        ]

    def list_all(self, session: Session, skip: int = 0, limit: int = 50) -> list[AppointmentDetailRead]:
        return [
            self._with_details(session, a)
            for a in self.repo.list_all(session, skip, limit)
        ]

    def update_status(
        self,
        session: Session,
        appointment_id: uuid.UUID,
        payload: AppointmentStatusUpdate,
    ) -> Appointment:
        """
        pending   -> confirmed, cancelled
        confirmed -> cancelled
        cancelled -> (no change)
        """
        appointment = self.repo.get_by_id(session, appointment_id)
        if not appointment:
            raise NotFound("Appointment not found")

        if appointment.status == payload.status:
            return appointment

        _check_transition(APPOINTMENT_TRANSITIONS, appointment.status, payload.status)
        appointment.status = payload.status
        return self.repo.save(session, appointment)

    def _with_details(self, session: Session, appointment: Appointment) -> AppointmentDetailRead:
        service = self.service_repo.get_by_id(session, appointment.service_id)
        office = self.service_repo.get_office(session, appointment.office_id)
        base = AppointmentRead.model_validate(appointment)
        return AppointmentDetailRead(
            **base.model_dump(),
            service=ServiceRead.model_validate(service) if service else None,
            office=ServiceOfficeRead.model_validate(office) if office else None,
        )

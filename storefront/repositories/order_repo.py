# storefront/repositories/order_repo.py
import uuid

from sqlmodel import Session, select

from storefront.models.appointment import Appointment
from storefront.models.order import Order


class OrderRepository:
    """
    Data access layer for orders.
    """

    def list_for_user(
        self,
        session: Session,
        user_id: uuid.UUID,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Order]:
        stmt = (
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(Order.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return session.exec(stmt).all()

    def list_all(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Order]:
        stmt = select(Order).order_by(Order.created_at.desc()).offset(skip).limit(limit)
        return session.exec(stmt).all()

    def get_by_id(self, session: Session, order_id: uuid.UUID) -> Order | None:
        return session.get(Order, order_id)

    def save(self, session: Session, order: Order) -> Order:
        session.add(order)
        session.commit()
        session.refresh(order)
        return order

    def detach_user(self, session: Session, user_id: uuid.UUID) -> None:
        """Keep a deleted account's orders for record keeping, unlinked."""
        for order in session.exec(select(Order).where(Order.user_id == user_id)).all():
            order.user_id = None
            session.add(order)
        session.commit()


class AppointmentRepository:
    """
    Data access layer for appointments.
    """

    def list_for_user(self, session: Session, user_id: uuid.UUID) -> list[Appointment]:
        stmt = (
            select(Appointment)
            .where(Appointment.user_id == user_id)
            .order_by(Appointment.created_at.desc())
        )
        return session.exec(stmt).all()

    def list_all(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Appointment]:
        stmt = (
            select(Appointment)
            .order_by(Appointment.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return session.exec(stmt).all()

    def get_by_id(self, session: Session, appointment_id: uuid.UUID) -> Appointment | None:
        return session.get(Appointment, appointment_id)

    def save(self, session: Session, appointment: Appointment) -> Appointment:
        session.add(appointment)
        session.commit()
        session.refresh(appointment)
        return appointment

    def detach_user(self, session: Session, user_id: uuid.UUID) -> None:
        stmt = select(Appointment).where(Appointment.user_id == user_id)
        for appointment in session.exec(stmt).all():
            appointment.user_id = None
            session.add(appointment)
        session.commit()

# storefront/repositories/email_change_repo.py
import uuid

from sqlmodel import Session, select

from storefront.models.email_change import EmailChangeRequest


class EmailChangeRepository:
    def get_by_id(self, session: Session, request_id: uuid.UUID) -> EmailChangeRequest | None:
        return session.get(EmailChangeRequest, request_id)

    def get_pending_for_user(
        self, session: Session, user_id: uuid.UUID
    ) -> EmailChangeRequest | None:
        stmt = select(EmailChangeRequest).where(
            EmailChangeRequest.user_id == user_id,
            EmailChangeRequest.status == "pending",
        )
        return session.exec(stmt).first()

    def list_all(self, session: Session) -> list[EmailChangeRequest]:
        """Newest requests first."""
        stmt = select(EmailChangeRequest).order_by(EmailChangeRequest.created_at.desc())
        return session.exec(stmt).all()

    def save(self, session: Session, request: EmailChangeRequest) -> EmailChangeRequest:
        session.add(request)
        session.commit()
        session.refresh(request)
        return request

    def delete_for_user(self, session: Session, user_id: uuid.UUID) -> None:
        stmt = select(EmailChangeRequest).where(EmailChangeRequest.user_id == user_id)
        for row in session.exec(stmt).all():
            session.delete(row)
        session.commit()

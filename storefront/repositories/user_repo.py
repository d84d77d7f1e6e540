# storefront/repositories/user_repo.py
import uuid

from sqlmodel import Session, select, or_

from storefront.models.user import User


class UserRepository:
    """Account lookups and writes. Emails are stored lower-cased."""

    def get_by_id(self, session: Session, user_id: uuid.UUID) -> User | None:
        return session.get(User, user_id)

    def get_by_email(self, session: Session, email: str) -> User | None:
        """Case-insensitive: the address is lower-cased before matching."""
        stmt = select(User).where(User.email == email.lower())
        return session.exec(stmt).first()

    def get_by_username(self, session: Session, username: str) -> User | None:
        stmt = select(User).where(User.username == username)
        return session.exec(stmt).first()

    def get_by_email_or_username(
        self, session: Session, email: str, username: str
    ) -> User | None:
        """Return any User holding either identifier (uniqueness check)."""
        stmt = select(User).where(
            or_(User.email == email.lower(), User.username == username)
        )
        return session.exec(stmt).first()

    def list_users(self, session: Session, skip: int = 0, limit: int = 50) -> list[User]:
        """Newest accounts first."""
        stmt = select(User).order_by(User.created_at.desc()).offset(skip).limit(limit)
        return session.exec(stmt).all()

    def create(self, session: Session, user: User) -> User:
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def update(self, session: Session, user: User) -> User:
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def delete(self, session: Session, user: User) -> None:
        session.delete(user)
        session.commit()

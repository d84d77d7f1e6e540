# storefront/services/auth_service.py
import logging

from sqlmodel import Session

from storefront.core.config import Settings
from storefront.core.errors import Conflict, Unauthorized
from storefront.core.security import hash_password, issue_token, verify_password
from storefront.models.user import User
from storefront.repositories.user_repo import UserRepository
from storefront.schemas.user import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)


class AuthService:
    """
    Registration and login.

    Responsibilities:
      - reject duplicate username/email with a readable 400
      - hash the password before it is persisted
      - mint a bearer token for the resulting account

    Binding the cookie session is the router's job (it owns the request).
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def register(
        self, session: Session, payload: RegisterRequest, settings: Settings
    ) -> tuple[User, str]:
        """
        Create a new account with role "user".

        Returns:
            (user, bearer token)

        Raises:
            Conflict(400): username or email already taken.
        """
        existing = self.repo.get_by_email_or_username(
            session, payload.email, payload.username
        )
        if existing:
            raise Conflict("User already exists")

        user = User(
            username=payload.username,
            email=payload.email,
            password_hash=hash_password(payload.password),
            phone=payload.phone,
            role="user",
        )
        user = self.repo.create(session, user)
        logger.info("Registered account %s", user.id)
        return user, issue_token(user.id, user.role, settings=settings)

    def login(
        self, session: Session, payload: LoginRequest, settings: Settings
    ) -> tuple[User, str]:
        """
        Verify credentials.

        Unknown email and wrong password are indistinguishable to the caller.

        Raises:
            Unauthorized(401): invalid credentials.
        """
        user = self.repo.get_by_email(session, payload.email)
        if user is None or not verify_password(payload.password, user.password_hash):
            logger.info("Failed login attempt for %s", payload.email)
            raise Unauthorized("Invalid credentials")
        return user, issue_token(user.id, user.role, settings=settings)

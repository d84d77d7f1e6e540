# storefront/core/auth.py
import logging
import uuid

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from storefront.core.config import Settings, get_app_settings
from storefront.core.errors import Forbidden, Unauthorized
from storefront.core.security import verify_token
from storefront.database import get_session
from storefront.models.user import ADMIN_ROLES, User

logger = logging.getLogger(__name__)

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so anonymous visitors can reach public and optional-auth routes.
bearer_scheme = HTTPBearer(auto_error=False)

SESSION_USER_KEY = "user_id"


def _load_user(session: Session, raw_id: object) -> User | None:
    """Fetch an account by a credential-supplied id; malformed ids resolve to None."""
    try:
        user_id = uuid.UUID(str(raw_id))
    except ValueError:
        return None
    return session.get(User, user_id)


def _session_user(request: Request, session: Session) -> User | None:
    # SessionMiddleware may be absent in stripped-down apps.
    if "session" not in request.scope:
        return None
    raw_id = request.session.get(SESSION_USER_KEY)
    if not raw_id:
        return None
    user = _load_user(session, raw_id)
    if user is None:
        # account deleted since login: drop the stale session
        request.session.pop(SESSION_USER_KEY, None)
    return user


def _bearer_user(
    credentials: HTTPAuthorizationCredentials | None,
    session: Session,
    settings: Settings,
) -> User | None:
    if credentials is None:
        return None
    claims = verify_token(credentials.credentials, settings)
    if claims is None:
        logger.debug("Ignoring invalid or expired bearer token")
        return None
    return _load_user(session, claims["sub"])


def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
) -> User | None:
    """
    Resolve the caller's account from either credential carrier.

    Flow:
      1. Cookie session: `user_id` stored at login.
      2. Only if (1) yields no account: `Authorization: Bearer <jwt>`.
      3. Nothing valid => anonymous => None.

    Both paths end by reading the account row, so the role used for
    authorization is always the stored one; the token's `role` claim is
    never consulted. Malformed, expired or foreign-signed credentials
    degrade to anonymous instead of failing the request.
    """
    user = _session_user(request, session)
    if user is not None:
        return user
    return _bearer_user(credentials, session, settings)


def require_auth(user: User | None = Depends(get_current_user)) -> User:
    """
    Enforce authentication.

    Raises:
        Unauthorized(401): if the caller is anonymous.
    """
    if user is None:
        raise Unauthorized("Authentication required")
    return user


def require_admin(user: User = Depends(require_auth)) -> User:
    """
    Enforce admin role.

    Route is accessible only if:
      - user.role in {"admin", "super_admin"}

    Raises:
        Forbidden(403): if role is not admin.
    """
    if user.role not in ADMIN_ROLES:
        raise Forbidden("Admin access required")
    return user


def require_super_admin(user: User = Depends(require_auth)) -> User:
    """
    Enforce super admin role (role changes, account deletion).
    """
    if user.role != "super_admin":
        raise Forbidden("Super admin access required")
    return user


def login_session(request: Request, user: User) -> None:
    """Bind the cookie session to an account."""
    if "session" in request.scope:
        request.session[SESSION_USER_KEY] = str(user.id)


def logout_session(request: Request) -> None:
    """Forget the cookie session (the signed cookie is reissued empty)."""
    if "session" in request.scope:
        request.session.clear()

# storefront/core/security.py
"""
Credential primitives: password hashing and JWT bearer tokens.

Passwords:
  bcrypt with a fresh random salt per call. The stored string is
  self-describing ("$2b$<cost>$<salt><digest>"), so verification needs
  nothing but the string itself.

Tokens:
  HS256 JWT signed with SECRET_KEY, carrying:
    - sub  : account id (string)
    - role : role at issue time (informational; authorization always
             re-reads the role from the account record)
    - iat / exp
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import JWTError, jwt

from storefront.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes of its input and newer releases
# refuse longer values outright; hashing and verification cut at the same
# boundary.
BCRYPT_MAX_BYTES = 72


def _password_bytes(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plaintext: str) -> str:
    """Hash a password with a random per-password salt."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(plaintext), salt).decode("ascii")


def verify_password(plaintext: str, hashed: str) -> bool:
    """
    Check a password against a stored hash.

    `bcrypt.checkpw` compares the derived digest in constant time.
    Malformed stored hashes verify as False.
    """
    if not plaintext or not hashed:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(plaintext), hashed.encode("ascii"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


def issue_token(
    account_id: uuid.UUID | str,
    role: str,
    expires_delta: timedelta | None = None,
    settings: Settings | None = None,
) -> str:
    """
    Sign a bearer token for an account.

    Args:
        account_id: id of the account (serialized as a string claim).
        role: role of the account at issue time.
        expires_delta: lifetime; defaults to ACCESS_TOKEN_EXPIRE_DAYS.
        settings: signing configuration; the process-wide settings when omitted.
    """
    settings = settings or get_settings()
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)

    claims: dict[str, Any] = {
        "sub": str(account_id),
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALG)


def verify_token(token: str | None, settings: Settings | None = None) -> dict[str, Any] | None:
    """
    Decode and verify a bearer token.

    Verification:
      - signature (SECRET_KEY / JWT_ALG)
      - expiration: a token is invalid at or after its `exp`
      - presence of the `sub` claim

    Returns:
        The decoded claims, or None for any invalid token. Never raises.
    """
    if not token:
        return None

    settings = settings or get_settings()
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALG])
    except JWTError:
        return None

    exp = claims.get("exp")
    if not isinstance(exp, (int, float)) or exp <= datetime.now(timezone.utc).timestamp():
        return None
    if not claims.get("sub"):
        return None
    return claims

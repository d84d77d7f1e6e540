# storefront/core/errors.py
"""
Error taxonomy and the exception handlers that turn it into JSON.

Services raise these exactly where they would raise `HTTPException`;
every error body the client sees has the shape `{"message": ...}` so the
front-end can surface it directly in a toast.
"""

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class StoreError(HTTPException):
    """Base class: an HTTPException with a default status and message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Any = None, headers: dict[str, str] | None = None):
        super().__init__(
            status_code=type(self).status_code,
            detail=message if message is not None else self.default_message,
            headers=headers,
        )


class ValidationError(StoreError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class Unauthorized(StoreError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class Forbidden(StoreError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(StoreError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(StoreError):
    # Duplicate unique fields are reported as 400, which is what the
    # front-end forms already handle.
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Already exists"


class PayloadTooLarge(StoreError):
    status_code = status.HTTP_413_CONTENT_TOO_LARGE
    default_message = "Payload too large"


class Internal(StoreError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"


def _error_body(detail: Any) -> dict[str, Any]:
    """
    Normalize an exception detail into the client-facing body.

    Structured details (e.g. {"message": ..., "items": [...]}) pass through;
    anything else is wrapped as {"message": str(detail)}.
    """
    if isinstance(detail, dict) and "message" in detail:
        return detail
    return {"message": detail if isinstance(detail, str) else str(detail)}


def format_validation_errors(errors: list[dict[str, Any]]) -> str:
    """
    Render pydantic errors as one readable line, e.g.
    "email: Field required; password: String should have at least 6 characters".
    """
    parts: list[str] = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code >= 500:
        logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": format_validation_errors(exc.errors())},
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": Internal.default_message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the taxonomy handlers to an application."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

# storefront/main.py
from contextlib import asynccontextmanager
import logging
from datetime import timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from storefront.core.config import Settings, get_settings
from storefront.core.errors import register_exception_handlers
from storefront.core.logging import setup_logging
from storefront.core.middleware import RequestLogMiddleware, SecurityHeadersMiddleware
from storefront.core.storage_utils import upload_root
from storefront.database import build_engine, create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from storefront.models import appointment as _appointment_models  # noqa: F401
from storefront.models import content as _content_models  # noqa: F401
from storefront.models import email_change as _email_change_models  # noqa: F401
from storefront.models import favorite as _favorite_models  # noqa: F401
from storefront.models import location as _location_models  # noqa: F401
from storefront.models import order as _order_models  # noqa: F401
from storefront.models import product as _product_models  # noqa: F401
from storefront.models import review as _review_models  # noqa: F401
from storefront.models import user as _user_models  # noqa: F401

# Routers
from storefront.routers.admin import router as admin_router
from storefront.routers.appointments import router as appointments_router
from storefront.routers.auth import router as auth_router
from storefront.routers.content import router as content_router
from storefront.routers.email_change import router as email_change_router
from storefront.routers.favorites import router as favorites_router
from storefront.routers.locations import router as locations_router
from storefront.routers.orders import router as orders_router
from storefront.routers.products import router as products_router
from storefront.routers.reviews import router as reviews_router
from storefront.routers.services import router as services_router
from storefront.routers.uploads import router as uploads_router
from storefront.routers.users import router as users_router

logger = logging.getLogger("storefront")


def check_secret(settings: Settings) -> None:
    """
    Refuse to run production on the shipped development secret.
    """
    if not settings.uses_default_secret:
        return
    if settings.is_production:
        raise RuntimeError("SECRET_KEY must be set in production")
    logger.warning("SECRET_KEY is the development default; set it before deploying")


def create_app(settings: Settings | None = None) -> FastAPI:
    if settings is None:
        settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup:
          - Configure logging and enforce the secret rule.
          - Create tables and the upload directory.
        """
        setup_logging(settings.LOG_LEVEL, settings.LOG_DIR)
        check_secret(settings)
        try:
            create_db_and_tables(app.state.engine)
            logger.info("Startup: database tables verified")
        except Exception:
            logger.exception("Startup: database initialisation failed")
            raise
        upload_root(settings.UPLOAD_DIR)
        yield

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = build_engine(settings.DATABASE_URL)

    # Added innermost first: CORS -> security headers -> request log -> session.
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY,
        session_cookie=settings.SESSION_COOKIE_NAME,
        max_age=int(timedelta(days=settings.SESSION_MAX_AGE_DAYS).total_seconds()),
        same_site="lax",
        https_only=settings.is_production,
    )
    app.add_middleware(RequestLogMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CLIENT_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    for router in (
        auth_router,
        users_router,
        email_change_router,
        products_router,
        services_router,
        content_router,
        favorites_router,
        orders_router,
        appointments_router,
        reviews_router,
        locations_router,
        uploads_router,
        admin_router,
    ):
        app.include_router(router, prefix=settings.API_PREFIX)

    @app.get(f"{settings.API_PREFIX}/health", tags=["Health"])
    def health():
        """Health check endpoint."""
        return {"status": "ok", "service": "storefront-api"}

    return app


app = create_app()

# storefront/core/config.py
from functools import lru_cache
from typing import Literal

from fastapi import Request
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "dev-secret-change-me"


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Every value has a development default so the API boots without a .env.
    Production deployments must at least override:
      - SECRET_KEY (signs both JWT bearer tokens and the session cookie)
      - DATABASE_URL
      - CLIENT_URL (allowed CORS origin of the storefront front-end)
    """

    PROJECT_NAME: str = "Healthcare Storefront API"
    API_PREFIX: str = "/api"
    ENVIRONMENT: Literal["development", "production"] = "development"

    DATABASE_URL: str = "sqlite:///./storefront.db"

    # Token + session signing
    SECRET_KEY: str = DEFAULT_SECRET_KEY
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 30

    SESSION_COOKIE_NAME: str = "storefront.sid"
    SESSION_MAX_AGE_DAYS: int = 30

    CLIENT_URL: str = "http://localhost:5173"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    UPLOAD_DIR: str = "public/uploads"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    LOG_LEVEL: str = "INFO"
    LOG_DIR: str | None = None

    DEFAULT_WHATSAPP_NUMBER: str = "+254700000000"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def uses_default_secret(self) -> bool:
        """True when SECRET_KEY still holds the shipped development fallback."""
        return self.SECRET_KEY == DEFAULT_SECRET_KEY


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()


def get_app_settings(request: Request) -> Settings:
    """
    FastAPI dependency: the settings the running app was built with.

    `create_app(settings)` stores them on `app.state`; token signing and
    the database engine must read them from there, not from the
    environment.
    """
    return getattr(request.app.state, "settings", None) or get_settings()

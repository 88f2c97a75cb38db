# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - DATABASE_URL (Postgres connection string; sqlite:// for local tests)

    Optional:
      - SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY (dog photo uploads)
      - PAYMENT_LINK / PAYMENT_TEST_LINK (hosted checkout pages)
      - PAYMENT_WEBHOOK_SECRET (verifies payment webhook signatures)
    """

    PROJECT_NAME: str = "Holistic Therapy Dog Association API"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "production"

    DATABASE_URL: str

    # Session cookie
    SESSION_COOKIE_NAME: str = "session_token"
    SESSION_TTL_DAYS: int = 30
    COOKIE_SECURE: bool = True
    COOKIE_SAMESITE: str = "lax"

    # Deprecated: accept "Authorization: Bearer <token>" when no cookie is sent.
    ALLOW_BEARER_FALLBACK: bool = True

    # Credentials
    PASSWORD_MIN_LENGTH: int = 8
    PBKDF2_ITERATIONS: int = 100_000
    RESET_TOKEN_TTL_MINUTES: int = 60

    CORS_ORIGINS: list[str] = [
        "https://holistictherapydogassociation.com",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8000",
        "http://127.0.0.1:8000",
        "http://localhost:8080",
        "http://127.0.0.1:8080",
    ]

    SITE_URL: str = "https://holistictherapydogassociation.com"

    # Payment links / coupons
    PAYMENT_LINK: str = ""
    PAYMENT_TEST_LINK: str | None = None
    PAYMENT_WEBHOOK_SECRET: str | None = None
    FREE_COUPON_CODES: list[str] = ["BETA2025"]
    TEST_COUPON_CODES: list[str] = ["TEST99", "TEST99PERCENT"]
    CERTIFICATION_YEARS: int = 2

    # Supabase storage (dog photos)
    SUPABASE_URL: str | None = None
    SUPABASE_KEY: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    PHOTO_BUCKET: str = "dog-photos"
    PHOTO_PUBLIC_ORIGIN: str | None = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()

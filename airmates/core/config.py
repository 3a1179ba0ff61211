# airmates/core/config.py
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - SUPABASE_URL
      - SUPABASE_KEY (anon key)
      - DATABASE_URL (Supabase Postgres connection string)
      - SUPABASE_JWT_SECRET (JWT signing secret from Supabase project settings)

    Optional:
      - SUPABASE_SERVICE_ROLE_KEY (only used for admin Supabase client)
      - EMAIL_TRANSPORT: "supabase" (edge function) or "smtp"
      - SMTP_* block when EMAIL_TRANSPORT=smtp
    """

    PROJECT_NAME: str = "AirMates API"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Comma separated list of allowed origins
    CORS_ORIGINS: str = (
        "http://localhost:3000,http://127.0.0.1:3000,"
        "http://localhost:5173,http://127.0.0.1:5173"
    )

    # Supabase / DB config
    SUPABASE_URL: str
    SUPABASE_KEY: str
    DATABASE_URL: str

    # JWT verification (backend-side)
    SUPABASE_JWT_SECRET: str
    SUPABASE_JWT_ALG: str = "HS256"

    # Service role key bypasses RLS (backend only)
    SUPABASE_SERVICE_ROLE_KEY: str | None = None

    # Payment-request emails
    APP_NAME: str = "AirMates"
    CURRENCY_SYMBOL: str = "₹"
    EMAIL_TRANSPORT: Literal["supabase", "smtp"] = "supabase"
    EMAIL_FUNCTION_NAME: str = "send-email"
    EMAIL_FROM: str = "AirMates <AirMates@airmedisphere.in>"

    # SMTP (only read when EMAIL_TRANSPORT=smtp)
    SMTP_HOST: str | None = None
    SMTP_PORT: int = 587
    SMTP_USERNAME: str | None = None
    SMTP_PASSWORD: str | None = None
    SMTP_USE_TLS: bool = True
    SMTP_USE_SSL: bool = False

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def get_cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()

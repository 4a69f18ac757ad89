# tattoo_workshop/core/config.py
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Everything has a development default so the app boots with an empty
    .env; production deployments must at least override:
      - JWT_SECRET
      - DEFAULT_ADMIN_PASSWORD

    Studio-level configuration that staff edit at runtime (SMTP, Gemini
    key, reminder flags) lives in the `settings` table instead, see
    `services/settings_service.py`.
    """

    PROJECT_NAME: str = "Tattoo Workshop API"
    API_PREFIX: str = "/api"

    # Any SQLAlchemy URL; sqlite file next to the process by default
    DATABASE_URL: str = "sqlite:///./tattoo-workshop.db"

    # Token signing
    JWT_SECRET: str = "change-me-in-production"
    JWT_ALG: str = "HS256"
    JWT_EXPIRATION_HOURS: int = 24
    COOKIE_SECURE: bool = False

    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "text"

    # Background workers
    SCHEDULER_ENABLED: bool = True
    REMINDER_INTERVAL_MINUTES: int = 60
    NOTIFICATION_WORKER_ENABLED: bool = True
    NOTIFICATION_MAX_ATTEMPTS: int = 3
    NOTIFICATION_BACKOFF_SECONDS: float = 30.0

    # "empty" renders unknown {{placeholders}} as "", "error" rejects them
    TEMPLATE_MISSING_VARIABLE_POLICY: Literal["empty", "error"] = "empty"

    GEMINI_MODEL: str = "gemini-1.5-flash"

    # Bootstrap account created when the users table is empty
    DEFAULT_ADMIN_NAME: str = "Admin User"
    DEFAULT_ADMIN_EMAIL: str = "admin@tattoo-workshop.app"
    DEFAULT_ADMIN_PASSWORD: str = "Admin123"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()

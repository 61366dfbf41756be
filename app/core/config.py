"""Application configuration loaded from environment variables."""

import logging
import re
from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
# SQLite is accepted for local runs and the test suite.
VALID_DATABASE_URL_PREFIXES = (
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "postgres+psycopg2://",
    "sqlite://",
)

# RFC 6265 cookie-name token characters.
COOKIE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9!#$%&'*+\-.^_`|~]+$")


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_V1_PREFIX: str = "/api/v1"

    # No default: the service must never start against an unconfigured store.
    DATABASE_URL: str

    # Server-side sessions: the cookie only carries an opaque identifier
    SESSION_COOKIE_NAME: str = "conspiralab_session"
    SESSION_MAX_AGE_MINUTES: int = 1440
    SESSION_COOKIE_SECURE: bool = False
    LOGIN_PATH: str = "/login"

    # Expired session purge (run via cron or CLI)
    SESSION_CLEANUP_ENABLED: bool = True

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must be set and non-empty")
        v = v.strip()
        if not any(v.startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL URL (e.g. postgresql:// or postgresql+psycopg2://) "
                "or a sqlite:// URL"
            )
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return level

    @field_validator("SESSION_COOKIE_NAME")
    @classmethod
    def validate_session_cookie_name(cls, v: str) -> str:
        v = v.strip()
        if not v or not COOKIE_NAME_PATTERN.match(v):
            raise ValueError("SESSION_COOKIE_NAME must be a non-empty cookie token")
        return v

    @field_validator("SESSION_MAX_AGE_MINUTES")
    @classmethod
    def validate_session_max_age(cls, v: int) -> int:
        if v < 1 or v > 43200:
            raise ValueError(
                "SESSION_MAX_AGE_MINUTES must be between 1 and 43200 (1 min to 30 days)"
            )
        return v

    @field_validator("LOGIN_PATH")
    @classmethod
    def validate_login_path(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith("/"):
            raise ValueError("LOGIN_PATH must be an absolute path starting with '/'")
        return v


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()

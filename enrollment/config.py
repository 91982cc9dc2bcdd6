"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    DATABASE_URL: str = "sqlite:///./enrollment.db"

    PROJECT_NAME: str = "enrollment"
    VERSION: str = "0.1.0"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # Background jobs
    JOB_MAX_ATTEMPTS: int = Field(default=5, ge=1)
    JOB_POLL_INTERVAL_SECONDS: float = Field(default=1.0, gt=0)
    JOB_RETRY_DELAY_SECONDS: float = Field(default=30.0, ge=0)

    @field_validator("DATABASE_URL", mode="after")
    @classmethod
    def strip_database_url(cls, value: str) -> str:
        """Strip whitespace and reject an empty URL."""
        value = value.strip()
        if not value:
            raise ValueError("DATABASE_URL cannot be empty")
        return value


LOG_LEVELS = {
    "development": logging.DEBUG,
    "production": logging.INFO,
    "test": logging.WARNING,
}


def configure_logging(environment: str = "development", level: int | None = None) -> None:
    """
    Route structlog through stdlib logging.

    Production renders one JSON object per line; other environments use the
    console renderer. ``level`` overrides the per-environment default.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level if level is not None else LOG_LEVELS.get(environment, logging.INFO),
    )

    processors: list[Callable[..., Any]] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    renderer: Callable[..., Any] = (
        structlog.processors.JSONRenderer()
        if environment == "production"
        else structlog.dev.ConsoleRenderer()
    )
    processors.append(renderer)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()

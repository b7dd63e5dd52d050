"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from readmark.domain.reading.entities.highlight import MAX_HIGHLIGHT_TEXT_LENGTH


class Settings(BaseSettings):
    """Engine settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    DATABASE_URL: str = "sqlite:///readmark.db"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # Search
    SEARCH_MIN_QUERY_LENGTH: int = 2
    SEARCH_EXCERPT_LENGTH: int = 150

    # Annotations
    HIGHLIGHT_TEXT_MAX_LENGTH: int = MAX_HIGHLIGHT_TEXT_LENGTH
    BOOKMARK_EXCERPT_MAX_LENGTH: int = 100
    HIGHLIGHT_FILL_OPACITY: str = "0.4"

    @field_validator("SEARCH_MIN_QUERY_LENGTH", "SEARCH_EXCERPT_LENGTH", mode="after")
    @classmethod
    def must_be_positive(cls, value: int) -> int:
        """Reject zero or negative search limits."""
        if value < 1:
            raise ValueError("must be at least 1")
        return value

    @field_validator("HIGHLIGHT_TEXT_MAX_LENGTH", mode="after")
    @classmethod
    def within_highlight_limit(cls, value: int) -> int:
        """Selections are cut to this length, so it cannot exceed what a highlight may hold."""
        if not 1 <= value <= MAX_HIGHLIGHT_TEXT_LENGTH:
            raise ValueError(f"must be between 1 and {MAX_HIGHLIGHT_TEXT_LENGTH}")
        return value


def configure_logging(environment: str = "development") -> None:
    """Configure structured logging with structlog."""
    use_json = environment == "production"

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if environment == "development" else logging.INFO,
    )

    processors: list[Callable[..., Any]] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

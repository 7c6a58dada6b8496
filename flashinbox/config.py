"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import structlog
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PDFS_DIRNAME = "pdfs"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    DATABASE_URL: str = "sqlite:///./flashinbox.db"
    CREATE_SCHEMA_ON_STARTUP: bool = True

    # Stored PDFs live under <STORAGE_PATH>/pdfs
    STORAGE_PATH: Path = Path("./storage")
    MAX_UPLOAD_MB: int = 50

    # API (constants, not from env)
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "flashinbox API"
    VERSION: str = "0.1.0"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # AnkiConnect
    ANKI_CONNECT_URL: str = "http://127.0.0.1:8765"
    ANKI_CONNECT_API_KEY: str | None = None
    ANKI_CONNECT_TIMEOUT: float = 10.0
    # Sent with every addNote as options.allowDuplicate
    ANKI_ALLOW_DUPLICATES: bool = True
    ANKI_MODEL_NAME: str = "flashinbox Basic"
    DEFAULT_DECK_NAME: str = "flashinbox"

    # Web clipping
    WEB_CLIP_TIMEOUT: float = 20.0

    @property
    def max_upload_bytes(self) -> int:
        return self.MAX_UPLOAD_MB * 1024 * 1024

    @field_validator("MAX_UPLOAD_MB", mode="after")
    @classmethod
    def validate_max_upload(cls, value: int) -> int:
        """Upload limit must be positive."""
        if value <= 0:
            msg = "MAX_UPLOAD_MB must be positive"
            raise ValueError(msg)
        return value

    @field_validator("DEFAULT_DECK_NAME", "ANKI_MODEL_NAME", mode="after")
    @classmethod
    def strip_names(cls, value: str) -> str:
        """Deck and model names must not be blank."""
        value = value.strip()
        if not value:
            msg = "Deck and model names cannot be blank"
            raise ValueError(msg)
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

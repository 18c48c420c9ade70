"""Application configuration helpers."""

from __future__ import annotations

from functools import lru_cache
import logging
import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_DB_URL = "mongodb://localhost:27017"
DEFAULT_DB_NAME = "webonary"
DEFAULT_ENTRIES_COLLECTION = "webonaryEntries"
MONGO_URL_SCHEMES = ("mongodb://", "mongodb+srv://")


class AppConfig(BaseModel):
    """Runtime configuration loaded from environment variables."""

    model_config = ConfigDict(frozen=True)

    db_url: str = Field(
        default=DEFAULT_DB_URL,
        description="MongoDB connection string for the dictionary store",
    )
    db_name: str = Field(default=DEFAULT_DB_NAME, min_length=1)
    entries_collection: str = Field(
        default=DEFAULT_ENTRIES_COLLECTION,
        min_length=1,
        description="Collection holding dictionary entries",
    )
    server_selection_timeout_ms: int = Field(
        default=5000,
        gt=0,
        description="How long the driver waits for a reachable server",
    )
    log_level: str = Field(default="INFO")

    @field_validator("db_url", mode="before")
    @classmethod
    def _ensure_mongo_url(cls, value: Optional[str]) -> str:
        if value is None or not str(value).strip():
            raise ValueError("DB_URL cannot be empty")
        cleaned = str(value).strip()
        if not cleaned.startswith(MONGO_URL_SCHEMES):
            raise ValueError("DB_URL must start with mongodb:// or mongodb+srv://")
        return cleaned

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Optional[str]) -> str:
        level = (value or "INFO").strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown LOG_LEVEL: {value}")
        return level


def _read_env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(key, default)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Load and cache application configuration."""
    return AppConfig(
        db_url=_read_env("DB_URL", DEFAULT_DB_URL),
        db_name=_read_env("DB_NAME", DEFAULT_DB_NAME),
        entries_collection=_read_env(
            "DB_COLLECTION_DICTIONARY_ENTRIES", DEFAULT_ENTRIES_COLLECTION
        ),
        server_selection_timeout_ms=_read_env("DB_SERVER_SELECTION_TIMEOUT_MS", "5000"),
        log_level=_read_env("LOG_LEVEL", "INFO"),
    )


def reload_config() -> AppConfig:
    """Clear cached config (useful for tests) and reload."""
    get_config.cache_clear()
    return get_config()


def configure_logging(config: AppConfig | None = None) -> None:
    """Set the root log level from LOG_LEVEL."""
    config = config or get_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(config.log_level)


__all__ = [
    "AppConfig",
    "get_config",
    "reload_config",
    "configure_logging",
    "DEFAULT_DB_URL",
]

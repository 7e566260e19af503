"""Centralized application configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the repository root: .env, .env.local, .env.dev/.env.test/.env.prod

Both halves of the project read from here: the mock data source (host, port,
payload file) and the guestbook session client (source URL, fetch timeout).
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_MOCK_PORT = 9191


class Settings(BaseSettings):
    """Typed application configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `GUESTBOOK_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    source_url : str
        Endpoint the bootstrap loader fetches the initial visitors from.
        Maps from `GUESTBOOK_SOURCE_URL`.
    fetch_timeout : float
        Socket timeout (seconds) for the bootstrap fetch. Maps from
        `GUESTBOOK_FETCH_TIMEOUT`.
    mock_host, mock_port : str, int
        Bind address of the mock data source. Map from `GUESTBOOK_MOCK_HOST`
        and `GUESTBOOK_MOCK_PORT`.
    mock_data : Optional[Path]
        JSON file served by the mock data source instead of the packaged
        sample. Maps from `GUESTBOOK_MOCK_DATA`.
    """

    environment: EnvName = Field(default="dev", alias="GUESTBOOK_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")

    source_url: str = Field(
        default=f"http://localhost:{DEFAULT_MOCK_PORT}/", alias="GUESTBOOK_SOURCE_URL"
    )
    fetch_timeout: float = Field(default=10.0, gt=0, alias="GUESTBOOK_FETCH_TIMEOUT")

    mock_host: str = Field(default="0.0.0.0", alias="GUESTBOOK_MOCK_HOST")
    mock_port: int = Field(default=DEFAULT_MOCK_PORT, ge=1, le=65535, alias="GUESTBOOK_MOCK_PORT")
    mock_data: Path | None = Field(default=None, alias="GUESTBOOK_MOCK_DATA")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    We keep this behind an LRU cache so tests can force a rebuild via
    `load_settings.cache_clear()` after mutating `os.environ`.
    """
    os.environ.setdefault("GUESTBOOK_ENV", "dev")
    return Settings()


# Export a ready-to-use singleton (import-time read of env / .env files).
settings: Settings = load_settings()


def get_logger(name: str = "guestbook") -> logging.Logger:
    """Return a process-global logger configured to the current `LOG_LEVEL`."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger


__all__ = ["Settings", "get_logger", "load_settings", "settings"]

"""
Core configuration module for Task Squad.
Uses pydantic-settings for environment variable management with full validation.
"""
from __future__ import annotations

import logging
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ── Application ──────────────────────────────────────────────────────────
    APP_NAME: str = "Task Squad"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # ── Remote store ──────────────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite+aiosqlite:///./tasksquad.db"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_RECYCLE: int = 3600

    # ── Logging ───────────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        """Accept level names in any case; reject unknown ones."""
        level = str(v).strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v!r}")
        return level

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def engine_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {"echo": self.DEBUG, "pool_pre_ping": True}
        # SQLite drivers reject pool sizing arguments
        if not self.is_sqlite:
            options.update(
                pool_size=self.DB_POOL_SIZE,
                max_overflow=self.DB_MAX_OVERFLOW,
                pool_recycle=self.DB_POOL_RECYCLE,
            )
        return options


settings = Settings()

"""Runtime settings for liteorm.

Only the database-facing layers (the CRUD façade and the CLI) read
settings; the mapper itself is configuration-free.

Features:
    - **LiteOrmSettings:** database path, foreign-key enforcement, logging
    - **env_prefix:** ``LITEORM_`` environment variables
    - **.env file support:** Automatic loading via pydantic-settings
    - **Extra ignore:** Unknown env vars don't cause startup failures

Examples:
    >>> from liteorm.core.settings import LiteOrmSettings
    >>> LiteOrmSettings(database_path=":memory:").enforce_foreign_keys
    True

Tags:
    settings, configuration, pydantic, environment, liteorm
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LiteOrmSettings(BaseSettings):
    """Settings shared by the CRUD façade and the command line.

    Fields
    ──────
    database_path        : SQLite file the façade opens (``:memory:`` allowed)
    enforce_foreign_keys : Run ``PRAGMA foreign_keys = ON`` on every connection
    log_level            : Structlog log level
    log_json             : JSON log output; ``None`` picks by tty
    """

    model_config = SettingsConfigDict(
        env_prefix="LITEORM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Database ─────────────────────────────────────────────────
    database_path: str = Field(default="liteorm.db", description="SQLite database file")
    enforce_foreign_keys: bool = True

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool | None = None

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {value!r}")
        return level


_settings: LiteOrmSettings | None = None


def get_settings(*, reload: bool = False) -> LiteOrmSettings:
    """Return the process-wide settings, building them on first use."""
    global _settings
    if reload or _settings is None:
        _settings = LiteOrmSettings()
    return _settings


__all__ = ["LiteOrmSettings", "get_settings"]

"""Environment-sourced settings for the database layer."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


DEFAULT_DATABASE_URL = "sqlite+pysqlite:///:memory:"


@dataclass(frozen=True)
class StoreSettings:
    database_url: str
    sql_echo: bool
    expire_on_commit: bool


def _normalize_bool(value: str | None, default: bool = False) -> bool:
    """Return normalized boolean from environment-style value."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"0", "false", "no", "off"}:
        return False
    if normalized in {"1", "true", "yes", "on"}:
        return True
    return default


def _database_url() -> str:
    # Package-specific variable wins over the conventional DATABASE_URL
    explicit: Optional[str] = os.getenv("RECORDSTORE_DATABASE_URL") or os.getenv("DATABASE_URL")
    if explicit and explicit.strip():
        return explicit.strip()
    return DEFAULT_DATABASE_URL


@lru_cache(maxsize=None)
def get_settings() -> StoreSettings:
    """Return the cached settings sourced from the environment."""
    return StoreSettings(
        database_url=_database_url(),
        sql_echo=_normalize_bool(os.getenv("RECORDSTORE_SQL_ECHO"), default=False),
        expire_on_commit=_normalize_bool(os.getenv("RECORDSTORE_EXPIRE_ON_COMMIT"), default=False),
    )


def refresh_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_settings.cache_clear()

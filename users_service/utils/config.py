"""Environment-backed service settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from users_service.db.database import compose_database_url

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000


@dataclass(frozen=True)
class Settings:
    database_url: str
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


def _get_database_url() -> str:
    # If DATABASE_URL is explicitly set, use it
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    # Otherwise, compose from the server address and database name (both must be set)
    server = os.getenv("USERS_DB_SERVER")
    database = os.getenv("USERS_DB_NAME")

    if not server or not database:
        missing = []
        if not server: missing.append("USERS_DB_SERVER")
        if not database: missing.append("USERS_DB_NAME")
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")

    return compose_database_url(server, database)


def _env_int(name: str, default: int) -> int:
    """Return an integer sourced from the environment when available."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return the cached settings sourced from the environment."""
    return Settings(
        database_url=_get_database_url(),
        host=os.getenv("HOST") or DEFAULT_HOST,
        port=_env_int("PORT", DEFAULT_PORT),
    )


def refresh_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_settings.cache_clear()

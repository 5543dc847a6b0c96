"""
Configuration helpers for the Shopper API.

Exposes a Settings object that reads environment variables (database URL,
listen address, logging, shutdown window) so that routers/services do not
fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

from dotenv import load_dotenv


class ConfigError(RuntimeError):
    """Raised when a required setting is missing or malformed."""


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    host: str
    port: int | None
    port_raw: str
    log_level: str
    shutdown_timeout_seconds: int


def load_env_file(path: str | None = None) -> bool:
    """Load a local .env file if present. Existing variables are kept."""
    return load_dotenv(dotenv_path=path, override=False)


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int | None = 0) -> int | None:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=(os.getenv("DATABASE_URL") or "").strip(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT"), None),
        port_raw=(os.getenv("PORT") or "").strip(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        shutdown_timeout_seconds=_int(os.getenv("SHUTDOWN_TIMEOUT_SECONDS", "10"), 10),
    )


def require_server_settings(settings: Settings) -> Settings:
    """Fail fast when the variables needed to serve HTTP are absent or malformed."""
    problems = []
    if not settings.database_url:
        problems.append("DATABASE_URL is required")
    if not settings.port_raw:
        problems.append("PORT is required")
    elif settings.port is None:
        problems.append(f"PORT must be an integer, got {settings.port_raw!r}")
    if problems:
        raise ConfigError("invalid environment: " + "; ".join(problems))
    return settings

"""Process entry point: read settings, configure logging, serve with uvicorn."""
from __future__ import annotations

import logging
import sys

import uvicorn

from shopper_api.core.config import ConfigError, get_settings, load_env_file, require_server_settings
from shopper_api.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    load_env_file()
    get_settings.cache_clear()
    try:
        settings = require_server_settings(get_settings())
    except ConfigError as exc:
        sys.stderr.write(f"{exc}\n")
        raise SystemExit(1)

    setup_logging(settings.log_level)
    logger.info(
        "Starting server",
        extra={"host": settings.host, "port": settings.port, "app_env": settings.app_env},
    )
    # uvicorn stops accepting connections on SIGINT/SIGTERM and waits for
    # in-flight requests up to the graceful shutdown window.
    uvicorn.run(
        "shopper_api.app:app",
        host=settings.host,
        port=settings.port,
        timeout_graceful_shutdown=settings.shutdown_timeout_seconds,
        log_config=None,
    )
    logger.info("Server stopped")


if __name__ == "__main__":
    main()

"""Tipline runtime entrypoint.

This module provides the ASGI application factory used by Granian. It
delegates to :func:`tipline.api.app.create_app` while keeping the
``tipline.runtime:create_app`` entrypoint stable.

When ``TIPLINE_DATABASE_URL`` is set, the runtime builds the lifecycle
service so the app includes the report endpoints. Otherwise it starts in
health-only mode.

Configuration is driven by environment variables:

- ``TIPLINE_HOST``: Bind address (default ``0.0.0.0``)
- ``TIPLINE_PORT``: Listen port (default ``8080``)
- ``TIPLINE_LOG_LEVEL``: Log level (default ``INFO``)
- ``TIPLINE_DATABASE_URL``: SQLAlchemy async database URL (optional;
  enables report endpoints when set)
- ``TIPLINE_CACHE_URL``: Cache location (default ``memory://``)
- ``TIPLINE_CACHE_NAMESPACE``: Prefix for keys in a shared Redis server

Run the service directly with ``python -m tipline.runtime``.
"""

from __future__ import annotations

import os
import typing as typ

from tipline.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    import falcon.asgi

__all__ = ["create_app", "main"]

logger = get_logger(__name__)

DEFAULT_CACHE_URL = "memory://"

# TCP port number range limits
_MIN_PORT = 1
_MAX_PORT = 65535


def _parse_port(port_str: str) -> int:
    """Parse and validate a port number string.

    Raises
    ------
    SystemExit
        If port_str is not a valid integer in range 1-65535.

    """
    try:
        port = int(port_str)
        if not (_MIN_PORT <= port <= _MAX_PORT):
            msg = f"port {port} outside valid range {_MIN_PORT}-{_MAX_PORT}"
            raise ValueError(msg)  # noqa: TRY301 - unify conversion and range errors
    except ValueError as exc:
        log_error(
            logger,
            "Invalid TIPLINE_PORT value: %r (must be %d-%d): %s",
            port_str,
            _MIN_PORT,
            _MAX_PORT,
            exc,
        )
        raise SystemExit(1) from exc
    return port


def create_app() -> falcon.asgi.App:
    """Create and configure the Falcon ASGI application.

    Returns
    -------
    falcon.asgi.App
        Health-only when ``TIPLINE_DATABASE_URL`` is unset; otherwise the
        full report API.

    """
    from tipline.api.app import create_app as _create_api_app

    database_url = os.environ.get("TIPLINE_DATABASE_URL")

    if database_url is None:
        return _create_api_app()

    from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

    from tipline.api.app import AppDependencies
    from tipline.api.callers import TrustedHeaderCallerResolver
    from tipline.cache import build_cache_store
    from tipline.reports import ReportsConfig, build_lifecycle_service

    config = ReportsConfig.from_env()
    cache_url = os.environ.get("TIPLINE_CACHE_URL", DEFAULT_CACHE_URL)
    cache = build_cache_store(
        cache_url, namespace=os.environ.get("TIPLINE_CACHE_NAMESPACE", "")
    )

    engine = create_async_engine(database_url)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    service = build_lifecycle_service(session_factory, cache, config=config)

    deps = AppDependencies(
        lifecycle_service=service,
        caller_resolver=TrustedHeaderCallerResolver(),
        engine=engine,
        cache=cache,
        moderation_permission=config.moderation_permission,
    )
    return _create_api_app(deps)


def main() -> None:
    """Start the Tipline server using Granian.

    Reads ``TIPLINE_HOST``, ``TIPLINE_PORT``, and ``TIPLINE_LOG_LEVEL`` from
    the environment and starts the ASGI server.
    """
    from granian import Granian
    from granian.constants import Interfaces

    host = os.environ.get("TIPLINE_HOST", "0.0.0.0")  # noqa: S104 - bind all interfaces for container
    port = _parse_port(os.environ.get("TIPLINE_PORT", "8080"))
    log_level_str = os.environ.get("TIPLINE_LOG_LEVEL", "INFO")

    normalized_level, invalid_level = configure_logging(log_level_str)
    if invalid_level:
        log_warning(
            logger,
            "Invalid TIPLINE_LOG_LEVEL %r, falling back to %s",
            log_level_str,
            normalized_level,
        )

    log_info(
        logger,
        "Starting Tipline runtime on %s:%d (log_level=%s)",
        host,
        port,
        normalized_level,
    )

    server = Granian(
        "tipline.runtime:create_app",
        address=host,
        port=port,
        interface=Interfaces.ASGI,
        factory=True,
    )
    server.serve()


if __name__ == "__main__":
    main()

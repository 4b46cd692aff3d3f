"""Falcon ASGI middleware for caller resolution and storage lifecycle.

Usage
-----
Register the middleware when creating the Falcon app::

    app = falcon.asgi.App(
        middleware=[
            StorageLifecycle(engine, cache=cache),
            CallerMiddleware(TrustedHeaderCallerResolver()),
        ]
    )

"""

from __future__ import annotations

import typing as typ

from sqlalchemy.exc import SQLAlchemyError

from tipline.logging import get_logger, log_error, log_info
from tipline.reports.storage import init_report_storage

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response
    from sqlalchemy.ext.asyncio import AsyncEngine

    from tipline.api.callers import CallerResolver
    from tipline.cache.protocol import CacheStore

__all__ = ["CallerMiddleware", "StorageLifecycle"]

logger = get_logger(__name__)


class CallerMiddleware:
    """Attach the resolved caller to ``req.context.caller``.

    Parameters
    ----------
    resolver
        Strategy that maps a request to a caller.

    """

    def __init__(self, resolver: CallerResolver) -> None:
        """Initialize the middleware with a resolver."""
        self._resolver = resolver

    async def process_request(self, req: Request, _resp: Response) -> None:
        """Resolve the caller before routing."""
        req.context.caller = await self._resolver.resolve(req)


class StorageLifecycle:
    """Create report tables on ASGI startup and release storage on shutdown.

    Parameters
    ----------
    engine
        Async engine shared by the application's session factory.
    cache
        Cache store used by the repository. When given, it is closed after
        the engine is disposed.

    """

    def __init__(
        self, engine: AsyncEngine, *, cache: CacheStore | None = None
    ) -> None:
        """Initialize with the application engine and cache."""
        self._engine = engine
        self._cache = cache

    async def process_startup(
        self, _scope: dict[str, typ.Any], _event: dict[str, typ.Any]
    ) -> None:
        """Create missing report tables."""
        try:
            await init_report_storage(self._engine)
        except SQLAlchemyError:
            log_error(logger, "Report storage initialisation failed", exc_info=True)
            raise
        log_info(logger, "Report storage ready")

    async def process_shutdown(
        self, _scope: dict[str, typ.Any], _event: dict[str, typ.Any]
    ) -> None:
        """Return pooled connections and close the cache."""
        try:
            await self._engine.dispose()
        finally:
            if self._cache is not None:
                await self._cache.close()
        log_info(logger, "Report storage closed")

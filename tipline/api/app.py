"""Application factory for the Tipline Falcon ASGI application.

This module provides ``create_app()`` which builds the Falcon ASGI
application with health endpoints and, when a lifecycle service is
available, the report endpoints.

Usage
-----
Create a health-only app (no database)::

    app = create_app()

Create a full app with report endpoints::

    from tipline.api.app import AppDependencies, create_app

    deps = AppDependencies(
        lifecycle_service=service,
        caller_resolver=TrustedHeaderCallerResolver(),
        engine=engine,
    )
    app = create_app(deps)

"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import falcon.asgi

from tipline.api.callers import AnonymousCallerResolver
from tipline.api.errors import InvalidInputError, handle_invalid_input
from tipline.api.health.resources import HealthResource, ReadyResource
from tipline.api.middleware import CallerMiddleware, StorageLifecycle
from tipline.reports.authorization import STAFF_DASHBOARD_PERMISSION
from tipline.reports.repository import MAX_ROW_ID

if typ.TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from tipline.api.callers import CallerResolver
    from tipline.cache.protocol import CacheStore
    from tipline.reports.service import ReportLifecycleService

__all__ = ["AppDependencies", "create_app"]


@dc.dataclass(frozen=True, slots=True)
class AppDependencies:
    """Dependencies for the Falcon ASGI application.

    Attributes
    ----------
    lifecycle_service
        Report lifecycle service; when ``None`` only health endpoints are
        registered.
    caller_resolver
        Maps requests to callers. Defaults to treating everyone as
        anonymous.
    engine
        Async engine whose tables are created on startup and which is
        disposed on shutdown.
    cache
        Cache store closed on shutdown together with *engine*.
    moderation_permission
        Permission required to read reports through the API.

    """

    lifecycle_service: ReportLifecycleService | None = None
    caller_resolver: CallerResolver | None = None
    engine: AsyncEngine | None = None
    cache: CacheStore | None = None
    moderation_permission: str = STAFF_DASHBOARD_PERMISSION


def create_app(
    dependencies: AppDependencies | None = None,
) -> falcon.asgi.App:
    """Create and configure the Falcon ASGI application.

    Parameters
    ----------
    dependencies
        Optional application dependencies. When ``None`` or lacking a
        lifecycle service, only ``/health`` and ``/ready`` are available.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application.

    """
    deps = dependencies or AppDependencies()

    middleware: list[object] = []
    if deps.engine is not None:
        middleware.append(StorageLifecycle(deps.engine, cache=deps.cache))
    middleware.append(CallerMiddleware(deps.caller_resolver or AnonymousCallerResolver()))

    app = falcon.asgi.App(middleware=middleware)  # type: ignore[no-matching-overload]  # Falcon stubs

    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource())

    if deps.lifecycle_service is not None:
        from tipline.api.reports.resources import (
            ReportCollectionResource,
            ReportItemResource,
            ReportResourceDependencies,
        )

        resource_deps = ReportResourceDependencies(
            lifecycle_service=deps.lifecycle_service,
            moderation_permission=deps.moderation_permission,
        )
        app.add_route("/api/v1/reports", ReportCollectionResource(resource_deps))
        app.add_route(
            f"/api/v1/reports/{{report_id:int(max={MAX_ROW_ID})}}",
            ReportItemResource(resource_deps),
        )

    app.add_error_handler(InvalidInputError, handle_invalid_input)

    return app

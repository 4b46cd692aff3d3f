"""Assemble a ReportLifecycleService from its collaborators.

Usage
-----
>>> from tipline.cache import InMemoryCacheStore
>>> service = build_lifecycle_service(session_factory, InMemoryCacheStore())

"""

from __future__ import annotations

import typing as typ

from tipline.reports.authorization import AuthorizationGate
from tipline.reports.config import ReportsConfig
from tipline.reports.observability import ReportEventLogger
from tipline.reports.repository import ReportRepository
from tipline.reports.service import ReportLifecycleService

if typ.TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from tipline.cache.protocol import CacheStore

__all__ = ["build_lifecycle_service"]


def build_lifecycle_service(
    session_factory: async_sessionmaker[AsyncSession],
    cache: CacheStore,
    *,
    config: ReportsConfig | None = None,
) -> ReportLifecycleService:
    """Build a lifecycle service; *config* defaults to the environment.

    Parameters
    ----------
    session_factory
        Async session factory for the report database.
    cache
        Process-wide cache store.
    config
        Listing and permission settings. Read with
        :meth:`ReportsConfig.from_env` when omitted.

    """
    settings = config or ReportsConfig.from_env()
    repository = ReportRepository(
        session_factory,
        cache,
        gate=AuthorizationGate(settings.moderation_permission),
        page_size=settings.page_size,
    )
    return ReportLifecycleService(repository, event_logger=ReportEventLogger())

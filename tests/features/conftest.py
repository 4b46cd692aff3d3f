"""Shared fixtures for BDD feature tests.

Steps drive the async service with ``asyncio.run``, so each step runs on a
fresh event loop. The engine here uses ``NullPool`` to keep connections from
outliving the loop that opened them.
"""

from __future__ import annotations

import asyncio
import typing as typ

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from tests.fixtures.clock import FakeClock
from tipline.cache import InMemoryCacheStore
from tipline.reports import ReportLifecycleService, ReportRepository, init_report_storage

if typ.TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def lifecycle(tmp_path: Path) -> typ.Iterator[ReportLifecycleService]:
    """Yield a lifecycle service over a fresh sqlite file."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'features.db'}", poolclass=NullPool
    )
    asyncio.run(init_report_storage(engine))
    repository = ReportRepository(
        async_sessionmaker(engine, expire_on_commit=False),
        InMemoryCacheStore(),
        clock=FakeClock(),
    )
    try:
        yield ReportLifecycleService(repository)
    finally:
        asyncio.run(engine.dispose())

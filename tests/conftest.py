"""Shared fixtures for unit and feature tests.

Repository tests run against a throwaway py-pglite Postgres when it is
installed and fall back to sqlite otherwise. Set ``TIPLINE_TEST_DB=sqlite``
to skip Postgres.
"""

from __future__ import annotations

import contextlib
import logging
import os
import socket
import typing as typ

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from tests.fixtures.clock import FakeClock
from tipline.cache import InMemoryCacheStore
from tipline.reports import (
    ReportLifecycleService,
    ReportRepository,
    init_report_storage,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

try:
    from py_pglite import PGliteConfig, PGliteManager

    _PGLITE_AVAILABLE = True
except ImportError:  # pragma: no cover - optional dependency
    _PGLITE_AVAILABLE = False

logger = logging.getLogger(__name__)


def _should_use_pglite() -> bool:
    """Return True unless sqlite was requested or py-pglite is missing."""
    target = os.getenv("TIPLINE_TEST_DB", "pglite").lower()
    return target != "sqlite" and _PGLITE_AVAILABLE


def _find_free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@contextlib.asynccontextmanager
async def _pglite_engine(tmp_path: Path) -> typ.AsyncIterator[AsyncEngine]:
    """Run a py-pglite server for the duration of the block."""
    config = PGliteConfig(
        use_tcp=True,
        tcp_host="127.0.0.1",
        tcp_port=_find_free_port(),
        work_dir=tmp_path / "pglite",
    )
    with PGliteManager(config):
        engine = create_async_engine(
            "postgresql+asyncpg://postgres:postgres@"
            f"{config.tcp_host}:{config.tcp_port}/postgres"
        )
        try:
            yield engine
        finally:
            await engine.dispose()


async def _try_setup_pglite(
    stack: contextlib.AsyncExitStack, tmp_path: Path
) -> AsyncEngine | None:
    """Start Postgres on *stack*, or return None when it cannot be used."""
    if not _should_use_pglite():
        return None

    attempt = contextlib.AsyncExitStack()
    try:
        engine = await attempt.enter_async_context(_pglite_engine(tmp_path))
        await init_report_storage(engine)
    except Exception as exc:  # noqa: BLE001
        # pragma: no cover - py-pglite can fail on hosts without Node
        logger.warning("py-pglite unavailable, falling back to SQLite: %s", exc)
        with contextlib.suppress(Exception):
            await attempt.aclose()
        return None
    stack.push_async_exit(attempt)
    return engine


async def _setup_sqlite(tmp_path: Path) -> AsyncEngine:
    """Create a SQLite engine and initialise report storage."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'tipline_test.db'}")
    try:
        await init_report_storage(engine)
    except Exception:
        await engine.dispose()
        raise
    return engine


@pytest_asyncio.fixture
async def session_factory(
    tmp_path: Path,
) -> typ.AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Yield a fresh async session factory over Postgres or sqlite."""
    async with contextlib.AsyncExitStack() as stack:
        engine = await _try_setup_pglite(stack, tmp_path)
        if engine is None:
            engine = await _setup_sqlite(tmp_path)
            stack.push_async_callback(engine.dispose)
        yield async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
def cache() -> InMemoryCacheStore:
    """Return an empty in-process cache."""
    return InMemoryCacheStore()


@pytest.fixture
def clock() -> FakeClock:
    """Return a deterministic clock."""
    return FakeClock()


@pytest.fixture
def repository(
    session_factory: async_sessionmaker[AsyncSession],
    cache: InMemoryCacheStore,
    clock: FakeClock,
) -> ReportRepository:
    """Return a repository wired to the test database and in-process cache."""
    return ReportRepository(session_factory, cache, clock=clock)


@pytest.fixture
def lifecycle_service(repository: ReportRepository) -> ReportLifecycleService:
    """Return a lifecycle service over the test repository."""
    return ReportLifecycleService(repository)

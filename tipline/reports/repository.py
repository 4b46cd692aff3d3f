"""Report persistence with a read-through, write-invalidate cache.

Cache layout
------------
``reports:offset<N>``
    One listing window: up to ``page_size`` Active reports starting at
    offset ``N``, newest first. Every window is dropped as a unit whenever a
    report is created or changes status.
``report:<id>``
    A single report. Populated on first read and patched in place when its
    status changes.

Entries carry no expiry; the repository is the only writer and removes or
overwrites entries after each committed database write. Invalidation is
always the last step of a write, so a failure before it leaves the cache
untouched.
"""

from __future__ import annotations

import typing as typ

import msgspec
from sqlalchemy import BigInteger, cast, select, update
from sqlalchemy.exc import SQLAlchemyError

from tipline.cache.errors import CacheError
from tipline.common.time import MonotonicEpochClock
from tipline.logging import get_logger, log_debug
from tipline.reports.authorization import AuthorizationGate
from tipline.reports.config import DEFAULT_PAGE_SIZE
from tipline.reports.errors import (
    ReportAuthorizationError,
    ReportNotFoundError,
    ReportStorageError,
    ReportValidationError,
)
from tipline.reports.models import (
    Report,
    ReportStatus,
    decode_report,
    decode_reports,
    encode_report,
    encode_reports,
)
from tipline.reports.storage import ReportRecord, to_record, to_report

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from tipline.cache.protocol import CacheStore
    from tipline.common.time import EpochClock
    from tipline.reports.authorization import Caller

type SessionFactory = async_sessionmaker[AsyncSession]

logger = get_logger(__name__)

LISTING_KEY_PREFIX = "reports:offset"
ENTITY_KEY_PREFIX = "report:"

# Identifiers and offsets are bound as signed 64-bit integers.
MAX_ROW_ID = 2**63 - 1
MAX_OFFSET = 2**63 - 1

MIN_CONTENT_LENGTH = 1
MAX_CONTENT_LENGTH = 2_000


def listing_key(offset: int) -> str:
    """Return the cache key for the listing window at *offset*."""
    return f"{LISTING_KEY_PREFIX}{offset}"


def entity_key(report_id: int) -> str:
    """Return the cache key for a single report."""
    return f"{ENTITY_KEY_PREFIX}{report_id}"


def validate_content(content: str) -> None:
    """Check the content length bounds, measured in UTF-8 bytes.

    Raises
    ------
    ReportValidationError
        If the encoded content is empty or longer than 2000 bytes.

    """
    length = len(content.encode("utf-8"))
    if not MIN_CONTENT_LENGTH <= length <= MAX_CONTENT_LENGTH:
        msg = (
            f"Content is invalid: length must be between {MIN_CONTENT_LENGTH} "
            f"and {MAX_CONTENT_LENGTH} bytes, got {length}"
        )
        raise ReportValidationError(msg, field="content")


class ReportRepository:
    """Owns report rows and keeps the cache consistent with them.

    Parameters
    ----------
    session_factory
        Async session factory bound to the report database.
    cache
        Cache store shared by every repository instance in the process.
    gate
        Permission check applied to status changes.
    page_size
        Number of reports per listing window.
    clock
        Source of creation timestamps in epoch milliseconds. Defaults to a
        :class:`~tipline.common.time.MonotonicEpochClock`.

    """

    def __init__(
        self,
        session_factory: SessionFactory,
        cache: CacheStore,
        *,
        gate: AuthorizationGate | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        clock: EpochClock | None = None,
    ) -> None:
        """Configure the repository with its collaborators."""
        if page_size < 1:
            msg = f"page_size must be positive, got: {page_size}"
            raise ValueError(msg)
        self._session_factory = session_factory
        self._cache = cache
        self._gate = gate or AuthorizationGate()
        self._page_size = page_size
        self._clock = clock or MonotonicEpochClock()

    async def list_active(self, offset: int = 0) -> list[Report]:
        """Return one window of Active reports, newest first.

        Raises
        ------
        ReportValidationError
            If *offset* is negative or does not fit a 64-bit integer.
        ReportStorageError
            If the database or cache fails.

        """
        if offset < 0:
            msg = f"Offset must not be negative, got {offset}"
            raise ReportValidationError(msg, field="offset")
        if offset > MAX_OFFSET:
            msg = f"Offset must not exceed {MAX_OFFSET}, got {offset}"
            raise ReportValidationError(msg, field="offset")

        key = listing_key(offset)
        cached = await self._cache_get(key, "list_active")
        if cached is not None:
            log_debug(logger, "Cache hit for %s", key)
            return self._decode_cached(decode_reports, cached, "list_active")

        log_debug(logger, "Cache miss for %s", key)
        stmt = (
            select(ReportRecord)
            .where(ReportRecord.report_status == ReportStatus.ACTIVE.value)
            .order_by(
                cast(ReportRecord.timestamp, BigInteger).desc(),
                ReportRecord.id.desc(),
            )
            .limit(self._page_size)
            .offset(offset)
        )
        try:
            async with self._session_factory() as session:
                records = (await session.scalars(stmt)).all()
        except SQLAlchemyError as exc:
            raise ReportStorageError("list_active", str(exc)) from exc

        reports = [self._decode_record(record, "list_active") for record in records]
        await self._cache_set(key, encode_reports(reports), "list_active")
        return reports

    async def get_by_id(self, report_id: int) -> Report:
        """Return the report stored under *report_id*.

        Raises
        ------
        ReportNotFoundError
            If no such report exists, including identifiers outside the
            storable range.
        ReportStorageError
            If the database or cache fails.

        """
        if not -MAX_ROW_ID - 1 <= report_id <= MAX_ROW_ID:
            raise ReportNotFoundError(report_id)

        key = entity_key(report_id)
        cached = await self._cache_get(key, "get_by_id")
        if cached is not None:
            log_debug(logger, "Cache hit for %s", key)
            return self._decode_cached(decode_report, cached, "get_by_id")

        log_debug(logger, "Cache miss for %s", key)
        try:
            async with self._session_factory() as session:
                record = await session.get(ReportRecord, report_id)
        except SQLAlchemyError as exc:
            raise ReportStorageError("get_by_id", str(exc)) from exc

        if record is None:
            raise ReportNotFoundError(report_id)

        report = self._decode_record(record, "get_by_id")
        await self._cache_set(key, encode_report(report), "get_by_id")
        return report

    async def create(self, report: Report) -> Report:
        """Persist a new report and drop every cached listing window.

        The stored copy is always Active and stamped with the current time,
        whatever *report* carried.

        Raises
        ------
        ReportValidationError
            If the content length is out of bounds. Nothing is written.
        ReportStorageError
            If the database or cache fails.

        """
        validate_content(report.content)

        stored = msgspec.structs.replace(
            report,
            status=ReportStatus.ACTIVE,
            timestamp=self._clock(),
            id=None,
        )
        record = to_record(stored)
        try:
            async with self._session_factory() as session, session.begin():
                session.add(record)
                await session.flush()
                stored.id = record.id
        except SQLAlchemyError as exc:
            raise ReportStorageError("create", str(exc)) from exc

        await self._invalidate_listings("create")
        return stored

    async def edit_status(
        self,
        report_id: int,
        new_status: ReportStatus,
        caller: Caller | None,
    ) -> int:
        """Change the status of a report on behalf of *caller*.

        Existence is checked before authorization, so an unknown identifier
        reports not-found to every caller.

        Raises
        ------
        ReportNotFoundError
            If no such report exists.
        ReportAuthorizationError
            If *caller* is anonymous or lacks the moderation permission.
        ReportStorageError
            If the database or cache fails.

        """
        await self.get_by_id(report_id)

        if not self._gate.is_authorized(caller):
            raise ReportAuthorizationError(self._gate.permission)

        stmt = (
            update(ReportRecord)
            .where(ReportRecord.id == report_id)
            .values(report_status=new_status.value)
        )
        try:
            async with self._session_factory() as session, session.begin():
                await session.execute(stmt)
        except SQLAlchemyError as exc:
            raise ReportStorageError("edit_status", str(exc)) from exc

        key = entity_key(report_id)
        cached = await self._cache_get(key, "edit_status")
        if cached is not None:
            current = self._decode_cached(decode_report, cached, "edit_status")
            patched = msgspec.structs.replace(current, status=new_status)
            await self._cache_update(key, encode_report(patched), "edit_status")

        # Status changes move reports in or out of the Active listing.
        await self._invalidate_listings("edit_status")
        return report_id

    async def _cache_get(self, key: str, operation: str) -> str | None:
        try:
            return await self._cache.get(key)
        except CacheError as exc:
            raise ReportStorageError(operation, str(exc)) from exc

    async def _cache_set(self, key: str, value: str, operation: str) -> None:
        try:
            await self._cache.set(key, value)
        except CacheError as exc:
            raise ReportStorageError(operation, str(exc)) from exc

    async def _cache_update(self, key: str, value: str, operation: str) -> None:
        try:
            await self._cache.update(key, value)
        except CacheError as exc:
            raise ReportStorageError(operation, str(exc)) from exc

    async def _invalidate_listings(self, operation: str) -> None:
        try:
            await self._cache.remove_starting_with(LISTING_KEY_PREFIX)
        except CacheError as exc:
            raise ReportStorageError(operation, str(exc)) from exc

    @staticmethod
    def _decode_record(record: ReportRecord, operation: str) -> Report:
        try:
            return to_report(record)
        except ValueError as exc:
            msg = f"undecodable row {record.id}: {exc}"
            raise ReportStorageError(operation, msg) from exc

    @staticmethod
    def _decode_cached[T](
        decoder: cabc.Callable[[str], T],
        payload: str,
        operation: str,
    ) -> T:
        try:
            return decoder(payload)
        except msgspec.DecodeError as exc:
            msg = f"undecodable cache entry: {exc}"
            raise ReportStorageError(operation, msg) from exc

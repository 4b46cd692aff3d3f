"""Report lifecycle service.

The service is the inbound surface of the report core. It coerces loosely
typed request values, delegates to :class:`ReportRepository`, and turns
every :class:`ReportError` into an :class:`OperationResult` so no
exception crosses this boundary.

Usage
-----
>>> service = ReportLifecycleService(repository)
>>> result = await service.submit_report("Abuse", "spam link", "http://x", None)
>>> result.success
True

"""

from __future__ import annotations

import typing as typ

from tipline.reports.authorization import Authenticated
from tipline.reports.errors import ReportError, ReportValidationError
from tipline.reports.models import Report, parse_report_status, parse_report_type
from tipline.reports.observability import ReportEventLogger
from tipline.reports.results import FailureKind, OperationResult

if typ.TYPE_CHECKING:
    from tipline.reports.authorization import Caller
    from tipline.reports.models import ReportStatus, ReportType
    from tipline.reports.repository import ReportRepository

__all__ = ["ReportLifecycleService"]


class ReportLifecycleService:
    """Create, list, fetch, and triage reports.

    Parameters
    ----------
    repository
        Repository that owns persistence and caching.
    event_logger
        Structured lifecycle logger; a default instance is created when
        omitted.

    """

    def __init__(
        self,
        repository: ReportRepository,
        *,
        event_logger: ReportEventLogger | None = None,
    ) -> None:
        """Configure the service with its repository."""
        self._repository = repository
        self._events = event_logger or ReportEventLogger()

    async def submit_report(
        self,
        report_type: ReportType | str | None,
        content: str,
        address: str,
        author: str | None,
    ) -> OperationResult[Report]:
        """File a new report.

        Parameters
        ----------
        report_type
            Category tag; ``None`` files the report as Other.
        content
            Report body; must be 1-2000 bytes once UTF-8 encoded.
        address
            Identifier of the reported resource.
        author
            Reporter username, or ``None``/empty for anonymous reports.

        Returns
        -------
        OperationResult[Report]
            The stored report on success.

        """
        try:
            kind = parse_report_type(report_type)
        except ValueError:
            error = ReportValidationError(
                f"Unknown report type: {report_type!r}", field="report_type"
            )
            self._events.log_report_rejected(reason=str(error))
            return OperationResult.from_error(error)

        draft = Report(
            report_type=kind,
            author=author or "",
            content=content,
            address=address,
        )
        try:
            stored = await self._repository.create(draft)
        except ReportError as exc:
            result: OperationResult[Report] = self._failed("submit_report", exc)
            if result.failure is FailureKind.VALIDATION:
                self._events.log_report_rejected(reason=result.message)
            return result

        self._events.log_report_created(
            report_id=stored.id,
            report_type=stored.report_type.value,
            author=stored.author,
        )
        return OperationResult.ok("Content reported.", stored)

    async def list_active_reports(self, offset: int = 0) -> OperationResult[list[Report]]:
        """Return one window of Active reports, newest first."""
        try:
            reports = await self._repository.list_active(offset)
        except ReportError as exc:
            return self._failed("list_active_reports", exc)
        return OperationResult.ok("Found reports", reports)

    async def get_report(self, report_id: int) -> OperationResult[Report]:
        """Return a single report."""
        try:
            report = await self._repository.get_by_id(report_id)
        except ReportError as exc:
            return self._failed("get_report", exc)
        return OperationResult.ok("Found report", report)

    async def set_report_status(
        self,
        report_id: int,
        new_status: ReportStatus | str,
        caller: Caller | None,
    ) -> OperationResult[int]:
        """Move a report to *new_status* on behalf of *caller*.

        Returns
        -------
        OperationResult[int]
            The report identifier on success. Fails with ``not_found`` for
            an unknown identifier and ``authorization`` when *caller* lacks
            the moderation permission.

        """
        try:
            status = parse_report_status(new_status)
        except ValueError:
            error = ReportValidationError(
                f"Unknown report status: {new_status!r}", field="status"
            )
            return OperationResult.from_error(error)

        try:
            await self._repository.edit_status(report_id, status, caller)
        except ReportError as exc:
            denied: OperationResult[int] = self._failed("set_report_status", exc)
            if denied.failure is FailureKind.AUTHORIZATION:
                self._events.log_status_denied(
                    report_id=report_id, username=_username(caller)
                )
            return denied

        self._events.log_status_changed(
            report_id=report_id,
            status=status.value,
            username=_username(caller) or "",
        )
        return OperationResult.ok("Report status updated.", report_id)

    def _failed[T](self, operation: str, error: ReportError) -> OperationResult[T]:
        result: OperationResult[T] = OperationResult.from_error(error)
        if result.failure is FailureKind.STORAGE:
            self._events.log_operation_failed(operation=operation, error=error)
        return result


def _username(caller: Caller | None) -> str | None:
    if isinstance(caller, Authenticated):
        return caller.username
    return None

"""Structured lifecycle events for report intake and triage.

Usage
-----
>>> event_logger = ReportEventLogger()
>>> event_logger.log_report_created(report_id=7, report_type="Abuse", author="")

"""

from __future__ import annotations

import enum

from tipline.logging import get_logger, log_error, log_info, log_warning

logger = get_logger(__name__)


class ReportEventType(enum.StrEnum):
    """Structured log event types for the report lifecycle."""

    REPORT_CREATED = "reports.report.created"
    REPORT_REJECTED = "reports.report.rejected"
    STATUS_CHANGED = "reports.status.changed"
    STATUS_DENIED = "reports.status.denied"
    OPERATION_FAILED = "reports.operation.failed"


class ReportEventLogger:
    """Emit report lifecycle events via femtologging."""

    def log_report_created(
        self,
        *,
        report_id: int | None,
        report_type: str,
        author: str,
    ) -> None:
        """Log a successfully stored submission."""
        log_info(
            logger,
            "[%s] report_id=%s report_type=%s author=%s",
            ReportEventType.REPORT_CREATED,
            report_id,
            report_type,
            author or "<anonymous>",
        )

    def log_report_rejected(self, *, reason: str) -> None:
        """Log a submission refused by validation."""
        log_info(
            logger,
            "[%s] reason=%s",
            ReportEventType.REPORT_REJECTED,
            reason,
        )

    def log_status_changed(
        self,
        *,
        report_id: int,
        status: str,
        username: str,
    ) -> None:
        """Log a status transition made by a staff member."""
        log_info(
            logger,
            "[%s] report_id=%s status=%s username=%s",
            ReportEventType.STATUS_CHANGED,
            report_id,
            status,
            username,
        )

    def log_status_denied(self, *, report_id: int, username: str | None) -> None:
        """Log a status change refused for lack of permission."""
        log_warning(
            logger,
            "[%s] report_id=%s username=%s",
            ReportEventType.STATUS_DENIED,
            report_id,
            username or "<anonymous>",
        )

    def log_operation_failed(self, *, operation: str, error: BaseException) -> None:
        """Log a storage or cache failure.

        Parameters
        ----------
        operation
            Name of the lifecycle operation that failed.
        error
            The raised exception; attached as ``exc_info``.

        """
        log_error(
            logger,
            "[%s] operation=%s error_type=%s error_message=%s",
            ReportEventType.OPERATION_FAILED,
            operation,
            type(error).__name__,
            str(error),
            exc_info=error,
        )

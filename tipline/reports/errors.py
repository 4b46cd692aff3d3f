"""Errors raised by the report repository."""

from __future__ import annotations


class ReportError(Exception):
    """Base class for report lifecycle errors."""


class ReportValidationError(ReportError):
    """Raised when submitted data violates a report invariant."""

    def __init__(self, reason: str, *, field: str | None = None) -> None:
        """Initialise with a human-readable reason and the offending field."""
        self.reason = reason
        self.field = field
        super().__init__(reason)


class ReportNotFoundError(ReportError):
    """Raised when no report exists for an identifier."""

    def __init__(self, report_id: int) -> None:
        """Initialise with the missing identifier."""
        self.report_id = report_id
        super().__init__(f"Report not found: {report_id}")


class ReportAuthorizationError(ReportError):
    """Raised when the caller may not change report status.

    Anonymous callers and authenticated callers lacking the permission get
    the same message.
    """

    def __init__(self, permission: str) -> None:
        """Initialise with the permission that was required."""
        self.permission = permission
        super().__init__(f"Missing required permission: {permission}")


class ReportStorageError(ReportError):
    """Raised when the database or cache fails, or returns undecodable data."""

    def __init__(self, operation: str, reason: str) -> None:
        """Initialise with the failed operation and underlying message."""
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation} failed: {reason}")

"""Tagged operation results returned by the lifecycle service."""

from __future__ import annotations

import dataclasses as dc
import enum

from tipline.reports.errors import (
    ReportAuthorizationError,
    ReportError,
    ReportNotFoundError,
    ReportStorageError,
    ReportValidationError,
)


class FailureKind(enum.StrEnum):
    """Why an operation did not succeed."""

    VALIDATION = "validation"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    STORAGE = "storage"


_FAILURE_KINDS: tuple[tuple[type[ReportError], FailureKind], ...] = (
    (ReportValidationError, FailureKind.VALIDATION),
    (ReportAuthorizationError, FailureKind.AUTHORIZATION),
    (ReportNotFoundError, FailureKind.NOT_FOUND),
    (ReportStorageError, FailureKind.STORAGE),
)


def failure_kind_for(error: ReportError) -> FailureKind:
    """Classify *error*; unrecognised subclasses count as storage failures."""
    for error_type, kind in _FAILURE_KINDS:
        if isinstance(error, error_type):
            return kind
    return FailureKind.STORAGE


@dc.dataclass(frozen=True, slots=True)
class OperationResult[T]:
    """Outcome of a lifecycle operation.

    Attributes
    ----------
    success
        ``True`` when the operation completed.
    message
        Human-readable summary, suitable for showing to the caller.
    payload
        Operation output on success, ``None`` otherwise.
    failure
        Failure classification, ``None`` on success.

    """

    success: bool
    message: str
    payload: T | None = None
    failure: FailureKind | None = None

    @classmethod
    def ok(cls, message: str, payload: T) -> OperationResult[T]:
        """Build a successful result."""
        return cls(success=True, message=message, payload=payload)

    @classmethod
    def from_error(cls, error: ReportError) -> OperationResult[T]:
        """Build a failed result carrying the error message."""
        return cls(
            success=False,
            message=str(error),
            failure=failure_kind_for(error),
        )

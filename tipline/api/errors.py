"""Request decoding errors and result-to-status mapping for the API layer.

Lifecycle operations never raise; they return an
:class:`~tipline.reports.results.OperationResult` whose failure kind picks
the HTTP status. Only malformed request bodies travel as exceptions, through
:class:`InvalidInputError` and its Falcon handler.

Usage
-----
Register the handler on the Falcon app::

    app.add_error_handler(InvalidInputError, handle_invalid_input)

"""

from __future__ import annotations

import typing as typ

import falcon

from tipline.reports.results import FailureKind

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from tipline.reports.results import OperationResult

__all__ = [
    "InvalidInputError",
    "handle_invalid_input",
    "status_for_result",
]

_FAILURE_STATUS: dict[FailureKind, str] = {
    FailureKind.VALIDATION: falcon.HTTP_400,
    FailureKind.AUTHORIZATION: falcon.HTTP_403,
    FailureKind.NOT_FOUND: falcon.HTTP_404,
    FailureKind.STORAGE: falcon.HTTP_503,
}


class InvalidInputError(Exception):
    """Raised when a request body cannot be decoded; maps to HTTP 400.

    Attributes
    ----------
    reason
        Human-readable description of the decoding failure.
    field
        Optional name of the offending field.

    """

    def __init__(self, reason: str, *, field: str | None = None) -> None:
        """Initialize with a reason and optional field name."""
        self.reason = reason
        self.field = field
        message = f"{field}: {reason}" if field is not None else reason
        super().__init__(message)


def status_for_result(
    result: OperationResult[typ.Any],
    *,
    success_status: str = falcon.HTTP_200,
) -> str:
    """Return the HTTP status line for *result*."""
    if result.success or result.failure is None:
        return success_status
    return _FAILURE_STATUS[result.failure]


async def handle_invalid_input(
    _req: Request,
    resp: Response,
    ex: InvalidInputError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``InvalidInputError`` to an HTTP 400 JSON response.

    The body has the same shape as a failed operation result so clients
    handle every error alike.
    """
    resp.status = falcon.HTTP_400
    media: dict[str, typ.Any] = {
        "success": False,
        "message": ex.reason,
        "payload": None,
        "failure": FailureKind.VALIDATION.value,
    }
    if ex.field is not None:
        media["field"] = ex.field
    resp.media = media

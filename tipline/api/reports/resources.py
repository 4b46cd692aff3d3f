"""Report API resources.

Routes
------
``POST /api/v1/reports``
    File a report. The author is the resolved caller's username, or empty
    for anonymous callers.
``GET /api/v1/reports?offset=N``
    One listing window of Active reports (staff only).
``GET /api/v1/reports/{report_id}``
    A single report (staff only).
``POST /api/v1/reports/{report_id}``
    Change a report's status; authorization is enforced by the repository.

Every response body is the JSON form of an
:class:`~tipline.reports.results.OperationResult`.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import falcon
import msgspec

from tipline.api.errors import InvalidInputError, status_for_result
from tipline.reports.authorization import (
    ANONYMOUS,
    STAFF_DASHBOARD_PERMISSION,
    Authenticated,
    is_authorized,
)
from tipline.reports.errors import ReportAuthorizationError
from tipline.reports.repository import MAX_OFFSET
from tipline.reports.results import OperationResult

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from tipline.reports.authorization import Caller
    from tipline.reports.service import ReportLifecycleService

__all__ = [
    "CreateReportBody",
    "EditStatusBody",
    "ReportCollectionResource",
    "ReportItemResource",
    "ReportResourceDependencies",
]


class CreateReportBody(msgspec.Struct, kw_only=True):
    """JSON body of a report submission."""

    content: str
    address: str
    report_type: str | None = None


class EditStatusBody(msgspec.Struct, kw_only=True):
    """JSON body of a status change."""

    status: str


@dc.dataclass(frozen=True, slots=True)
class ReportResourceDependencies:
    """Collaborators shared by the report resources.

    Attributes
    ----------
    lifecycle_service
        Service performing report operations.
    moderation_permission
        Permission required to read reports through the API.

    """

    lifecycle_service: ReportLifecycleService
    moderation_permission: str = STAFF_DASHBOARD_PERMISSION


async def _decode_body[T](req: Request, body_type: type[T]) -> T:
    raw = await req.stream.read()
    if not raw:
        raise InvalidInputError("Request body is required")
    try:
        return msgspec.json.decode(raw, type=body_type)
    except msgspec.ValidationError as exc:
        raise InvalidInputError(str(exc)) from exc
    except msgspec.DecodeError as exc:
        raise InvalidInputError(f"Malformed JSON: {exc}") from exc


def _caller(req: Request) -> Caller:
    return getattr(req.context, "caller", ANONYMOUS)


def _render(
    resp: Response,
    result: OperationResult[typ.Any],
    *,
    success_status: str = falcon.HTTP_200,
) -> None:
    resp.status = status_for_result(result, success_status=success_status)
    resp.content_type = falcon.MEDIA_JSON
    resp.data = msgspec.json.encode(result)


class _ReportResourceBase:
    def __init__(self, dependencies: ReportResourceDependencies) -> None:
        """Configure the resource with its dependencies."""
        self._service = dependencies.lifecycle_service
        self._permission = dependencies.moderation_permission

    def _deny_unless_staff(self, req: Request, resp: Response) -> bool:
        """Render a 403 and return ``True`` when the caller is not staff."""
        if is_authorized(_caller(req), self._permission):
            return False
        denied: OperationResult[None] = OperationResult.from_error(
            ReportAuthorizationError(self._permission)
        )
        _render(resp, denied)
        return True


class ReportCollectionResource(_ReportResourceBase):
    """``/api/v1/reports``: submit and list."""

    async def on_post(self, req: Request, resp: Response) -> None:
        """File a new report."""
        body = await _decode_body(req, CreateReportBody)
        caller = _caller(req)
        author = caller.username if isinstance(caller, Authenticated) else ""
        result = await self._service.submit_report(
            body.report_type, body.content, body.address, author
        )
        _render(resp, result, success_status=falcon.HTTP_201)

    async def on_get(self, req: Request, resp: Response) -> None:
        """Return one listing window of Active reports."""
        if self._deny_unless_staff(req, resp):
            return
        offset = req.get_param_as_int(
            "offset", min_value=0, max_value=MAX_OFFSET, default=0
        )
        result = await self._service.list_active_reports(offset)
        _render(resp, result)


class ReportItemResource(_ReportResourceBase):
    """``/api/v1/reports/{report_id}``: view and triage."""

    async def on_get(self, req: Request, resp: Response, *, report_id: int) -> None:
        """Return a single report."""
        if self._deny_unless_staff(req, resp):
            return
        result = await self._service.get_report(report_id)
        _render(resp, result)

    async def on_post(self, req: Request, resp: Response, *, report_id: int) -> None:
        """Change the status of a report."""
        body = await _decode_body(req, EditStatusBody)
        result = await self._service.set_report_status(
            report_id, body.status, _caller(req)
        )
        _render(resp, result)

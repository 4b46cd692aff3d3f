"""Report lifecycle: intake, listing, lookup, and staff triage.

Public API
----------
Report, ReportType, ReportStatus
    The report record and its enumerations.
ReportRepository
    Persistence with read-through, write-invalidate caching.
ReportLifecycleService
    Inbound operations returning :class:`OperationResult` values.
AuthorizationGate, Anonymous, Authenticated, Caller
    Caller identities and the staff permission check.
ReportsConfig
    Page size and permission settings.

Example:
Wire a service against SQLite and an in-process cache::

    from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

    from tipline.cache import InMemoryCacheStore
    from tipline.reports import build_lifecycle_service, init_report_storage

    engine = create_async_engine("sqlite+aiosqlite:///tipline.db")
    await init_report_storage(engine)
    service = build_lifecycle_service(
        async_sessionmaker(engine, expire_on_commit=False),
        InMemoryCacheStore(),
    )
    result = await service.submit_report("Abuse", "spam link", "http://x", None)

"""

from tipline.reports.authorization import (
    ANONYMOUS,
    STAFF_DASHBOARD_PERMISSION,
    Anonymous,
    Authenticated,
    AuthorizationGate,
    Caller,
    is_authorized,
)
from tipline.reports.config import ReportsConfig
from tipline.reports.errors import (
    ReportAuthorizationError,
    ReportError,
    ReportNotFoundError,
    ReportStorageError,
    ReportValidationError,
)
from tipline.reports.factory import build_lifecycle_service
from tipline.reports.models import Report, ReportStatus, ReportType
from tipline.reports.repository import ReportRepository
from tipline.reports.results import FailureKind, OperationResult
from tipline.reports.service import ReportLifecycleService
from tipline.reports.storage import ReportRecord, init_report_storage

__all__ = [
    "ANONYMOUS",
    "STAFF_DASHBOARD_PERMISSION",
    "Anonymous",
    "Authenticated",
    "AuthorizationGate",
    "Caller",
    "FailureKind",
    "OperationResult",
    "Report",
    "ReportAuthorizationError",
    "ReportError",
    "ReportLifecycleService",
    "ReportNotFoundError",
    "ReportRecord",
    "ReportRepository",
    "ReportStatus",
    "ReportStorageError",
    "ReportType",
    "ReportValidationError",
    "ReportsConfig",
    "build_lifecycle_service",
    "init_report_storage",
    "is_authorized",
]

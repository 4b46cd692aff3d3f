"""Persistence model for reports.

Every column except the identifier is stored as text: enums as their
textual tag and the timestamp as decimal epoch milliseconds. Rows are read
back strictly; an unknown tag raises instead of defaulting so schema drift
is noticed.
"""

from __future__ import annotations

import typing as typ

from sqlalchemy import BigInteger, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from tipline.reports.models import Report, ReportStatus, ReportType

if typ.TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine


class Base(DeclarativeBase):
    """Declarative base for Tipline tables."""


class ReportRecord(Base):
    """Row in the ``reports`` table."""

    __tablename__ = "reports"
    __table_args__ = (Index("ix_reports_status_timestamp", "report_status", "timestamp"),)

    # SQLite only autoincrements an INTEGER PRIMARY KEY.
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    report_type: Mapped[str] = mapped_column(String(32), nullable=False)
    report_status: Mapped[str] = mapped_column(String(32), nullable=False)
    author: Mapped[str] = mapped_column(Text(), nullable=False, default="")
    content: Mapped[str] = mapped_column(Text(), nullable=False)
    address: Mapped[str] = mapped_column(Text(), nullable=False)
    timestamp: Mapped[str] = mapped_column(String(32), nullable=False)


def to_record(report: Report) -> ReportRecord:
    """Build an unsaved row from *report*."""
    return ReportRecord(
        report_type=report.report_type.value,
        report_status=report.status.value,
        author=report.author,
        content=report.content,
        address=report.address,
        timestamp=str(report.timestamp),
    )


def to_report(record: ReportRecord) -> Report:
    """Decode a stored row.

    Raises
    ------
    ValueError
        If an enum tag is unknown or the timestamp is not an integer.

    """
    return Report(
        report_type=ReportType(record.report_type),
        status=ReportStatus(record.report_status),
        author=record.author,
        content=record.content,
        address=record.address,
        timestamp=int(record.timestamp),
        id=record.id,
    )


async def init_report_storage(engine: AsyncEngine) -> None:
    """Create the report tables if they are absent."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

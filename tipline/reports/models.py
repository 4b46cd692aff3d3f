"""Report record, its enumerations, and the JSON codec used for caching."""

from __future__ import annotations

import enum

import msgspec


class ReportType(enum.StrEnum):
    """Category chosen by the reporter."""

    HARASSMENT = "Harassment"
    ABUSE = "Abuse"
    ILLEGAL = "Illegal"
    HARMFUL = "Harmful"
    OTHER = "Other"


class ReportStatus(enum.StrEnum):
    """Triage state of a report."""

    ACTIVE = "Active"
    """Needs to be handled."""
    ARCHIVED = "Archived"
    """Has been handled."""
    SPAM = "Spam"
    """Flagged as spam."""


class Report(msgspec.Struct, kw_only=True):
    """A user-filed moderation report.

    Attributes
    ----------
    report_type
        Category of the report.
    status
        Current triage state.
    author
        Username of the reporter; empty for anonymous reports.
    content
        Free-text body written by the reporter.
    address
        Identifier (usually a URL) of the reported resource.
    timestamp
        Creation time in Unix epoch milliseconds.
    id
        Storage-assigned row identifier, ``None`` until persisted.

    """

    report_type: ReportType = ReportType.OTHER
    status: ReportStatus = ReportStatus.ACTIVE
    author: str = ""
    content: str
    address: str
    timestamp: int = 0
    id: int | None = None


_encoder = msgspec.json.Encoder()
_report_decoder = msgspec.json.Decoder(Report)
_listing_decoder = msgspec.json.Decoder(list[Report])


def encode_report(report: Report) -> str:
    """Serialize a single report for the cache."""
    return _encoder.encode(report).decode("utf-8")


def decode_report(payload: str) -> Report:
    """Deserialize a cached report.

    Raises
    ------
    msgspec.DecodeError
        If the payload is malformed or carries an unknown enum tag.

    """
    return _report_decoder.decode(payload)


def encode_reports(reports: list[Report]) -> str:
    """Serialize a listing window for the cache."""
    return _encoder.encode(reports).decode("utf-8")


def decode_reports(payload: str) -> list[Report]:
    """Deserialize a cached listing window.

    Raises
    ------
    msgspec.DecodeError
        If the payload is malformed or carries an unknown enum tag.

    """
    return _listing_decoder.decode(payload)


def parse_report_type(value: ReportType | str | None) -> ReportType:
    """Coerce a textual tag to :class:`ReportType`; ``None`` means Other.

    Raises
    ------
    ValueError
        If *value* is not a known tag.

    """
    if value is None:
        return ReportType.OTHER
    return ReportType(value)


def parse_report_status(value: ReportStatus | str) -> ReportStatus:
    """Coerce a textual tag to :class:`ReportStatus`.

    Raises
    ------
    ValueError
        If *value* is not a known tag.

    """
    return ReportStatus(value)

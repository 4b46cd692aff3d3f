"""Unit tests for tipline.reports.config.ReportsConfig."""

from __future__ import annotations

import pytest

from tipline.reports.config import ReportsConfig


def test_defaults() -> None:
    """Defaults match the documented page size and permission."""
    config = ReportsConfig()
    assert config.page_size == 50
    assert config.moderation_permission == "StaffDashboard"


def test_from_env_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment variables override defaults."""
    monkeypatch.setenv("TIPLINE_REPORTS_PAGE_SIZE", "25")
    monkeypatch.setenv("TIPLINE_MODERATION_PERMISSION", "  ReportsAdmin ")
    config = ReportsConfig.from_env()
    assert config.page_size == 25
    assert config.moderation_permission == "ReportsAdmin"


def test_from_env_blank_values_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    """Blank variables keep the defaults."""
    monkeypatch.setenv("TIPLINE_REPORTS_PAGE_SIZE", " ")
    monkeypatch.setenv("TIPLINE_MODERATION_PERMISSION", "")
    assert ReportsConfig.from_env() == ReportsConfig()


@pytest.mark.parametrize(
    ("raw", "match"),
    [
        ("fifty", "must be an integer"),
        ("0", "must be positive"),
        ("-5", "must be positive"),
    ],
)
def test_from_env_rejects_bad_page_size(
    monkeypatch: pytest.MonkeyPatch, raw: str, match: str
) -> None:
    """Invalid page sizes raise ValueError naming the variable."""
    monkeypatch.setenv("TIPLINE_REPORTS_PAGE_SIZE", raw)
    with pytest.raises(ValueError, match=f"TIPLINE_REPORTS_PAGE_SIZE {match}"):
        ReportsConfig.from_env()

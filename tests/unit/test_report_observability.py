"""Unit tests for report lifecycle observability logging."""

from __future__ import annotations

import pytest

from tests.fixtures.logs import FakeLogger
from tipline.reports import observability
from tipline.reports.observability import ReportEventLogger, ReportEventType


@pytest.fixture
def fake_logger(monkeypatch: pytest.MonkeyPatch) -> FakeLogger:
    """Replace the module logger with a recording double."""
    logger = FakeLogger()
    monkeypatch.setattr(observability, "logger", logger)
    return logger


class TestReportEventLogger:
    """Tests for ``ReportEventLogger`` structured log events."""

    def test_report_created_is_info(self, fake_logger: FakeLogger) -> None:
        """Creation events carry id, type, and author."""
        ReportEventLogger().log_report_created(
            report_id=7, report_type="Harassment", author="alice"
        )

        [(level, message, exc_info, _)] = fake_logger.calls
        assert level == "INFO"
        assert message == (
            "[reports.report.created] report_id=7 report_type=Harassment author=alice"
        )
        assert exc_info is None

    def test_anonymous_author_is_labelled(self, fake_logger: FakeLogger) -> None:
        """An empty author is rendered as anonymous."""
        ReportEventLogger().log_report_created(
            report_id=1, report_type="Other", author=""
        )

        assert "author=<anonymous>" in fake_logger.messages[0]

    def test_report_rejected_is_info(self, fake_logger: FakeLogger) -> None:
        """Rejections record the validation reason."""
        ReportEventLogger().log_report_rejected(reason="Content is invalid")

        [(level, message, _, _)] = fake_logger.calls
        assert level == "INFO"
        assert ReportEventType.REPORT_REJECTED in message
        assert "reason=Content is invalid" in message

    def test_status_changed_is_info(self, fake_logger: FakeLogger) -> None:
        """Status changes name the moderator."""
        ReportEventLogger().log_status_changed(
            report_id=3, status="Spam", username="mod"
        )

        [(level, message, _, _)] = fake_logger.calls
        assert level == "INFO"
        assert message == "[reports.status.changed] report_id=3 status=Spam username=mod"

    def test_status_denied_is_warning(self, fake_logger: FakeLogger) -> None:
        """Denied status changes are warnings; anonymous callers are labelled."""
        ReportEventLogger().log_status_denied(report_id=3, username=None)

        [(level, message, _, _)] = fake_logger.calls
        assert level == "WARNING"
        assert message == "[reports.status.denied] report_id=3 username=<anonymous>"

    def test_operation_failed_is_error_with_exc_info(
        self, fake_logger: FakeLogger
    ) -> None:
        """Failures attach the exception."""
        error = RuntimeError("boom")

        ReportEventLogger().log_operation_failed(operation="create", error=error)

        [(level, message, exc_info, stack_info)] = fake_logger.calls
        assert level == "ERROR"
        assert ReportEventType.OPERATION_FAILED in message
        assert "operation=create" in message
        assert "error_type=RuntimeError" in message
        assert "error_message=boom" in message
        assert exc_info is error
        assert stack_info is False

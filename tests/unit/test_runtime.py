"""Unit tests for the tipline.runtime module."""

from __future__ import annotations

import typing as typ
from http import HTTPStatus
from unittest import mock

import falcon.asgi
import falcon.testing
import pytest

from tipline import runtime

if typ.TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def health_only(monkeypatch: pytest.MonkeyPatch) -> falcon.testing.TestClient:
    """Create a client for the runtime app with no database configured."""
    monkeypatch.delenv("TIPLINE_DATABASE_URL", raising=False)
    return falcon.testing.TestClient(runtime.create_app())


class TestHealthOnlyMode:
    """Runtime app without TIPLINE_DATABASE_URL."""

    def test_returns_falcon_app(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """create_app returns a Falcon ASGI App instance."""
        monkeypatch.delenv("TIPLINE_DATABASE_URL", raising=False)
        assert isinstance(runtime.create_app(), falcon.asgi.App)

    @pytest.mark.parametrize(
        ("path", "body"),
        [("/health", {"status": "ok"}), ("/ready", {"status": "ready"})],
    )
    def test_probes_return_json(
        self,
        health_only: falcon.testing.TestClient,
        path: str,
        body: dict[str, str],
    ) -> None:
        """Probe endpoints answer with JSON."""
        result = health_only.simulate_get(path)
        assert result.status_code == HTTPStatus.OK
        assert result.json == body
        assert result.headers.get("content-type", "").startswith("application/json")

    def test_report_routes_absent(
        self, health_only: falcon.testing.TestClient
    ) -> None:
        """Report endpoints need a database."""
        result = health_only.simulate_get("/api/v1/reports")
        assert result.status_code == HTTPStatus.NOT_FOUND


class TestDatabaseMode:
    """Runtime app with TIPLINE_DATABASE_URL set."""

    def test_report_routes_registered(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """Report endpoints are served and guarded by the trusted headers."""
        monkeypatch.setenv(
            "TIPLINE_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'rt.db'}"
        )
        monkeypatch.delenv("TIPLINE_CACHE_URL", raising=False)

        client = falcon.testing.TestClient(runtime.create_app())
        result = client.simulate_get("/api/v1/reports")

        assert result.status_code == HTTPStatus.FORBIDDEN

    def test_unsupported_cache_url_fails_fast(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """An unknown cache scheme is a configuration error."""
        monkeypatch.setenv(
            "TIPLINE_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'rt.db'}"
        )
        monkeypatch.setenv("TIPLINE_CACHE_URL", "memcached://localhost")

        with pytest.raises(ValueError, match="Unsupported cache URL scheme"):
            runtime.create_app()

    def test_invalid_page_size_fails_fast(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """Report configuration is validated at startup."""
        monkeypatch.setenv(
            "TIPLINE_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'rt.db'}"
        )
        monkeypatch.setenv("TIPLINE_REPORTS_PAGE_SIZE", "0")

        with pytest.raises(ValueError, match="TIPLINE_REPORTS_PAGE_SIZE"):
            runtime.create_app()


class TestParsePort:
    """Tests for _parse_port."""

    @pytest.mark.parametrize("raw", ["1", "8080", "65535"])
    def test_valid_ports(self, raw: str) -> None:
        """Ports inside the TCP range are accepted."""
        assert runtime._parse_port(raw) == int(raw)

    @pytest.mark.parametrize("raw", ["0", "65536", "http", ""])
    def test_invalid_ports_exit(self, raw: str) -> None:
        """Anything else stops the process."""
        with pytest.raises(SystemExit) as excinfo:
            runtime._parse_port(raw)
        assert excinfo.value.code == 1


def test_main_serves_factory(monkeypatch: pytest.MonkeyPatch) -> None:
    """main() hands the app factory to Granian with env-derived settings."""
    granian_cls = mock.MagicMock()
    monkeypatch.setattr("granian.Granian", granian_cls)
    monkeypatch.setattr(
        runtime, "configure_logging", mock.MagicMock(return_value=("DEBUG", False))
    )
    monkeypatch.setenv("TIPLINE_HOST", "127.0.0.1")
    monkeypatch.setenv("TIPLINE_PORT", "9090")
    monkeypatch.setenv("TIPLINE_LOG_LEVEL", "debug")

    runtime.main()

    args, kwargs = granian_cls.call_args
    assert args == ("tipline.runtime:create_app",)
    assert kwargs["address"] == "127.0.0.1"
    assert kwargs["port"] == 9090
    assert kwargs["factory"] is True
    granian_cls.return_value.serve.assert_called_once_with()
    runtime.configure_logging.assert_called_once_with("debug")  # type: ignore[attr-defined]

"""Unit tests for structured logging configuration."""

import io
import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from typed_request.observability.logging import (
    bound_request_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)
from typed_request.settings import AppSettings


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Restore structlog defaults after each test."""
    yield
    structlog.reset_defaults()


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_output(self) -> None:
        """Test events are rendered as sorted JSON lines."""
        output = io.StringIO()
        configure_logging(output=output)

        get_logger("test").info("client_error", kind="ClientError", status_code=404)

        record = json.loads(output.getvalue().strip())
        assert record["event"] == "client_error"
        assert record["kind"] == "ClientError"
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_filters_below_level(self) -> None:
        """Test events below the configured level are dropped."""
        output = io.StringIO()
        configure_logging(level="WARNING", output=output)

        get_logger("test").info("request_complete")

        assert output.getvalue() == ""

    def test_numeric_level(self) -> None:
        """Test numeric levels are accepted."""
        output = io.StringIO()
        configure_logging(level=logging.ERROR, output=output)

        log = get_logger("test")
        log.warning("request_aborted")
        log.error("server_error")

        lines = output.getvalue().strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["event"] == "server_error"


class TestConfigureFromSettings:
    """Tests for settings-driven configuration."""

    def test_uses_settings_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test log level and format come from settings."""
        calls = []
        monkeypatch.setattr(
            "typed_request.observability.logging.configure_logging",
            lambda **kwargs: calls.append(kwargs),
        )

        configure_logging_from_settings(AppSettings(log_level="DEBUG", log_json=False))

        assert calls == [{"level": "DEBUG", "json_format": False}]


class TestBoundRequestContext:
    """Tests for per-request log context."""

    def test_lines_carry_request_fields(self) -> None:
        """Test lines logged inside the context name their request."""
        output = io.StringIO()
        configure_logging(output=output)

        with bound_request_context("https://api.example.com/users/1", "GET"):
            get_logger("test").error("server_error", status_code=503)
        get_logger("test").info("idle")

        inside, outside = (json.loads(line) for line in output.getvalue().splitlines())
        assert inside["component"] == "fetch"
        assert inside["url"] == "https://api.example.com/users/1"
        assert inside["method"] == "GET"
        assert inside["status_code"] == 503
        assert "url" not in outside
        assert structlog.contextvars.get_contextvars() == {}

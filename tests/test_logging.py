"""Tests for logging configuration."""

import json
import logging
import sys

from docchat.logging_config import (
    DevFormatter,
    JSONFormatter,
    get_logger,
    setup_logging,
)


def _record(msg: str = "Test message", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="/app/module.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestJSONFormatter:
    """Tests for JSON log formatter."""

    def test_format_basic_message(self) -> None:
        """Basic log message is formatted as JSON."""
        data = json.loads(JSONFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "test"
        assert data["message"] == "Test message"
        assert data["file"] == "/app/module.py:42"
        assert "timestamp" in data
        assert "extra" not in data

    def test_format_includes_extra_fields(self) -> None:
        """Fields passed through `extra=` end up in the output."""
        record = _record()
        record.collection = "docs"
        record.points_count = 3

        data = json.loads(JSONFormatter().format(record))

        assert data["extra"] == {"collection": "docs", "points_count": 3}

    def test_format_with_exception(self) -> None:
        """Exception info is included in output."""
        try:
            raise ValueError("test error")
        except ValueError:
            exc_info = sys.exc_info()

        record = _record(level=logging.ERROR)
        record.exc_info = exc_info

        data = json.loads(JSONFormatter().format(record))

        assert "ValueError" in data["exception"]


class TestDevFormatter:
    """Tests for development formatter."""

    def test_format_includes_level(self) -> None:
        """Development format includes level, logger and message."""
        record = _record("Warning message", level=logging.WARNING)
        record.name = "test.module"

        output = DevFormatter().format(record)

        assert "WARNING" in output
        assert "test.module" in output
        assert "Warning message" in output


class TestSetupLogging:
    """Tests for logging setup."""

    def test_returns_root_logger(self) -> None:
        """setup_logging returns root logger."""
        assert setup_logging(level="INFO") is logging.getLogger()

    def test_single_stderr_handler(self) -> None:
        """Logs go to stderr so stdout stays free for the conversation."""
        setup_logging()
        setup_logging()

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.handlers[0].stream is sys.stderr

    def test_dev_formatter_by_default(self) -> None:
        """Development formatter is the default."""
        setup_logging()
        assert isinstance(logging.getLogger().handlers[0].formatter, DevFormatter)

    def test_json_output(self) -> None:
        """JSON output can be requested."""
        setup_logging(json_output=True)
        assert isinstance(logging.getLogger().handlers[0].formatter, JSONFormatter)

    def test_level_override(self) -> None:
        """Log level can be set."""
        setup_logging(level="DEBUG")
        assert logging.getLogger().level == logging.DEBUG

    def test_http_loggers_quieted(self) -> None:
        """httpx never logs request URLs at INFO."""
        setup_logging(level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING


class TestGetLogger:
    """Tests for named logger retrieval."""

    def test_returns_named_logger(self) -> None:
        """get_logger returns a logger with the given name."""
        assert get_logger("docchat.module").name == "docchat.module"

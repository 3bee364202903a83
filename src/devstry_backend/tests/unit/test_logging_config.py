"""Tests for logging configuration."""

import json
import logging
import logging.handlers
import sys

import pytest
from rich.logging import RichHandler

from devstry_backend.utils.logging_config import (
    JSONFormatter,
    LogFormat,
    LoggingManager,
    LogLevel,
    parse_size,
)


class TestLogLevel:
    """Tests for LogLevel."""

    def test_from_name_is_case_insensitive(self):
        assert LogLevel.from_name("debug") is LogLevel.DEBUG
        assert LogLevel.from_name("WARNING") is LogLevel.WARNING

    def test_from_name_unknown(self):
        with pytest.raises(ValueError):
            LogLevel.from_name("loud")


class TestLoggingManager:
    """Tests for LoggingManager."""

    def test_console_handler_uses_rich(self, restore_root_logger):
        LoggingManager(log_level=LogLevel.WARNING)
        root = restore_root_logger
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], RichHandler)

    def test_json_file_output(self, restore_root_logger, temp_directory):
        log_file = temp_directory / "devstry.log"
        manager = LoggingManager(
            log_format=LogFormat.JSON,
            log_file=log_file,
            enable_console=False,
        )

        manager.get_logger("devstry_backend.test").info("parsed", extra={"files": 2})
        for handler in restore_root_logger.handlers:
            handler.flush()

        record = json.loads(log_file.read_text(encoding="utf-8").strip())
        assert record["message"] == "parsed"
        assert record["level"] == "INFO"
        assert record["files"] == 2

    def test_rotating_file_handler(self, restore_root_logger, temp_directory):
        LoggingManager(
            log_file=temp_directory / "devstry.log",
            enable_console=False,
            enable_rotation=True,
            max_file_size="1KB",
        )
        handler = restore_root_logger.handlers[0]
        assert isinstance(handler, logging.handlers.RotatingFileHandler)
        assert handler.maxBytes == 1024


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_exception_is_included(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())

        data = json.loads(JSONFormatter().format(record))
        assert data["message"] == "failed"
        assert "RuntimeError: boom" in data["exception"]


@pytest.mark.parametrize("size,expected", [
    ("512", 512),
    ("2KB", 2048),
    ("10MB", 10 * 1024 ** 2),
    (" 1gb ", 1024 ** 3),
])
def test_parse_size(size, expected):
    assert parse_size(size) == expected

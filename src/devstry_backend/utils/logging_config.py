"""
Logging configuration for Devstry.

Console output goes through rich's ``RichHandler``; an optional log file can
use the plain, detailed or JSON format and rotate by size.
"""

import json
import logging
import logging.handlers
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

from rich.console import Console
from rich.logging import RichHandler


class LogLevel(Enum):
    """Log level enumeration."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {name}") from None


class LogFormat(Enum):
    """Log format types."""
    STANDARD = "standard"
    JSON = "json"
    DETAILED = "detailed"


# Standard LogRecord attributes, excluded when collecting ``extra`` fields.
_STANDARD_ATTRS = frozenset({
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'getMessage', 'exc_info',
    'exc_text', 'stack_info', 'message', 'taskName'
})


class JSONFormatter(logging.Formatter):
    """Format records as single-line JSON objects, including ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        for attr_name, attr_value in record.__dict__.items():
            if not attr_name.startswith('_') and attr_name not in _STANDARD_ATTRS:
                log_data[attr_name] = attr_value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str, ensure_ascii=False, separators=(',', ':'))


class LoggingManager:
    """
    Configures the root logger for the CLI and embedding applications.

    Example:
        >>> manager = LoggingManager(log_level=LogLevel.DEBUG)
        >>> logger = manager.get_logger("devstry_backend")
    """

    def __init__(
        self,
        log_level: LogLevel = LogLevel.INFO,
        log_format: LogFormat = LogFormat.STANDARD,
        log_file: Optional[Union[str, Path]] = None,
        enable_console: bool = True,
        enable_rotation: bool = False,
        max_file_size: str = "10MB",
        backup_count: int = 5,
        console: Optional[Console] = None
    ):
        self.log_level = log_level
        self.log_format = log_format
        self.log_file = Path(log_file) if log_file else None
        self.enable_console = enable_console
        self.enable_rotation = enable_rotation
        self.max_file_size = max_file_size
        self.backup_count = backup_count
        self.console = console

        self._setup_root_logger()

    def _setup_root_logger(self) -> None:
        """Setup the root logger configuration."""
        root_logger = logging.getLogger()
        root_logger.setLevel(self.log_level.value)

        # Clear existing handlers
        root_logger.handlers.clear()

        if self.enable_console:
            console_handler = RichHandler(
                console=self.console or Console(stderr=True),
                show_time=True,
                show_path=False,
                markup=False,
                rich_tracebacks=True,
            )
            console_handler.setLevel(self.log_level.value)
            root_logger.addHandler(console_handler)

        if self.log_file:
            file_handler = self._create_file_handler()
            file_handler.setLevel(self.log_level.value)
            file_handler.setFormatter(self._create_formatters()[self.log_format])
            root_logger.addHandler(file_handler)

    def _create_formatters(self) -> Dict[LogFormat, logging.Formatter]:
        """Create the file formatters."""
        return {
            LogFormat.STANDARD: logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ),
            LogFormat.JSON: JSONFormatter(),
            LogFormat.DETAILED: logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s'
            )
        }

    def _create_file_handler(self) -> logging.Handler:
        """Create appropriate file handler based on rotation settings."""
        if self.enable_rotation:
            return logging.handlers.RotatingFileHandler(
                filename=self.log_file,
                maxBytes=parse_size(self.max_file_size),
                backupCount=self.backup_count,
                encoding="utf-8",
            )
        return logging.FileHandler(self.log_file, encoding="utf-8")

    def get_logger(self, name: str) -> logging.Logger:
        """Get a logger at the configured level."""
        logger = logging.getLogger(name)
        logger.setLevel(self.log_level.value)
        return logger


def parse_size(size: str) -> int:
    """Convert a size such as ``"10MB"`` into bytes."""
    units = {"KB": 1024, "MB": 1024 ** 2, "GB": 1024 ** 3}
    size = size.strip().upper()
    for suffix, factor in units.items():
        if size.endswith(suffix):
            return int(size[:-len(suffix)]) * factor
    return int(size)

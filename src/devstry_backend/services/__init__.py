"""Services package for Devstry: I/O-facing helpers around the devlog core."""

from .devlog_discovery import (
    find_devlog_dir,
    latest_devlog_file,
    list_devlog_files,
    read_devlog_safe,
)

__all__ = [
    "find_devlog_dir",
    "latest_devlog_file",
    "list_devlog_files",
    "read_devlog_safe",
]

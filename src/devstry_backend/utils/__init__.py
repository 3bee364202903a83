"""
Utilities package for Devstry.

This package contains configuration and logging utilities used throughout
the Devstry system.
"""

from .config import ConfigManager, ConfigPaths

__all__ = [
    "ConfigManager",
    "ConfigPaths",
]

"""
Command-line interface for Devstry.

Usage:
    devstry lookup /src/app.js 34
    devstry changes app.js 34 --devlog devLog/2025-08-18.md
"""

from .cli import app, cli_main

__all__ = ["app", "cli_main"]

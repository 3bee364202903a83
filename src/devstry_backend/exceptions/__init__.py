"""
Exceptions package for Devstry.

This package contains custom exception classes for devlog parsing,
discovery and configuration errors.
"""

from .config_exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationValidationError,
    EnvironmentVariableError,
)

from .devlog_exceptions import (
    DevlogError,
    MalformedRangeError,
    DevlogGrammarError,
    DevlogNotFoundError,
)

__all__ = [
    # Configuration exceptions
    "ConfigurationError",
    "ConfigurationFileNotFoundError",
    "ConfigurationValidationError",
    "EnvironmentVariableError",
    # Devlog exceptions
    "DevlogError",
    "MalformedRangeError",
    "DevlogGrammarError",
    "DevlogNotFoundError",
]

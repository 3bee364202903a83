"""Configuration management package.

This package provides a layered configuration system with support for:
- Built-in defaults with an optional JSON configuration file
- Environment variable overrides (including a .env file)
- JSON schema validation

Usage:
    from devstry_backend.utils.config import ConfigManager
    
    config = ConfigManager()
    algorithm = config.get("hashing.algorithm", "sha256")
"""

from .manager import ConfigManager, DEFAULT_CONFIG, merge_configs
from .paths import ConfigPaths
from .file_operations import FileOperations
from .schema_validation import SchemaValidator, CONFIG_SCHEMA
from .environment import EnvironmentHandler

__all__ = [
    'ConfigManager',
    'ConfigPaths',
    'DEFAULT_CONFIG',
    'CONFIG_SCHEMA',
    'FileOperations',
    'SchemaValidator',
    'EnvironmentHandler',
    'merge_configs',
]

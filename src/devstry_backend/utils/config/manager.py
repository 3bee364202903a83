"""
Main configuration manager for Devstry.

Configuration is resolved in layers: built-in defaults, then the optional
``devstry.config.json`` file, then ``DEVSTRY_*`` environment variables (with
a ``.env`` file loaded first), and the result is validated against the
built-in schema.
"""

import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ...exceptions.config_exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationValidationError,
)
from .environment import EnvironmentHandler
from .file_operations import FileOperations
from .paths import ConfigPaths
from .schema_validation import SchemaValidator


logger = logging.getLogger(__name__)


DEFAULT_CONFIG: Dict[str, Any] = {
    "devlog": {
        "directories": ["devLog", "devlog"],
        "extension": ".md",
    },
    "hashing": {
        "algorithm": "sha256",
    },
    "cache": {
        "max_entries": 16,
    },
    "logging": {
        "level": "INFO",
        "format": "standard",
        "file": None,
    },
}


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep-merge ``override`` into a copy of ``base``.
    
    Nested dictionaries are merged key by key; any other value, lists
    included, replaces the base value.
    """
    result = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = deepcopy(value)
    return result


class ConfigManager:
    """
    Configuration manager for Devstry.
    
    Example:
        >>> config = ConfigManager(project_root="/path/to/workspace")
        >>> config.get("hashing.algorithm")
        'sha256'
    """
    
    def __init__(
        self,
        config_file: Optional[str] = None,
        project_root: Optional[Union[str, Path]] = None,
        load_env: bool = True,
    ) -> None:
        """
        Initialize the ConfigManager.
        
        Args:
            config_file: Path to configuration file. When given explicitly the
                file must exist; the default devstry.config.json is optional.
            project_root: Directory relative paths resolve against (default: cwd)
            load_env: Whether to load environment variables from a .env file
        """
        self.project_root = Path(project_root or os.getcwd()).resolve()
        self.paths = ConfigPaths()
        self.config_file = config_file or self.paths.DEFAULT_CONFIG_FILE
        self._explicit_file = config_file is not None
        
        self._config: Dict[str, Any] = {}
        self._loaded = False
        self.logger = logger
        
        self.file_ops = FileOperations(self.project_root, self.paths.ENV_FILE)
        self.schema_validator = SchemaValidator()
        self.env_handler = EnvironmentHandler()
        
        if load_env:
            self.file_ops.load_environment_variables()
    
    @property
    def config(self) -> Dict[str, Any]:
        """Get the current configuration. Loads if not already loaded."""
        if not self._loaded:
            self.load_config()
        return deepcopy(self._config)
    
    @property
    def is_loaded(self) -> bool:
        """Check if configuration has been loaded."""
        return self._loaded
    
    def load_config(self, force_reload: bool = False) -> Dict[str, Any]:
        """
        Load configuration from all sources.
        
        Args:
            force_reload: Force reloading even if already loaded
            
        Returns:
            Loaded configuration dictionary
            
        Raises:
            ConfigurationFileNotFoundError: If an explicit config file is missing
            ConfigurationValidationError: If the merged configuration is invalid
            ConfigurationError: If the file cannot be read or parsed
        """
        if self._loaded and not force_reload:
            return deepcopy(self._config)
        
        config_path = self.file_ops.resolve_path(self.config_file)
        merged = deepcopy(DEFAULT_CONFIG)
        
        try:
            if config_path.exists():
                merged = merge_configs(merged, self.file_ops.load_json_file(config_path))
            elif self._explicit_file:
                raise ConfigurationFileNotFoundError(
                    f"Configuration file not found: {config_path}",
                    str(config_path),
                    searched_paths=[str(self.project_root)]
                )
            else:
                self.logger.debug(f"No configuration file at {config_path}, using defaults")
            
            merged = self.env_handler.apply_environment_overrides(merged)
            self.schema_validator.validate_config(merged, str(config_path))
        except (ConfigurationFileNotFoundError, ConfigurationValidationError) as e:
            self.logger.error(f"Configuration loading failed: {e}")
            self._loaded = False
            raise
        except ConfigurationError:
            self._loaded = False
            raise
        
        self._config = merged
        self._loaded = True
        self.logger.debug("Configuration loaded successfully")
        return deepcopy(self._config)
    
    def reload_config(self) -> Dict[str, Any]:
        """Force reload configuration from all sources."""
        return self.load_config(force_reload=True)
    
    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key using dot notation.
        
        Args:
            key: Configuration key (supports dot notation like 'logging.level')
            default: Default value if key not found
            
        Returns:
            Configuration value or default
        """
        if not self._loaded:
            self.load_config()
        
        value: Any = self._config
        try:
            for k in key.split('.'):
                value = value[k]
        except (KeyError, TypeError):
            return default
        return deepcopy(value)
    
    def reset(self) -> None:
        """Reset configuration state, forcing reload on next access."""
        self._config = {}
        self._loaded = False

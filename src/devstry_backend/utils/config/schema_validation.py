"""
Schema validation for configuration management.

The configuration schema is built in; a validated configuration can be
handed to the devlog services without further checks.
"""

import logging
from typing import Any, Dict, Optional

import jsonschema

from ...exceptions.config_exceptions import ConfigurationValidationError
from ...core.devlog.hash_index import SUPPORTED_ALGORITHMS


logger = logging.getLogger(__name__)


CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "devlog": {
            "type": "object",
            "properties": {
                "directories": {
                    "type": "array",
                    "items": {"type": "string", "minLength": 1},
                    "minItems": 1,
                },
                "extension": {"type": "string", "pattern": r"^\.\w+$"},
            },
            "required": ["directories", "extension"],
        },
        "hashing": {
            "type": "object",
            "properties": {
                "algorithm": {"enum": list(SUPPORTED_ALGORITHMS)},
            },
            "required": ["algorithm"],
        },
        "cache": {
            "type": "object",
            "properties": {
                "max_entries": {"type": "integer", "minimum": 1},
            },
            "required": ["max_entries"],
        },
        "logging": {
            "type": "object",
            "properties": {
                "level": {
                    "type": "string",
                    "pattern": r"(?i)^(debug|info|warning|error|critical)$",
                },
                "format": {"enum": ["standard", "json", "detailed"]},
                "file": {"type": ["string", "null"]},
            },
            "required": ["level", "format"],
        },
    },
    "required": ["devlog", "hashing", "cache", "logging"],
}


class SchemaValidator:
    """
    Schema validation for configuration management.
    
    Wraps ``jsonschema`` and converts its errors into
    ConfigurationValidationError with the offending field paths.
    """
    
    def __init__(self, schema: Optional[Dict[str, Any]] = None) -> None:
        self.schema = schema or CONFIG_SCHEMA
        self.logger = logger
    
    def validate_config(self, config: Dict[str, Any], config_file: str = "unknown") -> bool:
        """
        Validate configuration against the schema.
        
        Args:
            config: Configuration to validate
            config_file: Configuration file name for error reporting
            
        Returns:
            True if validation passes
            
        Raises:
            ConfigurationValidationError: If validation fails
        """
        try:
            jsonschema.validate(config, self.schema)
        except jsonschema.ValidationError as e:
            validation_errors = [e.message]
            invalid_fields = []
            
            if e.absolute_path:
                invalid_fields.append(".".join(str(p) for p in e.absolute_path))
            
            for ctx_error in getattr(e, 'context', None) or []:
                validation_errors.append(ctx_error.message)
                if ctx_error.absolute_path:
                    invalid_fields.append(".".join(str(p) for p in ctx_error.absolute_path))
            
            raise ConfigurationValidationError(
                f"Configuration validation failed: {e.message}",
                config_file,
                validation_errors,
                invalid_fields
            ) from e
        
        return True

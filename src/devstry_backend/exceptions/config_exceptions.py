"""
Configuration exceptions for Devstry.

Every configuration error carries optional fix suggestions, which the CLI
prints below the message.
"""

from typing import List, Optional


class ConfigurationError(Exception):
    """
    Base exception for configuration loading and validation.

    Attributes:
        config_file: File that caused the error, if any
        suggestions: Human-readable hints for fixing it
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ) -> None:
        super().__init__(message)
        self.config_file = config_file
        self.suggestions = list(suggestions or [])

    def __str__(self) -> str:
        lines = [super().__str__()]
        if self.config_file:
            lines.append(f"Config file: {self.config_file}")
        if self.suggestions:
            lines.append("")
            lines.append("Suggestions:")
            lines.extend(f"  {n}. {hint}" for n, hint in enumerate(self.suggestions, 1))
        return "\n".join(lines)


class ConfigurationFileNotFoundError(ConfigurationError):
    """An explicitly requested devstry.config.json does not exist."""

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        searched_paths: Optional[List[str]] = None
    ) -> None:
        self.searched_paths = list(searched_paths or [])
        hints = [
            "Pass the path of an existing JSON file to --config-path",
            "Omit --config-path to run with built-in defaults",
        ]
        if self.searched_paths:
            hints.append(f"Relative paths resolve against: {', '.join(self.searched_paths)}")
        super().__init__(message, config_file, hints)


class ConfigurationValidationError(ConfigurationError):
    """
    The merged configuration does not satisfy the built-in schema.

    Attributes:
        validation_errors: jsonschema messages
        invalid_fields: Dotted paths of the offending values, e.g. ``hashing.algorithm``
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        validation_errors: Optional[List[str]] = None,
        invalid_fields: Optional[List[str]] = None
    ) -> None:
        self.validation_errors = list(validation_errors or [])
        self.invalid_fields = list(invalid_fields or [])
        hints = [f"Check {field} in the file or its DEVSTRY_* variable" for field in self.invalid_fields]
        super().__init__(message, config_file, hints or ["Compare the file with the default configuration"])


class EnvironmentVariableError(ConfigurationError):
    """A DEVSTRY_* variable holds a value that cannot be converted."""

    def __init__(
        self,
        message: str,
        variable_name: Optional[str] = None,
        expected_type: Optional[str] = None
    ) -> None:
        self.variable_name = variable_name
        self.expected_type = expected_type
        hints = []
        if variable_name and expected_type:
            hints.append(f"Set {variable_name} to a {expected_type} or unset it")
        super().__init__(message, None, hints)

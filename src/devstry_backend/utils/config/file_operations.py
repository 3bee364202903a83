"""
Disk access for Devstry configuration: path resolution, the JSON config file
and the optional ``.env`` file.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from dotenv import load_dotenv

from ...exceptions.config_exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
)


logger = logging.getLogger(__name__)


class FileOperations:
    """
    Reads configuration sources relative to a workspace root.

    Attributes:
        project_root: Directory relative paths resolve against
        env_file: Name of the dotenv file inside project_root
    """

    def __init__(self, project_root: Path, env_file: str) -> None:
        self.project_root = project_root
        self.env_file = env_file

    def resolve_path(self, path: Union[str, Path]) -> Path:
        """Expand ``~`` and anchor relative paths at the workspace root."""
        candidate = Path(path).expanduser()
        if candidate.is_absolute():
            return candidate
        return (self.project_root / candidate).resolve()

    def load_environment_variables(self) -> bool:
        """
        Load ``DEVSTRY_*`` variables from the workspace ``.env`` file.

        Variables already present in the process environment are kept.

        Returns:
            True if a .env file was found and loaded
        """
        dotenv_path = self.resolve_path(self.env_file)
        if not dotenv_path.is_file():
            logger.debug(f"No {self.env_file} in {self.project_root}")
            return False

        logger.debug(f"Loading environment from {dotenv_path}")
        return load_dotenv(dotenv_path, override=False)

    def load_json_file(self, file_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Read a configuration file that must hold a single JSON object.

        Raises:
            ConfigurationFileNotFoundError: If the file does not exist
            ConfigurationError: If it cannot be read, is not valid JSON, or
                its top level is not an object
        """
        path = self.resolve_path(file_path)
        if not path.exists():
            raise ConfigurationFileNotFoundError(f"Configuration file not found: {path}", str(path))

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in {path}: {e}")
            raise ConfigurationError(f"Invalid JSON in configuration file: {e}", str(path)) from e
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Cannot read {path}: {e}")
            raise ConfigurationError(f"Cannot read configuration file: {e}", str(path)) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration must be a JSON object, got {type(data).__name__}",
                str(path),
            )

        logger.info(f"Loaded configuration from {path}")
        return data

"""
Environment variable overrides for Devstry configuration.

``DEVSTRY_*`` variables take precedence over the configuration file. A value
that cannot be converted is logged and ignored, so one bad variable never
prevents the CLI from starting.
"""

import json
import logging
import os
from copy import deepcopy
from typing import Any, Dict, Optional, Tuple

from ...exceptions.config_exceptions import EnvironmentVariableError


logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"true", "1", "yes", "on", "enabled"})


class EnvironmentHandler:
    """
    Applies ``DEVSTRY_*`` overrides to a configuration dictionary.

    ``DEVSTRY_DEVLOG_DIR`` is special: it is prepended to
    ``devlog.directories`` instead of replacing the list, so the configured
    directories stay available as fallbacks.
    """

    DEVLOG_DIR_VAR = "DEVSTRY_DEVLOG_DIR"

    ENV_MAPPING: Dict[str, Tuple[str, str]] = {
        "DEVSTRY_HASH_ALGORITHM": ("hashing.algorithm", "string"),
        "DEVSTRY_CACHE_SIZE": ("cache.max_entries", "integer"),
        "DEVSTRY_LOG_LEVEL": ("logging.level", "string"),
        "DEVSTRY_LOG_FORMAT": ("logging.format", "string"),
        "DEVSTRY_LOG_FILE": ("logging.file", "string"),
    }

    def get_env_mapping(self) -> Dict[str, Tuple[str, str]]:
        """Return variable name -> (dotted config key, target type)."""
        return dict(self.ENV_MAPPING)

    def convert_env_value(self, value: str, target_type: str = "string", var_name: Optional[str] = None) -> Any:
        """
        Convert a raw variable value to ``target_type``.

        Args:
            value: Raw value from the environment
            target_type: One of ``string``, ``integer``, ``boolean``, ``json``
            var_name: Variable name, reported on failure

        Returns:
            The converted value; None for an empty value

        Raises:
            EnvironmentVariableError: If the value cannot be converted
        """
        if not value:
            return None

        if target_type == "boolean":
            return value.strip().lower() in _TRUE_VALUES

        try:
            if target_type == "integer":
                return int(value)
            if target_type == "json":
                return json.loads(value)
        except ValueError as e:
            raise EnvironmentVariableError(
                f"Cannot convert {var_name or 'environment value'}={value!r} to {target_type}: {e}",
                var_name,
                target_type,
            ) from e

        return value

    def apply_environment_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Return a copy of ``config`` with every set ``DEVSTRY_*`` variable applied."""
        result = deepcopy(config)

        devlog_dir = (os.getenv(self.DEVLOG_DIR_VAR) or "").strip()
        if devlog_dir:
            devlog = result.setdefault("devlog", {})
            others = [d for d in devlog.get("directories", []) if d != devlog_dir]
            devlog["directories"] = [devlog_dir] + others
            logger.debug(f"{self.DEVLOG_DIR_VAR} prepended to devlog.directories")

        for env_var, (config_key, target_type) in self.ENV_MAPPING.items():
            raw = os.getenv(env_var)
            # An empty value (e.g. `DEVSTRY_LOG_LEVEL=` in .env) counts as unset.
            if raw is None or not raw.strip():
                continue

            try:
                converted = self.convert_env_value(raw, target_type, env_var)
            except EnvironmentVariableError as e:
                logger.warning(f"Ignoring {env_var}: {e}")
                continue

            _set_dotted(result, config_key, converted)
            logger.debug(f"{env_var} overrides {config_key}")

        return result


def _set_dotted(config: Dict[str, Any], key_path: str, value: Any) -> None:
    """Set ``config["a"]["b"] = value`` for ``key_path`` ``"a.b"``."""
    *parents, leaf = key_path.split(".")
    current = config
    for key in parents:
        current = current.setdefault(key, {})
    current[leaf] = value

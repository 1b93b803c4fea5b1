"""Layered key-value store the argument resolver reads from.

Values are looked up in this order, the first layer holding the key wins:

1. explicit overrides (``set`` and command line flags)
2. environment variables (``SHIM_LOGGER_<KEY>``)
3. values loaded from a YAML config file
4. defaults

A key missing from every layer is unset, which is different from a key set to
an empty string.
"""

import json
import logging
from collections.abc import Mapping
from os import environ as os_environ
from pathlib import Path
from typing import Any

import yaml

from src.constants import ENV_PREFIX

logger = logging.getLogger(__name__)


class ConfigFileError(Exception):
    """Exception raised when a config file does not hold a key-value mapping."""


def normalize_key(key: str) -> str:
    """Return the canonical dashed lower-case form of a configuration key."""
    return key.strip().lower().replace("_", "-")


def env_var_name(key: str) -> str:
    """Return the environment variable consulted for a configuration key."""
    return ENV_PREFIX + normalize_key(key).replace("-", "_").upper()


def to_config_value(value: Any) -> str:
    """Convert a YAML value into the string form stored in the config.

    Args:
        value: Scalar, list or mapping loaded from YAML

    Returns:
        String value; lists and mappings are JSON encoded
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)


class ConfigStore:
    """String keyed, string valued configuration with layered sources."""

    def __init__(
        self,
        defaults: Mapping[str, str] | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        """Initialize the store.

        Args:
            defaults: Lowest priority values
            environ: Environment mapping to read overrides from. None means
                the process environment; pass an empty dict to ignore it.
        """
        self._environ = os_environ if environ is None else environ
        self._overrides: dict[str, str] = {}
        self._file_values: dict[str, str] = {}
        self._defaults: dict[str, str] = {}
        for key, value in (defaults or {}).items():
            self.set_default(key, value)

    def get(self, key: str) -> str | None:
        """Get the effective value of a key.

        Args:
            key: Configuration key, e.g. ``container-id``

        Returns:
            The value from the highest priority layer, or None when unset
        """
        key = normalize_key(key)
        if key in self._overrides:
            return self._overrides[key]
        env_value = self._environ.get(env_var_name(key))
        if env_value is not None:
            return env_value
        if key in self._file_values:
            return self._file_values[key]
        return self._defaults.get(key)

    def is_set(self, key: str) -> bool:
        return self.get(key) is not None

    def set(self, key: str, value: str) -> None:
        self._overrides[normalize_key(key)] = value

    def unset(self, key: str) -> None:
        self._overrides.pop(normalize_key(key), None)

    def set_default(self, key: str, value: str) -> None:
        self._defaults[normalize_key(key)] = value

    def bind_args(self, values: Mapping[str, Any]) -> None:
        """Copy command line values into the override layer.

        Args:
            values: Mapping of option name to value; None values are skipped
                so that lower layers still apply
        """
        for key, value in values.items():
            if value is not None:
                self.set(key, to_config_value(value))

    def load_file(self, path: Path) -> None:
        """Load configuration values from a YAML file.

        Args:
            path: Path to the YAML file

        Raises:
            FileNotFoundError: If the file does not exist
            yaml.YAMLError: If the file is not valid YAML
            ConfigFileError: If the document is not a mapping
        """
        with open(path, "r", encoding="utf-8") as f:
            content = yaml.safe_load(f)

        # an empty file loads as None
        if content is None:
            content = {}
        if not isinstance(content, dict):
            raise ConfigFileError(
                f"Config file {path} must contain a mapping, "
                f"got {type(content).__name__}"
            )

        for key, value in content.items():
            if value is not None:
                self._file_values[normalize_key(str(key))] = to_config_value(value)
        logger.debug("Loaded %d values from %s", len(content), path)

    def reset(self) -> None:
        """Unset every key. The environment mapping itself is left untouched."""
        self._overrides.clear()
        self._file_values.clear()
        self._defaults.clear()

    def as_dict(self, keys: list[str] | tuple[str, ...]) -> dict[str, str | None]:
        """Return the effective value of each of the given keys."""
        return {normalize_key(key): self.get(key) for key in keys}

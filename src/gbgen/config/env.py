"""Environment variable reader with dependency injection support.

EnvReader reads GBGEN_* variables with type conversion. Tests pass an
explicit mapping instead of touching os.environ.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_ENV_PREFIX = "GBGEN"

_TRUE_VALUES = frozenset({"1", "t", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "f", "false", "no", "off"})


class EnvReader:
    """Environment variable reader with type conversion.

    Empty values are treated the same as unset ones, so an exported but
    blank variable never overrides a config file value.

    Example:
        reader = EnvReader(env={"GBGEN_API_KEY": "secret_x"})
        reader.get_str(reader.key("API_KEY"))  # "secret_x"
    """

    def __init__(
        self,
        env: Mapping[str, str] | None = None,
        prefix: str = DEFAULT_ENV_PREFIX,
    ) -> None:
        """Initialize the environment reader.

        Args:
            env: Optional mapping to use instead of os.environ.
            prefix: Variable prefix used by key(). Blank falls back to GBGEN.
        """
        self._env: Mapping[str, str] = env if env is not None else os.environ
        self._prefix = prefix.strip() or DEFAULT_ENV_PREFIX

    @property
    def prefix(self) -> str:
        return self._prefix

    def key(self, name: str) -> str:
        """Return the prefixed variable name, e.g. key("API_KEY")."""
        return f"{self._prefix}_{name}"

    def _raw(self, var: str) -> str | None:
        value = self._env.get(var)
        if value is None or value == "":
            return None
        return value

    def get_str(self, var: str, default: str | None = None) -> str | None:
        """Get a string from environment variable.

        Args:
            var: Environment variable name.
            default: Default value if unset or empty.

        Returns:
            The environment variable value, or default.
        """
        value = self._raw(var)
        return default if value is None else value

    def get_int(self, var: str, default: int | None = None) -> int | None:
        """Get an integer from environment variable.

        Logs a warning and returns default when the value is not an integer.
        """
        value = self._raw(var)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid integer value for %s: %s", var, value)
            return default

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Get a boolean from environment variable.

        Recognizes 1/t/true/yes/on and 0/f/false/no/off (case-insensitive).
        Anything else is ignored with a warning.
        """
        value = self._raw(var)
        if value is None:
            return default
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        logger.warning("Invalid boolean value for %s: %s", var, value)
        return default

    def get_path(self, var: str, default: Path | None = None) -> Path | None:
        """Get a path from environment variable, with tilde expansion."""
        value = self._raw(var)
        if value is None:
            return default
        return Path(value).expanduser()

"""Configuration errors."""

from __future__ import annotations

from gbgen.exceptions import GBGenError


class ConfigError(GBGenError):
    """Base class for configuration errors."""


class ConfigFormatError(ConfigError):
    """Raised when a config file cannot be read, parsed, or written."""


class ConfigValidationError(ConfigError):
    """User-facing error listing every problem found in a config.

    Attributes:
        problems: One human-readable line per problem, e.g.
            "growthbook.apiKey is required".
    """

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        super().__init__(self._render())

    def _render(self) -> str:
        if not self.problems:
            return "invalid configuration"
        lines = ["invalid configuration:"]
        lines.extend(f" - {problem}" for problem in self.problems)
        return "\n".join(lines)

"""Whole-config validation with user-friendly problem lists."""

from __future__ import annotations

from urllib.parse import urlparse

from gbgen.config.exceptions import ConfigValidationError
from gbgen.config.models import GBGenConfig


def _is_http_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _is_dotted_identifier(value: str) -> bool:
    return bool(value) and all(part.isidentifier() for part in value.split("."))


def collect_problems(config: GBGenConfig) -> list[str]:
    """Return every problem in the config, in a stable order."""
    problems: list[str] = []
    growthbook = config.growthbook
    generator = config.generator

    if not growthbook.api_base_url.strip():
        problems.append("growthbook.apiBaseURL is required")
    elif not _is_http_url(growthbook.api_base_url):
        problems.append(
            "growthbook.apiBaseURL must be a valid URL "
            "(e.g. https://api.growthbook.io)"
        )

    if not growthbook.api_key.strip():
        problems.append("growthbook.apiKey is required")
    elif any(ch.isspace() for ch in growthbook.api_key):
        problems.append("growthbook.apiKey must not contain whitespace")

    if not 1 <= growthbook.timeout_seconds <= 300:
        problems.append("growthbook.timeoutSeconds must be between 1 and 300")

    if not generator.output_dir.strip():
        problems.append("generator.outputDir is required")

    if not generator.package_name.strip():
        problems.append("generator.packageName is required")
    elif not _is_dotted_identifier(generator.package_name):
        problems.append(
            "generator.packageName must be a Python package name "
            "(e.g. myapp.growthbooktypes)"
        )

    return problems


def validate_config(config: GBGenConfig) -> None:
    """Validate a merged config.

    Raises:
        ConfigValidationError: Listing every problem found.
    """
    problems = collect_problems(config)
    if problems:
        raise ConfigValidationError(problems)

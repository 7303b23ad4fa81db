"""Configuration data models.

This module defines dataclasses for gbgen configuration options. Field
validation that needs the whole config lives in gbgen.config.validation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_API_BASE_URL = "https://api.growthbook.io"
DEFAULT_OUTPUT_DIR = "./growthbooktypes"
DEFAULT_PACKAGE_NAME = "growthbooktypes"
SAMPLE_API_KEY = "secret_***"  # pragma: allowlist secret


@dataclass
class GrowthBookConfig:
    """Connection settings for the GrowthBook REST API."""

    api_base_url: str = DEFAULT_API_BASE_URL
    """Base URL of the API. "/api/v1" is appended when missing."""

    api_key: str = ""
    """Secret API key, sent as a bearer token."""

    project_id: str | None = None
    """Only list features of this project when set."""

    timeout_seconds: int = 30
    """Per-request timeout in seconds (1-300)."""


@dataclass
class GeneratorConfig:
    """Settings that shape the generated module."""

    output_dir: str = DEFAULT_OUTPUT_DIR
    package_name: str = DEFAULT_PACKAGE_NAME

    emit_typed_features: bool = False
    """Emit value-type wrappers instead of plain keys."""

    emit_feature_list: bool = False
    """Also emit FeatureList with every key in catalog order."""


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "info"
    file: Path | None = None
    format: str = "text"
    include_stderr: bool = False
    max_bytes: int = 10_485_760
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.casefold() not in valid_levels:
            raise ValueError(
                f"logging level must be one of {sorted(valid_levels)}, "
                f"got {self.level!r}"
            )
        if self.format.casefold() not in {"text", "json"}:
            raise ValueError(f"logging format must be text or json, got {self.format!r}")


@dataclass
class GBGenConfig:
    """The single merged configuration for gbgen."""

    growthbook: GrowthBookConfig = field(default_factory=GrowthBookConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def sample_config() -> GBGenConfig:
    """Return the config written by ``gbgen init``, with a placeholder key."""
    config = GBGenConfig()
    config.growthbook.api_key = SAMPLE_API_KEY
    return config

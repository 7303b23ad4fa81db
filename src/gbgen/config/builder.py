"""Configuration builder with explicit layering.

This module provides ConfigBuilder for building GBGenConfig by composing
multiple configuration sources with explicit precedence handling.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from gbgen.config.env import EnvReader
from gbgen.config.exceptions import ConfigFormatError
from gbgen.config.models import (
    DEFAULT_API_BASE_URL,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PACKAGE_NAME,
    GBGenConfig,
    GeneratorConfig,
    GrowthBookConfig,
    LoggingConfig,
)


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None values indicate "not specified in this source" and will not
    override values from lower-precedence sources.
    """

    # GrowthBook connection
    api_base_url: str | None = None
    api_key: str | None = None
    project_id: str | None = None
    timeout_seconds: int | None = None

    # Generator
    output_dir: str | None = None
    package_name: str | None = None
    emit_typed_features: bool | None = None
    emit_feature_list: bool | None = None

    # Logging
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None


class ConfigBuilder:
    """Builds GBGenConfig by layering ConfigSources with precedence.

    Later sources override earlier ones (for non-None values).

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config))
        builder.apply(source_from_env(reader))
        builder.apply(cli_source)
        config = builder.build()
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def apply(self, source: ConfigSource) -> None:
        """Apply configuration source, overriding existing values.

        Args:
            source: Configuration source to apply.
        """
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build(self) -> GBGenConfig:
        """Build the final GBGenConfig with defaults for unset values.

        Raises:
            ValueError: If a logging value is invalid.
        """
        growthbook = GrowthBookConfig(
            api_base_url=self._get("api_base_url", DEFAULT_API_BASE_URL),
            api_key=self._get("api_key", ""),
            # An empty project id means "all projects"
            project_id=self._get("project_id", None) or None,
            timeout_seconds=self._get("timeout_seconds", 30),
        )

        generator = GeneratorConfig(
            output_dir=self._get("output_dir", DEFAULT_OUTPUT_DIR),
            package_name=self._get("package_name", DEFAULT_PACKAGE_NAME),
            emit_typed_features=self._get("emit_typed_features", False),
            emit_feature_list=self._get("emit_feature_list", False),
        )

        logging_config = LoggingConfig(
            level=self._get("logging_level", "info"),
            file=self._get("logging_file", None),
            format=self._get("logging_format", "text"),
            include_stderr=self._get("logging_include_stderr", False),
        )

        return GBGenConfig(
            growthbook=growthbook,
            generator=generator,
            logging=logging_config,
        )


def _section(file_config: dict[str, Any], name: str) -> dict[str, Any]:
    section = file_config.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigFormatError(f"{name} must be a mapping")
    return section


def _typed(section: dict[str, Any], path: str, key: str, expected: type) -> Any:
    """Return section[key] if present, checking its type."""
    value = section.get(key)
    if value is None:
        return None
    # bool is a subclass of int; a boolean timeout is still a mistake
    if not isinstance(value, expected) or (
        expected is int and isinstance(value, bool)
    ):
        raise ConfigFormatError(
            f"{path}.{key} must be a {expected.__name__}, "
            f"got {type(value).__name__}"
        )
    return value


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create ConfigSource from a parsed config file.

    Args:
        file_config: Parsed configuration dictionary.

    Returns:
        ConfigSource with values from the config file.

    Raises:
        ConfigFormatError: If a known key has the wrong type.
    """
    growthbook = _section(file_config, "growthbook")
    generator = _section(file_config, "generator")
    logging_conf = _section(file_config, "logging")

    log_file_str = _typed(logging_conf, "logging", "file", str)
    log_file = Path(log_file_str).expanduser() if log_file_str else None

    return ConfigSource(
        api_base_url=_typed(growthbook, "growthbook", "apiBaseURL", str),
        api_key=_typed(growthbook, "growthbook", "apiKey", str),
        project_id=_typed(growthbook, "growthbook", "projectID", str),
        timeout_seconds=_typed(growthbook, "growthbook", "timeoutSeconds", int),
        output_dir=_typed(generator, "generator", "outputDir", str),
        package_name=_typed(generator, "generator", "packageName", str),
        emit_typed_features=_typed(generator, "generator", "emitTypedFeatures", bool),
        emit_feature_list=_typed(generator, "generator", "emitFeatureList", bool),
        logging_level=_typed(logging_conf, "logging", "level", str),
        logging_file=log_file,
        logging_format=_typed(logging_conf, "logging", "format", str),
        logging_include_stderr=_typed(logging_conf, "logging", "includeStderr", bool),
    )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create ConfigSource from GBGEN_* environment variables.

    Args:
        reader: EnvReader instance for reading environment variables.

    Returns:
        ConfigSource with values from environment variables.
    """
    return ConfigSource(
        api_base_url=reader.get_str(reader.key("API_BASE_URL")),
        api_key=reader.get_str(reader.key("API_KEY")),
        project_id=reader.get_str(reader.key("PROJECT_ID")),
        timeout_seconds=reader.get_int(reader.key("TIMEOUT_SECONDS")),
        output_dir=reader.get_str(reader.key("OUTPUT_DIR")),
        package_name=reader.get_str(reader.key("PACKAGE_NAME")),
        emit_typed_features=reader.get_bool(reader.key("EMIT_TYPED_FEATURES")),
        emit_feature_list=reader.get_bool(reader.key("EMIT_FEATURE_LIST")),
        logging_level=reader.get_str(reader.key("LOG_LEVEL")),
        logging_file=reader.get_path(reader.key("LOG_FILE")),
        logging_format=reader.get_str(reader.key("LOG_FORMAT")),
    )

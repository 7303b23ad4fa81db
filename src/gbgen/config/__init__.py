"""Configuration for gbgen: models, layered loading and validation."""

from gbgen.config.builder import ConfigBuilder, ConfigSource
from gbgen.config.codec import ConfigFormat, detect_format, dumps
from gbgen.config.env import EnvReader
from gbgen.config.exceptions import (
    ConfigError,
    ConfigFormatError,
    ConfigValidationError,
)
from gbgen.config.loader import LoadOptions, load_config
from gbgen.config.models import (
    GBGenConfig,
    GeneratorConfig,
    GrowthBookConfig,
    LoggingConfig,
    sample_config,
)
from gbgen.config.validation import validate_config

__all__ = [
    "ConfigBuilder",
    "ConfigError",
    "ConfigFormat",
    "ConfigFormatError",
    "ConfigSource",
    "ConfigValidationError",
    "EnvReader",
    "GBGenConfig",
    "GeneratorConfig",
    "GrowthBookConfig",
    "LoadOptions",
    "LoggingConfig",
    "detect_format",
    "dumps",
    "load_config",
    "sample_config",
    "validate_config",
]

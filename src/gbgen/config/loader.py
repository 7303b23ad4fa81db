"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. Explicit overrides (CLI flags)
2. Environment variables (GBGEN_*)
3. Config file (--config, json/yaml/toml)
4. Default values

Environment variables:
- GBGEN_API_BASE_URL: GrowthBook API base URL
- GBGEN_API_KEY: GrowthBook secret API key
- GBGEN_PROJECT_ID: Only generate features of this project
- GBGEN_TIMEOUT_SECONDS: Per-request timeout in seconds
- GBGEN_OUTPUT_DIR: Directory that receives features_gen.py
- GBGEN_PACKAGE_NAME: Package name used in the generated docstring
- GBGEN_EMIT_TYPED_FEATURES: Emit typed wrappers (true/false)
- GBGEN_EMIT_FEATURE_LIST: Emit FeatureList (true/false)
- GBGEN_LOG_LEVEL / GBGEN_LOG_FILE / GBGEN_LOG_FORMAT: Logging overrides
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from gbgen.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from gbgen.config.codec import load_file
from gbgen.config.env import DEFAULT_ENV_PREFIX, EnvReader
from gbgen.config.exceptions import ConfigValidationError
from gbgen.config.models import GBGenConfig

logger = logging.getLogger(__name__)


@dataclass
class LoadOptions:
    """Inputs for load_config."""

    config_path: Path | None = None
    env_prefix: str = DEFAULT_ENV_PREFIX
    overrides: ConfigSource = field(default_factory=ConfigSource)


def load_config(
    options: LoadOptions | None = None,
    reader: EnvReader | None = None,
) -> GBGenConfig:
    """Build the final config: overrides > env > config file > defaults.

    This performs no cross-field validation; call validate_config() for that.

    Args:
        options: Config path, env prefix and explicit overrides.
        reader: Environment reader. Defaults to one over os.environ using
            options.env_prefix.

    Returns:
        The merged configuration.

    Raises:
        ConfigFormatError: If the config file cannot be read or parsed.
        ConfigValidationError: If a logging value is invalid.
    """
    options = options or LoadOptions()
    reader = reader or EnvReader(prefix=options.env_prefix)

    builder = ConfigBuilder()

    if options.config_path is not None:
        file_config = load_file(options.config_path)
        builder.apply(source_from_file(file_config))

    builder.apply(source_from_env(reader))
    builder.apply(options.overrides)

    try:
        config = builder.build()
    except ValueError as e:
        raise ConfigValidationError([str(e)]) from e

    logger.debug(
        "Config loaded: base_url=%s project=%s output_dir=%s typed=%s list=%s",
        config.growthbook.api_base_url,
        config.growthbook.project_id or "<all>",
        config.generator.output_dir,
        config.generator.emit_typed_features,
        config.generator.emit_feature_list,
    )
    return config

"""Config file formats: JSON, YAML and TOML.

Files use the camelCase keys of the GrowthBook tooling, grouped under
``growthbook``, ``generator`` and ``logging`` sections:

    growthbook:
      apiBaseURL: https://api.growthbook.io
      apiKey: secret_***
    generator:
      outputDir: ./growthbooktypes
      packageName: growthbooktypes
"""

from __future__ import annotations

import json
import logging
import tomllib
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from gbgen.config.exceptions import ConfigFormatError
from gbgen.config.models import GBGenConfig

logger = logging.getLogger(__name__)


class ConfigFormat(str, Enum):
    """Supported config file formats."""

    JSON = "json"
    YAML = "yaml"
    TOML = "toml"


_EXTENSIONS: dict[str, ConfigFormat] = {
    ".json": ConfigFormat.JSON,
    ".yml": ConfigFormat.YAML,
    ".yaml": ConfigFormat.YAML,
    ".toml": ConfigFormat.TOML,
}

_FORMAT_ALIASES: dict[str, ConfigFormat] = {
    "json": ConfigFormat.JSON,
    "yaml": ConfigFormat.YAML,
    "yml": ConfigFormat.YAML,
    "toml": ConfigFormat.TOML,
}


def normalize_format(value: str) -> ConfigFormat:
    """Parse a user supplied format name (json, yaml, yml, toml)."""
    fmt = _FORMAT_ALIASES.get(value.strip().lower())
    if fmt is None:
        raise ConfigFormatError(
            f"unsupported format {value!r} (expected json|yaml|toml)"
        )
    return fmt


def format_from_extension(path: Path) -> ConfigFormat:
    """Return the format for a config file path, failing on unknown extensions."""
    fmt = _EXTENSIONS.get(path.suffix.lower())
    if fmt is None:
        raise ConfigFormatError(
            f"unsupported config extension {path.suffix!r} "
            "(expected .json/.yaml/.yml/.toml)"
        )
    return fmt


def detect_format(path: Path, override: str | None = None) -> ConfigFormat:
    """Resolve the format for writing a config file.

    An explicit override wins. Otherwise the extension decides, and unknown
    or missing extensions default to YAML.
    """
    if override and override.strip():
        return normalize_format(override)
    return _EXTENSIONS.get(path.suffix.lower(), ConfigFormat.YAML)


def loads(text: str, fmt: ConfigFormat) -> dict[str, Any]:
    """Parse config text into a dictionary.

    Raises:
        ConfigFormatError: If the text is malformed or not a mapping.
    """
    try:
        if fmt is ConfigFormat.JSON:
            data = json.loads(text) if text.strip() else {}
        elif fmt is ConfigFormat.YAML:
            data = yaml.safe_load(text)
        else:
            data = tomllib.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError, tomllib.TOMLDecodeError) as e:
        raise ConfigFormatError(f"parse {fmt.value} config: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigFormatError(
            f"parse {fmt.value} config: top level must be a mapping, "
            f"got {type(data).__name__}"
        )
    return data


def load_file(path: Path) -> dict[str, Any]:
    """Read and parse a config file, choosing the format from its extension."""
    fmt = format_from_extension(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigFormatError(f"cannot read config file {path}: {e}") from e
    logger.debug("Loaded %s config from %s", fmt.value, path)
    return loads(text, fmt)


def config_to_dict(config: GBGenConfig) -> dict[str, Any]:
    """Convert a config into the file layout. Unset optional values are omitted."""
    growthbook: dict[str, Any] = {
        "apiBaseURL": config.growthbook.api_base_url,
        "apiKey": config.growthbook.api_key,
    }
    if config.growthbook.project_id is not None:
        growthbook["projectID"] = config.growthbook.project_id
    growthbook["timeoutSeconds"] = config.growthbook.timeout_seconds

    logging_section: dict[str, Any] = {
        "level": config.logging.level,
        "format": config.logging.format,
    }
    if config.logging.file is not None:
        logging_section["file"] = str(config.logging.file)

    return {
        "growthbook": growthbook,
        "generator": {
            "outputDir": config.generator.output_dir,
            "packageName": config.generator.package_name,
            "emitTypedFeatures": config.generator.emit_typed_features,
            "emitFeatureList": config.generator.emit_feature_list,
        },
        "logging": logging_section,
    }


def dumps(config: GBGenConfig, fmt: ConfigFormat) -> str:
    """Serialize a config in the given format."""
    data = config_to_dict(config)
    if fmt is ConfigFormat.JSON:
        return json.dumps(data, indent=2) + "\n"
    if fmt is ConfigFormat.YAML:
        return yaml.safe_dump(data, sort_keys=False)
    return _dump_toml(data)


def _toml_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        # JSON string escapes are a subset of TOML basic-string escapes
        return json.dumps(value, ensure_ascii=False)
    raise ConfigFormatError(f"cannot write {type(value).__name__} value as TOML")


def _dump_toml(data: dict[str, Any]) -> str:
    """Write the two-level section layout produced by config_to_dict."""
    blocks: list[str] = []
    for section, values in data.items():
        lines = [f"[{section}]"]
        lines.extend(f"{key} = {_toml_value(value)}" for key, value in values.items())
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks) + "\n"

"""Generate a Python module of GrowthBook feature keys.

Output behavior:
- Always writes a single file named "features_gen.py" (the file content
  varies by config).
- Generated identifiers are derived from feature ids and deduplicated when
  needed.
"""

from gbgen.generator.exceptions import (
    EmptyResponseError,
    FormatError,
    GenerationCancelledError,
    GeneratorError,
    PaginationStalledError,
    UnsupportedValueTypeError,
)
from gbgen.generator.generator import OUTPUT_FILE_NAME, Generator, write_output
from gbgen.generator.keys import render_feature_keys
from gbgen.generator.meta import FeatureMeta, NamedFeature, fetch_all_feature_meta
from gbgen.generator.naming import name_and_dedupe, to_exported_identifier
from gbgen.generator.typed import render_typed_features

__all__ = [
    "OUTPUT_FILE_NAME",
    "EmptyResponseError",
    "FeatureMeta",
    "FormatError",
    "GenerationCancelledError",
    "Generator",
    "GeneratorError",
    "NamedFeature",
    "PaginationStalledError",
    "UnsupportedValueTypeError",
    "fetch_all_feature_meta",
    "name_and_dedupe",
    "render_feature_keys",
    "render_typed_features",
    "to_exported_identifier",
    "write_output",
]

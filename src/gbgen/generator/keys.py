"""Keys-only rendering: one FeatureKey constant per feature."""

from __future__ import annotations

from collections.abc import Sequence

from gbgen.generator.meta import NamedFeature
from gbgen.generator.naming import feature_names
from gbgen.generator.render import (
    KEY_TYPE_NAME,
    OUTPUT_MODULE,
    PreambleOptions,
    comment_lines,
    format_python,
    package_or_default,
    render_key_type,
    render_list,
    render_preamble,
    str_literal,
)


def render_feature_keys(
    package_name: str,
    features: Sequence[NamedFeature],
    emit_list: bool,
    *,
    version: str,
) -> bytes:
    """Render the keys-only module.

    Args:
        package_name: Package the module is imported from (docstring only).
        features: Named catalog in id order.
        emit_list: Also emit FeatureList with every constant.
        version: gbgen version for the generated-code banner.

    Returns:
        Formatted module source.

    Raises:
        FormatError: If the rendered text is not valid Python.
    """
    pkg = package_or_default(package_name)

    lines = render_preamble(
        PreambleOptions(
            package_name=pkg,
            version=version,
            doc_lines=[
                f"Package {pkg} contains generated GrowthBook feature keys.",
                "",
                "Example:",
                f"    from {pkg} import {OUTPUT_MODULE}",
                "",
                "    # Use the generated keys with your GrowthBook SDK wrapper / evaluator.",
                f'    key = {OUTPUT_MODULE}.{KEY_TYPE_NAME}("example")',
            ],
            imports=["from typing import Final, NewType"],
        )
    )

    lines.extend(render_key_type())

    for feature in features:
        lines.extend(comment_lines(feature))
        lines.append(
            f"{feature.name}: Final[{KEY_TYPE_NAME}] = "
            f"{KEY_TYPE_NAME}({str_literal(feature.id)})"
        )

    if emit_list:
        lines.append("")
        lines.extend(render_list(feature_names(features)))

    return format_python("\n".join(lines) + "\n")

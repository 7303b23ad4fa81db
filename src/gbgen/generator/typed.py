"""Typed rendering: one value-type wrapper per feature."""

from __future__ import annotations

from collections.abc import Sequence

from gbgen.api.models import FeatureValueType
from gbgen.generator.exceptions import UnsupportedValueTypeError
from gbgen.generator.meta import NamedFeature
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

RUNTIME_IMPORT = "from gbgen import types"

_TYPE_EXPRS: dict[FeatureValueType, str] = {
    FeatureValueType.BOOLEAN: "types.BooleanFeature",
    FeatureValueType.STRING: "types.StringFeature",
    FeatureValueType.NUMBER: "types.NumberFeature",
    FeatureValueType.JSON: "types.JSONFeature",
}


def typed_feature_type_expr(feature: NamedFeature) -> str:
    """Return the wrapper constructor for a feature's value type.

    Raises:
        UnsupportedValueTypeError: If the value type has no wrapper.
    """
    try:
        value_type = FeatureValueType(feature.value_type)
    except ValueError:
        raise UnsupportedValueTypeError(feature.id, feature.value_type) from None
    return _TYPE_EXPRS[value_type]


def render_typed_features(
    package_name: str,
    features: Sequence[NamedFeature],
    emit_list: bool,
    *,
    version: str,
) -> bytes:
    """Render the typed module.

    Args:
        package_name: Package the module is imported from (docstring only).
        features: Named catalog in id order.
        emit_list: Also declare FeatureKey and a FeatureList of every key.
        version: gbgen version for the generated-code banner.

    Returns:
        Formatted module source.

    Raises:
        UnsupportedValueTypeError: If any feature has an unknown value type.
            Nothing is rendered in that case.
        FormatError: If the rendered text is not valid Python.
    """
    pkg = package_or_default(package_name)

    if emit_list:
        typing_import = "from typing import Final, NewType"
    else:
        typing_import = "from typing import Final"

    lines = render_preamble(
        PreambleOptions(
            package_name=pkg,
            version=version,
            doc_lines=[
                f"Package {pkg} contains generated GrowthBook typed feature helpers.",
                "",
                "Example:",
                "    from growthbook import GrowthBook",
                f"    from {pkg} import {OUTPUT_MODULE}",
                "",
                "    gb = GrowthBook(...)",
                f"    enabled = gb.is_on({OUTPUT_MODULE}.FeatureExample)",
            ],
            imports=[typing_import, "", RUNTIME_IMPORT],
        )
    )

    if emit_list:
        lines.extend(render_key_type())

    for feature in features:
        type_expr = typed_feature_type_expr(feature)
        lines.extend(comment_lines(feature))
        lines.append(f"{feature.name}: Final = {type_expr}({str_literal(feature.id)})")

    if emit_list:
        lines.append("")
        lines.extend(
            render_list(
                [f"{KEY_TYPE_NAME}({str_literal(feature.id)})" for feature in features]
            )
        )

    return format_python("\n".join(lines) + "\n")

"""Unit tests for keys-only rendering."""

from __future__ import annotations

import ast

import black

from gbgen.generator.keys import render_feature_keys
from gbgen.generator.meta import NamedFeature
from gbgen.generator.render import DEPRECATED_COMMENT


def _named(
    name: str,
    feature_id: str,
    description: str = "",
    inactive: bool = False,
    value_type: str = "boolean",
) -> NamedFeature:
    return NamedFeature(
        name=name,
        id=feature_id,
        description=description,
        value_type=value_type,
        no_active_environments=inactive,
    )


EXAMPLE = [
    _named("FeatureCheckoutRedesign", "checkout-redesign"),
    _named("FeatureDisabledFeature", "disabled-feature", inactive=True),
]


def _render(features, emit_list: bool = False, package: str = "growthbooktypes"):
    return render_feature_keys(package, features, emit_list, version="1.2.3").decode()


class TestRenderFeatureKeys:
    """Tests for render_feature_keys()."""

    def test_example_with_list(self) -> None:
        """Constants, deprecation marker and list for the two-feature catalog."""
        text = _render(EXAMPLE, emit_list=True)
        lines = text.splitlines()

        assert 'FeatureKey = NewType("FeatureKey", str)' in lines
        active = (
            'FeatureCheckoutRedesign: Final[FeatureKey] = '
            'FeatureKey("checkout-redesign")'
        )
        disabled = (
            'FeatureDisabledFeature: Final[FeatureKey] = '
            'FeatureKey("disabled-feature")'
        )
        assert active in lines
        assert disabled in lines

        # The deprecation marker belongs to disabled-feature only
        assert lines[lines.index(disabled) - 1] == DEPRECATED_COMMENT
        assert lines[lines.index(active) - 1] != DEPRECATED_COMMENT
        assert text.count(DEPRECATED_COMMENT) == 1

        list_start = lines.index("FeatureList: Final[list[FeatureKey]] = [")
        assert lines[list_start + 1 : list_start + 4] == [
            "    FeatureCheckoutRedesign,",
            "    FeatureDisabledFeature,",
            "]",
        ]

    def test_without_list(self) -> None:
        """FeatureList is omitted unless requested."""
        text = _render(EXAMPLE)
        assert "FeatureList" not in text
        assert "FeatureKey = NewType" in text

    def test_preamble(self) -> None:
        """Docstring names the package and the banner carries the version."""
        text = _render(EXAMPLE, package="myapp.flags")
        module = ast.parse(text)

        docstring = ast.get_docstring(module)
        assert docstring is not None
        assert docstring.startswith("Package myapp.flags contains")
        assert "from myapp.flags import features_gen" in docstring
        assert "# Code generated by gbgen 1.2.3. DO NOT EDIT." in text.splitlines()
        assert "from typing import Final, NewType" in text

    def test_blank_package_uses_default(self) -> None:
        """A blank package name falls back to features."""
        text = _render(EXAMPLE, package="  ")
        assert text.startswith('"""Package features contains')

    def test_description_comments(self) -> None:
        """Each non-empty description line becomes its own comment."""
        features = [
            _named("FeatureA", "a", description="  First line \n\n\tSecond line\n  "),
        ]
        lines = _render(features).splitlines()
        binding = lines.index('FeatureA: Final[FeatureKey] = FeatureKey("a")')
        assert lines[binding - 2 : binding] == ["# First line", "# Second line"]

    def test_description_and_deprecation_order(self) -> None:
        """The deprecation marker follows the description."""
        features = [_named("FeatureA", "a", description="Old", inactive=True)]
        lines = _render(features).splitlines()
        binding = lines.index('FeatureA: Final[FeatureKey] = FeatureKey("a")')
        assert lines[binding - 2 : binding] == ["# Old", DEPRECATED_COMMENT]

    def test_ids_are_escaped(self) -> None:
        """Quotes and backslashes in ids survive as literal values."""
        feature_id = 'we"ird\\id\'s'
        namespace: dict = {}
        exec(_render([_named("FeatureWeird", feature_id)]), namespace)
        assert namespace["FeatureWeird"] == feature_id

    def test_empty_catalog(self) -> None:
        """Zero features still renders valid source with an empty list."""
        text = _render([], emit_list=True)
        ast.parse(text)
        assert "FeatureList: Final[list[FeatureKey]] = []" in text.splitlines()

    def test_output_is_importable(self) -> None:
        """The module runs and exposes the constants and list."""
        namespace: dict = {}
        exec(_render(EXAMPLE, emit_list=True), namespace)
        assert namespace["FeatureCheckoutRedesign"] == "checkout-redesign"
        assert namespace["FeatureList"] == ["checkout-redesign", "disabled-feature"]

    def test_formatting_is_idempotent(self) -> None:
        """Formatting the output again with black changes nothing."""
        long_id = "a-very-long-feature-identifier-that-pushes-the-line-" + "x" * 40
        features = [
            *EXAMPLE,
            _named("FeatureLong", long_id, description="Line one\nLine two"),
        ]
        text = _render(features, emit_list=True)
        assert black.format_str(text, mode=black.Mode()) == text

    def test_returns_bytes_with_trailing_newline(self) -> None:
        """Output is UTF-8 bytes ending in a single newline."""
        out = render_feature_keys("pkg", EXAMPLE, False, version="dev")
        assert isinstance(out, bytes)
        assert out.endswith(b"\n")
        assert not out.endswith(b"\n\n")

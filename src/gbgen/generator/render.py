"""Shared pieces of the Python renderers.

Both render modes build the module text line by line and then run it
through black, the way the generated file would be formatted by hand. The
black output is parsed again and formatted a second time; any difference
or failure is a renderer bug and raises FormatError.
"""

from __future__ import annotations

import ast
import logging
import unicodedata
from collections.abc import Sequence
from dataclasses import dataclass

import black

from gbgen.generator.exceptions import FormatError
from gbgen.generator.meta import NamedFeature

logger = logging.getLogger(__name__)

DEFAULT_PACKAGE_NAME = "features"
OUTPUT_MODULE = "features_gen"
DEPRECATED_COMMENT = "# Deprecated: no active environments"
KEY_TYPE_NAME = "FeatureKey"
LIST_NAME = "FeatureList"

_BLACK_MODE = black.Mode()


@dataclass(frozen=True)
class PreambleOptions:
    """Inputs for render_preamble."""

    package_name: str
    version: str
    doc_lines: Sequence[str]
    imports: Sequence[str] = ()


def package_or_default(package_name: str) -> str:
    return package_name.strip() or DEFAULT_PACKAGE_NAME


def render_preamble(options: PreambleOptions) -> list[str]:
    """Render the module docstring, generated-code banner and imports.

    Import lines are emitted as given; an empty string separates groups.
    """
    # The banner is a single comment line whatever the version string holds
    version = comment_text(" ".join(options.version.split())) or "dev"

    lines = ['"""' + (options.doc_lines[0] if options.doc_lines else "")]
    lines.extend(options.doc_lines[1:])
    lines.append('"""')
    lines.append("")
    lines.append(f"# Code generated by gbgen {version}. DO NOT EDIT.")
    if options.imports:
        lines.append("")
        lines.extend(options.imports)
    lines.append("")
    return lines


def str_literal(value: str) -> str:
    """Return a Python string literal for value."""
    return repr(value)


def _escape_char(ch: str) -> str:
    if ch == "\t" or unicodedata.category(ch) not in ("Cc", "Cs"):
        return ch
    code = ord(ch)
    return f"\\x{code:02x}" if code < 0x100 else f"\\u{code:04x}"


def comment_text(line: str) -> str:
    """Make one description line safe to place after "# ".

    Control characters other than tab and unpaired surrogates are written
    as backslash escapes; everything else is kept as is.
    """
    return "".join(_escape_char(ch) for ch in line.strip())


def comment_lines(feature: NamedFeature) -> list[str]:
    """Render the comments placed above a feature binding.

    Every non-empty line of the description becomes one comment line,
    followed by a deprecation marker when no environment is active.
    """
    lines = [
        f"# {comment_text(line)}"
        for line in feature.description.splitlines()
        if line.strip()
    ]
    if feature.no_active_environments:
        lines.append(DEPRECATED_COMMENT)
    return lines


def render_key_type() -> list[str]:
    return [f'{KEY_TYPE_NAME} = NewType("{KEY_TYPE_NAME}", str)', ""]


def render_list(items: Sequence[str]) -> list[str]:
    """Render FeatureList with one item per line."""
    header = f"{LIST_NAME}: Final[list[{KEY_TYPE_NAME}]] = ["
    if not items:
        return [header + "]"]
    return [header, *(f"    {item}," for item in items), "]"]


def format_python(source: str) -> bytes:
    """Format generated source with black and check the result.

    Args:
        source: Rendered module text.

    Returns:
        The formatted module as UTF-8 bytes.

    Raises:
        FormatError: If black rejects the source, the output does not parse,
            or formatting the output again would change it.
    """
    try:
        formatted = black.format_str(source, mode=_BLACK_MODE)
    except Exception as e:
        raise FormatError(f"black could not format generated source: {e}") from e

    try:
        ast.parse(formatted)
    except (SyntaxError, ValueError) as e:
        raise FormatError(f"formatted source does not parse: {e}") from e

    try:
        reformatted = black.format_str(formatted, mode=_BLACK_MODE)
    except Exception as e:
        raise FormatError(f"black could not reformat its own output: {e}") from e
    if reformatted != formatted:
        raise FormatError("formatted source is not stable under black")

    logger.debug("Rendered %d bytes of Python", len(formatted))
    return formatted.encode("utf-8")

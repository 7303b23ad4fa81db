"""Identifier synthesis for feature ids.

Feature ids are arbitrary strings ("checkout-redesign", "new_ui.v2"). Each
one becomes a PascalCase identifier behind a fixed prefix, e.g.
FeatureCheckoutRedesign. Collisions are numbered in catalog order, so the
lexicographically smallest id keeps the clean name.
"""

from __future__ import annotations

import unicodedata
from collections import Counter
from collections.abc import Iterable, Sequence

from gbgen.generator.meta import FeatureMeta, NamedFeature

FEATURE_PREFIX = "Feature"
UNKNOWN_IDENTIFIER = "Unknown"

# Module-level names the renderers declare themselves
RESERVED_NAMES = frozenset({"FeatureKey", "FeatureList"})


def _is_identifier_char(ch: str) -> bool:
    # isalnum() alone accepts characters such as "²" that Python rejects
    return ch.isalnum() and f"_{ch}".isidentifier()


def split_non_alnum(value: str) -> list[str]:
    """Split on every run of characters that are not letters or digits.

    >>> split_non_alnum("checkout--redesign.v2")
    ['checkout', 'redesign', 'v2']
    """
    parts: list[str] = []
    current: list[str] = []
    for ch in value:
        if _is_identifier_char(ch):
            current.append(ch)
        elif current:
            parts.append("".join(current))
            current = []
    if current:
        parts.append("".join(current))
    return parts


def to_exported_identifier(feature_id: str) -> str:
    """PascalCase a feature id, leaving all but each token's first letter alone.

    Returns "Unknown" when the id has no letters or digits. The result is
    NFKC-normalized, matching how Python compares identifiers.

    >>> to_exported_identifier("checkout-redesign")
    'CheckoutRedesign'
    >>> to_exported_identifier("new_UI")
    'NewUI'
    """
    parts = split_non_alnum(feature_id)
    if not parts:
        return UNKNOWN_IDENTIFIER
    joined = "".join(part[0].upper() + part[1:] for part in parts)
    return unicodedata.normalize("NFKC", joined)


def name_and_dedupe(
    features: Iterable[FeatureMeta],
    reserved: Iterable[str] = RESERVED_NAMES,
) -> list[NamedFeature]:
    """Assign a unique identifier to every feature, in the given order.

    The first feature producing a name keeps it; the Nth gets an "_N" suffix.
    Reserved names count as already taken. Base names never contain an
    underscore, so suffixed names cannot collide with base names.

    Args:
        features: Catalog, already sorted by id.
        reserved: Names that must not be handed out unsuffixed.

    Returns:
        Named features in input order.
    """
    name_counts: Counter[str] = Counter(reserved)
    named: list[NamedFeature] = []

    for feature in features:
        base_name = FEATURE_PREFIX + to_exported_identifier(feature.id)
        name_counts[base_name] += 1
        count = name_counts[base_name]
        name = base_name if count == 1 else f"{base_name}_{count}"
        named.append(
            NamedFeature(
                name=name,
                id=feature.id,
                description=feature.description,
                value_type=feature.value_type,
                no_active_environments=feature.no_active_environments,
            )
        )

    return named


def feature_names(features: Sequence[NamedFeature]) -> list[str]:
    """Return the synthesized names in catalog order."""
    return [feature.name for feature in features]

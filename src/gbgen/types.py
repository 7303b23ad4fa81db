"""Typed feature keys imported by modules generated in typed mode.

Each wrapper is a ``str`` holding the GrowthBook feature key, so it can be
passed straight to the GrowthBook SDK (``gb.is_on(FeatureNewCheckout)``)
while still telling readers and type checkers what kind of value the
feature carries.
"""

from __future__ import annotations

from typing import ClassVar

from gbgen.api.models import FeatureValueType


class _TypedFeature(str):
    """A feature key tagged with its value type."""

    __slots__ = ()

    value_type: ClassVar[FeatureValueType]

    @property
    def key(self) -> str:
        """The underlying GrowthBook feature key."""
        return str.__str__(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str.__repr__(self)})"


class BooleanFeature(_TypedFeature):
    """Key of a boolean feature."""

    __slots__ = ()
    value_type = FeatureValueType.BOOLEAN


class StringFeature(_TypedFeature):
    """Key of a string feature."""

    __slots__ = ()
    value_type = FeatureValueType.STRING


class NumberFeature(_TypedFeature):
    """Key of a number feature."""

    __slots__ = ()
    value_type = FeatureValueType.NUMBER


class JSONFeature(_TypedFeature):
    """Key of a JSON feature."""

    __slots__ = ()
    value_type = FeatureValueType.JSON

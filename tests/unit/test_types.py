"""Tests for the typed feature wrappers used by generated modules."""

from __future__ import annotations

import pytest

from gbgen import types
from gbgen.api.models import FeatureValueType


class TestTypedFeatures:
    """Tests for BooleanFeature and friends."""

    @pytest.mark.parametrize(
        "cls,value_type",
        [
            (types.BooleanFeature, FeatureValueType.BOOLEAN),
            (types.StringFeature, FeatureValueType.STRING),
            (types.NumberFeature, FeatureValueType.NUMBER),
            (types.JSONFeature, FeatureValueType.JSON),
        ],
    )
    def test_value_type(self, cls, value_type: FeatureValueType) -> None:
        """Each wrapper records its value type."""
        assert cls("x").value_type is value_type

    def test_is_a_string(self) -> None:
        """Wrappers can be used wherever a key string is expected."""
        flag = types.BooleanFeature("checkout-redesign")
        assert flag == "checkout-redesign"
        assert isinstance(flag, str)
        assert {"checkout-redesign": 1}[flag] == 1

    def test_key(self) -> None:
        """key returns a plain str."""
        key = types.StringFeature("theme").key
        assert key == "theme"
        assert type(key) is str

    def test_repr(self) -> None:
        """repr names the wrapper type."""
        assert repr(types.NumberFeature("limit")) == "NumberFeature('limit')"

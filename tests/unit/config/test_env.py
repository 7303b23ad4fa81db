"""Tests for EnvReader."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from gbgen.config.env import EnvReader


class TestEnvReaderKey:
    """Tests for prefixed variable names."""

    def test_default_prefix(self) -> None:
        """The default prefix is GBGEN."""
        assert EnvReader(env={}).key("API_KEY") == "GBGEN_API_KEY"

    def test_custom_prefix(self) -> None:
        """A custom prefix is used as given."""
        assert EnvReader(env={}, prefix="MYAPP").key("API_KEY") == "MYAPP_API_KEY"

    def test_blank_prefix_falls_back(self) -> None:
        """A blank prefix falls back to GBGEN."""
        assert EnvReader(env={}, prefix="  ").prefix == "GBGEN"


class TestEnvReaderGetStr:
    """Tests for get_str()."""

    def test_set_value(self) -> None:
        """Set values are returned."""
        reader = EnvReader(env={"GBGEN_API_KEY": "secret_x"})
        assert reader.get_str("GBGEN_API_KEY") == "secret_x"

    def test_unset_returns_default(self) -> None:
        """Unset values return the default."""
        assert EnvReader(env={}).get_str("X", "fallback") == "fallback"

    def test_empty_is_unset(self) -> None:
        """Empty values are treated as unset."""
        assert EnvReader(env={"X": ""}).get_str("X") is None


class TestEnvReaderGetInt:
    """Tests for get_int()."""

    def test_valid(self) -> None:
        """Integers are converted."""
        assert EnvReader(env={"X": "42"}).get_int("X") == 42

    def test_invalid_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        """Invalid integers log a warning and return the default."""
        with caplog.at_level(logging.WARNING):
            assert EnvReader(env={"X": "abc"}).get_int("X", 7) == 7
        assert "Invalid integer value for X" in caplog.text


class TestEnvReaderGetBool:
    """Tests for get_bool()."""

    @pytest.mark.parametrize("value", ["1", "true", "TRUE", "yes", "on", "t"])
    def test_true_values(self, value: str) -> None:
        """Truthy spellings parse as True."""
        assert EnvReader(env={"X": value}).get_bool("X") is True

    @pytest.mark.parametrize("value", ["0", "false", "False", "no", "off", "f"])
    def test_false_values(self, value: str) -> None:
        """Falsy spellings parse as False."""
        assert EnvReader(env={"X": value}).get_bool("X") is False

    def test_invalid_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        """Unknown spellings log a warning and return the default."""
        with caplog.at_level(logging.WARNING):
            assert EnvReader(env={"X": "maybe"}).get_bool("X") is None
        assert "Invalid boolean value for X" in caplog.text


class TestEnvReaderGetPath:
    """Tests for get_path()."""

    def test_expands_tilde(self) -> None:
        """Paths get tilde expansion."""
        path = EnvReader(env={"X": "~/logs/gbgen.log"}).get_path("X")
        assert path == Path("~/logs/gbgen.log").expanduser()

    def test_unset(self) -> None:
        """Unset paths return the default."""
        assert EnvReader(env={}).get_path("X") is None

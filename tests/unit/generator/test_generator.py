"""Unit tests for the generation pipeline."""

from __future__ import annotations

import logging
import stat
import threading
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from gbgen.api.exceptions import APIError
from gbgen.config.models import GBGenConfig
from gbgen.generator.exceptions import (
    GenerationCancelledError,
    UnsupportedValueTypeError,
)
from gbgen.generator.generator import OUTPUT_FILE_NAME, Generator, write_output


class TestGenerator:
    """Tests for Generator.generate()."""

    def test_keys_mode(
        self,
        gbgen_config: GBGenConfig,
        mock_api: MagicMock,
        make_page,
        example_features,
    ) -> None:
        """Default config renders plain keys in id order."""
        mock_api.list_features.side_effect = [make_page(example_features)]

        text = Generator(gbgen_config, mock_api, version="9.9.9").generate().decode()

        assert "# Code generated by gbgen 9.9.9. DO NOT EDIT." in text
        assert text.index("FeatureCheckoutRedesign") < text.index(
            "FeatureDisabledFeature"
        )
        assert "from gbgen import types" not in text
        assert "FeatureList" not in text

    def test_logs_render_summary(
        self,
        gbgen_config: GBGenConfig,
        mock_api: MagicMock,
        make_page,
        example_features,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """The render log record carries mode, feature count and size."""
        mock_api.list_features.side_effect = [make_page(example_features)]

        with caplog.at_level(logging.INFO, logger="gbgen.generator.generator"):
            source = Generator(gbgen_config, mock_api).generate()

        record = caplog.records[-1]
        assert record.mode == "keys"
        assert record.features == len(example_features)
        assert record.bytes == len(source)

    def test_typed_mode_with_list(
        self,
        gbgen_config: GBGenConfig,
        mock_api: MagicMock,
        make_page,
        example_features,
    ) -> None:
        """emit flags select the typed renderer and the list."""
        gbgen_config.generator.emit_typed_features = True
        gbgen_config.generator.emit_feature_list = True
        mock_api.list_features.side_effect = [make_page(example_features)]

        text = Generator(gbgen_config, mock_api).generate().decode()

        assert "types.BooleanFeature(" in text
        assert "FeatureList: Final[list[FeatureKey]] = [" in text
        assert "# Code generated by gbgen dev. DO NOT EDIT." in text

    def test_passes_project_filter(
        self, gbgen_config: GBGenConfig, mock_api: MagicMock, make_page
    ) -> None:
        """The configured project id reaches the API."""
        gbgen_config.growthbook.project_id = "prj_9"
        mock_api.list_features.side_effect = [make_page([])]

        Generator(gbgen_config, mock_api).generate()

        assert mock_api.list_features.call_args.args[2] == "prj_9"

    def test_unsupported_type_in_typed_mode(
        self, gbgen_config: GBGenConfig, mock_api: MagicMock, make_page, make_feature
    ) -> None:
        """Typed mode rejects unknown value types."""
        gbgen_config.generator.emit_typed_features = True
        mock_api.list_features.side_effect = [
            make_page([make_feature("odd", value_type="unknown")])
        ]

        with pytest.raises(UnsupportedValueTypeError):
            Generator(gbgen_config, mock_api).generate()

    def test_unknown_type_fine_in_keys_mode(
        self, gbgen_config: GBGenConfig, mock_api: MagicMock, make_page, make_feature
    ) -> None:
        """Keys mode ignores value types."""
        mock_api.list_features.side_effect = [
            make_page([make_feature("odd", value_type="unknown")])
        ]

        text = Generator(gbgen_config, mock_api).generate().decode()

        assert 'FeatureOdd: Final[FeatureKey] = FeatureKey("odd")' in text

    def test_api_error_propagates(
        self, gbgen_config: GBGenConfig, mock_api: MagicMock
    ) -> None:
        """API errors reach the caller unchanged."""
        mock_api.list_features.side_effect = APIError("down")
        with pytest.raises(APIError, match="down"):
            Generator(gbgen_config, mock_api).generate()

    def test_cancel_event(self, gbgen_config: GBGenConfig, mock_api: MagicMock) -> None:
        """A set cancel event aborts before fetching."""
        event = threading.Event()
        event.set()
        with pytest.raises(GenerationCancelledError):
            Generator(gbgen_config, mock_api).generate(cancel_event=event)


class TestGeneratorClientOwnership:
    """Tests for closing the API client."""

    def test_builds_and_closes_own_client(self, gbgen_config: GBGenConfig) -> None:
        """Without an api, a FeaturesClient is built and closed."""
        with patch("gbgen.generator.generator.FeaturesClient") as mock_client_class:
            mock_client = MagicMock()
            mock_client_class.from_config.return_value = mock_client

            with Generator(gbgen_config):
                pass

        mock_client_class.from_config.assert_called_once_with(
            gbgen_config.growthbook
        )
        mock_client.close.assert_called_once()

    def test_does_not_close_injected_api(
        self, gbgen_config: GBGenConfig, mock_api: MagicMock
    ) -> None:
        """An injected api belongs to the caller."""
        with Generator(gbgen_config, mock_api):
            pass
        mock_api.close.assert_not_called()


class TestWriteOutput:
    """Tests for write_output()."""

    def test_writes_file(self, tmp_path: Path) -> None:
        """The module lands in output_dir under the fixed name."""
        out = write_output(tmp_path, b"x = 1\n")

        assert out == tmp_path / OUTPUT_FILE_NAME
        assert out.read_bytes() == b"x = 1\n"
        assert stat.S_IMODE(out.stat().st_mode) == 0o644

    def test_logs_path_and_size(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """The write is logged with the output path and byte count."""
        with caplog.at_level(logging.INFO, logger="gbgen.generator.generator"):
            out = write_output(tmp_path, b"x = 1\n")

        record = caplog.records[-1]
        assert record.path == str(out)
        assert record.bytes == 6

    def test_creates_directory(self, tmp_path: Path) -> None:
        """Missing parent directories are created."""
        out = write_output(tmp_path / "a" / "b", b"x = 1\n")
        assert out.exists()

    def test_overwrites_and_leaves_no_temp_files(self, tmp_path: Path) -> None:
        """Rewriting replaces the file without leftovers."""
        write_output(tmp_path, b"x = 1\n")
        write_output(tmp_path, b"x = 2\n")

        assert (tmp_path / OUTPUT_FILE_NAME).read_bytes() == b"x = 2\n"
        assert [p.name for p in tmp_path.iterdir()] == [OUTPUT_FILE_NAME]

    def test_failed_write_cleans_up(self, tmp_path: Path) -> None:
        """A failing rename leaves neither temp nor output file."""
        with patch.object(Path, "replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                write_output(tmp_path, b"x = 1\n")

        assert list(tmp_path.iterdir()) == []

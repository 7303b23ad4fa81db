"""Generation pipeline: fetch -> name -> render -> write.

Generator ties the pieces together for one configuration. Every stage
produces a fresh value for the next one; a failure anywhere aborts the run
and nothing is written.
"""

from __future__ import annotations

import logging
import os
import tempfile
import threading
from pathlib import Path

from gbgen.api.client import FeaturesClient
from gbgen.api.interface import FeaturesAPI
from gbgen.buildinfo import DEV_VERSION
from gbgen.config.models import GBGenConfig
from gbgen.generator.keys import render_feature_keys
from gbgen.generator.meta import fetch_all_feature_meta
from gbgen.generator.naming import name_and_dedupe
from gbgen.generator.render import OUTPUT_MODULE
from gbgen.generator.typed import render_typed_features

logger = logging.getLogger(__name__)

OUTPUT_FILE_NAME = f"{OUTPUT_MODULE}.py"


class Generator:
    """Generates the features module for one configuration.

    Example:
        with Generator(config, version=build.version) as generator:
            source = generator.generate()
        write_output(Path(config.generator.output_dir), source)
    """

    def __init__(
        self,
        config: GBGenConfig,
        api: FeaturesAPI | None = None,
        *,
        version: str = DEV_VERSION,
    ) -> None:
        """Initialize the generator.

        Args:
            config: Merged, validated configuration.
            api: Features API to use. When omitted, a FeaturesClient is built
                from config.growthbook and closed by close().
            version: gbgen version for the generated-code banner.
        """
        self._config = config
        self._client: FeaturesClient | None = None
        if api is None:
            self._client = FeaturesClient.from_config(config.growthbook)
            api = self._client
        self._api: FeaturesAPI = api
        self._version = version

    def __enter__(self) -> Generator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the API client if this generator created it."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def generate(
        self,
        *,
        cancel_event: threading.Event | None = None,
        deadline: float | None = None,
    ) -> bytes:
        """Fetch the catalog and render the module.

        Args:
            cancel_event: Optional cancellation signal, checked between pages.
            deadline: Optional time.monotonic() deadline for the fetch.

        Returns:
            The formatted module source.

        Raises:
            APIError: If the API cannot be reached or answers badly.
            GeneratorError: If pagination fails, the fetch is cancelled, a
                value type is unsupported, or the output does not format.
        """
        growthbook = self._config.growthbook
        generator = self._config.generator

        features = fetch_all_feature_meta(
            self._api,
            growthbook.project_id,
            cancel_event=cancel_event,
            deadline=deadline,
        )
        named = name_and_dedupe(features)

        if generator.emit_typed_features:
            render = render_typed_features
            mode = "typed"
        else:
            render = render_feature_keys
            mode = "keys"

        source = render(
            generator.package_name,
            named,
            generator.emit_feature_list,
            version=self._version,
        )
        logger.info(
            "Rendered features module (list=%s)",
            generator.emit_feature_list,
            extra={"features": len(named), "mode": mode, "bytes": len(source)},
        )
        return source


def write_output(output_dir: Path, source: bytes) -> Path:
    """Write the generated module into output_dir.

    Uses atomic write (temp file + rename) so an interrupted run never
    leaves a truncated file behind.

    Args:
        output_dir: Directory to write into; created if missing.
        source: Module source from Generator.generate().

    Returns:
        Path of the written file.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    out_path = output_dir / OUTPUT_FILE_NAME

    fd, temp_path_str = tempfile.mkstemp(
        prefix=f".{OUTPUT_MODULE}.", suffix=".tmp", dir=output_dir
    )
    temp_path = Path(temp_path_str)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(source)
        temp_path.chmod(0o644)
        temp_path.replace(out_path)  # Atomic on POSIX
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise

    logger.info(
        "Wrote generated module",
        extra={"path": str(out_path), "bytes": len(source)},
    )
    return out_path

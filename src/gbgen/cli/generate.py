"""CLI command for generating the features module.

Provides the `gbgen generate` command, which fetches every feature from
GrowthBook and writes features_gen.py (or prints it with --stdout).
"""

from __future__ import annotations

import logging
import signal
import threading
import time
from pathlib import Path
from types import FrameType

import click

from gbgen.api.exceptions import APIAuthError, APIError
from gbgen.buildinfo import BuildInfo
from gbgen.cli.exit_codes import ExitCode
from gbgen.cli.output import error_exit, success_output
from gbgen.config import (
    ConfigError,
    ConfigSource,
    GBGenConfig,
    LoadOptions,
    load_config,
    validate_config,
)
from gbgen.generator import (
    GenerationCancelledError,
    Generator,
    GeneratorError,
    write_output,
)
from gbgen.logging import configure_logging

logger = logging.getLogger(__name__)


def _overrides_from_options(
    obj: dict,
    *,
    api_base_url: str | None,
    api_key: str | None,
    project_id: str | None,
    output_dir: Path | None,
    package_name: str | None,
    typed: bool | None,
    emit_list: bool | None,
    timeout: int | None,
) -> ConfigSource:
    """Build the highest-precedence config layer from CLI flags."""
    return ConfigSource(
        api_base_url=api_base_url,
        api_key=api_key,
        project_id=project_id,
        timeout_seconds=timeout,
        output_dir=str(output_dir) if output_dir is not None else None,
        package_name=package_name,
        emit_typed_features=typed,
        emit_feature_list=emit_list,
        logging_level=obj.get("log_level"),
        logging_file=obj.get("log_file"),
        logging_format="json" if obj.get("log_json") else None,
    )


def _run_with_sigint(
    generator: Generator,
    cancel_event: threading.Event,
    deadline: float | None,
) -> bytes:
    """Run generation with SIGINT mapped to cooperative cancellation.

    The first Ctrl+C sets cancel_event so the fetch stops before its next
    request. A second one raises KeyboardInterrupt.
    """

    def handle_sigint(signum: int, frame: FrameType | None) -> None:
        if cancel_event.is_set():
            raise KeyboardInterrupt
        logger.warning("Interrupt received, cancelling after the current request")
        cancel_event.set()

    # signal handlers can only be installed from the main thread
    in_main_thread = threading.current_thread() is threading.main_thread()
    old_handler = None
    if in_main_thread:
        old_handler = signal.signal(signal.SIGINT, handle_sigint)
    try:
        return generator.generate(cancel_event=cancel_event, deadline=deadline)
    finally:
        if in_main_thread and old_handler is not None:
            signal.signal(signal.SIGINT, old_handler)


@click.command("generate")
@click.option("--api-base-url", default=None, help="GrowthBook API base URL.")
@click.option(
    "--api-key",
    default=None,
    help="GrowthBook secret API key (prefer GBGEN_API_KEY).",
)
@click.option(
    "--project-id",
    default=None,
    help="Only generate features of this project.",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory that receives features_gen.py.",
)
@click.option(
    "--package-name",
    default=None,
    help="Package name shown in the generated module docstring.",
)
@click.option(
    "--typed/--no-typed",
    default=None,
    help="Emit value-type wrappers instead of plain keys.",
)
@click.option(
    "--list/--no-list",
    "emit_list",
    default=None,
    help="Also emit FeatureList with every key.",
)
@click.option(
    "--timeout",
    type=click.IntRange(1, 300),
    default=None,
    help="Per-request timeout in seconds (1-300).",
)
@click.option(
    "--max-duration",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Give up fetching after this many seconds.",
)
@click.option(
    "--stdout",
    "to_stdout",
    is_flag=True,
    default=False,
    help="Print the module instead of writing it.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output the result as JSON.",
)
@click.pass_context
def generate_command(
    ctx: click.Context,
    api_base_url: str | None,
    api_key: str | None,
    project_id: str | None,
    output_dir: Path | None,
    package_name: str | None,
    typed: bool | None,
    emit_list: bool | None,
    timeout: int | None,
    max_duration: float | None,
    to_stdout: bool,
    json_output: bool,
) -> None:
    """Generate features_gen.py from the GrowthBook feature catalog.

    Settings are merged from defaults, the --config file, GBGEN_*
    environment variables and these flags, in increasing precedence.

    Examples:

        # Write ./growthbooktypes/features_gen.py
        GBGEN_API_KEY=secret_... gbgen generate

        # Typed helpers plus FeatureList, into a package of your app
        gbgen --config gbgen.yaml generate --typed --list -o myapp/features
    """
    obj = ctx.find_root().obj or {}
    build_info: BuildInfo = obj.get("build_info") or BuildInfo()

    overrides = _overrides_from_options(
        obj,
        api_base_url=api_base_url,
        api_key=api_key,
        project_id=project_id,
        output_dir=output_dir,
        package_name=package_name,
        typed=typed,
        emit_list=emit_list,
        timeout=timeout,
    )

    try:
        config: GBGenConfig = load_config(
            LoadOptions(config_path=obj.get("config_path"), overrides=overrides)
        )
        validate_config(config)
    except ConfigError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR, json_output)

    configure_logging(config.logging)

    deadline = None
    if max_duration is not None:
        deadline = time.monotonic() + max_duration

    cancel_event = threading.Event()
    try:
        with Generator(config, version=build_info.version) as generator:
            source = _run_with_sigint(generator, cancel_event, deadline)
    except GenerationCancelledError as e:
        code = ExitCode.INTERRUPTED if cancel_event.is_set() else ExitCode.CANCELLED
        error_exit(str(e), code, json_output)
    except KeyboardInterrupt:
        error_exit("interrupted", ExitCode.INTERRUPTED, json_output)
    except APIAuthError as e:
        error_exit(str(e), ExitCode.AUTH_ERROR, json_output)
    except APIError as e:
        error_exit(str(e), ExitCode.API_ERROR, json_output)
    except GeneratorError as e:
        error_exit(str(e), ExitCode.GENERATION_FAILED, json_output)

    if to_stdout:
        click.echo(source.decode("utf-8"), nl=False)
        return

    try:
        out_path = write_output(Path(config.generator.output_dir), source)
    except OSError as e:
        error_exit(f"cannot write output: {e}", ExitCode.WRITE_FAILED, json_output)

    success_output(
        f"Wrote {out_path}",
        {"path": str(out_path), "bytes": len(source)},
        json_output,
    )

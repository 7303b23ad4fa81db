"""CLI command for writing a starter config file.

Provides the `gbgen init` command.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from gbgen.cli.exit_codes import ExitCode
from gbgen.cli.output import error_exit, success_output
from gbgen.config import ConfigFormatError, detect_format, dumps, sample_config

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "gbgen.yaml"


@click.command("init")
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_FILE,
    show_default=True,
    help="Config file to write.",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["json", "yaml", "yml", "toml"], case_sensitive=False),
    default=None,
    help="File format. Defaults to the file extension, then yaml.",
)
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Overwrite an existing file.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output the result as JSON.",
)
def init_command(
    output: Path,
    fmt: str | None,
    force: bool,
    json_output: bool,
) -> None:
    """Write a sample config with a placeholder API key.

    Examples:

        gbgen init

        gbgen init -o gbgen.toml --force
    """
    if output.exists() and not force:
        error_exit(
            f"{output} already exists (use --force to overwrite)",
            ExitCode.FILE_EXISTS,
            json_output,
        )

    try:
        config_format = detect_format(output, fmt)
        text = dumps(sample_config(), config_format)
    except ConfigFormatError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR, json_output)

    try:
        if output.parent != Path():
            output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
    except OSError as e:
        error_exit(f"cannot write {output}: {e}", ExitCode.WRITE_FAILED, json_output)

    logger.debug("Wrote sample %s config to %s", config_format.value, output)
    success_output(
        f"Wrote {output}. Set growthbook.apiKey (or GBGEN_API_KEY) before generating.",
        {"path": str(output), "format": config_format.value},
        json_output,
    )

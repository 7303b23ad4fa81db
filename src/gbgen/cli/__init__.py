"""CLI module for gbgen."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from gbgen.buildinfo import BuildInfo, resolve_build_info

logger = logging.getLogger(__name__)


def _build_info(ctx: click.Context) -> BuildInfo:
    ctx.ensure_object(dict)
    # Preserve build info injected by tests
    if "build_info" not in ctx.obj:
        ctx.obj["build_info"] = resolve_build_info()
    return ctx.obj["build_info"]


def _print_version(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(_build_info(ctx).describe())
    ctx.exit()


@click.group()
@click.option(
    "--version",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=_print_version,
    help="Show the version and exit.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Path to config file (json|yaml|toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """gbgen - Generate Python feature keys from GrowthBook features."""
    _build_info(ctx)
    ctx.obj["config_path"] = config_path
    ctx.obj["log_level"] = log_level.lower() if log_level else None
    ctx.obj["log_file"] = log_file
    ctx.obj["log_json"] = log_json


# Defer import to avoid circular dependency
def _register_commands() -> None:
    from gbgen.cli.generate import generate_command
    from gbgen.cli.init import init_command
    from gbgen.cli.version import version_command

    main.add_command(generate_command)
    main.add_command(init_command)
    main.add_command(version_command)


_register_commands()

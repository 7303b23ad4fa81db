"""CLI command printing build information."""

from __future__ import annotations

import click

from gbgen.buildinfo import BuildInfo


@click.command("version")
@click.pass_context
def version_command(ctx: click.Context) -> None:
    """Print the gbgen version and build commit."""
    obj = ctx.find_root().obj or {}
    build_info: BuildInfo = obj.get("build_info") or BuildInfo()
    click.echo(build_info.describe())

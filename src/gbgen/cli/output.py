"""Unified CLI output for JSON and human-readable results."""

from __future__ import annotations

import json
import sys
from typing import Any, NoReturn

import click

from gbgen.cli.exit_codes import ExitCode


def error_exit(
    message: str,
    code: ExitCode,
    json_output: bool = False,
) -> NoReturn:
    """Print an error and exit with the given code.

    Args:
        message: Error message to display.
        code: Exit code to use.
        json_output: Whether to format output as JSON.
    """
    if json_output:
        click.echo(
            json.dumps(
                {
                    "status": "failed",
                    "error": {
                        "code": code.name,
                        "message": message,
                    },
                }
            ),
            err=True,
        )
    else:
        click.echo(f"Error: {message}", err=True)

    sys.exit(int(code))


def success_output(
    message: str,
    data: dict[str, Any] | None = None,
    json_output: bool = False,
) -> None:
    """Print a success message, or a JSON object with the extra data."""
    if json_output:
        output: dict[str, Any] = {"status": "completed", "message": message}
        output.update(data or {})
        click.echo(json.dumps(output, indent=2))
    else:
        click.echo(message)

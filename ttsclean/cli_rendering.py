"""Terminal output for the `tts-clean` commands.

Failures go to stderr in colour; the run summary goes to stdout.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import PipelineStageError
from .models.datatypes import CleanReport


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Report a failed command on stderr and exit with status 1.

    Driver errors name the failing step and may add a hint line; anything
    else is printed with its message only.
    """

    if isinstance(exc, PipelineStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_clean_summary(report: CleanReport) -> None:
    """Print `Summary: read X bytes, wrote Y bytes, N paragraphs`."""

    stats = report.stats
    typer.echo(
        f"Summary: read {stats.input_length} bytes, wrote {stats.output_length} bytes, "
        f"{stats.paragraph_count} paragraphs"
    )

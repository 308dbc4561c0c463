"""Command-line interface for ttsclean.

Responsibilities:
- Expose user-facing commands for cleaning one document.
- Load configuration, run the pipeline once, and write text and reports.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
import yaml

from .cli_rendering import echo_clean_summary, exit_with_command_error
from .config import DEFAULT_CONFIG_PATH, CleanConfig, ConfigLoader
from .errors import PipelineStageError
from .io.storage import TextStore, render_report
from .models.datatypes import CleanReport
from .pipeline import TextPipeline
from .telemetry.logger import RunLogger

app = typer.Typer(
    name="tts-clean",
    no_args_is_help=True,
    help="Clean and normalize text before feeding it into TTS engines.",
)


def _load_config(
    config_path: Path | None,
    log_level: str | None,
    report_path: Path | None,
) -> CleanConfig:
    """Load the YAML config (or defaults) and map failures to stage errors."""

    try:
        config = ConfigLoader.load(config_path)
        return config.with_logging(
            level=log_level,
            write_report=True if report_path is not None else None,
            report_path=str(report_path) if report_path is not None else None,
        )
    except yaml.YAMLError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Failed to parse config file `{config_path or DEFAULT_CONFIG_PATH}`: {exc}",
            hint="Verify YAML syntax.",
        ) from exc
    except ValueError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Invalid config: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc
    except OSError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Failed to read config file `{config_path or DEFAULT_CONFIG_PATH}`: {exc}",
            hint="Verify file permissions.",
        ) from exc


def _read_input(store: TextStore, input_path: Path) -> str:
    """Read the raw input document."""

    try:
        return store.load_text(input_path)
    except FileNotFoundError as exc:
        raise PipelineStageError(
            stage="read",
            detail=f"Input file not found: `{input_path}`.",
            hint="Provide an existing text or markdown file.",
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise PipelineStageError(
            stage="read",
            detail=f"Failed to read `{input_path}`: {exc}",
            hint="Input must be a readable UTF-8 text file.",
        ) from exc


def _write_text(store: TextStore, path: Path, content: str, stage: str) -> Path:
    """Write output or report text and map failures to stage errors."""

    try:
        return store.save_text(path, content)
    except OSError as exc:
        raise PipelineStageError(
            stage=stage,
            detail=f"Failed to write `{path}`: {exc}",
            hint="Verify the target directory is writable.",
        ) from exc


def _run_clean(
    config: CleanConfig,
    input_path: Path,
    output_path: Path,
) -> CleanReport:
    """Run read, clean, report, and write steps for one document."""

    run_logger = RunLogger(level=config.logging.level)
    run_logger.log_info("config", "loaded", profile=config.meta.profile)

    store = TextStore()
    raw = _read_input(store, input_path)
    run_logger.log_info("read", "complete", bytes=len(raw.encode("utf-8")), path=input_path)

    report = TextPipeline(config, run_logger=run_logger).clean_with_report(raw)
    run_logger.log_info(
        "clean",
        "complete",
        bytes=report.stats.output_length,
        paragraphs=report.stats.paragraph_count,
    )

    if config.logging.write_report:
        report_text = render_report(
            input_path=input_path,
            output_path=output_path,
            profile=config.meta.profile,
            report=report,
        )
        written = _write_text(store, Path(config.logging.report_path), report_text, "report")
        run_logger.log_info("report", "written", path=written)

    written = _write_text(store, output_path, report.cleaned_text, "write")
    run_logger.log_info("write", "complete", path=written)
    return report


@app.command("clean")
def clean_command(
    input_path: Annotated[Path, typer.Argument(help="File that should be cleaned.")],
    output_path: Annotated[
        Path, typer.Argument(help="Where the normalized text should be written.")
    ],
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            help=f"Path to YAML config file. Defaults to `./{DEFAULT_CONFIG_PATH}`.",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Log level override (`debug`, `info`, `warning`, ...)."),
    ] = None,
    report_path: Annotated[
        Path | None,
        typer.Option("--report-path", help="Write a run report to this path."),
    ] = None,
) -> None:
    """Clean one document and write speech-ready text."""

    try:
        config = _load_config(config_file, log_level, report_path)
        report = _run_clean(config, input_path, output_path)
    except Exception as exc:
        exit_with_command_error("clean", exc)

    if config.logging.print_summary:
        echo_clean_summary(report)
    typer.echo(f"Output: {output_path}")


@app.command("defaults")
def defaults_command() -> None:
    """Print the default configuration as YAML."""

    payload = CleanConfig.default().to_mapping()
    typer.echo(yaml.safe_dump(payload, sort_keys=False, allow_unicode=True), nl=False)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()

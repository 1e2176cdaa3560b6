from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.markup import escape

from initag.cli.ui import ValuesRenderOptions, dump_values, get_ui, render_report, render_values_table
from initag.cli.utils.models import instantiate_model
from initag.core.config import load_settings
from initag.core.errors import ExitCode
from initag.parsers import IniDecodeError, build_schema, load_path
from initag.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def decode_cmd(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="INI file to decode."),
    model: str = typer.Option(
        ..., "--model", "-m", help="Destination record as 'package.module:Class' or 'models.py:Class'."
    ),
    fmt: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: table, json or yaml (overrides config if set)."
    ),
    strict: Optional[bool] = typer.Option(
        None,
        "--strict/--no-strict",
        help="Exit 1 when the file has sections or keys the model does not declare (overrides config if set).",
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level (overrides config if set)."),
    verbose: bool = typer.Option(False, "--verbose", help="Print config sources and a decode summary."),
) -> None:
    ui = get_ui(verbose=verbose)
    err = get_ui(verbose=verbose, stderr=True).console

    cli_overrides = {
        "output": {"format": fmt, "strict": strict},
        "log": {"level": log_level},
    }
    try:
        loaded = load_settings(start_dir=file.resolve().parent, cli_overrides=cli_overrides)
    except ValidationError as e:
        err.print(f"[error]Invalid settings:[/error] {escape(str(e))}")
        raise typer.Exit(code=int(ExitCode.ERROR))
    settings = loaded.settings
    configure_logging(settings.log.level)

    if ui.verbose:
        err.print("[bold]Config sources:[/bold]")
        err.print(f"  global: {loaded.global_path or '-'}")
        err.print(f"  repo:   {loaded.repo_path or '-'}")

    try:
        record = instantiate_model(model)
        report = load_path(file, record)
    except IniDecodeError as e:
        err.print(f"[error]{escape(str(file))}:[/error] {escape(str(e))}")
        raise typer.Exit(code=int(ExitCode.ERROR))
    except OSError as e:
        err.print(f"[error]Cannot read {escape(str(file))}:[/error] {escape(str(e))}")
        raise typer.Exit(code=int(ExitCode.ERROR))

    logger.info(
        "Decoded %s into %s: %d assigned, %d unknown section(s), %d unknown key(s)",
        file,
        model,
        report.assignments,
        len(report.unknown_sections),
        len(report.unknown_keys),
    )

    schema = build_schema(record)
    if settings.output.format == "table":
        render_values_table(ui.console, schema, opts=ValuesRenderOptions(title=str(file)))
    else:
        typer.echo(dump_values(schema, settings.output.format))

    if ui.verbose:
        render_report(err, report)

    if settings.output.strict and report.has_unknown:
        if not ui.verbose:
            err.print("[warn]Input has undeclared sections or keys (run with --verbose for details).[/warn]")
        raise typer.Exit(code=int(ExitCode.UNKNOWN_CONTENT))

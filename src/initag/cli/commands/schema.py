from __future__ import annotations

import typer
from rich.markup import escape

from initag.cli.ui import get_ui, render_schema_tree
from initag.cli.utils.models import instantiate_model
from initag.core.errors import ExitCode
from initag.parsers import IniDecodeError, build_schema


def schema_cmd(
    model: str = typer.Option(
        ..., "--model", "-m", help="Destination record as 'package.module:Class' or 'models.py:Class'."
    ),
) -> None:
    """Show which INI sections and keys a model binds."""
    ui = get_ui()
    try:
        schema = build_schema(instantiate_model(model))
    except IniDecodeError as e:
        get_ui(stderr=True).console.print(f"[error]{escape(model)}:[/error] {escape(str(e))}")
        raise typer.Exit(code=int(ExitCode.ERROR))

    render_schema_tree(ui.console, schema, title=model)

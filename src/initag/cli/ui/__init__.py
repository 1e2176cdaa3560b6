from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.theme import Theme

from initag.cli.ui.formatters import (
    ValuesRenderOptions,
    dump_values,
    render_report,
    render_schema_tree,
    render_values_table,
    schema_values,
)

THEME = Theme(
    {
        "ok": "green",
        "warn": "yellow",
        "error": "bold red",
        "muted": "dim",
        "path": "cyan",
        "section": "bold magenta",
        "key": "cyan",
    }
)


@dataclass(frozen=True)
class UI:
    console: Console
    verbose: bool = False


def get_ui(*, verbose: bool = False, stderr: bool = False) -> UI:
    return UI(console=Console(theme=THEME, stderr=stderr), verbose=verbose)


__all__ = [
    "THEME",
    "UI",
    "ValuesRenderOptions",
    "dump_values",
    "get_ui",
    "render_report",
    "render_schema_tree",
    "render_values_table",
    "schema_values",
]

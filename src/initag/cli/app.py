from __future__ import annotations

import typer
from rich.console import Console

from initag import __version__
from initag.cli.commands.decode import decode_cmd
from initag.cli.commands.init import init_cmd
from initag.cli.commands.schema import schema_cmd

app = typer.Typer(
    name="initag",
    help="Decode INI files into tagged pydantic models and dataclasses.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"initag {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", callback=_version_callback, is_eager=True
    ),
) -> None:
    pass


app.command("decode", help="Decode an INI file into a model and print the values.")(decode_cmd)
app.command("schema")(schema_cmd)
app.command("init")(init_cmd)

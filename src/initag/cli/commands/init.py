from __future__ import annotations

from pathlib import Path

import typer

DEFAULT_CONFIG_TOML = """\
[log]
# DEBUG traces every scanned line and assignment
level = "WARNING"

[output]
# table | json | yaml
format = "table"
# exit 1 when a file has sections/keys the model does not declare
strict = false
"""


def _write_file(path: Path, content: str, *, force: bool) -> bool:
    if path.exists() and not force:
        return False
    path.write_text(content, encoding="utf-8")
    return True


def init_cmd(
    path: Path = typer.Argument(Path("."), help="Directory to initialize."),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config."),
) -> None:
    """Write a default .initag/config.toml."""
    cfg_dir = path.resolve() / ".initag"
    cfg_dir.mkdir(parents=True, exist_ok=True)

    target = cfg_dir / "config.toml"
    if _write_file(target, DEFAULT_CONFIG_TOML, force=force):
        typer.echo(f"Initialized {target}")
    else:
        typer.echo(f"Kept existing {target} (use --force to overwrite)")

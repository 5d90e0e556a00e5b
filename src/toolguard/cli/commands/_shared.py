"""Options and helpers shared by the path-oriented commands."""

from __future__ import annotations

from pathlib import Path

import typer

ROOT_OPTION = typer.Option(
    None,
    "--root",
    help="Sandbox root directory. Defaults to current working directory.",
)
PATH_ARGUMENT = typer.Argument(..., help="File path, absolute or relative to the sandbox root.")

EXIT_ALLOWED = 0
EXIT_DENIED = 1
EXIT_SANDBOX_ESCAPE = 2


def resolve_root(root: Path | None) -> Path:
    resolved = (root or Path.cwd()).resolve()
    if not resolved.is_dir():
        raise typer.BadParameter(f"Sandbox root is not a directory: {resolved}")
    return resolved

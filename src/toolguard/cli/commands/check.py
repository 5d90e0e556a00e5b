"""Implementation of the `check` subcommand."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer

from toolguard.core.errors import AccessDeniedError, IgnorePolicyError, SandboxEscapeError
from toolguard.core.tools.wrappers import authorize_path

from ..bootstrap import bootstrap_runtime
from ._shared import EXIT_DENIED, EXIT_SANDBOX_ESCAPE, PATH_ARGUMENT, ROOT_OPTION, resolve_root


def register(app: typer.Typer) -> None:
    """Register the `check` subcommand with the provided Typer app."""

    @app.command()
    def check(  # type: ignore[func-returns-value]
        path: str = PATH_ARGUMENT,
        root: Path | None = ROOT_OPTION,
    ) -> None:
        """Report whether the file tools would be allowed to touch PATH."""
        context = bootstrap_runtime()
        console = context.console
        sandbox_root = resolve_root(root)
        options = context.config_manager.get_guard_options()

        try:
            resolved = asyncio.run(authorize_path(path, sandbox_root, options))
        except SandboxEscapeError as error:
            console.print(f"[red]Sandbox violation:[/] {error}")
            raise typer.Exit(EXIT_SANDBOX_ESCAPE) from error
        except (AccessDeniedError, IgnorePolicyError) as error:
            console.print(f"[yellow]Denied:[/] {error}")
            raise typer.Exit(EXIT_DENIED) from error

        console.print(f"[green]Allowed:[/] {resolved.as_posix()}")

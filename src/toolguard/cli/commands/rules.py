"""Implementation of the `rules` subcommand."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer

from toolguard.core.errors import IgnorePolicyError, SandboxEscapeError
from toolguard.core.ignore.policy import describe_ignore_rules
from toolguard.core.sandbox.paths import assert_sandbox_path, resolve_unsandboxed_path

from ..bootstrap import bootstrap_runtime
from ._shared import EXIT_DENIED, EXIT_SANDBOX_ESCAPE, PATH_ARGUMENT, ROOT_OPTION, resolve_root


def register(app: typer.Typer) -> None:
    """Register the `rules` subcommand with the provided Typer app."""

    @app.command()
    def rules(  # type: ignore[func-returns-value]
        path: str = PATH_ARGUMENT,
        root: Path | None = ROOT_OPTION,
    ) -> None:
        """Print the anchor-relative .ignore rules that govern PATH, in evaluation order."""
        context = bootstrap_runtime()
        console = context.console
        sandbox_root = resolve_root(root)
        options = context.config_manager.get_guard_options()

        try:
            if options.allow_outside_root:
                resolved = resolve_unsandboxed_path(path, cwd=sandbox_root)
            else:
                resolved = assert_sandbox_path(path, cwd=sandbox_root, root=sandbox_root).resolved
            rule_set = asyncio.run(
                describe_ignore_rules(
                    resolved,
                    sandbox_root,
                    fail_closed=options.fail_closed_on_unreadable_ignore,
                )
            )
        except SandboxEscapeError as error:
            console.print(f"[red]Sandbox violation:[/] {error}")
            raise typer.Exit(EXIT_SANDBOX_ESCAPE) from error
        except IgnorePolicyError as error:
            console.print(f"[yellow]Denied:[/] {error}")
            raise typer.Exit(EXIT_DENIED) from error

        console.print(f"[bold]Anchor:[/] {rule_set.anchor.as_posix()}")
        if not rule_set.rules:
            console.print("[dim]No .ignore rules apply.[/]")
            return
        for rule in rule_set.rules:
            console.print(rule, markup=False, highlight=False)

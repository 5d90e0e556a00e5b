"""Implementation of the `read` subcommand."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer

from toolguard.core.errors import SandboxEscapeError, ToolGuardError
from toolguard.core.tools.wrappers import create_sandboxed_read_tool

from ..bootstrap import bootstrap_runtime
from ._shared import EXIT_DENIED, EXIT_SANDBOX_ESCAPE, PATH_ARGUMENT, ROOT_OPTION, resolve_root

OFFSET_OPTION = typer.Option(None, "--offset", min=1, help="Line number to start reading from (1-indexed).")
LIMIT_OPTION = typer.Option(None, "--limit", min=1, help="Maximum number of lines to read.")


def register(app: typer.Typer) -> None:
    """Register the `read` subcommand with the provided Typer app."""

    @app.command()
    def read(  # type: ignore[func-returns-value]
        path: str = PATH_ARGUMENT,
        root: Path | None = ROOT_OPTION,
        offset: int | None = OFFSET_OPTION,
        limit: int | None = LIMIT_OPTION,
    ) -> None:
        """Run the sandboxed read tool on PATH and print what the agent would receive."""
        context = bootstrap_runtime()
        console = context.console
        sandbox_root = resolve_root(root)
        tool = create_sandboxed_read_tool(sandbox_root, context.config_manager.get_guard_options())

        params: dict[str, object] = {"path": path}
        if offset is not None:
            params["offset"] = offset
        if limit is not None:
            params["limit"] = limit

        try:
            result = asyncio.run(tool.execute("cli-read", params))
        except SandboxEscapeError as error:
            console.print(f"[red]Sandbox violation:[/] {error}")
            raise typer.Exit(EXIT_SANDBOX_ESCAPE) from error
        except (ToolGuardError, OSError, ValueError) as error:
            console.print(f"[red]Read failed:[/] {error}")
            raise typer.Exit(EXIT_DENIED) from error

        for block in result.content:
            block_type = block.get("type")
            if block_type == "text":
                console.print(block["text"], markup=False, highlight=False)
            elif block_type == "image":
                console.print(f"[cyan]<image {block['mime_type']}, {len(block['data'])} base64 chars>[/]")

"""Implementation of the `config` command group."""

from __future__ import annotations

import typer

from ..bootstrap import bootstrap_runtime

ENABLED_ARGUMENT = typer.Argument(..., help="true or false.")
VERBOSITY_ARGUMENT = typer.Argument(..., help="quiet, standard or verbose.")


def _on_off(value: bool) -> str:
    return "[green]on[/]" if value else "[red]off[/]"


def register(app: typer.Typer) -> None:
    """Register the `config` command group."""

    config_app = typer.Typer(help="Show and change persisted guard settings.")
    app.add_typer(config_app, name="config")

    @config_app.command("show")
    def show() -> None:  # type: ignore[func-returns-value]
        context = bootstrap_runtime()
        console = context.console
        manager = context.config_manager
        config = manager.load()
        effective = manager.get_guard_options()

        console.print(f"verbosity: {config.verbosity or 'default'} (effective {manager.effective_verbosity()})")
        console.print(
            f"allow outside root: {_on_off(config.sandbox.allow_outside_root)}"
            f" (effective {_on_off(effective.allow_outside_root)})"
        )
        console.print(
            f"fail closed on unreadable .ignore: {_on_off(config.ignore.fail_closed)}"
            f" (effective {_on_off(effective.fail_closed_on_unreadable_ignore)})"
        )

    @config_app.command("set-outside-root")
    def set_outside_root(enabled: bool = ENABLED_ARGUMENT) -> None:  # type: ignore[func-returns-value]
        context = bootstrap_runtime()
        context.config_manager.set_allow_outside_root(enabled)
        context.console.print(f"allow outside root: {_on_off(enabled)}")

    @config_app.command("set-fail-closed")
    def set_fail_closed(enabled: bool = ENABLED_ARGUMENT) -> None:  # type: ignore[func-returns-value]
        context = bootstrap_runtime()
        context.config_manager.set_ignore_fail_closed(enabled)
        context.console.print(f"fail closed on unreadable .ignore: {_on_off(enabled)}")

    @config_app.command("set-verbosity")
    def set_verbosity(verbosity: str = VERBOSITY_ARGUMENT) -> None:  # type: ignore[func-returns-value]
        context = bootstrap_runtime()
        try:
            label = context.config_manager.set_logging_verbosity(verbosity)
        except ValueError as error:
            raise typer.BadParameter(str(error)) from error
        context.console.print(f"verbosity: {label or 'default'}")

"""Typer application wiring for the toolguard CLI."""

from __future__ import annotations

import typer

from .commands import check, config, read, rules

app = typer.Typer(
    name="toolguard",
    help="Inspect how sandbox and .ignore policies apply to agent file tools.",
    no_args_is_help=True,
    add_completion=False,
)

for module in (check, rules, read, config):
    module.register(app)

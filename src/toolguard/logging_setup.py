"""Logging configuration for the toolguard CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "toolguard-rich"


def configure_logging(level: int = logging.WARNING, console: Console | None = None) -> None:
    """Route ``toolguard`` loggers through a single rich handler at ``level``."""
    logger = logging.getLogger("toolguard")
    logger.setLevel(level)

    for handler in logger.handlers:
        if handler.get_name() == _HANDLER_NAME:
            handler.setLevel(level)
            return

    handler = RichHandler(
        console=console or Console(stderr=True),
        markup=True,
        rich_tracebacks=True,
        show_path=False,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

"""Runtime context shared by CLI commands."""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.console import Console

from toolguard.core.configuration import ConfigManager, get_config_manager


@dataclass
class CliContext:
    console: Console = field(default_factory=Console)
    config_manager: ConfigManager = field(default_factory=get_config_manager)

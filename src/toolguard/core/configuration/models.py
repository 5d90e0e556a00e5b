"""Dataclasses describing persisted CLI configuration."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SandboxSettings:
    allow_outside_root: bool = False


@dataclass
class IgnoreSettings:
    fail_closed: bool = False


@dataclass
class CLIConfig:
    verbosity: str | None = None
    sandbox: SandboxSettings = field(default_factory=SandboxSettings)
    ignore: IgnoreSettings = field(default_factory=IgnoreSettings)

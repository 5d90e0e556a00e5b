"""Sandbox and ignore-policy preference helpers."""

from __future__ import annotations

from toolguard.core.types.guard import GuardOptions

from ..constants import ALLOW_OUTSIDE_ROOT_ENV_VAR, IGNORE_FAIL_CLOSED_ENV_VAR
from ..environment import EnvironmentManager
from ..models import CLIConfig


def set_allow_outside_root(config: CLIConfig, enabled: bool) -> None:
    config.sandbox.allow_outside_root = bool(enabled)


def set_ignore_fail_closed(config: CLIConfig, enabled: bool) -> None:
    config.ignore.fail_closed = bool(enabled)


def get_guard_options(config: CLIConfig, environment: EnvironmentManager | None = None) -> GuardOptions:
    env = environment or EnvironmentManager()
    return GuardOptions(
        allow_outside_root=env.flag(ALLOW_OUTSIDE_ROOT_ENV_VAR, config.sandbox.allow_outside_root),
        fail_closed_on_unreadable_ignore=env.flag(IGNORE_FAIL_CLOSED_ENV_VAR, config.ignore.fail_closed),
    )

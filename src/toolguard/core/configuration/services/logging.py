"""Verbosity preference helpers."""

from __future__ import annotations

from ..constants import DEFAULT_VERBOSITY, VERBOSITY_ENV_VAR, VERBOSITY_PRESETS
from ..environment import EnvironmentManager
from ..models import CLIConfig
from ..utils import normalize_verbosity_label


def set_logging_verbosity(config: CLIConfig, verbosity: str | None) -> str | None:
    """Store a verbosity preset on ``config``; ``None`` or blank clears it."""
    label = normalize_verbosity_label(verbosity)
    if label is None and verbosity is not None and verbosity.strip():
        choices = ", ".join(VERBOSITY_PRESETS)
        raise ValueError(f"Unknown verbosity {verbosity!r}; expected one of: {choices}.")
    config.verbosity = label
    return label


def effective_verbosity(config: CLIConfig, environment: EnvironmentManager) -> str:
    env_label = normalize_verbosity_label(environment.getenv(VERBOSITY_ENV_VAR))
    return env_label or config.verbosity or DEFAULT_VERBOSITY

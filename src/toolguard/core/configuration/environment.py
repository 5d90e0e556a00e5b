"""Environment adapters for applying configuration at runtime."""

from __future__ import annotations

import os
from collections.abc import MutableMapping

from .constants import DEFAULT_VERBOSITY, TRUTHY_ENV_VALUES, VERBOSITY_ENV_VAR, VERBOSITY_PRESETS
from .models import CLIConfig
from .utils import normalize_verbosity_label


class EnvironmentManager:
    """Thin wrapper around environment access to aid testing and reuse."""

    def __init__(self, environ: MutableMapping[str, str] | None = None) -> None:
        self._environ = environ if environ is not None else os.environ

    def getenv(self, key: str) -> str | None:
        return self._environ.get(key)

    def resolve_log_level(self, config: CLIConfig, default: int | None = None) -> int:
        label = normalize_verbosity_label(self.getenv(VERBOSITY_ENV_VAR))
        if label is None:
            label = normalize_verbosity_label(config.verbosity)

        if label is None:
            fallback = VERBOSITY_PRESETS[DEFAULT_VERBOSITY]
            return fallback if default is None else default

        return VERBOSITY_PRESETS[label]

    def is_truthy(self, key: str) -> bool:
        value = self.getenv(key)
        return value is not None and value.strip().lower() in TRUTHY_ENV_VALUES

    def flag(self, key: str, fallback: bool) -> bool:
        """Boolean override from the environment; ``fallback`` when the variable is unset."""
        if self.getenv(key) is None:
            return fallback
        return self.is_truthy(key)

"""Persistence adapters for CLI configuration."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Protocol

import tomli_w

from .constants import CONFIG_FILE
from .models import CLIConfig
from .serde import config_from_dict, config_to_dict


class ConfigRepository(Protocol):
    """Abstraction for loading and persisting CLI configuration."""

    def load(self) -> CLIConfig:
        ...

    def save(self, config: CLIConfig) -> None:
        ...


class TomlConfigRepository(ConfigRepository):
    """Stores configuration in a TOML file."""

    def __init__(self, path: Path = CONFIG_FILE) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> CLIConfig:
        if not self._path.exists():
            return CLIConfig()
        with self._path.open("rb") as fh:
            payload = tomllib.load(fh)
        return config_from_dict(payload)

    def save(self, config: CLIConfig) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("wb") as fh:
            tomli_w.dump(config_to_dict(config), fh)

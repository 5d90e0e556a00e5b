"""Configuration loading, persistence and environment overrides."""

from __future__ import annotations

from functools import lru_cache

from .environment import EnvironmentManager
from .manager import ConfigManager
from .models import CLIConfig, IgnoreSettings, SandboxSettings
from .repository import TomlConfigRepository


@lru_cache(maxsize=1)
def get_config_manager() -> ConfigManager:
    return ConfigManager()


__all__ = [
    "CLIConfig",
    "ConfigManager",
    "EnvironmentManager",
    "IgnoreSettings",
    "SandboxSettings",
    "TomlConfigRepository",
    "get_config_manager",
]

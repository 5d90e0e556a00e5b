"""High-level facade over configuration persistence and runtime overrides."""

from __future__ import annotations

from toolguard.core.types.guard import GuardOptions

from .environment import EnvironmentManager
from .models import CLIConfig
from .repository import ConfigRepository, TomlConfigRepository
from .services import guard as guard_service
from .services import logging as logging_service


class ConfigManager:
    """Loads, mutates and saves the CLI configuration."""

    def __init__(
        self,
        repository: ConfigRepository | None = None,
        environment: EnvironmentManager | None = None,
    ) -> None:
        self._repository = repository or TomlConfigRepository()
        self._environment = environment or EnvironmentManager()
        self._config: CLIConfig | None = None

    @property
    def environment(self) -> EnvironmentManager:
        return self._environment

    def load(self) -> CLIConfig:
        if self._config is None:
            self._config = self._repository.load()
        return self._config

    def save(self, config: CLIConfig | None = None) -> None:
        target = config or self.load()
        self._repository.save(target)
        self._config = target

    def resolve_log_level(self) -> int:
        return self._environment.resolve_log_level(self.load())

    def get_guard_options(self) -> GuardOptions:
        return guard_service.get_guard_options(self.load(), self._environment)

    def set_allow_outside_root(self, enabled: bool) -> None:
        config = self.load()
        guard_service.set_allow_outside_root(config, enabled)
        self.save(config)

    def set_ignore_fail_closed(self, enabled: bool) -> None:
        config = self.load()
        guard_service.set_ignore_fail_closed(config, enabled)
        self.save(config)

    def effective_verbosity(self) -> str:
        return logging_service.effective_verbosity(self.load(), self._environment)

    def set_logging_verbosity(self, verbosity: str | None) -> str | None:
        config = self.load()
        label = logging_service.set_logging_verbosity(config, verbosity)
        self.save(config)
        return label

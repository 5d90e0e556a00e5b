import ast
import logging
import tempfile
import tomllib
import unittest
from pathlib import Path

from toolguard.core.configuration import (
    CLIConfig,
    ConfigManager,
    EnvironmentManager,
    TomlConfigRepository,
)
from toolguard.core.configuration.serde import config_from_dict, config_to_dict
from toolguard.core.configuration.utils import coerce_bool, normalize_verbosity_label
from toolguard.core.types.guard import GuardOptions

SRC_ROOT = Path(__file__).resolve().parents[2] / "src" / "toolguard"


class ConfigTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.config_path = Path(self.temp_dir.name) / "nested" / "config.toml"

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def _manager(self, environ: dict[str, str] | None = None) -> ConfigManager:
        return ConfigManager(TomlConfigRepository(self.config_path), EnvironmentManager(environ or {}))


class RepositoryTests(ConfigTestCase):
    def test_missing_file_yields_defaults(self) -> None:
        config = TomlConfigRepository(self.config_path).load()

        self.assertEqual(config, CLIConfig())

    def test_save_creates_parent_and_round_trips(self) -> None:
        repository = TomlConfigRepository(self.config_path)
        config = CLIConfig(verbosity="verbose")
        config.sandbox.allow_outside_root = True

        repository.save(config)

        self.assertTrue(self.config_path.exists())
        self.assertEqual(repository.load(), config)

    def test_unset_verbosity_is_omitted_from_file(self) -> None:
        TomlConfigRepository(self.config_path).save(CLIConfig())

        with self.config_path.open("rb") as fh:
            payload = tomllib.load(fh)

        self.assertNotIn("verbosity", payload)
        self.assertEqual(payload["ignore"], {"fail_closed": False})


class SerdeTests(unittest.TestCase):
    def test_malformed_sections_fall_back_to_defaults(self) -> None:
        config = config_from_dict({"verbosity": "LOUD", "sandbox": "yes", "ignore": {"fail_closed": "on"}})

        self.assertIsNone(config.verbosity)
        self.assertFalse(config.sandbox.allow_outside_root)
        self.assertTrue(config.ignore.fail_closed)

    def test_to_dict_includes_verbosity_when_set(self) -> None:
        payload = config_to_dict(CLIConfig(verbosity="standard"))

        self.assertEqual(payload["verbosity"], "standard")


class UtilsTests(unittest.TestCase):
    def test_normalize_verbosity_label(self) -> None:
        self.assertEqual(normalize_verbosity_label(" Verbose "), "verbose")
        self.assertIsNone(normalize_verbosity_label(""))
        self.assertIsNone(normalize_verbosity_label("chatty"))
        self.assertIsNone(normalize_verbosity_label(None))

    def test_coerce_bool(self) -> None:
        self.assertTrue(coerce_bool("YES"))
        self.assertTrue(coerce_bool(1))
        self.assertFalse(coerce_bool("off"))
        self.assertTrue(coerce_bool(None, default=True))


class ManagerTests(ConfigTestCase):
    def test_default_log_level_is_warning(self) -> None:
        self.assertEqual(self._manager().resolve_log_level(), logging.WARNING)

    def test_persisted_verbosity_sets_log_level(self) -> None:
        self._manager().set_logging_verbosity("verbose")

        self.assertEqual(self._manager().resolve_log_level(), logging.DEBUG)

    def test_environment_overrides_persisted_verbosity(self) -> None:
        self._manager().set_logging_verbosity("verbose")

        manager = self._manager({"TOOLGUARD_LOG_LEVEL": "standard"})

        self.assertEqual(manager.resolve_log_level(), logging.INFO)

    def test_unknown_environment_verbosity_is_ignored(self) -> None:
        self._manager().set_logging_verbosity("verbose")

        manager = self._manager({"TOOLGUARD_LOG_LEVEL": "shouty"})

        self.assertEqual(manager.resolve_log_level(), logging.DEBUG)

    def test_unknown_verbosity_is_rejected_and_not_saved(self) -> None:
        with self.assertRaises(ValueError):
            self._manager().set_logging_verbosity("chatty")

        self.assertFalse(self.config_path.exists())

    def test_effective_verbosity_defaults_to_quiet(self) -> None:
        self.assertEqual(self._manager().effective_verbosity(), "quiet")

    def test_effective_verbosity_prefers_environment(self) -> None:
        self._manager().set_logging_verbosity("standard")

        self.assertEqual(self._manager().effective_verbosity(), "standard")
        self.assertEqual(self._manager({"TOOLGUARD_LOG_LEVEL": "verbose"}).effective_verbosity(), "verbose")

    def test_guard_options_default_to_strict(self) -> None:
        self.assertEqual(self._manager().get_guard_options(), GuardOptions())

    def test_guard_options_follow_persisted_settings(self) -> None:
        manager = self._manager()
        manager.set_allow_outside_root(True)
        manager.set_ignore_fail_closed(True)

        options = self._manager().get_guard_options()

        self.assertEqual(
            options,
            GuardOptions(allow_outside_root=True, fail_closed_on_unreadable_ignore=True),
        )

    def test_environment_flags_override_persisted_settings(self) -> None:
        self._manager().set_allow_outside_root(True)

        manager = self._manager(
            {"TOOLGUARD_ALLOW_OUTSIDE_ROOT": "0", "TOOLGUARD_IGNORE_FAIL_CLOSED": "true"}
        )

        self.assertEqual(
            manager.get_guard_options(),
            GuardOptions(allow_outside_root=False, fail_closed_on_unreadable_ignore=True),
        )


class LayeringTests(unittest.TestCase):
    def _imported_modules(self, relative: str) -> set[str]:
        tree = ast.parse((SRC_ROOT / relative).read_text(encoding="utf-8"))
        return {node.module or "" for node in ast.walk(tree) if isinstance(node, ast.ImportFrom)}

    def test_configuration_does_not_import_tool_wrappers(self) -> None:
        for relative in ("core/configuration/manager.py", "core/configuration/services/guard.py"):
            with self.subTest(module=relative):
                modules = self._imported_modules(relative)
                self.assertFalse([name for name in modules if "tools" in name.split(".")], modules)

    def test_wrappers_reexport_the_shared_options_type(self) -> None:
        from toolguard.core.tools import wrappers

        self.assertIs(wrappers.GuardOptions, GuardOptions)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()

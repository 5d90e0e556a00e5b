"""Constants used throughout the configuration subsystem."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_config_dir

CONFIG_DIR = Path(os.getenv("TOOLGUARD_CONFIG_DIR", user_config_dir("toolguard")))
CONFIG_FILE = CONFIG_DIR / "config.toml"

DEFAULT_VERBOSITY = "quiet"
VERBOSITY_ENV_VAR = "TOOLGUARD_LOG_LEVEL"
ALLOW_OUTSIDE_ROOT_ENV_VAR = "TOOLGUARD_ALLOW_OUTSIDE_ROOT"
IGNORE_FAIL_CLOSED_ENV_VAR = "TOOLGUARD_IGNORE_FAIL_CLOSED"
VERBOSITY_PRESETS = {
    "quiet": logging.WARNING,
    "standard": logging.INFO,
    "verbose": logging.DEBUG,
}

TRUTHY_ENV_VALUES = {"1", "true", "yes", "on"}

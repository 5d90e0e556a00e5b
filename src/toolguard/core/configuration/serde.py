"""Conversion between CLIConfig and its TOML-friendly dictionary form."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .models import CLIConfig, IgnoreSettings, SandboxSettings
from .utils import coerce_bool, normalize_verbosity_label


def _section(payload: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = payload.get(name)
    return section if isinstance(section, Mapping) else {}


def config_from_dict(payload: Mapping[str, Any]) -> CLIConfig:
    verbosity = payload.get("verbosity")
    sandbox = _section(payload, "sandbox")
    ignore = _section(payload, "ignore")
    return CLIConfig(
        verbosity=normalize_verbosity_label(verbosity) if isinstance(verbosity, str) else None,
        sandbox=SandboxSettings(allow_outside_root=coerce_bool(sandbox.get("allow_outside_root"))),
        ignore=IgnoreSettings(fail_closed=coerce_bool(ignore.get("fail_closed"))),
    )


def config_to_dict(config: CLIConfig) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "sandbox": {"allow_outside_root": config.sandbox.allow_outside_root},
        "ignore": {"fail_closed": config.ignore.fail_closed},
    }
    # TOML has no null; omit unset values.
    if config.verbosity is not None:
        payload["verbosity"] = config.verbosity
    return payload

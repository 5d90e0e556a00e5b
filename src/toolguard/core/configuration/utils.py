"""Normalization helpers shared by configuration services."""

from __future__ import annotations

from typing import Any

from .constants import TRUTHY_ENV_VALUES, VERBOSITY_PRESETS


def normalize_verbosity_label(value: str | None) -> str | None:
    if value is None:
        return None
    label = value.strip().lower()
    if not label:
        return None
    return label if label in VERBOSITY_PRESETS else None


def coerce_bool(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_ENV_VALUES
    if isinstance(value, int):
        return value != 0
    return default

"""Argument normalization between the two file-tool naming conventions.

Models trained on Claude Code emit ``file_path``/``old_string``/``new_string``
while the file tools expect ``path``/``oldText``/``newText``. Accepting both keeps
such models from looping on schema errors.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ..errors import MissingParametersError, MissingRequiredParameterError

# (canonical, alias) pairs, applied in this order.
PARAM_ALIASES: tuple[tuple[str, str], ...] = (
    ("path", "file_path"),
    ("oldText", "old_string"),
    ("newText", "new_string"),
)


@dataclass(frozen=True, slots=True)
class RequiredParamGroup:
    """One logical parameter and the keys that may carry it."""

    keys: tuple[str, ...]
    allow_empty: bool = False
    label: str | None = None

    def describe(self) -> str:
        return self.label or " or ".join(self.keys)


_PATH_GROUP = RequiredParamGroup(keys=("path", "file_path"), label="path (path or file_path)")

CLAUDE_PARAM_GROUPS: dict[str, tuple[RequiredParamGroup, ...]] = {
    "read": (_PATH_GROUP,),
    "write": (_PATH_GROUP,),
    "edit": (
        _PATH_GROUP,
        RequiredParamGroup(keys=("oldText", "old_string"), label="oldText (oldText or old_string)"),
        RequiredParamGroup(keys=("newText", "new_string"), label="newText (newText or new_string)"),
    ),
}


def normalize_tool_params(params: Any) -> dict[str, Any] | None:
    """
    Rewrite alias keys to their canonical names.

    Returns None when ``params`` is not a mapping so callers can fall back to the
    raw arguments. An explicitly supplied canonical key always wins; the alias is
    dropped either way so downstream validation never sees both.
    """
    if not isinstance(params, Mapping):
        return None

    normalized = dict(params)
    for canonical, alias in PARAM_ALIASES:
        if alias not in normalized:
            continue
        value = normalized.pop(alias)
        if canonical not in normalized:
            normalized[canonical] = value
    return normalized


def as_param_record(params: Any, normalized: dict[str, Any] | None) -> Mapping[str, Any] | None:
    if normalized is not None:
        return normalized
    return params if isinstance(params, Mapping) else None


def _group_satisfied(record: Mapping[str, Any], group: RequiredParamGroup) -> bool:
    for key in group.keys:
        value = record.get(key)
        if not isinstance(value, str):
            continue
        if group.allow_empty or value.strip():
            return True
    return False


def assert_required_params(
    record: Mapping[str, Any] | None,
    groups: Sequence[RequiredParamGroup],
    tool_name: str,
) -> None:
    """Fail on the first group that has no usable value."""
    if not isinstance(record, Mapping):
        raise MissingParametersError(tool_name)

    for group in groups:
        if not _group_satisfied(record, group):
            raise MissingRequiredParameterError(group.describe())


__all__ = [
    "CLAUDE_PARAM_GROUPS",
    "PARAM_ALIASES",
    "RequiredParamGroup",
    "as_param_record",
    "assert_required_params",
    "normalize_tool_params",
]

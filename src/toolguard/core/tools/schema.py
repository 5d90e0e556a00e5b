"""Schema patching so validators accept either parameter naming convention."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

from ..types.tools import ToolDefinition
from .params import PARAM_ALIASES


def patch_tool_schema_for_claude_compatibility(tool: ToolDefinition) -> ToolDefinition:
    """
    Declare alias properties next to their canonical ones and relax requiredness.

    A schema validator may run before argument normalization, so an alias-only
    call must validate: each alias mirrors its canonical property and the
    canonical key leaves ``required``. Returns ``tool`` itself when the schema
    needs no change.
    """
    schema = tool.parameters if isinstance(tool.parameters, Mapping) else None
    if schema is None or not isinstance(schema.get("properties"), Mapping):
        return tool

    properties: dict[str, Any] = dict(schema["properties"])
    raw_required = schema.get("required")
    required = [key for key in raw_required if isinstance(key, str)] if isinstance(raw_required, list) else []
    changed = False

    for canonical, alias in PARAM_ALIASES:
        if canonical not in properties:
            continue
        if alias not in properties:
            properties[alias] = properties[canonical]
            changed = True
        if canonical in required:
            required.remove(canonical)
            changed = True

    if not changed:
        return tool

    patched_schema = {**schema, "properties": properties, "required": required}
    return dataclasses.replace(tool, parameters=patched_schema)


__all__ = ["patch_tool_schema_for_claude_compatibility"]

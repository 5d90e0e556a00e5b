"""Sandboxed, alias-tolerant file tools for coding agents."""

from toolguard.core.errors import (
    AccessDeniedError,
    EmptyImagePayloadError,
    IgnorePolicyError,
    ImageTypeMismatchError,
    MissingParametersError,
    MissingRequiredParameterError,
    SandboxEscapeError,
    ToolGuardError,
)
from toolguard.core.tools.wrappers import (
    GuardOptions,
    create_sandboxed_edit_tool,
    create_sandboxed_read_tool,
    create_sandboxed_tools,
    create_sandboxed_write_tool,
)
from toolguard.core.types.tools import ToolDefinition, ToolResult

__all__ = [
    "AccessDeniedError",
    "EmptyImagePayloadError",
    "GuardOptions",
    "IgnorePolicyError",
    "ImageTypeMismatchError",
    "MissingParametersError",
    "MissingRequiredParameterError",
    "SandboxEscapeError",
    "ToolDefinition",
    "ToolGuardError",
    "ToolResult",
    "create_sandboxed_edit_tool",
    "create_sandboxed_read_tool",
    "create_sandboxed_tools",
    "create_sandboxed_write_tool",
]

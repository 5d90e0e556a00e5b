"""
core/tools/__init__.py
"""

from .params import CLAUDE_PARAM_GROUPS, RequiredParamGroup, assert_required_params, normalize_tool_params
from .schema import patch_tool_schema_for_claude_compatibility
from .wrappers import (
    GuardOptions,
    authorize_path,
    create_sandboxed_edit_tool,
    create_sandboxed_read_tool,
    create_sandboxed_tools,
    create_sandboxed_write_tool,
    wrap_read_tool,
    wrap_sandbox_path_guard,
    wrap_tool_param_normalization,
)

__all__ = [
    "CLAUDE_PARAM_GROUPS",
    "GuardOptions",
    "RequiredParamGroup",
    "assert_required_params",
    "authorize_path",
    "create_sandboxed_edit_tool",
    "create_sandboxed_read_tool",
    "create_sandboxed_tools",
    "create_sandboxed_write_tool",
    "normalize_tool_params",
    "patch_tool_schema_for_claude_compatibility",
    "wrap_read_tool",
    "wrap_sandbox_path_guard",
    "wrap_tool_param_normalization",
]

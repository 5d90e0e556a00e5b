"""Guard wrappers that turn plain file tools into sandboxed, alias-tolerant ones.

Pipeline for one call:

    raw args -> alias normalization -> required-param check -> sandbox resolve
             -> .ignore policy -> underlying tool -> (read) image verification
             -> (read) image size limits

Every wrapper returns a new ``ToolDefinition`` and forwards the cancellation
signal and progress callback to the wrapped tool untouched.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..errors import ToolGuardError
from ..ignore.policy import check_ignore_policy
from ..results.images import normalize_read_image_result
from ..results.sanitize import ImageLimits, sanitize_tool_result_images
from ..sandbox.paths import assert_sandbox_path, resolve_unsandboxed_path
from ..types.guard import GuardOptions
from ..types.tools import CancellationSignal, ProgressCallback, ToolDefinition, ToolResult
from .builtin import create_edit_tool, create_read_tool, create_write_tool
from .params import (
    CLAUDE_PARAM_GROUPS,
    RequiredParamGroup,
    as_param_record,
    assert_required_params,
    normalize_tool_params,
)
from .schema import patch_tool_schema_for_claude_compatibility

logger = logging.getLogger(__name__)

_UNKNOWN_PATH = "<unknown>"


async def authorize_path(file_path: str, root: Path, options: GuardOptions | None = None) -> Path:
    """
    Resolve ``file_path`` against ``root`` and run the sandbox and ignore checks.

    ``root`` must already be canonical (see ``wrap_sandbox_path_guard``).

    Returns:
        The canonical absolute path the call may touch.

    Raises:
        SandboxEscapeError: The path leaves ``root`` and outside paths are not allowed.
        AccessDeniedError: The path is blocked by an ``.ignore`` rule.
        IgnorePolicyError: An ignore file is unreadable and the policy fails closed.
    """
    guard_options = options or GuardOptions()
    if guard_options.allow_outside_root:
        resolved = resolve_unsandboxed_path(file_path, cwd=root)
    else:
        resolved = assert_sandbox_path(file_path, cwd=root, root=root).resolved
    await check_ignore_policy(resolved, root, fail_closed=guard_options.fail_closed_on_unreadable_ignore)
    return resolved


def wrap_tool_param_normalization(
    tool: ToolDefinition,
    required_param_groups: Sequence[RequiredParamGroup] | None = None,
) -> ToolDefinition:
    """Accept both naming conventions and validate required params after normalizing."""
    patched = patch_tool_schema_for_claude_compatibility(tool)

    async def execute(
        tool_call_id: str,
        params: Any,
        signal: CancellationSignal | None = None,
        on_update: ProgressCallback | None = None,
    ) -> ToolResult:
        normalized = normalize_tool_params(params)
        if required_param_groups:
            assert_required_params(as_param_record(params, normalized), required_param_groups, tool.name)
        return await tool.execute(
            tool_call_id,
            normalized if normalized is not None else params,
            signal,
            on_update,
        )

    return dataclasses.replace(patched, execute=execute)


def wrap_sandbox_path_guard(
    tool: ToolDefinition,
    root: Path,
    options: GuardOptions | None = None,
) -> ToolDefinition:
    """
    Reject calls whose ``path`` escapes ``root`` or is blocked by ``.ignore`` files.

    Both checks run before the wrapped tool; a failure means it never executes.
    Calls without a usable ``path`` pass through so the wrapped tool can report
    the missing parameter itself.
    """
    guard_options = options or GuardOptions()
    sandbox_root = Path(root).resolve()

    async def execute(
        tool_call_id: str,
        params: Any,
        signal: CancellationSignal | None = None,
        on_update: ProgressCallback | None = None,
    ) -> ToolResult:
        normalized = normalize_tool_params(params)
        record = as_param_record(params, normalized)
        file_path = record.get("path") if record is not None else None
        if isinstance(file_path, str) and file_path.strip():
            try:
                resolved = await authorize_path(file_path, sandbox_root, guard_options)
            except ToolGuardError as error:
                logger.warning("[%s] %s denied: %s", tool_call_id, tool.name, error)
                raise
            logger.debug("[%s] %s allowed: %s", tool_call_id, tool.name, resolved.as_posix())
        return await tool.execute(
            tool_call_id,
            normalized if normalized is not None else params,
            signal,
            on_update,
        )

    return dataclasses.replace(tool, execute=execute)


def wrap_read_tool(base: ToolDefinition, image_limits: ImageLimits | None = None) -> ToolDefinition:
    """Alias-tolerant read tool whose image results are checked against their bytes and size-bounded."""
    patched = patch_tool_schema_for_claude_compatibility(base)

    async def execute(
        tool_call_id: str,
        params: Any,
        signal: CancellationSignal | None = None,
        on_update: ProgressCallback | None = None,
    ) -> ToolResult:
        normalized = normalize_tool_params(params)
        record = as_param_record(params, normalized)
        assert_required_params(record, CLAUDE_PARAM_GROUPS["read"], base.name)
        result = await base.execute(
            tool_call_id,
            normalized if normalized is not None else params,
            signal,
            on_update,
        )
        file_path = record.get("path") if record is not None else None
        label = file_path if isinstance(file_path, str) else _UNKNOWN_PATH
        normalized_result = normalize_read_image_result(result, label)
        return await asyncio.to_thread(sanitize_tool_result_images, normalized_result, f"read:{label}", image_limits)

    return dataclasses.replace(patched, execute=execute)


def create_sandboxed_read_tool(root: Path, options: GuardOptions | None = None) -> ToolDefinition:
    return wrap_sandbox_path_guard(wrap_read_tool(create_read_tool(Path(root))), root, options)


def create_sandboxed_write_tool(root: Path, options: GuardOptions | None = None) -> ToolDefinition:
    base = create_write_tool(Path(root))
    return wrap_sandbox_path_guard(wrap_tool_param_normalization(base, CLAUDE_PARAM_GROUPS["write"]), root, options)


def create_sandboxed_edit_tool(root: Path, options: GuardOptions | None = None) -> ToolDefinition:
    base = create_edit_tool(Path(root))
    return wrap_sandbox_path_guard(wrap_tool_param_normalization(base, CLAUDE_PARAM_GROUPS["edit"]), root, options)


def create_sandboxed_tools(root: Path, options: GuardOptions | None = None) -> list[ToolDefinition]:
    """The read, write and edit tools for one sandbox root, in that order."""
    return [
        create_sandboxed_read_tool(root, options),
        create_sandboxed_write_tool(root, options),
        create_sandboxed_edit_tool(root, options),
    ]


__all__ = [
    "GuardOptions",
    "authorize_path",
    "create_sandboxed_edit_tool",
    "create_sandboxed_read_tool",
    "create_sandboxed_tools",
    "create_sandboxed_write_tool",
    "wrap_read_tool",
    "wrap_sandbox_path_guard",
    "wrap_tool_param_normalization",
]

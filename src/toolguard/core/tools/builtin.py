"""Plain read/write/edit file tools rooted at a working directory.

These perform the actual filesystem I/O and know nothing about aliases,
sandboxing or ignore policies; the wrappers in ``wrappers.py`` add those.
"""

from __future__ import annotations

import asyncio
import base64
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..errors import OperationCancelledError
from ..media.mime import guess_mime_from_path, is_image_mime
from ..sandbox.paths import resolve_unsandboxed_path
from ..types.tools import (
    CancellationSignal,
    ProgressCallback,
    ToolDefinition,
    ToolResult,
    image_block,
    text_block,
)

DEFAULT_READ_LINE_LIMIT = 2000

READ_TOOL_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "path": {"type": "string", "description": "Path to the file to read (relative or absolute)."},
        "offset": {"type": "integer", "description": "Line number to start reading from (1-indexed)."},
        "limit": {"type": "integer", "description": "Maximum number of lines to read."},
    },
    "required": ["path"],
}

WRITE_TOOL_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "path": {"type": "string", "description": "Path to the file to write (relative or absolute)."},
        "content": {"type": "string", "description": "Content to write to the file."},
    },
    "required": ["path", "content"],
}

EDIT_TOOL_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "path": {"type": "string", "description": "Path to the file to edit (relative or absolute)."},
        "oldText": {"type": "string", "description": "Exact text to find and replace (must match exactly)."},
        "newText": {"type": "string", "description": "New text to replace the old text with."},
    },
    "required": ["path", "oldText", "newText"],
}


def _ensure_not_cancelled(tool_name: str, signal: CancellationSignal | None) -> None:
    if signal is not None and signal.is_set():
        raise OperationCancelledError(tool_name)


def _resolve_target(root: Path, params: Mapping[str, Any]) -> Path:
    # Same resolution as the sandbox guard, so the checked path is the one opened.
    return resolve_unsandboxed_path(str(params["path"]), cwd=root)


def _read_image(target: Path, mime_type: str) -> ToolResult:
    payload = base64.b64encode(target.read_bytes()).decode("ascii")
    return ToolResult(
        content=[text_block(f"Read image file [{mime_type}]"), image_block(payload, mime_type)],
        details={"path": target.as_posix(), "mime_type": mime_type},
    )


def _read_text(target: Path, offset: int | None, limit: int | None) -> ToolResult:
    lines = target.read_text(encoding="utf-8", errors="replace").splitlines()
    total = len(lines)
    start = max((offset or 1) - 1, 0)
    if start > 0 and start >= total:
        raise ValueError(f"Offset {offset} is beyond end of file ({total} lines total)")

    count = limit if limit and limit > 0 else DEFAULT_READ_LINE_LIMIT
    window = lines[start:start + count]
    text = "\n".join(window)
    end = start + len(window)
    if end < total:
        text += f"\n\n[Showing lines {start + 1}-{end} of {total}. Use offset={end + 1} to continue]"
    return ToolResult(content=[text_block(text)], details={"path": target.as_posix(), "lines": total})


def _atomic_write_text(path: Path, text: str) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)
    file_descriptor, temporary_path = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=path.parent,
    )
    try:
        with os.fdopen(file_descriptor, "w", encoding="utf-8") as handle:
            written = handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temporary_path, path)
    finally:
        if os.path.exists(temporary_path):
            os.remove(temporary_path)
    return written


def _apply_edit(target: Path, old_text: str, new_text: str) -> None:
    if not target.is_file():
        raise FileNotFoundError(f"File not found: {target.as_posix()}")
    content = target.read_text(encoding="utf-8")
    occurrences = content.count(old_text)
    if occurrences == 0:
        raise ValueError(f"Could not find the exact text in {target.as_posix()}.")
    if occurrences > 1:
        raise ValueError(
            f"Found {occurrences} occurrences of the text in {target.as_posix()}. "
            "Provide more context to make it unique."
        )
    _atomic_write_text(target, content.replace(old_text, new_text, 1))


def create_read_tool(root: Path) -> ToolDefinition:
    """Read text files in line windows, or image files as base64 payloads."""

    async def execute(
        tool_call_id: str,
        params: Any,
        signal: CancellationSignal | None = None,
        on_update: ProgressCallback | None = None,
    ) -> ToolResult:
        _ensure_not_cancelled("read", signal)
        target = _resolve_target(root, params)
        if not target.is_file():
            raise FileNotFoundError(f"File not found: {target.as_posix()}")

        mime_type = guess_mime_from_path(target)
        if is_image_mime(mime_type):
            return await asyncio.to_thread(_read_image, target, mime_type)
        return await asyncio.to_thread(_read_text, target, params.get("offset"), params.get("limit"))

    return ToolDefinition(
        name="read",
        description="Read the contents of a file. Images are returned as attachments.",
        parameters=READ_TOOL_SCHEMA,
        execute=execute,
    )


def create_write_tool(root: Path) -> ToolDefinition:
    """Write a file atomically, creating parent directories."""

    async def execute(
        tool_call_id: str,
        params: Any,
        signal: CancellationSignal | None = None,
        on_update: ProgressCallback | None = None,
    ) -> ToolResult:
        _ensure_not_cancelled("write", signal)
        target = _resolve_target(root, params)
        content = params.get("content", "")
        if not isinstance(content, str):
            raise ValueError("write: content must be a string")
        written = await asyncio.to_thread(_atomic_write_text, target, content)
        return ToolResult(
            content=[text_block(f"Successfully wrote {written} characters to {params['path']}")],
            details={"path": target.as_posix(), "characters": written},
        )

    return ToolDefinition(
        name="write",
        description="Write content to a file. Creates the file and parent directories if needed.",
        parameters=WRITE_TOOL_SCHEMA,
        execute=execute,
    )


def create_edit_tool(root: Path) -> ToolDefinition:
    """Replace one exact, unique occurrence of ``oldText`` with ``newText``."""

    async def execute(
        tool_call_id: str,
        params: Any,
        signal: CancellationSignal | None = None,
        on_update: ProgressCallback | None = None,
    ) -> ToolResult:
        _ensure_not_cancelled("edit", signal)
        target = _resolve_target(root, params)
        await asyncio.to_thread(_apply_edit, target, params["oldText"], params["newText"])
        return ToolResult(
            content=[text_block(f"Successfully replaced text in {params['path']}.")],
            details={"path": target.as_posix()},
        )

    return ToolDefinition(
        name="edit",
        description="Edit a file by replacing exact text. The old text must match exactly once.",
        parameters=EDIT_TOOL_SCHEMA,
        execute=execute,
    )


__all__ = [
    "DEFAULT_READ_LINE_LIMIT",
    "EDIT_TOOL_SCHEMA",
    "READ_TOOL_SCHEMA",
    "WRITE_TOOL_SCHEMA",
    "create_edit_tool",
    "create_read_tool",
    "create_write_tool",
]

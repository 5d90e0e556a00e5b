"""
core/types/tools.py

This module defines the tool execution contract shared by the guard wrappers and
the file tools they decorate: tool definitions, results and content blocks.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol, TypedDict

CancellationSignal = asyncio.Event
"""Set when the caller wants the in-flight operation abandoned."""


class TextContent(TypedDict):
    """Plain text block."""
    type: Literal["text"]
    text: str


class ImageContent(TypedDict):
    """Inline image block carrying a base64 payload and its declared media type."""
    type: Literal["image"]
    data: str
    mime_type: str


ContentBlock = TextContent | ImageContent | dict[str, Any]


@dataclass
class ToolResult:
    """Ordered content blocks produced by one tool execution."""

    content: list[ContentBlock] = field(default_factory=list)
    details: Any = None


ProgressCallback = Callable[[ToolResult], None]


class ToolExecute(Protocol):
    def __call__(
        self,
        tool_call_id: str,
        params: Any,
        signal: CancellationSignal | None = None,
        on_update: ProgressCallback | None = None,
    ) -> Awaitable[ToolResult]:
        ...


@dataclass(frozen=True)
class ToolDefinition:
    """
    A tool exposed to the agent.

    Definitions are values: wrappers build new ones with ``dataclasses.replace``
    instead of mutating the instance they decorate.
    """

    name: str
    description: str
    parameters: Mapping[str, Any]
    execute: ToolExecute


def text_block(text: str) -> TextContent:
    return {"type": "text", "text": text}


def image_block(data: str, mime_type: str) -> ImageContent:
    return {"type": "image", "data": data, "mime_type": mime_type}


__all__ = [
    "CancellationSignal",
    "ContentBlock",
    "ImageContent",
    "ProgressCallback",
    "TextContent",
    "ToolDefinition",
    "ToolExecute",
    "ToolResult",
    "image_block",
    "text_block",
]

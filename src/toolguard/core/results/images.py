"""Post-processing for read results that carry inline images.

The read tool declares an image type from the file name. Before the payload
reaches a model provider the declared type is checked against the payload's
magic bytes: a wrong image type is corrected, a non-image payload is rejected.
"""

from __future__ import annotations

import base64
import binascii
import dataclasses
import logging
from typing import Any

from ..errors import EmptyImagePayloadError, ImageTypeMismatchError
from ..media.mime import detect_mime, is_image_mime
from ..types.tools import ContentBlock, ImageContent, ToolResult

logger = logging.getLogger(__name__)

_SNIFF_MAX_CHARS = 256
_BASE64_BLOCK = 4
_SNIFF_MIN_CHARS = 8
_READ_IMAGE_HEADER_PREFIX = "Read image file ["
_READ_IMAGE_HEADER_SUFFIX = "]"


def sniff_mime_from_base64(data: str) -> str | None:
    """Detect the media type from the first few base64 blocks of ``data``."""
    trimmed = data.strip()
    if not trimmed:
        return None

    take = min(_SNIFF_MAX_CHARS, len(trimmed))
    slice_len = take - (take % _BASE64_BLOCK)
    if slice_len < _SNIFF_MIN_CHARS:
        return None

    try:
        head = base64.b64decode(trimmed[:slice_len], validate=False)
    except (binascii.Error, ValueError):
        return None
    return detect_mime(head)


def rewrite_read_image_header(text: str, mime_type: str) -> str:
    # The read tool emits "Read image file [image/png]".
    if text.startswith(_READ_IMAGE_HEADER_PREFIX) and text.endswith(_READ_IMAGE_HEADER_SUFFIX):
        return f"{_READ_IMAGE_HEADER_PREFIX}{mime_type}{_READ_IMAGE_HEADER_SUFFIX}"
    return text


def _is_image_block(block: Any) -> bool:
    return (
        isinstance(block, dict)
        and block.get("type") == "image"
        and isinstance(block.get("data"), str)
        and isinstance(block.get("mime_type"), str)
    )


def _is_text_block(block: Any) -> bool:
    return isinstance(block, dict) and block.get("type") == "text" and isinstance(block.get("text"), str)


def _find_image_block(content: list[ContentBlock]) -> ImageContent | None:
    for block in content:
        if _is_image_block(block):
            return block  # type: ignore[return-value]
    return None


def normalize_read_image_result(result: ToolResult, file_path: str) -> ToolResult:
    """
    Verify the image block of a read result against its actual bytes.

    Args:
        result: Result returned by the underlying read tool.
        file_path: Path the caller asked for, used in error messages.

    Returns:
        ``result`` itself when there is nothing to correct, otherwise a new result
        whose image blocks and ``Read image file [...]`` header carry the sniffed type.

    Raises:
        EmptyImagePayloadError: The image payload is blank.
        ImageTypeMismatchError: The payload is not an image at all.
    """
    content = result.content if isinstance(result.content, list) else []
    image = _find_image_block(content)
    if image is None:
        return result

    if not image["data"].strip():
        raise EmptyImagePayloadError(file_path)

    sniffed = sniff_mime_from_base64(image["data"])
    if sniffed is None:
        return result

    declared = image["mime_type"]
    if not is_image_mime(sniffed):
        raise ImageTypeMismatchError(file_path, detected=sniffed, declared=declared)

    if sniffed == declared:
        return result

    logger.info("Correcting image type for %s: declared %s, detected %s", file_path, declared, sniffed)
    next_content: list[ContentBlock] = []
    for block in content:
        if isinstance(block, dict) and block.get("type") == "image":
            next_content.append({**block, "mime_type": sniffed})
        elif _is_text_block(block):
            next_content.append({**block, "text": rewrite_read_image_header(block["text"], sniffed)})
        else:
            next_content.append(block)

    return dataclasses.replace(result, content=next_content)


__all__ = [
    "normalize_read_image_result",
    "rewrite_read_image_header",
    "sniff_mime_from_base64",
]

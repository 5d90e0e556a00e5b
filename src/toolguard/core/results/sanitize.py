"""Keep inline images within provider size limits.

Oversized image blocks are downscaled and re-encoded with Pillow. Blocks that
cannot be brought under the byte limit are replaced by a text notice, so the
payload never reaches a provider.
"""

from __future__ import annotations

import base64
import binascii
import dataclasses
import io
import logging
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from ..types.tools import ContentBlock, ToolResult, image_block, text_block
from .images import rewrite_read_image_header

logger = logging.getLogger(__name__)

DEFAULT_MAX_IMAGE_DIMENSION = 2000
DEFAULT_MAX_IMAGE_BYTES = 5 * 1024 * 1024

_SCALE_STEPS = (1.0, 0.75, 0.5, 0.25)
_JPEG_QUALITY_STEPS = (85, 75, 60, 45)


@dataclass(frozen=True, slots=True)
class ImageLimits:
    max_dimension: int = DEFAULT_MAX_IMAGE_DIMENSION
    max_bytes: int = DEFAULT_MAX_IMAGE_BYTES


def _encode(image: Image.Image, image_format: str, **options) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=image_format, **options)
    return buffer.getvalue()


def _shrink(raw: bytes, limits: ImageLimits) -> tuple[bytes, str] | None:
    """Return ``(bytes, mime_type)`` that fit ``limits``, or ``None`` when nothing fits."""
    with Image.open(io.BytesIO(raw)) as source:
        source.load()
        keep_png = source.format == "PNG"
        bounded = source.copy()
    bounded.thumbnail((limits.max_dimension, limits.max_dimension))

    for scale in _SCALE_STEPS:
        width = max(1, int(bounded.width * scale))
        height = max(1, int(bounded.height * scale))
        candidate = bounded if scale == 1.0 else bounded.resize((width, height))

        if keep_png:
            encoded = _encode(candidate, "PNG", optimize=True)
            if len(encoded) <= limits.max_bytes:
                return encoded, "image/png"

        rgb = candidate.convert("RGB")
        for quality in _JPEG_QUALITY_STEPS:
            encoded = _encode(rgb, "JPEG", quality=quality, optimize=True)
            if len(encoded) <= limits.max_bytes:
                return encoded, "image/jpeg"
    return None


def _fits(raw: bytes, limits: ImageLimits) -> bool | None:
    """True/False when the image can be measured, ``None`` when Pillow cannot open it."""
    if len(raw) > limits.max_bytes:
        return False
    try:
        with Image.open(io.BytesIO(raw)) as image:
            width, height = image.size
    except (UnidentifiedImageError, OSError):
        return None
    return width <= limits.max_dimension and height <= limits.max_dimension


def _sanitize_block(block: dict, label: str, limits: ImageLimits) -> tuple[ContentBlock, str | None]:
    """Return the block to keep and, when it was re-encoded, its new mime type."""
    try:
        raw = base64.b64decode(block["data"], validate=False)
    except (binascii.Error, ValueError):
        logger.warning("[%s] dropping image with undecodable payload", label)
        return text_block(f"[{label}] omitted image payload: invalid base64 data"), None

    fits = _fits(raw, limits)
    if fits is None or fits:
        return block, None

    try:
        shrunk = _shrink(raw, limits)
    except (UnidentifiedImageError, OSError) as error:
        logger.warning("[%s] dropping oversized image that could not be decoded: %s", label, error)
        return text_block(f"[{label}] omitted image payload: {len(raw)} bytes could not be decoded"), None

    if shrunk is None:
        logger.warning("[%s] dropping image that stays above %d bytes", label, limits.max_bytes)
        return (
            text_block(f"[{label}] omitted image payload: could not shrink below {limits.max_bytes} bytes"),
            None,
        )

    encoded, mime_type = shrunk
    logger.info("[%s] resized image from %d to %d bytes (%s)", label, len(raw), len(encoded), mime_type)
    return image_block(base64.b64encode(encoded).decode("ascii"), mime_type), mime_type


def sanitize_tool_result_images(result: ToolResult, label: str, limits: ImageLimits | None = None) -> ToolResult:
    """
    Downscale or drop image blocks that exceed ``limits``.

    Args:
        result: Tool result that may carry image blocks.
        label: Prefix for log lines and omission notices, e.g. ``read:photo.png``.
        limits: Size bounds; defaults to 2000px per side and 5 MiB per image.

    Returns:
        ``result`` itself when every image already fits, otherwise a new result.
        A re-encoded image also updates any ``Read image file [...]`` header.
    """
    bounds = limits or ImageLimits()
    content = result.content if isinstance(result.content, list) else []

    changed = False
    new_mime: str | None = None
    next_content: list[ContentBlock] = []
    for block in content:
        if isinstance(block, dict) and block.get("type") == "image" and isinstance(block.get("data"), str):
            kept, mime_type = _sanitize_block(block, label, bounds)
            changed = changed or kept is not block
            new_mime = mime_type or new_mime
            next_content.append(kept)
        else:
            next_content.append(block)

    if not changed:
        return result

    if new_mime is not None:
        next_content = [
            {**block, "text": rewrite_read_image_header(block["text"], new_mime)}
            if isinstance(block, dict) and block.get("type") == "text" and isinstance(block.get("text"), str)
            else block
            for block in next_content
        ]
    return dataclasses.replace(result, content=next_content)


__all__ = [
    "DEFAULT_MAX_IMAGE_BYTES",
    "DEFAULT_MAX_IMAGE_DIMENSION",
    "ImageLimits",
    "sanitize_tool_result_images",
]

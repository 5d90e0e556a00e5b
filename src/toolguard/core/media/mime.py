"""Media type detection helpers."""

from __future__ import annotations

import mimetypes
from pathlib import Path

import filetype


def detect_mime(buffer: bytes) -> str | None:
    """Best-effort media type from the leading bytes of ``buffer`` (magic signatures only)."""
    if not buffer:
        return None
    kind = filetype.guess(buffer)
    return kind.mime if kind is not None else None


def guess_mime_from_path(path: Path) -> str | None:
    """Media type implied by the file extension, without reading the file."""
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type


def is_image_mime(mime_type: str | None) -> bool:
    return bool(mime_type) and mime_type.startswith("image/")


__all__ = ["detect_mime", "guess_mime_from_path", "is_image_mime"]

"""Sandbox path resolution: keep tool path arguments inside a configured root.

Prevents path traversal by resolving caller-supplied paths (symlinks included)
and rejecting anything that does not stay under the canonical root.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ..errors import SandboxEscapeError

_FILE_URL_PREFIX = "file://"


@dataclass(frozen=True, slots=True)
class SandboxPath:
    resolved: Path
    relative: str


def _expand_user_path(file_path: str) -> str:
    candidate = file_path.strip()
    if candidate.startswith(_FILE_URL_PREFIX):
        candidate = candidate[len(_FILE_URL_PREFIX):]
    return os.path.expanduser(candidate)


def _join_with_cwd(file_path: str, cwd: Path) -> Path:
    candidate = Path(_expand_user_path(file_path))
    if not candidate.is_absolute():
        candidate = cwd / candidate
    return candidate


def resolve_unsandboxed_path(file_path: str, *, cwd: Path) -> Path:
    """Resolve ``file_path`` against ``cwd`` without any boundary check."""
    return _join_with_cwd(file_path, cwd).resolve()


def assert_sandbox_path(file_path: str, *, cwd: Path, root: Path) -> SandboxPath:
    """
    Resolve ``file_path`` and guarantee it stays inside ``root``.

    Args:
        file_path: Path supplied by the caller, absolute or relative to ``cwd``.
        cwd: Working directory relative paths are resolved against.
        root: Sandbox boundary.

    Returns:
        The canonical absolute path and its POSIX form relative to the root.

    Raises:
        SandboxEscapeError: On a ``..`` escape or a symlink pointing outside.
    """
    root_resolved = root.resolve()
    joined = _join_with_cwd(file_path, cwd)

    # Lexical check first so "../x" is reported even when it does not exist.
    lexical = Path(os.path.normpath(joined))
    lexical_root = Path(os.path.normpath(root.absolute()))
    if not (lexical.is_relative_to(lexical_root) or lexical.is_relative_to(root_resolved)):
        raise SandboxEscapeError(file_path, root_resolved)

    resolved = joined.resolve()
    try:
        relative = resolved.relative_to(root_resolved)
    except ValueError:
        raise SandboxEscapeError(
            file_path,
            root_resolved,
            reason="resolves through a symlink outside sandbox root",
        ) from None

    return SandboxPath(resolved=resolved, relative=relative.as_posix())


__all__ = ["SandboxPath", "assert_sandbox_path", "resolve_unsandboxed_path"]

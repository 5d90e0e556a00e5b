"""Exception types raised by the tool guard layer.

Each class maps onto one failure category of the guard pipeline so callers can
tell a malformed call apart from a policy denial or an untrustworthy result.
None of them are retried here; retry policy belongs to the orchestration layer.
"""

from __future__ import annotations

from pathlib import Path


class ToolGuardError(Exception):
    """Base class for every failure surfaced by the guard pipeline."""


class MissingParametersError(ToolGuardError, ValueError):
    """Raised when a tool call carries no argument mapping at all."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Missing parameters for {tool_name}")
        self.tool_name = tool_name


class MissingRequiredParameterError(ToolGuardError, ValueError):
    """Raised for the first required parameter group left unsatisfied."""

    def __init__(self, label: str) -> None:
        super().__init__(f"Missing required parameter: {label}")
        self.label = label


class SandboxEscapeError(ToolGuardError, PermissionError):
    """Raised when a path resolves outside the sandbox root."""

    def __init__(self, path: str, root: Path, *, reason: str = "escapes sandbox root") -> None:
        super().__init__(f"Path {path!r} {reason} ({root.as_posix()})")
        self.path = path
        self.root = root


class AccessDeniedError(ToolGuardError, PermissionError):
    """Raised when a path is blocked by the hierarchical .ignore policy."""

    def __init__(self, relative_path: str) -> None:
        super().__init__(f"Access denied: Path {relative_path} is ignored by .ignore policy.")
        self.path = relative_path


class IgnorePolicyError(ToolGuardError, OSError):
    """Raised when an ignore file exists but cannot be read and the policy fails closed."""

    def __init__(self, ignore_file: Path, cause: BaseException) -> None:
        super().__init__(
            f"Access denied: ignore file {ignore_file.as_posix()} could not be read ({cause})"
        )
        self.ignore_file = ignore_file


class EmptyImagePayloadError(ToolGuardError, ValueError):
    def __init__(self, path: str) -> None:
        super().__init__(f"read: image payload is empty ({path})")
        self.path = path


class ImageTypeMismatchError(ToolGuardError, ValueError):
    def __init__(self, path: str, *, detected: str, declared: str) -> None:
        super().__init__(f"read: file looks like {detected} but was treated as {declared} ({path})")
        self.path = path
        self.detected = detected
        self.declared = declared


class OperationCancelledError(ToolGuardError, RuntimeError):
    """Raised by the built-in file tools when the cancellation signal is already set."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"{tool_name}: operation cancelled")
        self.tool_name = tool_name


__all__ = [
    "AccessDeniedError",
    "EmptyImagePayloadError",
    "IgnorePolicyError",
    "ImageTypeMismatchError",
    "MissingParametersError",
    "MissingRequiredParameterError",
    "OperationCancelledError",
    "SandboxEscapeError",
    "ToolGuardError",
]

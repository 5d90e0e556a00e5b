"""Options shared by the guard pipeline and the configuration layer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GuardOptions:
    """Knobs for the sandbox guard.

    ``allow_outside_root`` lets paths outside the root through; the ignore policy
    is then evaluated from the filesystem root of that path.
    ``fail_closed_on_unreadable_ignore`` denies access when an ``.ignore`` file
    exists but cannot be read, instead of treating it as empty.
    """

    allow_outside_root: bool = False
    fail_closed_on_unreadable_ignore: bool = False


__all__ = ["GuardOptions"]

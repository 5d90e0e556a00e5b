"""Hierarchical ``.ignore`` policy evaluated through one flat gitignore matcher.

``pathspec`` understands a single rule set rooted at one directory. Nested
``.ignore`` files are emulated by rewriting every rule into the coordinate
system of an anchor directory (the sandbox root, or the filesystem root for
paths outside it) and feeding them to one matcher in top-down order, so deeper
files override shallower ones:

    root/.ignore:      *.log        ->  *.log
    root/sub/.ignore:  *.secret     ->  sub/*.secret
    root/sub/.ignore:  !keep.secret ->  !sub/keep.secret
    root/sub/.ignore:  /build       ->  /sub/build
    root/.ignore:      /secret.txt  ->  /secret.txt

Negation and the leading ``/`` anchor are resolved before prefixing. A
negation in ``sub/.ignore`` must only re-include files under ``sub/``.
Directory names are glob-escaped, so ``[ab]/`` or ``!private/`` stay literal.

Built rule sets are cached for the lifetime of the process under
``(anchor, directory)``. Edits to ``.ignore`` files during a run are not
picked up.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from pathspec import GitIgnoreSpec

from ..errors import AccessDeniedError, IgnorePolicyError

logger = logging.getLogger(__name__)

IGNORE_FILENAME = ".ignore"
_COMMENT_PREFIX = "#"
_NEGATION_PREFIX = "!"
_ROOT_ANCHOR_PREFIX = "/"
_GLOB_METACHARACTERS = frozenset("\\[]*?")


@dataclass(frozen=True, slots=True)
class IgnoreRuleSet:
    """Anchor-relative rules gathered for one directory, compiled once."""

    anchor: Path
    directory: Path
    rules: tuple[str, ...]
    spec: GitIgnoreSpec

    def matches(self, relative_path: str) -> bool:
        return self.spec.match_file(relative_path)


_RULESET_CACHE: dict[tuple[Path, Path], IgnoreRuleSet] = {}


def clear_ignore_cache() -> None:
    """Drop every cached rule set. Only tests need this."""
    _RULESET_CACHE.clear()


def resolve_anchor(path: Path, root: Path) -> Path:
    """
    Return ``root`` when ``path`` lies under it, else the filesystem root of ``path``.

    Both arguments must already be canonical; nothing here touches the filesystem.
    """
    if path.is_relative_to(root):
        return root
    return Path(path.anchor)


def directory_chain(directory: Path, anchor: Path) -> list[Path]:
    """
    List the directories from ``anchor`` down to ``directory``, both inclusive.

    Walks parents upward and stops at the anchor or when no parent is left, then
    reverses so ancestors come first.
    """
    chain: list[Path] = []
    current = directory
    while True:
        chain.append(current)
        if current == anchor:
            break
        parent = current.parent
        if parent == current:
            break
        current = parent
    chain.reverse()
    return chain


def escape_glob(text: str) -> str:
    """Escape ``text`` so gitignore matching treats it as a literal path fragment."""
    escaped = "".join(f"\\{char}" if char in _GLOB_METACHARACTERS else char for char in text)
    if escaped.startswith((_NEGATION_PREFIX, _COMMENT_PREFIX)):
        escaped = f"\\{escaped}"
    return escaped


def _directory_prefix(directory: Path, anchor: Path) -> str:
    relative = directory.relative_to(anchor).as_posix()
    if relative in ("", "."):
        return ""
    return f"{escape_glob(relative)}/"


def scope_ignore_rules(lines: Iterable[str], prefix: str) -> list[str]:
    """
    Rewrite the rules of one ignore file so they are relative to the anchor.

    ``prefix`` is the ignore file's directory relative to the anchor, already
    glob-escaped and ending in ``/`` (empty for the anchor itself). A leading
    ``/`` stays a root anchor and is moved in front of the prefix.
    """
    scoped: list[str] = []
    for raw_line in lines:
        rule = raw_line.strip()
        if not rule or rule.startswith(_COMMENT_PREFIX):
            continue

        negated = rule.startswith(_NEGATION_PREFIX)
        if negated:
            rule = rule[len(_NEGATION_PREFIX):]
        anchored = rule.startswith(_ROOT_ANCHOR_PREFIX)
        if anchored:
            rule = rule[len(_ROOT_ANCHOR_PREFIX):]
        if not rule:
            continue

        scoped_rule = f"{prefix}{rule}"
        if anchored:
            scoped_rule = f"{_ROOT_ANCHOR_PREFIX}{scoped_rule}"
        scoped.append(f"{_NEGATION_PREFIX}{scoped_rule}" if negated else scoped_rule)
    return scoped


async def _read_ignore_file(ignore_file: Path, *, fail_closed: bool) -> str | None:
    try:
        return await asyncio.to_thread(ignore_file.read_text, encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as error:
        if fail_closed:
            raise IgnorePolicyError(ignore_file, error) from error
        logger.warning("Skipping unreadable ignore file %s: %s", ignore_file.as_posix(), error)
        return None


async def load_ignore_rules(anchor: Path, directory: Path, *, fail_closed: bool = False) -> IgnoreRuleSet:
    """
    Build (or fetch from cache) the rule set for files directly inside ``directory``.

    Args:
        anchor: Directory every rule is rewritten relative to.
        directory: Directory being queried; must be ``anchor`` or below it.
        fail_closed: Raise instead of skipping ignore files that exist but cannot be read.

    Returns:
        The compiled rule set, cached under ``(anchor, directory)``.

    Raises:
        IgnorePolicyError: When ``fail_closed`` is set and an ignore file is unreadable.
    """
    key = (anchor, directory)
    cached = _RULESET_CACHE.get(key)
    if cached is not None:
        return cached

    rules: list[str] = []
    for current in directory_chain(directory, anchor):
        content = await _read_ignore_file(current / IGNORE_FILENAME, fail_closed=fail_closed)
        if content is None:
            continue
        rules.extend(scope_ignore_rules(content.splitlines(), _directory_prefix(current, anchor)))

    rule_set = IgnoreRuleSet(
        anchor=anchor,
        directory=directory,
        rules=tuple(rules),
        spec=GitIgnoreSpec.from_lines(rules),
    )
    # Concurrent builders for the same key produce equal rule sets; last write wins.
    _RULESET_CACHE[key] = rule_set
    logger.debug(
        "Built ignore rules for %s (anchor %s): %d rule(s)",
        directory.as_posix(),
        anchor.as_posix(),
        len(rules),
    )
    return rule_set


async def describe_ignore_rules(path: Path, root: Path, *, fail_closed: bool = False) -> IgnoreRuleSet:
    """Return the rule set that governs ``path``."""
    anchor = resolve_anchor(path, root)
    directory = path.parent if path != anchor else anchor
    return await load_ignore_rules(anchor, directory, fail_closed=fail_closed)


async def _evaluate(path: Path, root: Path, *, fail_closed: bool) -> tuple[str, bool]:
    anchor = resolve_anchor(path, root)
    if path == anchor:
        return ".", False
    rule_set = await load_ignore_rules(anchor, path.parent, fail_closed=fail_closed)
    relative = path.relative_to(anchor).as_posix()
    return relative, rule_set.matches(relative)


async def is_path_ignored(path: Path, root: Path, *, fail_closed: bool = False) -> bool:
    """Return True when ``path`` is blocked by the ``.ignore`` hierarchy; both paths must be canonical."""
    _, ignored = await _evaluate(path, root, fail_closed=fail_closed)
    return ignored


async def check_ignore_policy(path: Path, root: Path, *, fail_closed: bool = False) -> None:
    """Raise ``AccessDeniedError`` when ``path`` is blocked by the ``.ignore`` hierarchy."""
    relative, ignored = await _evaluate(path, root, fail_closed=fail_closed)
    if ignored:
        raise AccessDeniedError(relative)


__all__ = [
    "IGNORE_FILENAME",
    "IgnoreRuleSet",
    "check_ignore_policy",
    "clear_ignore_cache",
    "describe_ignore_rules",
    "directory_chain",
    "escape_glob",
    "is_path_ignored",
    "load_ignore_rules",
    "resolve_anchor",
    "scope_ignore_rules",
]

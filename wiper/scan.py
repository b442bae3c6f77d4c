"""Filesystem scanning, size aggregation, and deletion of matched entries.

``scan`` is pure with respect to program state: it only reads the
filesystem and returns a fresh, size-sorted list of immutable ``Entry``
snapshots. Unreadable paths are skipped rather than reported.
"""

from __future__ import annotations

import os
import re
import shutil
import stat
import time
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from .debug import get_logger
from .errors import InvalidFilterError

logger = get_logger("scan")

DEFAULT_FILTER = "^node_modules$"

Predicate = Callable[[Path], bool]


@dataclass(frozen=True)
class Entry:
    """One reported unit: a matched path and the regular files beneath it."""

    path: Path
    size: int
    file_count: int = 0


@dataclass(frozen=True)
class DeletionFailure:
    entry: Entry
    error: OSError


class RegexPredicate:
    """Regex test against an entry name, or against its full path string."""

    def __init__(self, pattern: str, match_full_path: bool = False) -> None:
        try:
            self._regex = re.compile(pattern)
        except re.error as exc:
            raise InvalidFilterError(pattern, str(exc)) from exc
        self.pattern = pattern
        self.match_full_path = match_full_path

    def __call__(self, path: Path) -> bool:
        subject = str(path) if self.match_full_path else path.name
        return self._regex.search(subject) is not None

    def __repr__(self) -> str:
        return f"RegexPredicate({self.pattern!r}, match_full_path={self.match_full_path})"


def name_equals(name: str) -> Predicate:
    """Exact file-name predicate (``node_modules`` style)."""

    def predicate(path: Path) -> bool:
        return path.name == name

    return predicate


def regex_predicate(pattern: str, match_full_path: bool = False) -> RegexPredicate:
    """Compile ``pattern``; raises ``InvalidFilterError`` when it is not a valid regex."""
    return RegexPredicate(pattern, match_full_path=match_full_path)


def build_predicate(pattern: str, *, exact: bool = False, match_full_path: bool = False) -> Predicate:
    """Return the name-equality predicate for ``exact``, else a compiled regex predicate."""
    if exact:
        return name_equals(pattern)
    return regex_predicate(pattern, match_full_path=match_full_path)


def _directory_key(path: Path) -> tuple[int, int] | None:
    """Return ``(st_dev, st_ino)`` when ``path`` resolves to a directory."""
    try:
        st = os.stat(path)
    except OSError:
        return None
    if not stat.S_ISDIR(st.st_mode):
        return None
    return st.st_dev, st.st_ino


def _sorted_children(directory: Path) -> list[Path]:
    try:
        with os.scandir(directory) as entries:
            names = sorted(child.name for child in entries)
    except OSError:
        return []
    return [directory / name for name in names]


def count_and_size(path: Path) -> tuple[int, int]:
    """Return ``(file_count, total_bytes)`` of regular files under ``path``.

    Symbolic links are followed; directories and links contribute nothing
    directly. Broken links, permission errors, and directory cycles are
    skipped.
    """
    file_count = 0
    total = 0
    visited: set[tuple[int, int]] = set()
    stack = [Path(path)]
    while stack:
        current = stack.pop()
        try:
            st = os.stat(current)
        except OSError:
            continue
        if stat.S_ISREG(st.st_mode):
            file_count += 1
            total += st.st_size
            continue
        if not stat.S_ISDIR(st.st_mode):
            continue
        key = (st.st_dev, st.st_ino)
        if key in visited:
            continue
        visited.add(key)
        stack.extend(_sorted_children(current))
    return file_count, total


def iter_matching_paths(root: Path, predicate: Predicate, prune: bool = True) -> Iterator[Path]:
    """Yield paths under ``root`` (root included) whose entry matches ``predicate``.

    With ``prune`` a matching entry is not descended into, so the first match
    along each branch is the reported unit. Paths are yielded depth-first in
    name order.
    """
    if not os.path.lexists(root):
        return
    visited: set[tuple[int, int]] = set()
    stack = [Path(root)]
    while stack:
        current = stack.pop()
        matched = predicate(current)
        if matched:
            yield current
            if prune:
                continue
        key = _directory_key(current)
        if key is None or key in visited:
            continue
        visited.add(key)
        stack.extend(reversed(_sorted_children(current)))


def scan(root: str | os.PathLike[str], predicate: Predicate, prune: bool = True) -> list[Entry]:
    """Scan ``root`` and return matched entries sorted by size, largest first."""
    started = time.monotonic()
    entries: list[Entry] = []
    for path in iter_matching_paths(Path(root), predicate, prune=prune):
        file_count, size = count_and_size(path)
        entries.append(Entry(path=path, size=size, file_count=file_count))
    entries.sort(key=lambda entry: entry.size, reverse=True)
    logger.debug(
        "scanned %s with %r: %d entries in %.3fs",
        root,
        predicate,
        len(entries),
        time.monotonic() - started,
    )
    return entries


def delete_path(path: Path) -> None:
    """Remove a matched path; symlinks are unlinked, never followed."""
    if path.is_symlink() or not path.is_dir():
        path.unlink()
    else:
        shutil.rmtree(path)


def delete_entries(entries: Iterable[Entry]) -> list[DeletionFailure]:
    """Delete every entry independently and return the ones that failed."""
    failures: list[DeletionFailure] = []
    for entry in entries:
        try:
            delete_path(entry.path)
        except OSError as exc:
            logger.warning("failed to delete %s: %s", entry.path, exc)
            failures.append(DeletionFailure(entry=entry, error=exc))
        else:
            logger.info("deleted %s (%d bytes)", entry.path, entry.size)
    return failures


__all__ = [
    "DEFAULT_FILTER",
    "build_predicate",
    "DeletionFailure",
    "Entry",
    "Predicate",
    "RegexPredicate",
    "count_and_size",
    "delete_entries",
    "delete_path",
    "iter_matching_paths",
    "name_equals",
    "regex_predicate",
    "scan",
]

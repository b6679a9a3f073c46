"""Single-pass filesystem traversal producing walk records.

The walk is top-down and pre-order with children in name order. Entries are
``lstat``-ed, so symlinks are counted as files and never followed; only a
root spelled with a trailing separator resolves through a symlink.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from .errors import TraversalError
from .ignores import IGNORE_FILENAME, IgnoreMatcher, load_ignore_file
from .types import WalkRecord

logger = logging.getLogger(__name__)


@dataclass
class _Frame:
    """One open directory on the walk stack."""

    path: Path
    relative: str
    entries: Iterator[os.DirEntry[str]]


def _scan_sorted(directory: str) -> list[os.DirEntry[str]]:
    with os.scandir(directory) as entries:
        return sorted(entries, key=lambda entry: entry.name)


def _register_ignore_file(
    matcher: IgnoreMatcher,
    directory: Path,
    relative: str,
    entries: list[os.DirEntry[str]],
) -> WalkRecord | None:
    """Register ``directory``'s ignore file, returning an error record on failure."""
    for entry in entries:
        if entry.name != IGNORE_FILENAME:
            continue
        try:
            matcher.register(relative, load_ignore_file(Path(entry.path)))
        except OSError as exc:
            logger.debug("cannot read %s: %s", entry.path, exc)
            return WalkRecord(path=directory, is_directory=True, error=exc)
        return None
    return None


def walk(
    root: Path,
    *,
    actual_root: str | None = None,
    ignore_matcher: IgnoreMatcher | None = None,
    gitignore: bool = False,
) -> Iterator[WalkRecord]:
    """Yield records for ``root`` and everything below it.

    ``actual_root`` is the filesystem spelling to open (it may carry a
    trailing separator); record paths are always built from ``root``. A root
    that cannot be stat-ed or listed, or is not a directory, raises
    ``TraversalError``; failures below the root become error records.
    """
    start = actual_root if actual_root is not None else str(root)
    try:
        root_stat = os.stat(start) if start.endswith(os.sep) else os.lstat(start)
    except OSError as exc:
        raise TraversalError(f"Cannot access {start}: {exc.strerror or exc}") from exc
    if not stat.S_ISDIR(root_stat.st_mode):
        raise TraversalError(f"Not a directory: {start}")
    try:
        root_entries = _scan_sorted(start)
    except OSError as exc:
        raise TraversalError(f"Cannot list {start}: {exc.strerror or exc}") from exc

    matcher = ignore_matcher
    if gitignore and matcher is None:
        matcher = IgnoreMatcher()

    yield WalkRecord(path=root, is_directory=True)
    if gitignore and matcher is not None:
        failure = _register_ignore_file(matcher, root, "", root_entries)
        if failure is not None:
            yield failure

    stack = [_Frame(path=root, relative="", entries=iter(root_entries))]
    while stack:
        frame = stack[-1]
        entry = next(frame.entries, None)
        if entry is None:
            stack.pop()
            continue

        child_path = frame.path / entry.name
        child_relative = frame.relative + entry.name
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            entry_stat = entry.stat(follow_symlinks=False)
        except OSError as exc:
            # Kind unknown: only patterns that match without a trailing "/" apply.
            if matcher is not None and matcher.matches(child_relative):
                continue
            logger.debug("cannot stat %s: %s", entry.path, exc)
            yield WalkRecord(path=child_path, is_directory=False, error=exc)
            continue

        if matcher is not None and matcher.matches(child_relative + ("/" if is_dir else "")):
            continue

        if not is_dir:
            yield WalkRecord(path=child_path, is_directory=False, byte_size=int(entry_stat.st_size))
            continue

        yield WalkRecord(path=child_path, is_directory=True)
        try:
            child_entries = _scan_sorted(entry.path)
        except OSError as exc:
            logger.debug("cannot list %s: %s", entry.path, exc)
            yield WalkRecord(path=child_path, is_directory=True, error=exc)
            continue

        child_frame_relative = child_relative + "/"
        if gitignore and matcher is not None:
            failure = _register_ignore_file(matcher, child_path, child_frame_relative, child_entries)
            if failure is not None:
                yield failure
        stack.append(_Frame(path=child_path, relative=child_frame_relative, entries=iter(child_entries)))


__all__ = [
    "walk",
]

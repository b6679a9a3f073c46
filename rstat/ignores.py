"""Cascading ignore-file matching over a trie of directory segments.

Each trie node holds the pattern sets registered for that directory. A path
is checked against the shallowest directory first, with the remainder of the
path made relative to that directory; the first level that matches wins and
deeper registrations are never consulted.

Paths use ``/`` separators and are relative to the walk root. Directories
are passed with a trailing ``/`` so directory-only patterns apply.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

import pathspec

IGNORE_FILENAME = ".gitignore"


class PatternSet(Protocol):
    """Compiled patterns for one directory, matched against relative paths."""

    def match_file(self, file: str) -> bool: ...


@dataclass
class _IgnoreNode:
    pattern_sets: list[PatternSet] = field(default_factory=list)
    children: dict[str, _IgnoreNode] = field(default_factory=dict)

    def child(self, segment: str) -> _IgnoreNode | None:
        return self.children.get(segment)


def _directory_segments(directory: str) -> list[str]:
    """Split a relative directory path; ``""``, ``"."`` and ``"/"`` mean the root."""
    return [segment for segment in directory.strip("/").split("/") if segment and segment != "."]


class IgnoreMatcher:
    """Trie of per-directory pattern sets answering "is this path ignored"."""

    def __init__(self) -> None:
        self._root = _IgnoreNode()

    def register(self, directory: str, pattern_set: PatternSet) -> None:
        """Append ``pattern_set`` to the patterns of ``directory``."""
        node = self._root
        for segment in _directory_segments(directory):
            child = node.child(segment)
            if child is None:
                child = _IgnoreNode()
                node.children[segment] = child
            node = child
        node.pattern_sets.append(pattern_set)

    def pattern_sets_at(self, directory: str) -> tuple[PatternSet, ...] | None:
        """Return patterns registered at ``directory``.

        ``None`` means no trie node exists for that directory, while an empty
        tuple means the node exists (a deeper directory registered patterns)
        but carries none of its own.
        """
        node: _IgnoreNode | None = self._root
        for segment in _directory_segments(directory):
            assert node is not None
            node = node.child(segment)
            if node is None:
                return None
        assert node is not None
        return tuple(node.pattern_sets)

    def matches(self, path: str) -> bool:
        """Return whether ``path`` is ignored by any registered directory."""
        node = self._root
        remainder = path
        while True:
            for pattern_set in node.pattern_sets:
                if pattern_set.match_file(remainder):
                    return True
            segment, _sep, rest = remainder.partition("/")
            if not rest:
                # ``remainder`` names the entry itself; nothing deeper applies.
                return False
            child = node.child(segment)
            if child is None:
                return False
            node = child
            remainder = rest


def compile_ignore_lines(lines: list[str]) -> pathspec.GitIgnoreSpec:
    return pathspec.GitIgnoreSpec.from_lines(lines)


def load_ignore_file(path: Path) -> pathspec.GitIgnoreSpec:
    """Compile an ignore file; read failures propagate as ``OSError``."""
    text = path.read_text(encoding="utf-8", errors="replace")
    return compile_ignore_lines(text.splitlines())


__all__ = [
    "IGNORE_FILENAME",
    "PatternSet",
    "IgnoreMatcher",
    "compile_ignore_lines",
    "load_ignore_file",
]

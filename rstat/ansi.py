"""ANSI-aware text measurement and padding for table cells.

Escape sequences do not count toward width; East Asian wide characters
count as two columns.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character."""
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def visible_width(text: str) -> int:
    """Return display columns used by ``text`` once escapes are removed."""
    return sum(char_display_width(ch) for ch in strip_ansi(text))


def pad_cell(text: str, width: int, align: str) -> str:
    """Pad ``text`` to ``width`` visible columns.

    ``align`` is ``"left"``, ``"right"`` or ``"center"``; centering puts the
    extra column on the right.
    """
    total_pad = max(0, width - visible_width(text))
    if align == "right":
        return " " * total_pad + text
    if align == "center":
        left = total_pad // 2
        return " " * left + text + " " * (total_pad - left)
    return text + " " * total_pad


__all__ = [
    "ANSI_ESCAPE_RE",
    "char_display_width",
    "strip_ansi",
    "visible_width",
    "pad_cell",
]

"""Report rows, number formatting, and aligned table rendering.

Rows follow selection order with the root first. Numeric cells may carry a
percent-of-root annotation when that column is a noticeable part of the
row's score and of the root total.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .aggregate import AggregationTree
from .ansi import pad_cell, visible_width
from .scoring import ScoreComputer
from .types import AggregateNode
from .ui_theme import PLAIN_THEME, ReportTheme

logger = logging.getLogger(__name__)

HUMAN_BYTE_SCALES = ("", "k", "M", "G", "T", "P")
HEADER = ("", "Dirs", "Files", "Bytes")
SCORE_SHARE_CUTOFF = 0.01
PERCENT_CUTOFF = 0.5
# Width of a rendered percent suffix such as " 42% ".
_PERCENT_SUFFIX_WIDTH = 6


@dataclass(frozen=True)
class ReportRow:
    """One rendered line of the summary table."""

    label: str
    directory_count: int
    file_count: int
    byte_count: int
    is_total: bool = False
    directory_percent: float | None = None
    file_percent: float | None = None
    byte_percent: float | None = None


def format_count(num: int) -> str:
    return str(num)


def format_bytes(num: int) -> str:
    """Format a byte count with decimal scale suffixes.

    Unscaled values get no decimals; scaled values get two decimals below 10
    and one decimal otherwise.
    """
    value = float(num)
    scale = 0
    while value >= 1000 and scale + 1 < len(HUMAN_BYTE_SCALES):
        scale += 1
        value /= 1000
    if scale == 0:
        return str(int(num))
    decimals = 2 if value < 10 else 1
    # Pick the scale from the rounded value so 999_999 reads "1.00M", not "1000.0k".
    rounded = round(value, decimals)
    if rounded >= 1000 and scale + 1 < len(HUMAN_BYTE_SCALES):
        scale += 1
        value /= 1000
        decimals = 2
    elif rounded >= 10:
        decimals = 1
    return f"{value:.{decimals}f}{HUMAN_BYTE_SCALES[scale]}"


def _percent_of_root(value: int, root_value: int, component: float, total_score: float) -> float | None:
    if root_value <= 0:
        return None
    percent = 100.0 * value / root_value
    if component > SCORE_SHARE_CUTOFF * total_score and percent >= PERCENT_CUTOFF:
        return percent
    return None


def build_report(selection: list[AggregateNode], computer: ScoreComputer) -> list[ReportRow]:
    """Convert a selection (root first) into report rows."""
    if not selection:
        return []
    root = selection[0]
    rows: list[ReportRow] = []
    for node in selection:
        label = str(node.path)
        if node is root:
            rows.append(
                ReportRow(
                    label=label,
                    directory_count=node.directory_count,
                    file_count=node.file_count,
                    byte_count=node.byte_count,
                    is_total=True,
                )
            )
            continue
        components = computer.component_scores(node)
        total_score = components.total
        rows.append(
            ReportRow(
                label=label,
                directory_count=node.directory_count,
                file_count=node.file_count,
                byte_count=node.byte_count,
                directory_percent=_percent_of_root(
                    node.directory_count, root.directory_count, components.directories, total_score
                ),
                file_percent=_percent_of_root(node.file_count, root.file_count, components.files, total_score),
                byte_percent=_percent_of_root(node.byte_count, root.byte_count, components.bytes, total_score),
            )
        )
    return rows


def _number_cell(text: str, percent: float | None, theme: ReportTheme) -> str:
    number = theme.paint("number", text)
    if percent is None:
        return f" {number}" + " " * _PERCENT_SUFFIX_WIDTH
    return f" {number}" + theme.paint("percent", f"{percent: 4.0f}%") + " "


def _row_cells(row: ReportRow, theme: ReportTheme) -> list[str]:
    label = theme.paint("path", row.label)
    if row.is_total:
        label += " " + theme.paint("total_marker", "(total)")
    return [
        label,
        _number_cell(format_count(row.directory_count), row.directory_percent, theme),
        _number_cell(format_count(row.file_count), row.file_percent, theme),
        _number_cell(format_bytes(row.byte_count), row.byte_percent, theme),
    ]


def render_table(rows: list[ReportRow], theme: ReportTheme = PLAIN_THEME) -> str:
    """Render rows under a centered header with visible-width alignment."""
    table = [[theme.paint("header", title) for title in HEADER]]
    table.extend(_row_cells(row, theme) for row in rows)

    widths = [0] * len(HEADER)
    for cells in table:
        for idx, cell in enumerate(cells):
            widths[idx] = max(widths[idx], visible_width(cell))

    lines: list[str] = []
    for row_idx, cells in enumerate(table):
        parts: list[str] = []
        for idx, cell in enumerate(cells):
            if row_idx == 0:
                align = "center"
            elif idx == 0:
                align = "left"
            else:
                align = "right"
            parts.append(" " + pad_cell(cell, widths[idx], align))
        lines.append("".join(parts) + "\n")
    return "".join(lines)


def error_nodes(tree: AggregationTree, selection: list[AggregateNode]) -> list[AggregateNode]:
    """Nodes worth an error diagnostic.

    Selected rows with errors come first in selection order, followed by every
    other directory with a non-zero error count in tree order.
    """
    seen: set[int] = set()
    out: list[AggregateNode] = []
    for node in selection:
        if node.error_count and node.node_id not in seen:
            seen.add(node.node_id)
            out.append(node)
    for node in tree.nodes():
        if node.error_count and node.node_id not in seen:
            seen.add(node.node_id)
            out.append(node)
    return out


def log_error_diagnostics(tree: AggregationTree, selection: list[AggregateNode]) -> int:
    """Warn about every directory with errors; returns the number of warnings."""
    nodes = error_nodes(tree, selection)
    for node in nodes:
        logger.warning(
            "Encountered %d errors within %r. First error: %s",
            node.error_count,
            str(node.path),
            node.first_error,
        )
    return len(nodes)


__all__ = [
    "HEADER",
    "ReportRow",
    "format_count",
    "format_bytes",
    "build_report",
    "render_table",
    "error_nodes",
    "log_error_diagnostics",
]

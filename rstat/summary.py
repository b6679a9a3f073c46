"""One-shot pipeline: walk, aggregate, score, select, build rows."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .aggregate import AggregationTree, build_aggregation_tree
from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .ignores import IgnoreMatcher
from .report import ReportRow, build_report
from .scoring import ScoreComputer
from .selection import select_interesting
from .types import AggregateNode
from .walk import walk


@dataclass(frozen=True)
class Summary:
    """Everything produced by a single traversal pass."""

    tree: AggregationTree
    computer: ScoreComputer
    selection: list[AggregateNode]
    rows: list[ReportRow]


def summarize(
    root: Path,
    *,
    actual_root: str | None = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    gitignore: bool = False,
    ignore_matcher: IgnoreMatcher | None = None,
) -> Summary:
    """Summarize the subtree at ``root``; fatal failures raise ``RstatError``."""
    records = walk(root, actual_root=actual_root, ignore_matcher=ignore_matcher, gitignore=gitignore)
    tree = build_aggregation_tree(root, records)
    selection, computer = select_interesting(tree, config)
    return Summary(
        tree=tree,
        computer=computer,
        selection=selection,
        rows=build_report(selection, computer),
    )


__all__ = [
    "Summary",
    "summarize",
]

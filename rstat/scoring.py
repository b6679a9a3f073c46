"""Interestingness scoring relative to a floor-clamped root baseline."""

from __future__ import annotations

from dataclasses import dataclass

from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .types import AggregateNode


@dataclass(frozen=True)
class ScoreBaseline:
    """Root totals clamped upward to the configured floors."""

    directory_count: int
    error_count: int
    file_count: int
    byte_count: int

    @classmethod
    def from_root(cls, root: AggregateNode, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> ScoreBaseline:
        return cls(
            directory_count=max(root.directory_count, config.min_directories),
            error_count=max(root.error_count, config.min_errors),
            file_count=max(root.file_count, config.min_files),
            byte_count=max(root.byte_count, config.min_bytes),
        )


@dataclass(frozen=True)
class ComponentScores:
    """Per-column ratios whose sum is the node's score."""

    directories: float
    errors: float
    files: float
    bytes: float

    @property
    def total(self) -> float:
        return self.directories + self.errors + self.files + self.bytes


class ScoreComputer:
    """Converts aggregates into comparable scores against a fixed baseline."""

    def __init__(self, root: AggregateNode, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> None:
        self.config = config
        self.baseline = ScoreBaseline.from_root(root, config)

    def component_scores(self, node: AggregateNode) -> ComponentScores:
        baseline = self.baseline
        return ComponentScores(
            directories=node.directory_count / baseline.directory_count,
            errors=node.error_count / baseline.error_count,
            files=node.file_count / baseline.file_count,
            bytes=node.byte_count / baseline.byte_count,
        )

    def score(self, node: AggregateNode) -> float:
        """Return the summed ratios; zero only for an empty node."""
        return self.component_scores(node).total


__all__ = [
    "ScoreBaseline",
    "ComponentScores",
    "ScoreComputer",
]

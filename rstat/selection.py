"""Greedy selection of non-overlapping interesting directories.

Each round picks the candidate whose score is least explained by one of its
own remaining descendants, then charges that score against its ancestors so
they only compete with what is left unexplained.
"""

from __future__ import annotations

from .aggregate import AggregationTree
from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .errors import SelectionError
from .scoring import ScoreComputer
from .types import AggregateNode


class GreedySelector:
    """Select the report set for one frozen aggregation tree."""

    def __init__(
        self,
        tree: AggregationTree,
        computer: ScoreComputer,
        config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    ) -> None:
        self.tree = tree
        self.computer = computer
        self.config = config

    def candidate_scores(self) -> dict[int, float]:
        """Raw scores of every non-root node at or above the threshold."""
        threshold = self.config.interestingness_threshold
        scores: dict[int, float] = {}
        for node in self.tree.nodes():
            if node.is_root:
                continue
            score = self.computer.score(node)
            if score >= threshold:
                scores[node.node_id] = score
        return scores

    def _strict_ancestors(self, node: AggregateNode) -> list[AggregateNode]:
        return [ancestor for ancestor in self.tree.ancestors(node) if not ancestor.is_root]

    def select(self) -> list[AggregateNode]:
        """Return the root followed by winners in selection order."""
        threshold = self.config.interestingness_threshold
        preference = self.config.specificity_preference
        root = self.tree.root

        unexplained = self.candidate_scores()
        nodes = {node.node_id: node for node in self.tree.nodes() if node.node_id in unexplained}
        # Path order makes the strict ">" below prefer the smaller path on ties.
        remaining = sorted(nodes.values(), key=lambda node: str(node.path))
        ancestry = {node.node_id: self._strict_ancestors(node) for node in remaining}

        selected: list[AggregateNode] = [root]
        # Ancestors of a winner still pass their leftover score upward but may not win.
        blocked: set[int] = set()
        max_rounds = len(remaining)
        for _round in range(max_rounds + 1):
            best_descendant: dict[int, float] = {}
            for node in remaining:
                score = unexplained[node.node_id]
                for ancestor in ancestry[node.node_id]:
                    if score > best_descendant.get(ancestor.node_id, 0.0):
                        best_descendant[ancestor.node_id] = score

            best_score = threshold
            winner: AggregateNode | None = None
            for node in remaining:
                if node.node_id in blocked:
                    continue
                adjusted = unexplained[node.node_id] - preference * best_descendant.get(node.node_id, 0.0)
                if adjusted > best_score:
                    best_score = adjusted
                    winner = node
            if winner is None:
                return selected

            selected.append(winner)
            winner_score = unexplained[winner.node_id]
            for ancestor in ancestry[winner.node_id]:
                if ancestor.node_id in unexplained:
                    unexplained[ancestor.node_id] -= winner_score
                blocked.add(ancestor.node_id)

            remaining = [
                node
                for node in remaining
                if node.node_id != winner.node_id
                and all(ancestor.node_id != winner.node_id for ancestor in ancestry[node.node_id])
            ]
        raise SelectionError(f"selection did not finish within {max_rounds} rounds")


def select_interesting(
    tree: AggregationTree,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> tuple[list[AggregateNode], ScoreComputer]:
    """Score ``tree`` against its root and run the greedy selection."""
    computer = ScoreComputer(tree.root, config)
    return GreedySelector(tree, computer, config).select(), computer


__all__ = [
    "GreedySelector",
    "select_interesting",
]

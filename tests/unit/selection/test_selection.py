"""Greedy selection tests.

Covers the specificity discount, charging winners against ancestors,
non-overlap of the result, tie-breaking, and threshold configuration.
"""

from __future__ import annotations

import unittest
from pathlib import Path

from rstat.aggregate import AggregationTree, build_aggregation_tree
from rstat.config import ScoringConfig
from rstat.scoring import ScoreComputer
from rstat.selection import GreedySelector, select_interesting
from rstat.types import WalkRecord

ROOT = Path("/r")


def _tree(dirs: list[str], files: dict[str, int]) -> AggregationTree:
    records = [WalkRecord(path=ROOT, is_directory=True)]
    records.extend(WalkRecord(path=ROOT / name, is_directory=True) for name in dirs)
    records.extend(
        WalkRecord(path=ROOT / name, is_directory=False, byte_size=size) for name, size in files.items()
    )
    return build_aggregation_tree(ROOT, records)


def _labels(tree: AggregationTree, config: ScoringConfig | None = None) -> list[str]:
    selection, _computer = select_interesting(tree, config or ScoringConfig())
    return [str(node.path.relative_to(ROOT)) for node in selection]


class GreedySelectionTests(unittest.TestCase):
    def test_single_large_subdirectory_is_reported_once(self) -> None:
        tree = _tree(["a", "big", "c"], {"big/blob.bin": 20_000_000})
        self.assertEqual(_labels(tree), [".", "big"])

    def test_root_is_always_first_even_when_nothing_qualifies(self) -> None:
        tree = _tree(["a"], {"a/tiny.txt": 10})
        self.assertEqual(_labels(tree), ["."])

    def test_deepest_directory_explaining_the_bytes_wins(self) -> None:
        tree = _tree(["x", "x/y"], {"x/y/blob.bin": 20_000_000})
        self.assertEqual(_labels(tree), [".", "x/y"])

    def test_siblings_are_both_reported_and_parent_is_explained(self) -> None:
        tree = _tree(["p", "p/q", "p/s"], {"p/q/a.bin": 20_000_000, "p/s/b.bin": 20_000_000})
        self.assertEqual(_labels(tree), [".", "p/q", "p/s"])

    def test_parent_wins_when_no_single_child_explains_it(self) -> None:
        subdirs = [f"p/d{idx}" for idx in range(10)]
        files = {f"p/d{idx}/f.bin": 2_000_000 for idx in range(10)}
        tree = _tree(["p", *subdirs], files)
        self.assertEqual(_labels(tree), [".", "p"])

    def test_sibling_sharing_a_name_prefix_is_not_removed_with_winner(self) -> None:
        tree = _tree(["big", "big2"], {"big/a.bin": 20_000_000, "big2/b.bin": 20_000_000})
        self.assertEqual(_labels(tree), [".", "big", "big2"])

    def test_ties_prefer_lexicographically_smaller_path(self) -> None:
        tree = _tree(["zeta", "alpha"], {"zeta/a.bin": 20_000_000, "alpha/b.bin": 20_000_000})
        self.assertEqual(_labels(tree), [".", "alpha", "zeta"])

    def test_higher_threshold_suppresses_modest_directories(self) -> None:
        tree = _tree(["big", "small"], {"big/a.bin": 20_000_000, "small/b.bin": 2_000_000})
        self.assertEqual(_labels(tree), [".", "big", "small"])
        self.assertEqual(_labels(tree, ScoringConfig(interestingness_threshold=0.5)), [".", "big"])

    def test_parent_with_leftover_score_is_not_reported_after_its_child(self) -> None:
        files = {"e/f/big.bin": 12_000_000}
        for idx in range(300):
            files[f"e/many{idx}.txt"] = 10
        tree = _tree(["e", "e/f"], files)
        self.assertEqual(_labels(tree), [".", "e/f"])

    def test_sibling_of_winner_can_still_win_after_parent_is_blocked(self) -> None:
        files = {"p/q/a.bin": 20_000_000, "p/s/b.bin": 5_000_000}
        for idx in range(300):
            files[f"p/many{idx}.txt"] = 10
        tree = _tree(["p", "p/q", "p/s"], files)
        self.assertEqual(_labels(tree), [".", "p/q", "p/s"])

    def test_zero_specificity_preference_reports_broadest_directory(self) -> None:
        tree = _tree(["x", "x/y"], {"x/y/blob.bin": 20_000_000})
        self.assertEqual(_labels(tree, ScoringConfig(specificity_preference=0.0)), [".", "x"])


class GreedySelectionPropertyTests(unittest.TestCase):
    def _mixed_tree(self) -> AggregationTree:
        dirs = ["a", "a/b", "a/b/c", "a/d", "e", "e/f", "g"]
        files = {
            "a/b/c/one.bin": 9_000_000,
            "a/b/two.bin": 3_000_000,
            "a/d/three.bin": 6_000_000,
            "e/f/four.bin": 12_000_000,
            "g/five.bin": 400_000,
        }
        for idx in range(300):
            files[f"e/many{idx}.txt"] = 10
        return _tree(dirs, files)

    def test_no_selected_pair_is_ancestor_and_descendant(self) -> None:
        tree = self._mixed_tree()
        selection, _computer = select_interesting(tree)
        picked = selection[1:]
        for first in picked:
            for second in picked:
                if first is second:
                    continue
                self.assertFalse(tree.is_ancestor(first, second), f"{first.path} contains {second.path}")

    def test_every_selected_directory_meets_raw_threshold(self) -> None:
        tree = self._mixed_tree()
        config = ScoringConfig()
        selection, computer = select_interesting(tree, config)
        self.assertGreater(len(selection), 1)
        for node in selection[1:]:
            self.assertGreaterEqual(computer.score(node), config.interestingness_threshold)

    def test_repeated_runs_are_identical(self) -> None:
        tree = self._mixed_tree()
        computer = ScoreComputer(tree.root)
        first = [node.path for node in GreedySelector(tree, computer).select()]
        second = [node.path for node in GreedySelector(tree, computer).select()]
        self.assertEqual(first, second)

    def test_candidate_scores_exclude_root_and_low_scores(self) -> None:
        tree = self._mixed_tree()
        computer = ScoreComputer(tree.root)
        candidates = GreedySelector(tree, computer).candidate_scores()
        self.assertNotIn(tree.root.node_id, candidates)
        for node_id, score in candidates.items():
            self.assertGreaterEqual(score, 0.05)


if __name__ == "__main__":
    unittest.main()

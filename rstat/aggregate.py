"""Cumulative per-directory aggregation over a stream of walk records.

Nodes live in an arena indexed by ``node_id``; each carries its parent's id
so ancestry walks are index hops. Path parsing only happens the first time
a directory is seen.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

from .errors import AggregationError
from .types import AggregateNode, WalkRecord


class AggregationTree:
    """Arena of cumulative directory aggregates rooted at ``root``."""

    def __init__(self, root: Path) -> None:
        self._root = root
        self._nodes: list[AggregateNode] = []
        self._index: dict[Path, int] = {}
        self._frozen = False

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def root_path(self) -> Path:
        return self._root

    @property
    def root(self) -> AggregateNode:
        """Return the root aggregate, creating it if nothing was ingested."""
        return self._nodes[self._node_id_for(self._root)]

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Mark the traversal pass complete; later ingests are rejected."""
        self._node_id_for(self._root)
        self._frozen = True

    def ingest(self, record: WalkRecord) -> None:
        """Fold ``record`` into its owning directory and every ancestor up to the root."""
        if self._frozen:
            raise AggregationError(f"cannot ingest {record.path} after traversal completed")
        owner = record.path if record.is_directory else record.path.parent
        node_id: int | None = self._node_id_for(owner)
        while node_id is not None:
            node = self._nodes[node_id]
            node.add(record)
            node_id = node.parent_id

    def node(self, path: Path) -> AggregateNode | None:
        node_id = self._index.get(path)
        if node_id is None:
            return None
        return self._nodes[node_id]

    def nodes(self) -> Iterator[AggregateNode]:
        """Iterate nodes in creation order (parents always precede children)."""
        return iter(self._nodes)

    def parent(self, node: AggregateNode) -> AggregateNode | None:
        if node.parent_id is None:
            return None
        return self._nodes[node.parent_id]

    def ancestors(self, node: AggregateNode) -> Iterator[AggregateNode]:
        """Yield strict ancestors, nearest first, ending with the root."""
        parent_id = node.parent_id
        while parent_id is not None:
            parent = self._nodes[parent_id]
            yield parent
            parent_id = parent.parent_id

    def is_ancestor(self, ancestor: AggregateNode, node: AggregateNode) -> bool:
        """Return whether ``ancestor`` is a strict ancestor of ``node``."""
        return any(candidate.node_id == ancestor.node_id for candidate in self.ancestors(node))

    def _node_id_for(self, path: Path) -> int:
        """Get or create the node for ``path`` plus any missing ancestors.

        The upward walk is bounded by the number of path segments; a path
        that never reaches the root raises ``AggregationError``.
        """
        node_id = self._index.get(path)
        if node_id is not None:
            return node_id

        missing: list[Path] = []
        current = path
        parent_id: int | None = None
        for _step in range(len(path.parts) + 1):
            missing.append(current)
            if current == self._root:
                break
            parent = current.parent
            if parent == current:
                break
            current = parent
            parent_id = self._index.get(current)
            if parent_id is not None:
                break
        else:
            raise AggregationError(
                f"parent directory iteration failed to terminate for {path!s}"
            )

        if parent_id is None and missing[-1] != self._root:
            raise AggregationError(f"{path!s} is not inside root {self._root!s}")

        for directory in reversed(missing):
            parent_id = self._create(directory, parent_id)
        assert parent_id is not None
        return parent_id

    def _create(self, path: Path, parent_id: int | None) -> int:
        node_id = len(self._nodes)
        self._nodes.append(AggregateNode(node_id=node_id, path=path, parent_id=parent_id))
        self._index[path] = node_id
        return node_id


def build_aggregation_tree(root: Path, records: Iterable[WalkRecord]) -> AggregationTree:
    """Ingest every record under ``root`` and return the frozen tree."""
    tree = AggregationTree(root)
    for record in records:
        tree.ingest(record)
    tree.freeze()
    return tree


__all__ = [
    "AggregationTree",
    "build_aggregation_tree",
]

"""Domain datatypes for traversal records and cumulative directory aggregates."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class WalkRecord:
    """One entry observed by the walker.

    ``byte_size`` is zero for directories and for error records. When
    ``error`` is set the remaining fields only locate the failure.
    """

    path: Path
    is_directory: bool
    byte_size: int = 0
    error: OSError | None = None


@dataclass(eq=False)
class AggregateNode:
    """Cumulative counts for a directory and everything beneath it."""

    node_id: int
    path: Path
    parent_id: int | None
    directory_count: int = 0
    file_count: int = 0
    byte_count: int = 0
    error_count: int = 0
    first_error: BaseException | None = None

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def add(self, record: WalkRecord) -> None:
        """Fold one record into the counts."""
        if record.error is not None:
            self.error_count += 1
            if self.first_error is None:
                self.first_error = record.error
            return
        self.byte_count += record.byte_size
        if record.is_directory:
            self.directory_count += 1
        else:
            self.file_count += 1


__all__ = [
    "WalkRecord",
    "AggregateNode",
]

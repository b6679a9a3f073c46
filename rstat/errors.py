"""Exception types shared across rstat modules.

Per-entry filesystem failures never raise; they travel as walk records.
Everything here is fatal and ends the run at the CLI boundary.
"""

from __future__ import annotations


class RstatError(Exception):
    """Base class for fatal rstat failures."""


class TraversalError(RstatError):
    """The walk could not start: root missing, not a directory, or unlistable."""


class AggregationError(RstatError):
    """Aggregation tree invariant violated while ingesting records."""


class SelectionError(RstatError):
    """Greedy selection failed to terminate within its iteration bound."""


__all__ = [
    "RstatError",
    "TraversalError",
    "AggregationError",
    "SelectionError",
]

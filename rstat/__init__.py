"""Public package surface for rstat.

Exports ``main`` for programmatic CLI invocation and ``summarize`` for the
library pipeline. Most implementation lives in submodules under ``rstat``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


def summarize(*args, **kwargs):
    """Lazily import the summary pipeline."""
    from .summary import summarize as _summarize

    return _summarize(*args, **kwargs)


__all__ = ["main", "summarize"]

"""Command-line front door for rstat.

Parses CLI options, resolves the target root, runs the summary pipeline,
and prints the table. Diagnostics go to stderr through ``logging``.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .config import load_scoring_config, load_theme_name
from .errors import RstatError
from .report import log_error_diagnostics, render_table
from .summary import summarize
from .ui_theme import ReportTheme, available_theme_names, resolve_theme

logger = logging.getLogger("rstat")


class ThemeFormatter(logging.Formatter):
    """Log formatter that colors warnings and errors with the report theme."""

    def __init__(self, fmt: str, theme: ReportTheme) -> None:
        super().__init__(fmt)
        self.theme = theme

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno >= logging.ERROR:
            return self.theme.paint("error", message)
        if record.levelno >= logging.WARNING:
            return self.theme.paint("warning", message)
        return message


_handler: logging.Handler | None = None


def _configure_logging(theme: ReportTheme, verbose: bool) -> None:
    """Install a single stderr handler on the package logger."""
    global _handler
    if _handler is not None:
        logger.removeHandler(_handler)
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(ThemeFormatter("%(levelname)s: %(message)s", theme))
    logger.addHandler(_handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def resolve_root(raw_path: str | None, cwd: Path) -> tuple[Path, str]:
    """Return ``(root, actual_root)`` for the positional argument.

    ``root`` is the cleaned absolute path used as the aggregation key;
    ``actual_root`` keeps a trailing separator from an explicit argument so a
    root symlink is resolved during traversal.
    """
    if raw_path is None:
        cleaned = os.path.normpath(str(cwd))
        return Path(cleaned), cleaned
    joined = raw_path if os.path.isabs(raw_path) else os.path.join(str(cwd), raw_path)
    cleaned = os.path.normpath(joined)
    actual = cleaned
    if raw_path.endswith(("/", os.sep)) and not cleaned.endswith(os.sep):
        actual = cleaned + os.sep
    return Path(cleaned), actual


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Summarize which directories dominate a tree by size, entry count, or errors."
    )
    parser.add_argument("path", nargs="?", default=None, help="Root directory. Defaults to current directory.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"Color theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument(
        "--gitignore",
        action="store_true",
        help="Skip entries matched by .gitignore files found during the walk.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log traversal details to stderr.")
    return parser


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and print the summary table.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used both as the default root and as the base for relative
    arguments.
    """
    args = build_parser().parse_args()

    no_color = args.no_color or not sys.stdout.isatty()
    theme = resolve_theme(args.theme or load_theme_name(), no_color=no_color)
    _configure_logging(theme, args.verbose)

    if default_path is None:
        try:
            default_path = Path.cwd()
        except OSError as exc:
            raise SystemExit(f"Cannot resolve working directory: {exc}") from exc

    root, actual_root = resolve_root(args.path, default_path)
    logger.debug("summarizing %s", actual_root)
    try:
        summary = summarize(
            root,
            actual_root=actual_root,
            config=load_scoring_config(),
            gitignore=args.gitignore,
        )
    except RstatError as exc:
        raise SystemExit(str(exc)) from exc

    log_error_diagnostics(summary.tree, summary.selection)
    sys.stdout.write(render_table(summary.rows, theme))


if __name__ == "__main__":
    main()

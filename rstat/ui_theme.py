"""Report color themes and selection helpers.

Theme slots hold pygments console attribute names (``"green"``,
``"*cyan*"`` for bold, ``"faint"``); an empty slot renders text unstyled.
"""

from __future__ import annotations

from dataclasses import dataclass

from pygments.console import ansiformat


@dataclass(frozen=True)
class ReportTheme:
    """Semantic palette used by the table renderer and log formatter."""

    name: str
    header: str
    path: str
    total_marker: str
    number: str
    percent: str
    warning: str
    error: str

    def paint(self, slot: str, text: str) -> str:
        """Style ``text`` with the attribute stored in ``slot``."""
        attr = getattr(self, slot)
        if not attr or not text:
            return text
        return ansiformat(attr, text)


DEFAULT_THEME = ReportTheme(
    name="default",
    header="",
    path="green",
    total_marker="faint",
    number="cyan",
    percent="faint",
    warning="yellow",
    error="red",
)

OCEAN_THEME = ReportTheme(
    name="ocean",
    header="*brightblue*",
    path="brightcyan",
    total_marker="faint",
    number="blue",
    percent="faint",
    warning="brightyellow",
    error="brightred",
)

PLAIN_THEME = ReportTheme(
    name="plain",
    header="",
    path="",
    total_marker="",
    number="",
    percent="",
    warning="",
    error="",
)

_THEMES: dict[str, ReportTheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> ReportTheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "ReportTheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]

"""Scoring thresholds and read-only JSON config helpers.

``ScoringConfig`` carries every tunable used by scoring and selection.
User overrides are read from a JSON file; access is defensive so missing or
malformed config falls back to defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "rstat"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LEGACY_CONFIG_PATH = Path.home() / ".config" / "rstat.json"
CONFIG_PATH = DEFAULT_CONFIG_PATH


@dataclass(frozen=True)
class ScoringConfig:
    """Normalization floors plus selection weights.

    The ``min_*`` floors keep small trees from producing inflated ratios when
    the root totals are close to zero.
    """

    min_directories: int = 256
    min_errors: int = 1
    min_files: int = 1024
    min_bytes: int = 10 * 1024 * 1024
    specificity_preference: float = 1.5
    interestingness_threshold: float = 0.05


DEFAULT_SCORING_CONFIG = ScoringConfig()

_INT_FIELDS = {"min_directories", "min_errors", "min_files", "min_bytes"}


def _config_source() -> Path:
    # ~/.config/rstat.json is only consulted while CONFIG_PATH is the platform default.
    use_legacy = (
        CONFIG_PATH == DEFAULT_CONFIG_PATH
        and not CONFIG_PATH.exists()
        and LEGACY_CONFIG_PATH.exists()
    )
    return LEGACY_CONFIG_PATH if use_legacy else CONFIG_PATH


def load_config() -> dict[str, object]:
    """Read the user's overrides; anything but a readable JSON object yields ``{}``."""
    try:
        raw = _config_source().read_text(encoding="utf-8")
        data = json.loads(raw)
    except (OSError, ValueError):
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def _coerce_field(name: str, value: object) -> int | float | None:
    """Validate one override; ``None`` means keep the default.

    Booleans are rejected, integer floors must be ``>= 1`` and float weights
    must be non-negative.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if name in _INT_FIELDS:
        if not isinstance(value, int) or value < 1:
            return None
        return value
    if value < 0:
        return None
    return float(value)


def scoring_config_from_mapping(raw: object, base: ScoringConfig = DEFAULT_SCORING_CONFIG) -> ScoringConfig:
    """Overlay valid entries of ``raw`` on ``base``; unknown keys are ignored."""
    if not isinstance(raw, dict):
        return base
    overrides: dict[str, int | float] = {}
    for field in fields(ScoringConfig):
        if field.name not in raw:
            continue
        coerced = _coerce_field(field.name, raw[field.name])
        if coerced is not None:
            overrides[field.name] = coerced
    return replace(base, **overrides) if overrides else base


def load_scoring_config() -> ScoringConfig:
    """Load scoring overrides from the ``"scoring"`` object of the config file."""
    return scoring_config_from_mapping(load_config().get("scoring"))


def load_theme_name() -> str | None:
    """Load configured UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


__all__ = [
    "CONFIG_PATH",
    "ScoringConfig",
    "DEFAULT_SCORING_CONFIG",
    "load_config",
    "load_scoring_config",
    "load_theme_name",
    "scoring_config_from_mapping",
]

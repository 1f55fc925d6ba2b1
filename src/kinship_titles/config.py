"""Environment-overridable settings.

Environment Variables:
    KINSHIP_LOG_LEVEL: Log level for the structlog setup (default WARNING)
    KINSHIP_LAYOUT_ITERATIONS: Force simulation steps (default 100)
    KINSHIP_LAYOUT_DAMPING: Fraction of the net force applied per step (default 0.1)
    KINSHIP_LAYOUT_PADDING: Inset of the clamp rectangle from the canvas edge (default 30)
    KINSHIP_LAYOUT_SEED: Seed for initial node placement (default unset, random)

Example:
    >>> from kinship_titles.config import CONFIG
    >>> CONFIG.iterations
    100
"""
from __future__ import annotations

import os
from dataclasses import dataclass


def _f(name: str, default: float) -> float:
    """Parse float from environment variable with fallback."""
    try:
        return float(os.getenv(name, default))
    except Exception:
        return default


def _i(name: str, default: int) -> int:
    """Parse int from environment variable with fallback."""
    try:
        return int(os.getenv(name, default))
    except Exception:
        return default


def _opt_i(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        return None


@dataclass(frozen=True)
class LayoutConfig:
    """Force-directed layout parameters."""

    iterations: int = _i("KINSHIP_LAYOUT_ITERATIONS", 100)
    damping: float = _f("KINSHIP_LAYOUT_DAMPING", 0.1)
    padding: float = _f("KINSHIP_LAYOUT_PADDING", 30.0)
    seed: int | None = _opt_i("KINSHIP_LAYOUT_SEED")

    # Distance used when two nodes coincide
    min_distance: float = 0.1


LOG_LEVEL: str = os.getenv("KINSHIP_LOG_LEVEL", "WARNING").upper()

CONFIG = LayoutConfig()

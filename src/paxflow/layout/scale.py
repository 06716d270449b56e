"""Value-to-size scaling."""

from __future__ import annotations

__all__ = ["scale", "scale_raw"]


def scale(value: float, factor: float, min_extent: float) -> float:
    """Pixel extent of *value*, never below *min_extent* unless *value* is 0.

    Non-positive values always map to 0 so that empty things stay invisible.
    """
    if value <= 0:
        return 0.0
    return max(scale_raw(value, factor), min_extent)


def scale_raw(value: float, factor: float) -> float:
    """Unclamped extent, used to measure how much clamping added."""
    return value / factor

"""Explicit layout configuration passed into every layout call."""

from __future__ import annotations

__all__ = ["Axis", "LayoutConfig"]

from dataclasses import dataclass
from enum import Enum

from paxflow.layout.constants import (
    FRAME_HOURS,
    HOURS_PER_DAY,
    MIN_LINK_EXTENT,
    MIN_NODE_EXTENT,
    OVERFLOW_GAP,
    PADDING,
    SCALE_FACTOR,
    TRIP_SCALE_FACTOR,
)


class Axis(Enum):
    """What the cross axis of a diagram means."""

    RANK = "rank"  # rows stacked in time order (flow diagrams)
    TIME = "time"  # x is wall-clock time (horizontal trip display)


@dataclass(frozen=True)
class LayoutConfig:
    """Scaling and spacing for one layout pass."""

    scale_factor: float = SCALE_FACTOR
    min_node_extent: float = MIN_NODE_EXTENT
    min_link_extent: float = MIN_LINK_EXTENT
    padding: float = PADDING
    axis: Axis = Axis.RANK
    frame_hours: float = FRAME_HOURS
    overflow_gap: float = OVERFLOW_GAP

    def __post_init__(self) -> None:
        if isinstance(self.axis, str):
            object.__setattr__(self, "axis", Axis(self.axis))
        if self.scale_factor <= 0:
            raise ValueError(f"scale_factor must be positive, got {self.scale_factor}")
        for name in ("min_node_extent", "min_link_extent", "padding", "overflow_gap"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        if self.frame_hours < HOURS_PER_DAY:
            raise ValueError(
                f"frame_hours must cover a full day ({HOURS_PER_DAY}), "
                f"got {self.frame_hours}"
            )

    def require_axis(self, axis: Axis) -> None:
        if self.axis is not axis:
            raise ValueError(
                f"layout expects a {axis.value!r} axis config, got {self.axis.value!r}"
            )

    @classmethod
    def time_axis(cls, **overrides) -> LayoutConfig:
        """Config for the horizontal trip display (x is wall-clock time)."""
        params = {"axis": Axis.TIME, "scale_factor": TRIP_SCALE_FACTOR}
        params.update(overrides)
        return cls(**params)

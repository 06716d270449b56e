"""Overflow geometry: splitting an over-capacity bar in two.

Bars grow towards smaller offsets from a baseline (upwards on screen).
The within-capacity bar sits on the baseline; the overflow bar sits on top
of it, separated by a small seam. Each bar keeps its true value for labels;
the seam only ever shrinks the drawn extent.
"""

from __future__ import annotations

__all__ = ["Bar", "OverflowGeometry", "build_overflow"]

from dataclasses import dataclass


@dataclass(frozen=True)
class Bar:
    """A drawable range along the stacking axis and the value it stands for."""

    value: float
    start: float
    end: float

    @property
    def extent(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class OverflowGeometry:
    within: Bar
    overflow: Bar


def build_overflow(
    occupancy: float,
    capacity: float,
    capacity_extent: float,
    occupancy_extent: float,
    baseline: float,
    gap: float,
) -> OverflowGeometry | None:
    """Split an over-capacity bar; return None when occupancy fits.

    Args:
        occupancy: Passengers on board.
        capacity: Seats available.
        capacity_extent: Drawn extent of *capacity*.
        occupancy_extent: Drawn extent of *occupancy*.
        baseline: Offset the bars grow from.
        gap: Visual seam between the two bars.
    """
    if occupancy <= capacity:
        return None

    within = Bar(value=capacity, start=baseline - capacity_extent, end=baseline)
    over_extent = max(occupancy_extent - capacity_extent - gap, 0.0)
    over_end = max(within.start - gap, 0.0)
    overflow = Bar(
        value=occupancy - capacity,
        start=max(over_end - over_extent, 0.0),
        end=over_end,
    )
    return OverflowGeometry(within=within, overflow=overflow)

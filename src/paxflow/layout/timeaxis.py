"""Time-axis mapping for the horizontal trip display.

The x axis spans ``frame_hours`` of wall-clock time starting at 00:00.
Each trip edge becomes a bar from its departure to its arrival; an edge
running past midnight is drawn as two bars, one up to 24:00 and one from
00:00, so no bar leaves the axis.

The vertical display instead stacks the edges of a trip downward, each
slot as tall as its travel time and as wide as its capacity.
"""

from __future__ import annotations

__all__ = [
    "ClockTime",
    "EdgeLoad",
    "TripEdgeLayout",
    "TripSpan",
    "VerticalEdgeSlot",
    "VerticalTripLayout",
    "compute_trip_layout",
    "compute_vertical_trip_layout",
    "segment_width",
    "split_at_midnight",
    "time_to_x",
    "travel_minutes",
]

from collections.abc import Hashable
from dataclasses import dataclass, field
from datetime import datetime
from typing import NamedTuple

from paxflow.layout.config import Axis, LayoutConfig
from paxflow.layout.constants import (
    FRAME_HOURS,
    HOURS_PER_DAY,
    MINUTES_PER_HOUR,
    VERTICAL_GAP,
    VERTICAL_MIN_EXTENT,
    VERTICAL_MINUTE_EXTENT,
    VERTICAL_PASSENGER_EXTENT,
    VERTICAL_TOP,
)
from paxflow.layout.overflow import Bar, build_overflow
from paxflow.layout.scale import scale_raw


class ClockTime(NamedTuple):
    hour: int
    minute: int

    @classmethod
    def of(cls, moment: datetime) -> ClockTime:
        return cls(moment.hour, moment.minute)


MIDNIGHT = ClockTime(0, 0)
END_OF_DAY = ClockTime(HOURS_PER_DAY, 0)


@dataclass(frozen=True)
class EdgeLoad:
    """Load of one trip section between two consecutive stops.

    ``floor`` is the lower bound of the passenger forecast, drawn as a
    translucent bar in front of the expected load.
    """

    id: Hashable
    from_name: str
    to_name: str
    departure: datetime
    arrival: datetime
    capacity: float
    occupancy: float
    floor: float | None = None

    def __post_init__(self) -> None:
        for name in ("capacity", "occupancy", "floor"):
            value = getattr(self, name)
            if value is not None and not value >= 0:
                raise ValueError(
                    f"Edge {self.id!r}: {name} must be non-negative, got {value}"
                )

    @property
    def overflowing(self) -> bool:
        return self.occupancy > self.capacity


@dataclass
class TripSpan:
    """One drawn piece of an edge between two clock times."""

    departure: ClockTime
    arrival: ClockTime
    x: float
    width: float
    load: Bar
    overflow: Bar | None = None
    floor: Bar | None = None
    wrapped: bool = False  # the 00:00 continuation of a midnight split


@dataclass
class TripEdgeLayout:
    edge: EdgeLoad
    spans: list[TripSpan] = field(default_factory=list)


def time_to_x(
    width: float, hour: float, minute: float, frame_hours: float = FRAME_HOURS
) -> float:
    """Horizontal offset of a clock time on an axis of *width* pixels."""
    return width * (hour / frame_hours + minute / (MINUTES_PER_HOUR * frame_hours))


def segment_width(
    width: float,
    dep_hour: float,
    dep_min: float,
    arr_hour: float,
    arr_min: float,
    frame_hours: float = FRAME_HOURS,
) -> float:
    return time_to_x(width, arr_hour, arr_min, frame_hours) - time_to_x(
        width, dep_hour, dep_min, frame_hours
    )


def split_at_midnight(
    departure: ClockTime, arrival: ClockTime
) -> list[tuple[ClockTime, ClockTime]]:
    """Return the clock-time spans an edge is drawn as.

    An edge whose departure hour is after its arrival hour crosses
    midnight (e.g. 23:50 -> 00:20) and is split at 24:00. An arrival at
    exactly 00:00 ends the edge at 24:00 with no continuation span.
    """
    if departure.hour > arrival.hour:
        if arrival == MIDNIGHT:
            return [(departure, END_OF_DAY)]
        return [(departure, END_OF_DAY), (MIDNIGHT, arrival)]
    return [(departure, arrival)]


def compute_trip_layout(
    edges: list[EdgeLoad],
    width: float,
    height: float,
    config: LayoutConfig | None = None,
) -> list[TripEdgeLayout]:
    """Lay out trip edges on a time axis.

    Args:
        edges: Edge loads of one trip, in travel order.
        width: Width of the time axis in pixels.
        height: Baseline the bars grow up from.
        config: A time-axis config (see ``LayoutConfig.time_axis``).
    """
    if config is None:
        config = LayoutConfig.time_axis()
    config.require_axis(Axis.TIME)

    layouts: list[TripEdgeLayout] = []
    for edge in edges:
        load, overflow = _load_bars(edge, height, config)
        floor = None
        if edge.floor is not None:
            floor = Bar(
                value=edge.floor,
                start=max(height - scale_raw(edge.floor, config.scale_factor), 0.0),
                end=height,
            )

        layout = TripEdgeLayout(edge=edge)
        spans = split_at_midnight(ClockTime.of(edge.departure), ClockTime.of(edge.arrival))
        for i, (dep, arr) in enumerate(spans):
            x = time_to_x(width, dep.hour, dep.minute, config.frame_hours)
            layout.spans.append(
                TripSpan(
                    departure=dep,
                    arrival=arr,
                    x=x,
                    width=segment_width(
                        width, dep.hour, dep.minute, arr.hour, arr.minute,
                        config.frame_hours,
                    ),
                    load=load,
                    overflow=overflow,
                    floor=floor,
                    wrapped=i > 0,
                )
            )
        layouts.append(layout)
    return layouts


def _load_bars(
    edge: EdgeLoad, height: float, config: LayoutConfig
) -> tuple[Bar, Bar | None]:
    """Expected-load bar, split at capacity when the edge is over-full."""
    occupancy_extent = scale_raw(edge.occupancy, config.scale_factor)
    geometry = build_overflow(
        occupancy=edge.occupancy,
        capacity=edge.capacity,
        capacity_extent=scale_raw(edge.capacity, config.scale_factor),
        occupancy_extent=occupancy_extent,
        baseline=height,
        gap=config.overflow_gap,
    )
    if geometry is None:
        start = max(height - occupancy_extent, 0.0)
        return Bar(value=edge.occupancy, start=start, end=height), None
    return geometry.within, geometry.overflow


@dataclass
class VerticalEdgeSlot:
    """One edge of the vertical display.

    ``capacity_width`` is the width of the capacity box; ``load_width``
    may exceed it when the edge is over capacity.
    """

    edge: EdgeLoad
    y: float
    height: float
    minutes: int
    capacity_width: float
    load_width: float

    @property
    def load_ratio(self) -> float:
        """Load relative to capacity, capped at 1."""
        if self.edge.capacity <= 0:
            return 1.0 if self.edge.occupancy > 0 else 0.0
        return min(1.0, self.edge.occupancy / self.edge.capacity)


@dataclass
class VerticalTripLayout:
    slots: list[VerticalEdgeSlot] = field(default_factory=list)
    total_extent: float = 0.0


def travel_minutes(edge: EdgeLoad) -> int:
    """Whole minutes between departure and arrival, never negative."""
    seconds = (edge.arrival - edge.departure).total_seconds()
    return max(int(seconds // 60), 0)


def compute_vertical_trip_layout(
    edges: list[EdgeLoad],
    top: float = VERTICAL_TOP,
    gap: float = VERTICAL_GAP,
) -> VerticalTripLayout:
    """Stack trip edges downward, in travel order.

    Each slot starts ``gap`` below the previous one (or below ``top``);
    ``total_extent`` is the bottom of the last slot plus ``gap``.
    """
    layout = VerticalTripLayout()
    offset = top
    for edge in edges:
        minutes = travel_minutes(edge)
        height = max(VERTICAL_MIN_EXTENT, minutes * VERTICAL_MINUTE_EXTENT)
        layout.slots.append(
            VerticalEdgeSlot(
                edge=edge,
                y=offset + gap,
                height=height,
                minutes=minutes,
                capacity_width=max(
                    VERTICAL_MIN_EXTENT, edge.capacity * VERTICAL_PASSENGER_EXTENT
                ),
                load_width=edge.occupancy * VERTICAL_PASSENGER_EXTENT,
            )
        )
        offset += height + gap
    layout.total_extent = offset + gap
    return layout

"""Assembling flow-diagram input from station interchange records.

An interchange is a group of passengers changing trains at a station: it
arrives on one trip and departs on another. Groups whose arrival lies
before the observed window come from ``previous`` trips; groups without an
arriving trip start their journey here (``boarding``). Symmetrically,
departures after the window go to ``future`` trips and groups without a
departing trip end here (``exiting``).
"""

from __future__ import annotations

__all__ = ["FlowInput", "Interchange", "TripStop", "assemble_station_flows"]

import warnings
from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass, field

from paxflow.model import LinkSpec, NodeId, NodeSpec, RealId, SentinelId, SentinelTag


@dataclass(frozen=True)
class TripStop:
    """A trip's arrival at, or departure from, the station."""

    trip: Hashable
    schedule_time: float
    capacity: float
    name: str = ""


@dataclass(frozen=True)
class Interchange:
    passengers: float
    arrival: TripStop | None = None
    departure: TripStop | None = None


@dataclass
class FlowInput:
    """Node and link specs ready for ``compute_layout``."""

    source_nodes: list[NodeSpec] = field(default_factory=list)
    target_nodes: list[NodeSpec] = field(default_factory=list)
    links: list[LinkSpec] = field(default_factory=list)


@dataclass
class _TripLoad:
    stop: TripStop
    passengers: float = 0.0

    def to_spec(self) -> NodeSpec:
        return NodeSpec(
            id=RealId(self.stop.trip),
            display_time=self.stop.schedule_time,
            occupancy=self.passengers,
            capacity=self.stop.capacity,
            name=self.stop.name or str(self.stop.trip),
        )


def assemble_station_flows(
    interchanges: Iterable[Interchange],
    window_start: float,
    window_end: float,
) -> FlowInput:
    """Build node and link specs for one station and time window.

    Each interchange endpoint is classified once, here; the result is
    encoded in the link's node ids. Groups sharing the same pair of
    endpoints are merged into a single link.
    """
    if window_end < window_start:
        raise ValueError(
            f"Window ends ({window_end}) before it starts ({window_start})"
        )

    arriving: dict[Hashable, _TripLoad] = {}
    departing: dict[Hashable, _TripLoad] = {}
    link_values: dict[tuple[NodeId, NodeId], float] = {}

    for interchange in interchanges:
        if interchange.arrival is None and interchange.departure is None:
            warnings.warn(
                "Skipping interchange with neither arrival nor departure",
                stacklevel=2,
            )
            continue
        if not interchange.passengers >= 0:
            raise ValueError(
                f"Interchange passengers must be non-negative, "
                f"got {interchange.passengers}"
            )

        src = _classify(
            interchange.arrival,
            interchange.passengers,
            arriving,
            missing=SentinelTag.BOARDING,
            outside=SentinelTag.PREVIOUS,
            is_outside=lambda t: t < window_start,
        )
        dst = _classify(
            interchange.departure,
            interchange.passengers,
            departing,
            missing=SentinelTag.EXITING,
            outside=SentinelTag.FUTURE,
            is_outside=lambda t: t > window_end,
        )
        link_values[(src, dst)] = link_values.get((src, dst), 0.0) + interchange.passengers

    result = FlowInput(
        source_nodes=_sorted_specs(arriving),
        target_nodes=_sorted_specs(departing),
    )
    for i, ((src, dst), value) in enumerate(link_values.items()):
        result.links.append(LinkSpec(id=i, from_node=src, to_node=dst, value=value))
    return result


def _classify(
    stop: TripStop | None,
    passengers: float,
    trips: dict[Hashable, _TripLoad],
    *,
    missing: SentinelTag,
    outside: SentinelTag,
    is_outside: Callable[[float], bool],
) -> NodeId:
    """Node id for one end of an interchange, updating the trip load."""
    if stop is None:
        return SentinelId(missing)
    if is_outside(stop.schedule_time):
        return SentinelId(outside)
    load = trips.get(stop.trip)
    if load is None:
        load = trips[stop.trip] = _TripLoad(stop=stop)
    load.passengers += passengers
    return RealId(stop.trip)


def _sorted_specs(trips: dict[Hashable, _TripLoad]) -> list[NodeSpec]:
    specs = [load.to_spec() for load in trips.values()]
    return sorted(specs, key=lambda s: s.display_time)

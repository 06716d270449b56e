"""Assembling flow-diagram input for the passengers of a single trip.

Every stop of the trip appears on both sides: on the source side sized by
the passengers who board there, on the target side by those who alight.
A link runs from a group's boarding stop to its alighting stop. Both sides
of a stop share one backdrop, the larger of the two sums, so a stop's row
is as tall as its busier side.
"""

from __future__ import annotations

__all__ = ["GroupCount", "Stop", "TripSection", "assemble_trip_flows"]

import warnings
from collections.abc import Hashable, Sequence
from dataclasses import dataclass

from paxflow.interchanges import FlowInput
from paxflow.model import LinkSpec, NodeSpec, RealId

# Backdrop floor in passengers, so stops nobody uses still get a row.
MIN_STOP_VALUE = 1.0


@dataclass(frozen=True)
class Stop:
    station: Hashable
    name: str
    schedule_time: float


@dataclass(frozen=True)
class GroupCount:
    """A passenger group riding the trip."""

    group: Hashable
    passengers: float


@dataclass(frozen=True)
class TripSection:
    """The trip between two consecutive stops.

    ``entering`` lists the groups that board at ``departure_stop``;
    ``exiting`` the groups that alight at ``arrival_stop``.
    """

    departure_stop: Stop
    arrival_stop: Stop
    entering: tuple[GroupCount, ...] = ()
    exiting: tuple[GroupCount, ...] = ()


def assemble_trip_flows(sections: Sequence[TripSection]) -> FlowInput:
    """Build node and link specs for one trip, sections in travel order.

    Stops are keyed by their position along the trip, so a station the
    trip passes twice gets two rows. Groups with the same boarding and
    alighting stop are merged into one link; links are ordered by
    boarding stop, then alighting stop.
    """
    if not sections:
        return FlowInput()

    stops = [section.departure_stop for section in sections]
    stops.append(sections[-1].arrival_stop)

    boarding: dict[Hashable, tuple[int, float]] = {}
    for index, section in enumerate(sections):
        for count in section.entering:
            if not count.passengers >= 0:
                raise ValueError(
                    f"Group {count.group!r}: passengers must be non-negative, "
                    f"got {count.passengers}"
                )
            boarding[count.group] = (index, count.passengers)

    link_values: dict[tuple[int, int], float] = {}
    for index, section in enumerate(sections):
        exit_stop = index + 1
        for count in section.exiting:
            entry = boarding.pop(count.group, None)
            if entry is None:
                warnings.warn(
                    f"Skipping group {count.group!r}: alights at stop "
                    f"{exit_stop} but never boarded",
                    stacklevel=2,
                )
                continue
            enter_stop, passengers = entry
            if exit_stop <= enter_stop:
                warnings.warn(
                    f"Skipping group {count.group!r}: alights at stop "
                    f"{exit_stop}, not after boarding stop {enter_stop}",
                    stacklevel=2,
                )
                continue
            pair = (enter_stop, exit_stop)
            link_values[pair] = link_values.get(pair, 0.0) + passengers

    for group in boarding:
        warnings.warn(
            f"Skipping group {group!r}: boards but never alights", stacklevel=2
        )

    sum_out = [0.0] * len(stops)
    sum_in = [0.0] * len(stops)
    for (enter_stop, exit_stop), value in link_values.items():
        sum_out[enter_stop] += value
        sum_in[exit_stop] += value

    result = FlowInput()
    for index, stop in enumerate(stops):
        backdrop = max(sum_out[index], sum_in[index], MIN_STOP_VALUE)
        result.source_nodes.append(_stop_spec(index, stop, sum_out[index], backdrop))
        result.target_nodes.append(_stop_spec(index, stop, sum_in[index], backdrop))

    for i, ((enter_stop, exit_stop), value) in enumerate(sorted(link_values.items())):
        result.links.append(
            LinkSpec(
                id=i,
                from_node=RealId(enter_stop),
                to_node=RealId(exit_stop),
                value=value,
            )
        )
    return result


def _stop_spec(index: int, stop: Stop, occupancy: float, capacity: float) -> NodeSpec:
    return NodeSpec(
        id=RealId(index),
        display_time=stop.schedule_time,
        occupancy=occupancy,
        capacity=capacity,
        name=stop.name or str(stop.station),
    )

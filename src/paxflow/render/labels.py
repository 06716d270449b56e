"""Hover titles. Always report the underlying values, never drawn sizes."""

from __future__ import annotations

__all__ = [
    "format_bar_title",
    "format_link_title",
    "format_node_title",
    "format_slot_title",
    "format_span_title",
]

import math

from paxflow.layout.overflow import Bar
from paxflow.layout.timeaxis import EdgeLoad, TripSpan, VerticalEdgeSlot
from paxflow.model import LayoutLink, LayoutNode, SentinelId, SentinelTag, Side

_SENTINEL_TEXT = {
    SentinelTag.PREVIOUS: (
        "{pax:g} people coming from trips outside the selected timeframe."
    ),
    SentinelTag.BOARDING: "{pax:g} people starting their trip at this station.",
    SentinelTag.FUTURE: (
        "{pax:g} people boarding trips outside the selected timeframe."
    ),
    SentinelTag.EXITING: "{pax:g} people ending their trip at this station.",
}


def format_node_title(node: LayoutNode) -> str:
    if isinstance(node.id, SentinelId):
        return _SENTINEL_TEXT[node.id.tag].format(pax=node.occupancy)
    links = node.link_sum_out if node.side is Side.SOURCE else node.link_sum_in
    lines = [
        node.name or str(node.id),
        f"{node.occupancy:g} passengers",
        f"Transfers: {links:g}",
        f"Capacity: {node.capacity:g}",
    ]
    if node.capacity > 0:
        lines.append(f"Load: {math.ceil(node.occupancy / node.capacity * 100)}%")
    if node.overflow is not None:
        lines.append(f"Over capacity by {node.overflow.overflow.value:g}")
    return "\n".join(lines)


def format_link_title(link: LayoutLink, from_name: str, to_name: str) -> str:
    return f"{link.value:g} passengers\n{from_name} → {to_name}"


def format_bar_title(bar: Bar, what: str) -> str:
    return f"{bar.value:g} {what}"


def format_span_title(edge: EdgeLoad, span: TripSpan) -> str:
    dep = _clock(edge.departure.hour, edge.departure.minute)
    arr = _clock(edge.arrival.hour, edge.arrival.minute)
    lines = [
        f"{edge.from_name} → {edge.to_name}",
        f"{dep} → {arr}",
        "",
        f"{edge.occupancy:g} expected passengers",
        f"{edge.capacity:g} capacity",
    ]
    if span.overflow is not None:
        lines.append(f"{span.overflow.value:g} over capacity")
    return "\n".join(lines)


def format_slot_title(slot: VerticalEdgeSlot) -> str:
    edge = slot.edge
    return "\n".join(
        [
            f"{edge.from_name} → {edge.to_name}",
            f"{slot.minutes} min",
            f"{edge.occupancy:g} expected passengers",
            f"{edge.capacity:g} capacity",
            f"Load: {math.ceil(slot.load_ratio * 100)}%",
        ]
    )


def _clock(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"

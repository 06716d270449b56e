"""paxflow: passenger-flow diagram layout."""

from paxflow.layout.config import Axis, LayoutConfig
from paxflow.layout.engine import compute_layout
from paxflow.layout.timeaxis import compute_trip_layout, compute_vertical_trip_layout
from paxflow.model import (
    FlowLayout,
    LayoutLink,
    LayoutNode,
    LinkSpec,
    NodeSpec,
    RealId,
    SentinelId,
    SentinelTag,
    same_id,
)

__all__ = [
    "Axis",
    "FlowLayout",
    "LayoutConfig",
    "LayoutLink",
    "LayoutNode",
    "LinkSpec",
    "NodeSpec",
    "RealId",
    "SentinelId",
    "SentinelTag",
    "compute_layout",
    "compute_trip_layout",
    "compute_vertical_trip_layout",
    "same_id",
]

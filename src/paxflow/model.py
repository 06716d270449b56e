"""Data model for flow diagrams: input specs and computed layout records."""

from __future__ import annotations

__all__ = [
    "FlowLayout",
    "LayoutLink",
    "LayoutNode",
    "LinkSpec",
    "NodeId",
    "NodeSpec",
    "RealId",
    "SentinelId",
    "SentinelTag",
    "Side",
    "same_id",
]

from collections.abc import Hashable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from paxflow.layout.overflow import OverflowGeometry


class Side(Enum):
    """Which stack of the diagram a node belongs to."""

    SOURCE = "source"
    TARGET = "target"

    @property
    def opposite(self) -> Side:
        return Side.TARGET if self is Side.SOURCE else Side.SOURCE


class SentinelTag(str, Enum):
    """Pseudo-nodes for passengers entering or leaving the modeled window."""

    PREVIOUS = "previous"
    BOARDING = "boarding"
    FUTURE = "future"
    EXITING = "exiting"

    @property
    def side(self) -> Side:
        if self in (SentinelTag.PREVIOUS, SentinelTag.BOARDING):
            return Side.SOURCE
        return Side.TARGET

    @property
    def rank(self) -> int:
        """Stacking rank relative to real nodes (which have rank 0)."""
        return _SENTINEL_RANK[self]


_SENTINEL_RANK = {
    SentinelTag.PREVIOUS: -2,
    SentinelTag.BOARDING: -1,
    SentinelTag.FUTURE: 1,
    SentinelTag.EXITING: 2,
}


@dataclass(frozen=True)
class RealId:
    """Id of a real entity (a trip, a trip stop, a station)."""

    key: Hashable

    def __str__(self) -> str:
        return str(self.key)


@dataclass(frozen=True)
class SentinelId:
    """Id of one of the four sentinel pseudo-nodes."""

    tag: SentinelTag

    def __str__(self) -> str:
        return self.tag.value


NodeId = Union[RealId, SentinelId]


def same_id(a: NodeId, b: NodeId) -> bool:
    """Compare two node ids; real and sentinel ids never match each other."""
    if type(a) is not type(b):
        return False
    return a == b


def _check_non_negative(kind: str, ident: object, **values: float) -> None:
    for name, value in values.items():
        # NaN fails the comparison too
        if not value >= 0:
            raise ValueError(f"{kind} {ident}: {name} must be non-negative, got {value}")


@dataclass(frozen=True)
class NodeSpec:
    """A node as handed to the layout engine."""

    id: NodeId
    display_time: float
    occupancy: float
    capacity: float
    name: str = ""

    def __post_init__(self) -> None:
        _check_non_negative(
            "Node", self.id, occupancy=self.occupancy, capacity=self.capacity
        )

    @property
    def is_sentinel(self) -> bool:
        return isinstance(self.id, SentinelId)

    @property
    def sort_rank(self) -> int:
        if isinstance(self.id, SentinelId):
            return self.id.tag.rank
        return 0


@dataclass(frozen=True)
class LinkSpec:
    """A passenger flow between a source-side and a target-side node."""

    id: Hashable
    from_node: NodeId
    to_node: NodeId
    value: float

    def __post_init__(self) -> None:
        _check_non_negative("Link", self.id, value=self.value)


@dataclass
class LayoutNode:
    """Geometry of one node along the stacking axis.

    ``start``/``end`` bound the capacity backdrop; the occupancy body is
    anchored to ``end`` and grows towards smaller offsets.
    """

    spec: NodeSpec
    side: Side
    row: int
    backdrop_extent: float = 0.0
    body_extent: float = 0.0
    start: float = 0.0
    end: float = 0.0
    body_start: float = 0.0
    body_end: float = 0.0
    overflowing: bool = False
    link_sum_out: float = 0.0
    link_sum_in: float = 0.0
    placeholder: bool = False  # zero-occupancy stand-in for the other side
    overflow: OverflowGeometry | None = None

    @property
    def id(self) -> NodeId:
        return self.spec.id

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def occupancy(self) -> float:
        return self.spec.occupancy

    @property
    def capacity(self) -> float:
        return self.spec.capacity

    @property
    def is_sentinel(self) -> bool:
        return self.spec.is_sentinel

    @property
    def overflow_extent(self) -> float:
        return max(self.body_extent - self.backdrop_extent, 0.0)


@dataclass
class LayoutLink:
    """Geometry of one link: its thickness and its centre at each end."""

    spec: LinkSpec
    extent: float
    start_offset_at_source: float = 0.0
    start_offset_at_target: float = 0.0
    source_order_key: int = 0
    target_order_key: int = 0

    @property
    def id(self) -> Hashable:
        return self.spec.id

    @property
    def from_node(self) -> NodeId:
        return self.spec.from_node

    @property
    def to_node(self) -> NodeId:
        return self.spec.to_node

    @property
    def value(self) -> float:
        return self.spec.value


@dataclass
class FlowLayout:
    """Result of one layout pass."""

    source_layout: list[LayoutNode] = field(default_factory=list)
    target_layout: list[LayoutNode] = field(default_factory=list)
    links: list[LayoutLink] = field(default_factory=list)
    total_extent: float = 0.0

    def node(self, side: Side, node_id: NodeId) -> LayoutNode | None:
        nodes = self.source_layout if side is Side.SOURCE else self.target_layout
        for n in nodes:
            if same_id(n.id, node_id):
                return n
        return None

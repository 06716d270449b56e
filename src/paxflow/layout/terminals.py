"""Endpoint resolution and sentinel node synthesis.

Every link endpoint is classified exactly once here. A real id either
resolves to a node on its side or the link is dropped; a sentinel id feeds
the aggregated occupancy of that sentinel. Downstream passes only ever see
the resulting :class:`Resolution` and never classify endpoints again.
"""

from __future__ import annotations

__all__ = ["Resolution", "resolve_terminals"]

import math
import warnings
from collections import defaultdict
from dataclasses import dataclass, field

from paxflow.model import LinkSpec, NodeId, NodeSpec, SentinelId, SentinelTag, Side

# Sentinels sort before/after every real node; the tag rank orders them
# among themselves.
_SENTINEL_TIME = {
    SentinelTag.PREVIOUS: -math.inf,
    SentinelTag.BOARDING: -math.inf,
    SentinelTag.FUTURE: math.inf,
    SentinelTag.EXITING: math.inf,
}


@dataclass
class Resolution:
    """Node sets with sentinels included, plus the links that survived."""

    source_nodes: list[NodeSpec] = field(default_factory=list)
    target_nodes: list[NodeSpec] = field(default_factory=list)
    links: list[LinkSpec] = field(default_factory=list)
    dropped: list[LinkSpec] = field(default_factory=list)

    def nodes(self, side: Side) -> list[NodeSpec]:
        return self.source_nodes if side is Side.SOURCE else self.target_nodes


def resolve_terminals(
    source_nodes: list[NodeSpec],
    target_nodes: list[NodeSpec],
    links: list[LinkSpec],
) -> Resolution:
    """Resolve link endpoints and synthesize the sentinel nodes.

    Args:
        source_nodes: Real nodes on the source (arriving) side.
        target_nodes: Real nodes on the target (departing) side.
        links: Flows between them; endpoints may be sentinel ids.

    Raises ValueError if a node list contains a sentinel or a duplicate id.
    Links with an endpoint that cannot be resolved are dropped with a
    warning.
    """
    source_ids = _index_side(source_nodes, Side.SOURCE)
    target_ids = _index_side(target_nodes, Side.TARGET)

    sentinel_load: dict[SentinelTag, float] = defaultdict(float)
    kept: list[LinkSpec] = []
    dropped: list[LinkSpec] = []

    for link in links:
        from_ok = _endpoint_resolves(link.from_node, Side.SOURCE, source_ids)
        to_ok = _endpoint_resolves(link.to_node, Side.TARGET, target_ids)
        if not (from_ok and to_ok):
            end = link.from_node if not from_ok else link.to_node
            warnings.warn(
                f"Dropping link {link.id!r}: endpoint {end} not found "
                f"on the {'source' if not from_ok else 'target'} side",
                stacklevel=2,
            )
            dropped.append(link)
            continue
        for end in (link.from_node, link.to_node):
            if isinstance(end, SentinelId):
                sentinel_load[end.tag] += link.value
        kept.append(link)

    resolution = Resolution(
        source_nodes=list(source_nodes),
        target_nodes=list(target_nodes),
        dropped=dropped,
    )
    for tag in SentinelTag:
        load = sentinel_load.get(tag, 0.0)
        if load <= 0:
            continue
        resolution.nodes(tag.side).append(
            NodeSpec(
                id=SentinelId(tag),
                display_time=_SENTINEL_TIME[tag],
                occupancy=load,
                capacity=0.0,
                name=tag.value,
            )
        )
    # Zero-valued flows into a sentinel that carries no load have nothing
    # to attach to and would never be drawn.
    resolution.links = [
        link
        for link in kept
        if all(
            sentinel_load.get(end.tag, 0.0) > 0
            for end in (link.from_node, link.to_node)
            if isinstance(end, SentinelId)
        )
    ]
    return resolution


def _index_side(nodes: list[NodeSpec], side: Side) -> set[NodeId]:
    ids: set[NodeId] = set()
    for node in nodes:
        if node.is_sentinel:
            raise ValueError(
                f"Sentinel node {node.id} in the {side.value} node list; "
                "sentinels are synthesized from links"
            )
        if node.id in ids:
            raise ValueError(f"Duplicate node id {node.id} on the {side.value} side")
        ids.add(node.id)
    return ids


def _endpoint_resolves(node_id: NodeId, side: Side, ids: set[NodeId]) -> bool:
    if isinstance(node_id, SentinelId):
        return node_id.tag.side is side
    return node_id in ids

"""Layout coordinator: resolution, stacking, link allocation, overflow.

One synchronous pass over fresh inputs. Nothing is cached between calls,
so identical inputs always give identical geometry.
"""

from __future__ import annotations

__all__ = ["compute_layout"]

from paxflow.layout.config import Axis, LayoutConfig
from paxflow.layout.links import allocate_links
from paxflow.layout.overflow import build_overflow
from paxflow.layout.stacking import Stack, stack_nodes
from paxflow.layout.terminals import resolve_terminals
from paxflow.model import FlowLayout, LinkSpec, NodeSpec, Side


def compute_layout(
    source_nodes: list[NodeSpec],
    target_nodes: list[NodeSpec],
    links: list[LinkSpec],
    config: LayoutConfig | None = None,
) -> FlowLayout:
    """Compute the geometry of a flow diagram.

    Args:
        source_nodes: Real nodes of the source stack (e.g. arriving trips).
        target_nodes: Real nodes of the target stack (e.g. departing trips).
        links: Passenger flows; endpoints may be sentinel ids.
        config: Scaling and spacing; defaults to ``LayoutConfig()``.

    Returns a FlowLayout whose node lists are in stacking order and whose
    links are in input order. Links that cannot be resolved are dropped
    with a warning; malformed config raises ValueError.
    """
    if config is None:
        config = LayoutConfig()
    config.require_axis(Axis.RANK)

    resolution = resolve_terminals(source_nodes, target_nodes, links)
    stack = stack_nodes(resolution, config)
    layout_links = allocate_links(stack, resolution, config)
    _attach_overflow(stack, config)

    return FlowLayout(
        source_layout=stack.nodes(Side.SOURCE),
        target_layout=stack.nodes(Side.TARGET),
        links=layout_links,
        total_extent=stack.total_extent,
    )


def _attach_overflow(stack: Stack, config: LayoutConfig) -> None:
    for row in stack.rows:
        for node in row.nodes():
            if not node.overflowing:
                continue
            node.overflow = build_overflow(
                occupancy=node.occupancy,
                capacity=node.capacity,
                capacity_extent=node.backdrop_extent,
                occupancy_extent=node.body_extent,
                baseline=node.end,
                gap=config.overflow_gap,
            )

"""Link allocation: thickness and position of every link at both ends.

Links leaving a node are stacked along its body in the order of their
other endpoint's row, bottom-most partner first, so ribbons between two
stacks cross as little as possible.
"""

from __future__ import annotations

__all__ = ["allocate_links"]

import warnings

import networkx as nx

from paxflow.layout.config import LayoutConfig
from paxflow.layout.scale import scale
from paxflow.layout.stacking import Stack
from paxflow.layout.terminals import Resolution
from paxflow.model import LayoutLink, LayoutNode, Side


def allocate_links(
    stack: Stack, resolution: Resolution, config: LayoutConfig
) -> list[LayoutLink]:
    """Place every resolved link on its source and target node.

    Returns the links in input order; links whose extent is zero are left
    out entirely.
    """
    row_of = stack.row_index()
    G = _flow_graph(stack, resolution, row_of)

    layout_links: dict[int, LayoutLink] = {}
    for i, link in enumerate(resolution.links):
        extent = scale(link.value, config.scale_factor, config.min_link_extent)
        layout_links[i] = LayoutLink(spec=link, extent=extent)

    for node in stack.nodes(Side.SOURCE):
        edges = G.out_edges((Side.SOURCE, node.id), keys=True)
        _place_along(
            node,
            [(key, row_of[tgt[1]]) for _, tgt, key in edges],
            layout_links,
            at_source=True,
        )

    for node in stack.nodes(Side.TARGET):
        edges = G.in_edges((Side.TARGET, node.id), keys=True)
        _place_along(
            node,
            [(key, row_of[src[1]]) for src, _, key in edges],
            layout_links,
            at_source=False,
        )

    return [ll for _, ll in sorted(layout_links.items()) if ll.extent > 0]


def _flow_graph(
    stack: Stack, resolution: Resolution, row_of: dict
) -> nx.MultiDiGraph:
    """Bipartite multigraph of the resolved links, keyed by link position.

    Nodes are ``(side, node_id)`` so a trip present on both sides stays two
    distinct vertices.
    """
    G = nx.MultiDiGraph()
    for side in Side:
        for node in stack.nodes(side):
            G.add_node((side, node.id))

    for i, link in enumerate(resolution.links):
        if link.from_node not in row_of or link.to_node not in row_of:
            warnings.warn(
                f"Skipping link {link.id!r}: endpoint missing from the stack",
                stacklevel=3,
            )
            continue
        G.add_edge((Side.SOURCE, link.from_node), (Side.TARGET, link.to_node), key=i)
    return G


def _place_along(
    node: LayoutNode,
    keyed_rows: list[tuple[int, int]],
    layout_links: dict[int, LayoutLink],
    *,
    at_source: bool,
) -> None:
    """Stack links upward from the node's body end.

    *keyed_rows* pairs each link key with the row of its other endpoint.
    Sorting is stable, so ties keep input order.
    """
    ordered = sorted(keyed_rows, key=lambda kr: (-kr[1], kr[0]))
    offset = 0.0
    for order, (key, _) in enumerate(ordered):
        ll = layout_links[key]
        centre = node.body_end - offset - ll.extent / 2
        if at_source:
            ll.start_offset_at_source = centre
            ll.source_order_key = order
        else:
            ll.start_offset_at_target = centre
            ll.target_order_key = order
        offset += ll.extent

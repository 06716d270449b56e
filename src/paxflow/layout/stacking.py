"""Node stacking: row pairing, extents, compensation and the sweep.

The diagram draws two parallel stacks (arriving and departing
representations of the same timeline). Nodes of both sides with the same
id share a row; every row is centred on a shared gridline so paired bars
line up even when their capacities differ.
"""

from __future__ import annotations

__all__ = ["Row", "Stack", "stack_nodes"]

from dataclasses import dataclass, field

from paxflow.layout.config import LayoutConfig
from paxflow.layout.scale import scale, scale_raw
from paxflow.layout.terminals import Resolution
from paxflow.model import LayoutNode, NodeId, NodeSpec, Side


@dataclass
class Row:
    """One time slot: a source node, a target node, or both."""

    index: int
    key: NodeId
    source: LayoutNode | None = None
    target: LayoutNode | None = None

    def node(self, side: Side) -> LayoutNode | None:
        return self.source if side is Side.SOURCE else self.target

    def nodes(self) -> list[LayoutNode]:
        return [n for n in (self.source, self.target) if n is not None]


@dataclass
class Stack:
    """Stacked rows in display order and the total extent they occupy."""

    rows: list[Row] = field(default_factory=list)
    total_extent: float = 0.0

    def row_index(self) -> dict[NodeId, int]:
        return {row.key: row.index for row in self.rows}

    def nodes(self, side: Side) -> list[LayoutNode]:
        nodes = (row.node(side) for row in self.rows)
        return [n for n in nodes if n is not None]


def stack_nodes(resolution: Resolution, config: LayoutConfig) -> Stack:
    """Compute extents and stacking offsets for every node of both sides."""
    rows = _build_rows(resolution)
    by_key = {row.key: row for row in rows}

    for row in rows:
        for node in row.nodes():
            _init_extents(node, config)

    _compensate_min_links(by_key, resolution, config)

    for row in rows:
        for node in row.nodes():
            _finish_extents(node, config)

    total = _sweep(rows, config.padding)
    return Stack(rows=rows, total_extent=total)


def _build_rows(resolution: Resolution) -> list[Row]:
    """Pair source and target specs by id and sort rows by display time.

    Ties keep input order (source list first, then target-only nodes).
    """
    entries: dict[NodeId, list] = {}
    for order, spec in enumerate(resolution.source_nodes):
        entries[spec.id] = [spec, None, order]
    offset = len(resolution.source_nodes)
    for order, spec in enumerate(resolution.target_nodes, start=offset):
        entry = entries.get(spec.id)
        if entry is not None:
            entry[1] = spec
        else:
            entries[spec.id] = [None, spec, order]

    def sort_key(item: tuple[NodeId, list]) -> tuple[int, float, int]:
        src, tgt, order = item[1]
        spec = src if src is not None else tgt
        return spec.sort_rank, spec.display_time, order

    rows: list[Row] = []
    for index, (key, (src, tgt, _)) in enumerate(sorted(entries.items(), key=sort_key)):
        row = Row(index=index, key=key)
        if src is not None:
            row.source = LayoutNode(spec=src, side=Side.SOURCE, row=index)
        if tgt is not None:
            row.target = LayoutNode(spec=tgt, side=Side.TARGET, row=index)
        # Real nodes seen on one side only get an empty counterpart so the
        # backdrop is drawn on both sides.
        if not _is_sentinel_row(src, tgt):
            if row.source is None:
                row.source = _placeholder(tgt, Side.SOURCE, index)
            elif row.target is None:
                row.target = _placeholder(src, Side.TARGET, index)
        rows.append(row)
    return rows


def _is_sentinel_row(src: NodeSpec | None, tgt: NodeSpec | None) -> bool:
    spec = src if src is not None else tgt
    return spec is not None and spec.is_sentinel


def _placeholder(other: NodeSpec, side: Side, index: int) -> LayoutNode:
    spec = NodeSpec(
        id=other.id,
        display_time=other.display_time,
        occupancy=0.0,
        capacity=other.capacity,
        name=other.name,
    )
    return LayoutNode(spec=spec, side=side, row=index, placeholder=True)


def _init_extents(node: LayoutNode, config: LayoutConfig) -> None:
    # Unclamped for now: link compensation is added on top, the minimum
    # node size is applied afterwards.
    node.body_extent = scale(node.occupancy, config.scale_factor, 0.0)
    if not node.is_sentinel:
        node.backdrop_extent = scale(node.capacity, config.scale_factor, 0.0)


def _finish_extents(node: LayoutNode, config: LayoutConfig) -> None:
    if node.occupancy > 0:
        node.body_extent = max(node.body_extent, config.min_node_extent)
    if node.is_sentinel:
        # No capacity ceiling: the backdrop is the body itself.
        node.backdrop_extent = node.body_extent
    elif node.capacity > 0:
        node.backdrop_extent = max(node.backdrop_extent, config.min_node_extent)
    node.overflowing = (not node.is_sentinel) and node.occupancy > node.capacity


def _compensate_min_links(
    rows: dict[NodeId, Row], resolution: Resolution, config: LayoutConfig
) -> None:
    """Grow nodes by whatever minimum-thickness clamping adds to their links.

    The clamped links must still fill the node body exactly, so the delta
    goes into the node's body and backdrop, and into the backdrop of its
    partner on the other side to keep the row aligned. Also accumulates the
    per-node link sums.
    """
    for link in resolution.links:
        raw = scale_raw(link.value, config.scale_factor)
        delta = 0.0
        if 0 < raw < config.min_link_extent:
            delta = config.min_link_extent - raw
        for side, end in ((Side.SOURCE, link.from_node), (Side.TARGET, link.to_node)):
            row = rows[end]
            node = row.node(side)
            if side is Side.SOURCE:
                node.link_sum_out += link.value
            else:
                node.link_sum_in += link.value
            if not delta:
                continue
            node.body_extent += delta
            node.backdrop_extent += delta
            partner = row.node(side.opposite)
            if partner is not None:
                partner.backdrop_extent += delta


def _sweep(rows: list[Row], padding: float) -> float:
    """Assign start/end offsets row by row; return the total extent."""
    prev_end = 0.0
    for i, row in enumerate(rows):
        nodes = row.nodes()
        row_backdrop = max(n.backdrop_extent for n in nodes)
        row_start = prev_end + _full_padding(nodes) + (0.0 if i == 0 else padding)
        for node in nodes:
            # Centre the shorter backdrop on the row.
            node.start = row_start + (row_backdrop - node.backdrop_extent) / 2
            node.end = node.start + node.backdrop_extent
            node.body_end = node.end
            node.body_start = max(node.end - node.body_extent, 0.0)
        prev_end = max(n.end for n in nodes)
    return prev_end + padding


def _full_padding(nodes: list[LayoutNode]) -> float:
    """Room above a row for the overflow bars of its overflowing nodes."""
    if not any(n.overflowing for n in nodes):
        return 0.0
    reach = max(n.body_extent - n.backdrop_extent + n.backdrop_extent / 2 for n in nodes)
    half = max(n.backdrop_extent / 2 for n in nodes)
    return max(reach - half, 0.0)

"""Draw computed layouts as SVG with drawsvg.

Rendering is a pure consumer of layout output: it reads the geometry and
the true values for titles and never changes either.
"""

from __future__ import annotations

__all__ = [
    "link_path",
    "render_flow_svg",
    "render_trip_svg",
    "render_vertical_trip_svg",
]

import drawsvg as draw

from paxflow.layout.overflow import Bar
from paxflow.layout.timeaxis import TripEdgeLayout, VerticalTripLayout
from paxflow.model import FlowLayout, LayoutNode, SentinelId, Side
from paxflow.render.constants import (
    BACKDROP_COLOR,
    FLOOR_COLOR,
    FLOOR_OPACITY,
    FONT_FAMILY,
    FONT_SIZE,
    LINK_OPACITY,
    NODE_PALETTE,
    NODE_WIDTH,
    OVERFLOW_COLOR,
    SENTINEL_COLORS,
    SLOT_X,
    TIME_OFFSET,
    TIMELINE_COLOR,
    TIMELINE_WIDTH,
    TIMELINE_X,
    TRIP_FULL_COLOR,
    TRIP_LOAD_COLOR,
    WIDTH,
)
from paxflow.render.labels import (
    format_bar_title,
    format_link_title,
    format_node_title,
    format_slot_title,
    format_span_title,
)


def link_path(x0: float, y0: float, x1: float, y1: float, mid_x: float) -> str:
    """Cubic Bezier ribbon centre line between two link ends."""
    return f"M{x0},{y0}C{mid_x},{y0},{mid_x},{y1},{x1},{y1}"


def node_color(node: LayoutNode) -> str:
    if isinstance(node.id, SentinelId):
        return SENTINEL_COLORS[node.id.tag.value]
    return NODE_PALETTE[node.row % len(NODE_PALETTE)]


def render_flow_svg(
    layout: FlowLayout,
    width: float = WIDTH,
    node_width: float = NODE_WIDTH,
    time_offset: float = TIME_OFFSET,
) -> str:
    """Render a flow diagram: two node columns joined by link ribbons."""
    height = max(layout.total_extent, 1.0)
    d = draw.Drawing(width, height)

    column_x = {
        Side.SOURCE: time_offset,
        Side.TARGET: width - node_width - time_offset,
    }
    names: dict[tuple[Side, object], str] = {}
    colors: dict[object, str] = {}

    for side, nodes in (
        (Side.SOURCE, layout.source_layout),
        (Side.TARGET, layout.target_layout),
    ):
        x = column_x[side]
        for node in nodes:
            names[(side, node.id)] = node.name or str(node.id)
            color = node_color(node)
            if side is Side.SOURCE:
                colors[node.id] = color
            _draw_node(d, node, x, node_width, color)

    mid_x = width / 2
    x0 = column_x[Side.SOURCE] + node_width
    x1 = column_x[Side.TARGET]
    for link in layout.links:
        path = draw.Path(
            d=link_path(
                x0, link.start_offset_at_source, x1, link.start_offset_at_target, mid_x
            ),
            stroke=colors.get(link.from_node, NODE_PALETTE[0]),
            stroke_width=link.extent,
            stroke_opacity=LINK_OPACITY,
            fill="none",
            class_="link",
        )
        path.append_title(
            format_link_title(
                link,
                names.get((Side.SOURCE, link.from_node), str(link.from_node)),
                names.get((Side.TARGET, link.to_node), str(link.to_node)),
            )
        )
        d.append(path)

    return d.as_svg()


def _draw_node(
    d: draw.Drawing, node: LayoutNode, x: float, node_width: float, color: str
) -> None:
    title = format_node_title(node)
    backdrop = draw.Rectangle(
        x, node.start, node_width, node.backdrop_extent, fill=BACKDROP_COLOR
    )
    backdrop.append_title(title)
    d.append(backdrop)

    if node.overflow is None:
        body = draw.Rectangle(
            x, node.body_start, node_width, node.body_end - node.body_start, fill=color
        )
        body.append_title(title)
        d.append(body)
        return

    within = node.overflow.within
    body = draw.Rectangle(x, within.start, node_width, within.extent, fill=color)
    body.append_title(title)
    d.append(body)
    overflow = node.overflow.overflow
    d.append(
        _bar_rect(
            x,
            node_width,
            overflow,
            OVERFLOW_COLOR,
            format_bar_title(overflow, "over capacity"),
        )
    )


def _bar_rect(x: float, w: float, bar: Bar, fill: str, title: str, **kwargs):
    rect = draw.Rectangle(x, bar.start, w, bar.extent, fill=fill, **kwargs)
    rect.append_title(title)
    return rect


def render_trip_svg(
    layouts: list[TripEdgeLayout],
    width: float,
    height: float,
    label: str = "",
) -> str:
    """Render one trip's edges as bars on a time axis."""
    d = draw.Drawing(width, height)
    if label:
        d.append(
            draw.Text(label, FONT_SIZE, 0, FONT_SIZE, font_family=FONT_FAMILY)
        )

    for layout in layouts:
        edge = layout.edge
        fill = TRIP_FULL_COLOR if edge.overflowing else TRIP_LOAD_COLOR
        for span in layout.spans:
            title = format_span_title(edge, span)
            d.append(_bar_rect(span.x, span.width, span.load, fill, title))
            if span.overflow is not None:
                d.append(
                    _bar_rect(span.x, span.width, span.overflow, OVERFLOW_COLOR, title)
                )
            if span.floor is not None:
                d.append(
                    _bar_rect(
                        span.x,
                        span.width,
                        span.floor,
                        FLOOR_COLOR,
                        format_bar_title(span.floor, "passengers at least"),
                        fill_opacity=FLOOR_OPACITY,
                    )
                )

    return d.as_svg()


def render_vertical_trip_svg(layout: VerticalTripLayout, width: float) -> str:
    """Render one trip's edges as boxes stacked down a timeline.

    The load box is right-aligned in the capacity box; load beyond
    capacity continues to the right of it.
    """
    height = max(layout.total_extent, 1.0)
    d = draw.Drawing(width, height)
    if layout.slots:
        top = layout.slots[0].y
        d.append(
            draw.Rectangle(
                TIMELINE_X, top, TIMELINE_WIDTH, height - top, fill=TIMELINE_COLOR
            )
        )

    for slot in layout.slots:
        title = format_slot_title(slot)
        capacity = draw.Rectangle(
            SLOT_X, slot.y, slot.capacity_width, slot.height, fill=BACKDROP_COLOR
        )
        capacity.append_title(title)
        d.append(capacity)

        within = min(slot.load_width, slot.capacity_width)
        if within > 0:
            fill = TRIP_FULL_COLOR if slot.edge.overflowing else TRIP_LOAD_COLOR
            load = draw.Rectangle(
                SLOT_X + slot.capacity_width - within,
                slot.y,
                within,
                slot.height,
                fill=fill,
            )
            load.append_title(title)
            d.append(load)
        beyond = slot.load_width - slot.capacity_width
        if beyond > 0:
            over = draw.Rectangle(
                SLOT_X + slot.capacity_width,
                slot.y,
                beyond,
                slot.height,
                fill=OVERFLOW_COLOR,
            )
            over.append_title(title)
            d.append(over)

    return d.as_svg()

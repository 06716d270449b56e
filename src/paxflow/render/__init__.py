"""SVG rendering of computed flow and trip layouts."""

from paxflow.render.svg import link_path, render_flow_svg, render_trip_svg

__all__ = ["link_path", "render_flow_svg", "render_trip_svg"]

"""Tests for SVG rendering."""

import xml.etree.ElementTree as ET
from datetime import datetime

import pytest
from builders import layout_of, node

from paxflow.layout.timeaxis import (
    EdgeLoad,
    compute_trip_layout,
    compute_vertical_trip_layout,
)
from paxflow.render.svg import (
    link_path,
    render_flow_svg,
    render_trip_svg,
    render_vertical_trip_svg,
)

SVG_NS = "{http://www.w3.org/2000/svg}"


def _titles(svg: str) -> list[str]:
    root = ET.fromstring(svg)
    return [el.text or "" for el in root.iter(f"{SVG_NS}title")]


def test_link_path_shape():
    assert link_path(20, 10, 580, 50, 300) == "M20,10C300,10,300,50,580,50"


def test_render_produces_valid_svg(station_layout):
    root = ET.fromstring(render_flow_svg(station_layout))
    assert root.tag.endswith("svg")


def test_render_one_path_per_link(station_layout):
    root = ET.fromstring(render_flow_svg(station_layout))
    paths = list(root.iter(f"{SVG_NS}path"))
    assert len(paths) == len(station_layout.links)


def test_render_canvas_height_follows_total_extent(station_layout):
    root = ET.fromstring(render_flow_svg(station_layout))
    assert float(root.get("height")) == pytest.approx(station_layout.total_extent)


def test_render_contains_trip_names(station_layout):
    svg = render_flow_svg(station_layout)
    assert "ICE 571" in svg
    assert "RE 4410" in svg


def test_render_sentinel_titles(station_layout):
    titles = _titles(render_flow_svg(station_layout))
    assert any("starting their trip at this station" in t for t in titles)
    assert any("ending their trip at this station" in t for t in titles)


def test_overflow_titles_show_true_values():
    layout = layout_of([node("x", 0, 140, 100)], [], [])
    titles = _titles(render_flow_svg(layout))
    assert "40 over capacity" in titles
    assert any("Capacity: 100" in t for t in titles)


def test_render_empty_layout():
    svg = render_flow_svg(layout_of([], [], []))
    assert "svg" in svg


def test_render_trip():
    edges = [
        EdgeLoad(
            id=0,
            from_name="Hannover Hbf",
            to_name="Göttingen",
            departure=datetime(2021, 10, 25, 23, 50),
            arrival=datetime(2021, 10, 26, 0, 20),
            capacity=800,
            occupancy=910,
            floor=500,
        )
    ]
    svg = render_trip_svg(compute_trip_layout(edges, 1250, 100), 1250, 100, "ICE 1091")
    root = ET.fromstring(svg)
    # Two halves, each with load, overflow and floor bars.
    assert len(list(root.iter(f"{SVG_NS}rect"))) == 6
    assert "ICE 1091" in svg
    titles = _titles(svg)
    assert any("910 expected passengers" in t for t in titles)
    assert any("110 over capacity" in t for t in titles)


def test_render_vertical_trip():
    edges = [
        EdgeLoad(
            id=0,
            from_name="Hamburg Hbf",
            to_name="Hannover Hbf",
            departure=datetime(2021, 10, 25, 22, 10),
            arrival=datetime(2021, 10, 25, 23, 25),
            capacity=800,
            occupancy=520,
        ),
        EdgeLoad(
            id=1,
            from_name="Hannover Hbf",
            to_name="Göttingen",
            departure=datetime(2021, 10, 25, 23, 50),
            arrival=datetime(2021, 10, 26, 0, 20),
            capacity=800,
            occupancy=910,
        ),
    ]
    layout = compute_vertical_trip_layout(edges)
    svg = render_vertical_trip_svg(layout, 580)
    root = ET.fromstring(svg)
    assert float(root.get("height")) == pytest.approx(layout.total_extent)
    # Timeline, then capacity and load per edge, plus the overflow box.
    assert len(list(root.iter(f"{SVG_NS}rect"))) == 1 + 2 * 2 + 1
    titles = _titles(svg)
    assert any("75 min" in t for t in titles)
    assert any("Load: 100%" in t for t in titles)

"""Tests for the full layout pass."""

import warnings

import pytest
from builders import (
    BOARDING,
    EXITING,
    FUTURE,
    PREVIOUS,
    STATION_LINKS,
    STATION_SOURCE,
    STATION_TARGET,
    layout_of,
    link,
    node,
)

from paxflow.layout.config import LayoutConfig
from paxflow.layout.engine import compute_layout
from paxflow.model import RealId, Side


# --- Regression fixture ---


def test_two_trip_backdrops(two_trip_layout):
    a = two_trip_layout.node(Side.SOURCE, RealId("A"))
    b = two_trip_layout.node(Side.TARGET, RealId("B"))
    assert a.backdrop_extent == 150
    assert b.backdrop_extent == 225


def test_two_trip_link_extent(two_trip_layout):
    (only,) = two_trip_layout.links
    assert only.extent == 25
    assert only.start_offset_at_source == pytest.approx(137.5)
    assert only.start_offset_at_target == pytest.approx(382.5)


def test_two_trip_total_extent(two_trip_layout):
    """Backdrops 150 + 225, one padding between rows, one after the last."""
    assert two_trip_layout.total_extent == pytest.approx(150 + 20 + 225 + 20)


def test_two_trip_placeholders(two_trip_layout):
    assert [n.placeholder for n in two_trip_layout.source_layout] == [False, True]
    assert [n.placeholder for n in two_trip_layout.target_layout] == [True, False]


# --- Properties ---


def test_determinism():
    first = layout_of(STATION_SOURCE, STATION_TARGET, STATION_LINKS)
    second = layout_of(STATION_SOURCE, STATION_TARGET, STATION_LINKS)
    assert first == second


def test_fill_invariant(station_layout):
    for side, nodes in (
        (Side.SOURCE, station_layout.source_layout),
        (Side.TARGET, station_layout.target_layout),
    ):
        for n in nodes:
            attached = [
                lk
                for lk in station_layout.links
                if (lk.from_node if side is Side.SOURCE else lk.to_node) == n.id
            ]
            if attached:
                assert sum(lk.extent for lk in attached) == pytest.approx(
                    n.body_extent
                ), f"{side.value} node {n.id} not filled"


def test_non_overlap(station_layout):
    for nodes in (station_layout.source_layout, station_layout.target_layout):
        for a, b in zip(nodes, nodes[1:]):
            assert a.end + 20 <= b.start + 1e-9, f"{a.id} overlaps {b.id}"


def test_stacking_order(station_layout):
    assert [n.id for n in station_layout.source_layout] == [
        PREVIOUS,
        BOARDING,
        RealId("ICE 571"),
        RealId("IC 2013"),
        RealId("RE 4410"),
    ]
    assert [n.id for n in station_layout.target_layout] == [
        RealId("ICE 571"),
        RealId("IC 2013"),
        RealId("RE 4410"),
        FUTURE,
        EXITING,
    ]


def test_minimum_sizes(station_layout):
    for n in station_layout.source_layout + station_layout.target_layout:
        if n.occupancy > 0:
            assert n.body_extent >= 2
        else:
            assert n.body_extent == 0
    for lk in station_layout.links:
        assert lk.extent >= 2


def test_sentinel_suppression():
    layout = layout_of(
        [node("a", 0, 10, 50)],
        [node("b", 1, 10, 50)],
        [link(0, "a", "b", 10), link(1, PREVIOUS, "b", 0)],
    )
    ids = [n.id for n in layout.source_layout + layout.target_layout]
    assert PREVIOUS not in ids
    assert all(not n.is_sentinel for n in layout.source_layout)


def test_link_sums_reported(station_layout):
    ice = station_layout.node(Side.SOURCE, RealId("ICE 571"))
    assert ice.link_sum_out == 220
    re = station_layout.node(Side.TARGET, RealId("RE 4410"))
    assert re.link_sum_in == 600


def test_inputs_are_not_mutated():
    source = list(STATION_SOURCE)
    links = list(STATION_LINKS)
    layout_of(source, STATION_TARGET, links)
    assert source == STATION_SOURCE
    assert links == STATION_LINKS


# --- Overflow ---


def test_overflow_scenario():
    layout = layout_of([node("x", 0, 140, 100)], [], [])
    x = layout.source_layout[0]
    assert x.overflowing
    assert x.overflow_extent == pytest.approx(10)
    within, over = x.overflow.within, x.overflow.overflow
    assert within.value == 100
    assert over.value == 40
    assert within.extent == pytest.approx(25)
    assert over.extent == pytest.approx(10 - 1.5)
    assert within.end == x.end
    assert over.end == pytest.approx(within.start - 1.5)


def test_station_overflowing_trip(station_layout):
    ic = station_layout.node(Side.SOURCE, RealId("IC 2013"))
    assert ic.overflowing
    assert ic.overflow.within.value == 100
    assert ic.overflow.overflow.value == 40


def test_non_overflowing_nodes_have_no_overflow(station_layout):
    for n in station_layout.source_layout + station_layout.target_layout:
        if not n.overflowing:
            assert n.overflow is None
            assert n.overflow_extent == 0


# --- Edge cases and errors ---


def test_empty_input():
    layout = compute_layout([], [], [], LayoutConfig(padding=20))
    assert layout.source_layout == []
    assert layout.target_layout == []
    assert layout.links == []
    assert layout.total_extent == 20


def test_nodes_without_links():
    layout = layout_of([node("a", 0, 10, 40)], [node("b", 1, 0, 40)], [])
    assert layout.links == []
    assert len(layout.source_layout) == 2


def test_default_config():
    layout = compute_layout([node("a", 0, 220, 600)], [], [])
    assert layout.source_layout[0].backdrop_extent == 150


def test_unresolvable_link_skipped():
    with pytest.warns(UserWarning, match="Dropping link 1"):
        layout = layout_of(
            [node("a", 0, 10, 50)],
            [node("b", 1, 10, 50)],
            [link(0, "a", "b", 10), link(1, "nowhere", "b", 5)],
        )
    assert [lk.id for lk in layout.links] == [0]


def test_clean_input_emits_no_warnings():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        layout_of(STATION_SOURCE, STATION_TARGET, STATION_LINKS)


def test_time_axis_config_rejected():
    with pytest.raises(ValueError, match="'rank' axis"):
        compute_layout([], [], [], LayoutConfig(axis="time"))


def test_nan_occupancy_rejected_before_layout():
    with pytest.raises(ValueError, match="occupancy must be non-negative"):
        layout_of([node("a", 0, float("nan"), 100)], [], [])

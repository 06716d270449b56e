"""Tests for endpoint resolution and sentinel synthesis."""

import math

import pytest
from builders import (
    BOARDING,
    EXITING,
    FUTURE,
    PREVIOUS,
    STATION_LINKS,
    STATION_SOURCE,
    STATION_TARGET,
    link,
    node,
)

from paxflow.layout.terminals import resolve_terminals
from paxflow.model import NodeSpec, SentinelId, SentinelTag


def _by_id(nodes):
    return {n.id: n for n in nodes}


def test_sentinels_aggregate_link_values():
    res = resolve_terminals(STATION_SOURCE, STATION_TARGET, STATION_LINKS)
    src = _by_id(res.source_nodes)
    tgt = _by_id(res.target_nodes)
    assert src[BOARDING].occupancy == 183
    assert src[PREVIOUS].occupancy == 360
    assert tgt[EXITING].occupancy == 120
    assert tgt[FUTURE].occupancy == 3


def test_sentinels_land_on_their_own_side():
    res = resolve_terminals(STATION_SOURCE, STATION_TARGET, STATION_LINKS)
    assert BOARDING not in _by_id(res.target_nodes)
    assert EXITING not in _by_id(res.source_nodes)


def test_sentinels_have_no_capacity():
    res = resolve_terminals(STATION_SOURCE, STATION_TARGET, STATION_LINKS)
    for spec in res.source_nodes + res.target_nodes:
        if spec.is_sentinel:
            assert spec.capacity == 0


def test_sentinel_display_times_sort_outside_real_nodes():
    res = resolve_terminals(STATION_SOURCE, STATION_TARGET, STATION_LINKS)
    src = _by_id(res.source_nodes)
    tgt = _by_id(res.target_nodes)
    assert src[PREVIOUS].display_time == -math.inf
    assert tgt[EXITING].display_time == math.inf


def test_unused_sentinel_is_absent():
    res = resolve_terminals(
        [node("a", 0, 10, 50)], [node("b", 1, 10, 50)], [link(0, "a", "b", 10)]
    )
    assert not any(s.is_sentinel for s in res.source_nodes + res.target_nodes)


def test_zero_load_sentinel_is_suppressed_with_its_links():
    """A zero-valued flow must not conjure an empty sentinel bar."""
    res = resolve_terminals(
        [node("a", 0, 10, 50)],
        [node("b", 1, 10, 50)],
        [link(0, "a", "b", 10), link(1, BOARDING, "b", 0)],
    )
    assert BOARDING not in _by_id(res.source_nodes)
    assert [lk.id for lk in res.links] == [0]
    assert res.dropped == []


def test_unresolvable_link_dropped_with_warning():
    with pytest.warns(UserWarning, match="Dropping link 1"):
        res = resolve_terminals(
            [node("a", 0, 10, 50)],
            [node("b", 1, 10, 50)],
            [link(0, "a", "b", 10), link(1, "a", "ghost", 5)],
        )
    assert [lk.id for lk in res.links] == [0]
    assert [lk.id for lk in res.dropped] == [1]


def test_dropped_link_does_not_feed_sentinel():
    with pytest.warns(UserWarning):
        res = resolve_terminals(
            [node("a", 0, 10, 50)], [], [link(0, BOARDING, "ghost", 7)]
        )
    assert not any(s.is_sentinel for s in res.source_nodes)


def test_wrong_side_sentinel_is_unresolvable():
    with pytest.warns(UserWarning, match="not found on the source side"):
        res = resolve_terminals([], [node("b", 1, 10, 50)], [link(0, EXITING, "b", 4)])
    assert res.links == []


def test_real_id_resolves_only_on_its_side():
    """A source-only trip cannot be the target of a flow."""
    with pytest.warns(UserWarning, match="target side"):
        res = resolve_terminals([node("a", 0, 10, 50)], [], [link(0, "a", "a", 4)])
    assert res.links == []


def test_sentinel_in_node_list_rejected():
    sentinel = NodeSpec(
        id=SentinelId(SentinelTag.BOARDING), display_time=0, occupancy=5, capacity=0
    )
    with pytest.raises(ValueError, match="sentinels are synthesized"):
        resolve_terminals([sentinel], [], [])


def test_duplicate_node_id_rejected():
    with pytest.raises(ValueError, match="Duplicate node id a"):
        resolve_terminals([node("a", 0, 1, 1), node("a", 1, 1, 1)], [], [])


def test_same_id_on_both_sides_is_fine():
    res = resolve_terminals([node("a", 0, 1, 1)], [node("a", 1, 1, 1)], [])
    assert len(res.source_nodes) == len(res.target_nodes) == 1


def test_inputs_are_not_mutated():
    source = list(STATION_SOURCE)
    resolve_terminals(source, STATION_TARGET, STATION_LINKS)
    assert source == STATION_SOURCE

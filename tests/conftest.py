"""Shared test fixtures for the paxflow test suite."""

from __future__ import annotations

import pytest
from builders import (
    CONSISTENT_LINKS,
    CONSISTENT_SOURCE,
    CONSISTENT_TARGET,
    STATION_LINKS,
    STATION_SOURCE,
    STATION_TARGET,
    TWO_TRIP_LINKS,
    TWO_TRIP_SOURCE,
    TWO_TRIP_TARGET,
    layout_of,
)

from paxflow.layout.config import LayoutConfig
from paxflow.model import FlowLayout


@pytest.fixture
def config() -> LayoutConfig:
    return LayoutConfig(scale_factor=4, min_node_extent=2, min_link_extent=2, padding=20)


@pytest.fixture
def two_trip_layout() -> FlowLayout:
    """Trip A feeding trip B, laid out."""
    return layout_of(TWO_TRIP_SOURCE, TWO_TRIP_TARGET, TWO_TRIP_LINKS)


@pytest.fixture
def consistent_layout() -> FlowLayout:
    """Three trips whose occupancies match their flows, laid out."""
    return layout_of(CONSISTENT_SOURCE, CONSISTENT_TARGET, CONSISTENT_LINKS)


@pytest.fixture
def station_layout() -> FlowLayout:
    """A station diagram using every sentinel, laid out."""
    return layout_of(STATION_SOURCE, STATION_TARGET, STATION_LINKS)

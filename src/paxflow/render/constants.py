"""Rendering defaults. None of these feed back into layout."""

WIDTH = 600.0
NODE_WIDTH = 20.0
# Inset of both node columns from the canvas edges (room for time labels).
TIME_OFFSET = 0.0

BACKDROP_COLOR = "#e9ecef"
OVERFLOW_COLOR = "#dd4141"
FLOOR_COLOR = "#343a40"
FLOOR_OPACITY = 0.45
LINK_OPACITY = 0.5

# Cycled by row; rows sharing a colour are far apart.
NODE_PALETTE = (
    "#6e40aa",
    "#bf3caf",
    "#fe4b83",
    "#ff7847",
    "#e2b72f",
    "#aff05b",
    "#52f667",
    "#1ddfa3",
    "#23abd8",
    "#4c6edb",
)

SENTINEL_COLORS = {
    "previous": "#f20544",
    "boarding": "#f27e93",
    "exiting": "#f27e93",
    "future": "#f20544",
}

TRIP_LOAD_COLOR = "#c1d5d7"
TRIP_FULL_COLOR = "#f04b4a"

FONT_FAMILY = "Helvetica, Arial, sans-serif"
FONT_SIZE = 12

# Vertical trip display: x of the timeline and of the capacity boxes.
TIMELINE_X = 10.0
TIMELINE_WIDTH = 2.0
TIMELINE_COLOR = "#343a40"
SLOT_X = 30.0

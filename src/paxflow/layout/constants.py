"""Default layout parameters.

Extents are in pixels of the stacking axis; values are passenger counts.
"""

# Passengers per pixel.
SCALE_FACTOR = 4.0
MIN_NODE_EXTENT = 2.0
MIN_LINK_EXTENT = 2.0
# Gap between consecutive rows.
PADDING = 20.0

# Hours spanned by the time axis. Slightly more than a day so slots next
# to midnight stay visually apart.
FRAME_HOURS = 25.0
HOURS_PER_DAY = 24
MINUTES_PER_HOUR = 60

# Horizontal trip display: passengers per pixel and the seam left between
# a within-capacity bar and its overflow bar.
TRIP_SCALE_FACTOR = 13.0
OVERFLOW_GAP = 1.5

# Vertical trip display: edges stacked downward, one slot per edge.
# Heights are travel minutes times VERTICAL_MINUTE_EXTENT, widths are
# passengers times VERTICAL_PASSENGER_EXTENT; both floored at
# VERTICAL_MIN_EXTENT.
VERTICAL_TOP = 20.0
VERTICAL_GAP = 4.0
VERTICAL_MIN_EXTENT = 30.0
VERTICAL_MINUTE_EXTENT = 3.0
VERTICAL_PASSENGER_EXTENT = 0.15

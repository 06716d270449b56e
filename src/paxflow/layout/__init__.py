"""Flow-diagram layout: scaling, stacking, link allocation, time axis."""

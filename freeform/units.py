"""
units.py — Canvas interaction constants.

This is the foundation module. ALL snapping, collision and placement math
uses these constants. Never hardcode pixel tunables anywhere else.

All values are in logical canvas pixels (not screen pixels).
"""

# =============================================================================
# GRID & SNAPPING
# =============================================================================

GRID_SIZE_PX = 8

# Max distance between a raw value and its grid-snapped value for the snap to
# engage. Independent of GRID_SIZE_PX.
SNAP_THRESHOLD_PX = 5

# Max distance between matching edges/centers for an alignment guide.
ALIGNMENT_TOLERANCE_PX = 5

# =============================================================================
# COLLISION & PLACEMENT
# =============================================================================

COLLISION_STEP_PX = 8
PLACEMENT_PADDING_PX = 8

# =============================================================================
# VIEWPORT
# =============================================================================

MIN_SCALE = 0.1
MAX_SCALE = 5.0
ZOOM_IN_FACTOR = 1.1
ZOOM_OUT_FACTOR = 0.9

# =============================================================================
# ARTBOARD FLOW
# =============================================================================

FIRST_ARTBOARD_OFFSET_PX = 100
ARTBOARD_SPACING_PX = 100

# Offset applied to a duplicated component before collision resolution
DUPLICATE_OFFSET_PX = 16

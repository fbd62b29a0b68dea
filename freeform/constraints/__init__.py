"""Geometry engine - collision, grid snapping and alignment guides."""

from freeform.constraints.alignment import (
    AlignmentMatch,
    Anchor,
    AxisMatches,
    find_alignment_guides,
    find_alignment_matches,
    guide_for_match,
)
from freeform.constraints.collision import find_initial_position, find_non_overlapping_position
from freeform.constraints.geometry import (
    clamp_to_bounds,
    find_overlapping,
    is_within_bounds,
    minimum_push_vector,
    overlap_area,
    overlaps,
)
from freeform.constraints.resolver import (
    MovingComponent,
    ResizeHandle,
    ResizeSnapInput,
    ResizeSnapOutput,
    SnapInput,
    SnapModifiers,
    SnapOutput,
    SnapSource,
    resolve_resize_snap,
    resolve_snap,
)
from freeform.constraints.snapping import (
    snap_rect_to_grid,
    snap_to_grid,
    snap_to_grid_within_threshold,
)

__all__ = [
    # Geometry
    "clamp_to_bounds",
    "find_overlapping",
    "is_within_bounds",
    "minimum_push_vector",
    "overlap_area",
    "overlaps",
    # Collision
    "find_initial_position",
    "find_non_overlapping_position",
    # Grid
    "snap_rect_to_grid",
    "snap_to_grid",
    "snap_to_grid_within_threshold",
    # Alignment
    "AlignmentMatch",
    "Anchor",
    "AxisMatches",
    "find_alignment_guides",
    "find_alignment_matches",
    "guide_for_match",
    # Resolver
    "MovingComponent",
    "ResizeHandle",
    "ResizeSnapInput",
    "ResizeSnapOutput",
    "SnapInput",
    "SnapModifiers",
    "SnapOutput",
    "SnapSource",
    "resolve_resize_snap",
    "resolve_snap",
]

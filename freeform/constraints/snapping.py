"""Grid snapping with a distance threshold."""

import math

from freeform.models.schema import Rect
from freeform.units import GRID_SIZE_PX, SNAP_THRESHOLD_PX


def _is_valid_grid(grid_size: float) -> bool:
    return math.isfinite(grid_size) and grid_size > 0


def snap_to_grid(value: float, grid_size: float = GRID_SIZE_PX) -> float:
    """Snap a scalar to the nearest grid line.

    Halfway values round up. Non-finite values and non-finite or
    non-positive grid sizes return the input unchanged.

    Args:
        value: Value in pixels.
        grid_size: Grid spacing in pixels.

    Returns:
        Snapped value.
    """
    if not math.isfinite(value) or not _is_valid_grid(grid_size):
        return value
    return math.floor(value / grid_size + 0.5) * grid_size


def snap_to_grid_within_threshold(
    value: float,
    grid_size: float = GRID_SIZE_PX,
    threshold: float = SNAP_THRESHOLD_PX,
) -> float:
    """Snap to the grid only when the grid line is close enough.

    Avoids jarring jumps when the pointer is far from a grid line.

    Args:
        value: Value in pixels.
        grid_size: Grid spacing in pixels.
        threshold: Max distance for the snap to engage.

    Returns:
        The snapped value, or the raw value when out of range or invalid.
    """
    if (
        not math.isfinite(value)
        or not _is_valid_grid(grid_size)
        or not math.isfinite(threshold)
        or threshold < 0
    ):
        return value

    snapped = snap_to_grid(value, grid_size)
    return snapped if abs(snapped - value) <= threshold else value


def snap_rect_to_grid(rect: Rect, grid_size: float = GRID_SIZE_PX) -> Rect:
    """Snap a rect's origin to the grid, keeping its size."""
    return rect.moved_to(snap_to_grid(rect.x, grid_size), snap_to_grid(rect.y, grid_size))

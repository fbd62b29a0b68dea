"""Collision resolution for freeform placement.

Finds a placement for a rect that does not overlap any sibling. The search
order is externally observable (it decides where dropped and dragged
components land) and is kept fixed:

1. the clamped rect itself, when it is already free;
2. a square-perimeter spiral around the requested origin;
3. a deterministic stack below the lowest sibling.
"""

import logging
from typing import Sequence

from freeform.constraints.geometry import clamp_to_bounds, is_within_bounds, overlaps_any
from freeform.models.schema import ComponentRect, LocalPoint, Rect, Size
from freeform.units import COLLISION_STEP_PX, PLACEMENT_PADDING_PX

logger = logging.getLogger(__name__)


def find_non_overlapping_position(
    rect: Rect,
    siblings: Sequence[ComponentRect],
    container: Size,
    exclude_id: str | None = None,
    step: int = COLLISION_STEP_PX,
) -> LocalPoint:
    """Find a nearby position for ``rect`` that overlaps no sibling.

    Args:
        rect: Requested placement (container-local).
        siblings: Read-only snapshot of sibling rects.
        container: Container size.
        exclude_id: Sibling id to ignore (usually the moving component).
        step: Spiral search step in pixels. Steps below one pixel fall back
            to the default step.

    Returns:
        The resolved top-left position. Always returns a position.
    """
    step = int(step) if step >= 1 else COLLISION_STEP_PX

    others = [s for s in siblings if s.id != exclude_id]

    constrained = clamp_to_bounds(rect, container)
    test_rect = rect.moved_to(constrained.x, constrained.y)

    if not overlaps_any(test_rect, others):
        return LocalPoint(x=constrained.x, y=constrained.y)

    max_radius = max(container.width, container.height)

    radius = step
    while radius < max_radius:
        for dx in range(-radius, radius + 1, step):
            for dy in range(-radius, radius + 1, step):
                # Perimeter only; interior cells were tried at smaller radii
                if abs(dx) != radius and abs(dy) != radius:
                    continue

                candidate = rect.moved_to(rect.x + dx, rect.y + dy)
                if not is_within_bounds(candidate, container):
                    continue
                if not overlaps_any(candidate, others):
                    return LocalPoint(x=candidate.x, y=candidate.y)
        radius += step

    return _stacked_fallback(rect, others, container)


def _stacked_fallback(
    rect: Rect,
    others: Sequence[ComponentRect],
    container: Size,
) -> LocalPoint:
    """Stack the rect below the lowest sibling, clamped into the container."""
    if others:
        max_y = max(s.bottom for s in others) + PLACEMENT_PADDING_PX
    else:
        max_y = 0

    x = max(0, min(rect.x, container.width - rect.width))
    y = max(0, min(max_y, container.height - rect.height))

    logger.debug(f"Spiral search exhausted, stacking at ({x}, {y})")
    return LocalPoint(x=x, y=y)


def find_initial_position(
    size: Size,
    siblings: Sequence[ComponentRect],
    container: Size,
    padding: int = PLACEMENT_PADDING_PX,
) -> LocalPoint:
    """Find the first free slot for a new component using top-left packing.

    Rows are scanned top to bottom, columns left to right, in ``padding``
    steps starting at ``(padding, padding)``.

    Args:
        size: Size of the new component.
        siblings: Existing components.
        container: Container size.
        padding: Scan step and gap between components.

    Returns:
        The first free position, or a slot below existing content.
    """
    if padding < 1:
        padding = PLACEMENT_PADDING_PX

    y = padding
    while y < container.height - size.height:
        x = padding
        while x < container.width - size.width:
            candidate = Rect(x=x, y=y, width=size.width, height=size.height)
            if not overlaps_any(candidate, siblings):
                return LocalPoint(x=x, y=y)
            x += padding
        y += padding

    if siblings:
        max_y = max(s.bottom for s in siblings) + padding
    else:
        max_y = padding

    return LocalPoint(
        x=padding,
        y=min(max_y, max(0, container.height - size.height)),
    )

"""Rectangle primitives shared by the collision and alignment engines."""

from typing import Iterable

from freeform.models.schema import ComponentRect, Rect, Size, Vector


def overlaps(a: Rect, b: Rect) -> bool:
    """Check whether two rects intersect with positive area.

    Touching edges (``a.right == b.left``) do not count as overlap, so
    adjacent placements are valid.

    Args:
        a: First rect.
        b: Second rect.

    Returns:
        True if the rects overlap.
    """
    return not (
        a.right <= b.x  # a is left of b
        or b.right <= a.x  # b is left of a
        or a.bottom <= b.y  # a is above b
        or b.bottom <= a.y  # b is above a
    )


def is_within_bounds(rect: Rect, container: Size) -> bool:
    """Check that a rect lies entirely inside ``[0, w] x [0, h]``."""
    return (
        rect.x >= 0
        and rect.y >= 0
        and rect.right <= container.width
        and rect.bottom <= container.height
    )


def clamp_to_bounds(rect: Rect, container: Size) -> Rect:
    """Constrain a rect to fit within container bounds.

    The size is shrunk to at most the container's, then the origin is
    clamped so the rect stays inside.

    Args:
        rect: Rect to constrain.
        container: Container size.

    Returns:
        A rect inside the container.
    """
    width = min(rect.width, container.width)
    height = min(rect.height, container.height)

    return rect.model_copy(
        update={
            "x": max(0, min(rect.x, container.width - width)),
            "y": max(0, min(rect.y, container.height - height)),
            "width": width,
            "height": height,
        }
    )


def overlap_area(a: Rect, b: Rect) -> float | None:
    """Area of the intersection of two rects, or None if they don't overlap."""
    if not overlaps(a, b):
        return None

    overlap_x = max(0, min(a.right, b.right) - max(a.x, b.x))
    overlap_y = max(0, min(a.bottom, b.bottom) - max(a.y, b.y))
    return overlap_x * overlap_y


def find_overlapping(
    rect: Rect,
    siblings: Iterable[ComponentRect],
    exclude_id: str | None = None,
) -> list[ComponentRect]:
    """Siblings that a rect overlaps, skipping ``exclude_id``."""
    return [s for s in siblings if s.id != exclude_id and overlaps(rect, s)]


def overlaps_any(rect: Rect, siblings: Iterable[Rect]) -> bool:
    """Check a rect against every sibling."""
    return any(overlaps(rect, s) for s in siblings)


def minimum_push_vector(moving: Rect, obstacle: Rect) -> Vector:
    """Smallest axis-aligned translation that separates ``moving`` from ``obstacle``.

    The four pushes are evaluated in the order right, left, down, up; on
    equal Manhattan magnitude the earlier one is kept.

    Args:
        moving: Rect to push.
        obstacle: Rect to push away from.

    Returns:
        The push vector, or a zero vector when there is no overlap.
    """
    if not overlaps(moving, obstacle):
        return Vector(x=0, y=0)

    options = [
        Vector(x=obstacle.right - moving.x, y=0),  # right
        Vector(x=-(moving.right - obstacle.x), y=0),  # left
        Vector(x=0, y=obstacle.bottom - moving.y),  # down
        Vector(x=0, y=-(moving.bottom - obstacle.y)),  # up
    ]

    best = options[0]
    for option in options[1:]:
        if option.manhattan < best.manhattan:
            best = option
    return best

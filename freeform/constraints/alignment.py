"""Smart alignment guides between a moving rect and its siblings.

Each axis is resolved independently. On the x axis the moving rect's left
edge, right edge and center are compared with the same anchor on every
sibling; the y axis does the same with top, bottom and center. The closest
match within tolerance wins; exact ties keep the first match encountered
(sibling order, then anchor order).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from freeform.models.schema import AlignmentGuide, ComponentBounds, GuideType, Rect
from freeform.units import ALIGNMENT_TOLERANCE_PX


class Anchor(str, Enum):
    """Edge or center used for alignment."""

    START = "start"  # left / top
    END = "end"  # right / bottom
    CENTER = "center"


ANCHOR_ORDER = (Anchor.START, Anchor.END, Anchor.CENTER)


@dataclass
class AlignmentMatch:
    """Best alignment found on one axis."""

    guide_type: GuideType
    anchor: Anchor
    position: float  # Coordinate of the guide line
    snapped: float  # Origin coordinate that puts the moving anchor on the line
    distance: float
    sibling: ComponentBounds


@dataclass
class AxisMatches:
    """Per-axis alignment result (at most one match per axis)."""

    vertical: AlignmentMatch | None = None  # x axis
    horizontal: AlignmentMatch | None = None  # y axis

    def as_list(self) -> list[AlignmentMatch]:
        return [m for m in (self.vertical, self.horizontal) if m is not None]


def anchor_value(rect: Rect, guide_type: GuideType, anchor: Anchor) -> float:
    if guide_type == GuideType.VERTICAL:
        if anchor == Anchor.START:
            return rect.x
        if anchor == Anchor.END:
            return rect.right
        return rect.center_x

    if anchor == Anchor.START:
        return rect.y
    if anchor == Anchor.END:
        return rect.bottom
    return rect.center_y


def _anchor_offset(rect: Rect, guide_type: GuideType, anchor: Anchor) -> float:
    """Distance from the rect's origin to the anchor on the given axis."""
    length = rect.width if guide_type == GuideType.VERTICAL else rect.height
    if anchor == Anchor.START:
        return 0
    if anchor == Anchor.END:
        return length
    return length / 2


def _best_match(
    moving: Rect,
    siblings: Sequence[ComponentBounds],
    guide_type: GuideType,
    tolerance: float,
    exclude_id: str | None,
) -> AlignmentMatch | None:
    best: AlignmentMatch | None = None

    for sibling in siblings:
        if exclude_id is not None and sibling.id == exclude_id:
            continue

        for anchor in ANCHOR_ORDER:
            line = anchor_value(sibling, guide_type, anchor)
            distance = abs(anchor_value(moving, guide_type, anchor) - line)
            if distance > tolerance:
                continue
            if best is None or distance < best.distance:
                best = AlignmentMatch(
                    guide_type=guide_type,
                    anchor=anchor,
                    position=line,
                    snapped=line - _anchor_offset(moving, guide_type, anchor),
                    distance=distance,
                    sibling=sibling,
                )

    return best


def find_alignment_matches(
    moving: Rect,
    siblings: Sequence[ComponentBounds],
    tolerance: float = ALIGNMENT_TOLERANCE_PX,
    exclude_id: str | None = None,
) -> AxisMatches:
    """Find the closest alignment on each axis.

    Args:
        moving: Rect being moved, at its raw position.
        siblings: Read-only sibling snapshot.
        tolerance: Max edge/center distance for a match.
        exclude_id: Id of the moving component, never matched against itself.

    Returns:
        AxisMatches with up to one match per axis.
    """
    if exclude_id is None:
        exclude_id = getattr(moving, "id", None)

    return AxisMatches(
        vertical=_best_match(moving, siblings, GuideType.VERTICAL, tolerance, exclude_id),
        horizontal=_best_match(moving, siblings, GuideType.HORIZONTAL, tolerance, exclude_id),
    )


def guide_for_match(match: AlignmentMatch, moving: Rect, moving_id: str | None = None) -> AlignmentGuide:
    """Build the visible guide for a match.

    The guide spans the union of the moving rect's and the matched sibling's
    extents on the perpendicular axis, not the whole container.
    """
    sibling = match.sibling
    if match.guide_type == GuideType.VERTICAL:
        start = min(moving.y, sibling.y)
        end = max(moving.bottom, sibling.bottom)
    else:
        start = min(moving.x, sibling.x)
        end = max(moving.right, sibling.right)

    ids = (moving_id, sibling.id) if moving_id else (sibling.id,)
    return AlignmentGuide(
        type=match.guide_type,
        position=match.position,
        start=start,
        end=end,
        component_ids=ids,
    )


def find_alignment_guides(
    moving: Rect,
    siblings: Sequence[ComponentBounds],
    tolerance: float = ALIGNMENT_TOLERANCE_PX,
) -> list[AlignmentGuide]:
    """Alignment guides for a moving rect (at most one per axis).

    Extents are computed from the moving rect as given.
    """
    moving_id = getattr(moving, "id", None)
    matches = find_alignment_matches(moving, siblings, tolerance, exclude_id=moving_id)
    return [guide_for_match(m, moving, moving_id) for m in matches.as_list()]

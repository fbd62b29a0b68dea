"""Unified snap resolver for canvas interactions.

One place decides snapping for drags, drops and resizes:

- A held bypass modifier (Alt/Option) suppresses ALL snapping.
- Alignment guides take priority, per axis independently.
- Axes without an alignment match fall back to grid snapping within the
  snap threshold.

Coordinate space: all inputs and outputs are container-local logical
pixels, never screen pixels.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from freeform.constraints.alignment import (
    ANCHOR_ORDER,
    anchor_value,
    find_alignment_matches,
    guide_for_match,
)
from freeform.constraints.snapping import snap_to_grid_within_threshold
from freeform.models.schema import (
    AlignmentGuide,
    ComponentBounds,
    ComponentRect,
    GuideType,
    LocalPoint,
    Rect,
)
from freeform.units import ALIGNMENT_TOLERANCE_PX, GRID_SIZE_PX, SNAP_THRESHOLD_PX


class SnapSource(str, Enum):
    """Which rule decided an axis."""

    NONE = "none"
    ALIGNMENT = "alignment"
    GRID = "grid"


class ResizeHandle(str, Enum):
    """The eight resize handles (corners and edges)."""

    NW = "nw"
    N = "n"
    NE = "ne"
    E = "e"
    SE = "se"
    S = "s"
    SW = "sw"
    W = "w"

    @property
    def moves_left(self) -> bool:
        return "w" in self.value

    @property
    def moves_right(self) -> bool:
        return "e" in self.value

    @property
    def moves_top(self) -> bool:
        return "n" in self.value

    @property
    def moves_bottom(self) -> bool:
        return "s" in self.value


@dataclass
class SnapModifiers:
    """Modifier keys held during an interaction."""

    bypass_all_snapping: bool = False  # Alt/Option
    keep_aspect_ratio: bool = False  # Shift, resize only


@dataclass
class MovingComponent:
    """Identity and size of the rect being moved."""

    id: str
    width: float
    height: float


@dataclass
class SnapInput:
    """Input for a move/drop snap."""

    raw_position: LocalPoint
    moving: MovingComponent
    siblings: Sequence[ComponentBounds] = field(default_factory=list)
    modifiers: SnapModifiers = field(default_factory=SnapModifiers)
    threshold: float | None = None
    grid_size: float | None = None
    tolerance: float | None = None


@dataclass
class SnapOutput:
    """Resolved position plus the guides actually applied."""

    position: LocalPoint
    guides: list[AlignmentGuide]
    x_source: SnapSource = SnapSource.NONE
    y_source: SnapSource = SnapSource.NONE

    @property
    def snapped(self) -> bool:
        return self.x_source != SnapSource.NONE or self.y_source != SnapSource.NONE


@dataclass
class ResizeSnapInput:
    """Input for a resize snap."""

    raw_rect: Rect
    start_rect: Rect  # Interaction start; anchors the opposite edge
    handle: ResizeHandle
    moving_id: str = "__resize__"
    siblings: Sequence[ComponentBounds] = field(default_factory=list)
    modifiers: SnapModifiers = field(default_factory=SnapModifiers)
    threshold: float | None = None
    grid_size: float | None = None
    tolerance: float | None = None


@dataclass
class ResizeSnapOutput:
    """Resolved rect plus the guides actually applied."""

    rect: Rect
    guides: list[AlignmentGuide]
    x_source: SnapSource = SnapSource.NONE
    y_source: SnapSource = SnapSource.NONE


def _finite_or(value: float | None, default: float) -> float:
    if value is None or not math.isfinite(value):
        return default
    return value


def resolve_snap(snap_input: SnapInput) -> SnapOutput:
    """Resolve snapping for a move, drag or drop.

    Args:
        snap_input: Raw position, moving size, siblings and modifiers.

    Returns:
        SnapOutput with the resolved position and 0-2 guides.
    """
    raw = snap_input.raw_position

    if snap_input.modifiers.bypass_all_snapping:
        return SnapOutput(position=LocalPoint(x=raw.x, y=raw.y), guides=[])

    threshold = _finite_or(snap_input.threshold, SNAP_THRESHOLD_PX)
    grid_size = _finite_or(snap_input.grid_size, GRID_SIZE_PX)
    tolerance = _finite_or(snap_input.tolerance, ALIGNMENT_TOLERANCE_PX)

    moving_id = snap_input.moving.id
    moving = ComponentRect(
        id=moving_id,
        x=raw.x,
        y=raw.y,
        width=snap_input.moving.width,
        height=snap_input.moving.height,
    )
    siblings = [s for s in snap_input.siblings if s.id != moving_id]
    matches = find_alignment_matches(moving, siblings, tolerance, exclude_id=moving_id)

    if matches.vertical is not None:
        x, x_source = matches.vertical.snapped, SnapSource.ALIGNMENT
    else:
        x = snap_to_grid_within_threshold(raw.x, grid_size, threshold)
        x_source = SnapSource.GRID if x != raw.x else SnapSource.NONE

    if matches.horizontal is not None:
        y, y_source = matches.horizontal.snapped, SnapSource.ALIGNMENT
    else:
        y = snap_to_grid_within_threshold(raw.y, grid_size, threshold)
        y_source = SnapSource.GRID if y != raw.y else SnapSource.NONE

    resolved = moving.moved_to(x, y)
    guides = [guide_for_match(m, resolved, moving_id) for m in matches.as_list()]

    return SnapOutput(
        position=LocalPoint(x=x, y=y),
        guides=guides,
        x_source=x_source,
        y_source=y_source,
    )


def _closest_line(
    value: float,
    siblings: Sequence[ComponentBounds],
    guide_type: GuideType,
    tolerance: float,
) -> tuple[float, ComponentBounds] | None:
    """Closest sibling edge/center line to a single moving edge."""
    best: tuple[float, ComponentBounds] | None = None
    best_distance = math.inf

    for sibling in siblings:
        for anchor in ANCHOR_ORDER:
            line = anchor_value(sibling, guide_type, anchor)
            distance = abs(value - line)
            if distance <= tolerance and distance < best_distance:
                best = (line, sibling)
                best_distance = distance

    return best


def _edge_guide(guide_type: GuideType, line: float, rect: Rect, sibling: ComponentBounds, moving_id: str) -> AlignmentGuide:
    if guide_type == GuideType.VERTICAL:
        start, end = min(rect.y, sibling.y), max(rect.bottom, sibling.bottom)
    else:
        start, end = min(rect.x, sibling.x), max(rect.right, sibling.right)
    return AlignmentGuide(
        type=guide_type,
        position=line,
        start=start,
        end=end,
        component_ids=(moving_id, sibling.id),
    )


def resolve_resize_snap(snap_input: ResizeSnapInput) -> ResizeSnapOutput:
    """Resolve snapping for a resize.

    Only the edges moved by the handle snap; the opposite edge stays
    anchored to the start rect. Each moving edge prefers the closest sibling
    line within tolerance and falls back to the grid within threshold.
    Min/max size constraints are the caller's job.

    Args:
        snap_input: Raw rect, start rect, handle, siblings and modifiers.

    Returns:
        ResizeSnapOutput with the resolved rect and the guides applied.
    """
    raw = snap_input.raw_rect
    start = snap_input.start_rect

    if snap_input.modifiers.bypass_all_snapping:
        return ResizeSnapOutput(rect=raw, guides=[])

    threshold = _finite_or(snap_input.threshold, SNAP_THRESHOLD_PX)
    grid_size = _finite_or(snap_input.grid_size, GRID_SIZE_PX)
    tolerance = _finite_or(snap_input.tolerance, ALIGNMENT_TOLERANCE_PX)

    siblings = [s for s in snap_input.siblings if s.id != snap_input.moving_id]
    handle = snap_input.handle

    x, y, width, height = raw.x, raw.y, raw.width, raw.height
    x_source = y_source = SnapSource.NONE
    matched: list[tuple[GuideType, float, ComponentBounds]] = []

    def snap_edge(value: float, guide_type: GuideType) -> tuple[float, SnapSource]:
        found = _closest_line(value, siblings, guide_type, tolerance)
        if found is not None:
            line, sibling = found
            matched.append((guide_type, line, sibling))
            return line, SnapSource.ALIGNMENT
        snapped = snap_to_grid_within_threshold(value, grid_size, threshold)
        return snapped, SnapSource.GRID if snapped != value else SnapSource.NONE

    if handle.moves_right:
        right, x_source = snap_edge(raw.right, GuideType.VERTICAL)
        width = right - raw.x
    if handle.moves_left:
        x, x_source = snap_edge(raw.x, GuideType.VERTICAL)
        width = start.right - x
    if handle.moves_bottom:
        bottom, y_source = snap_edge(raw.bottom, GuideType.HORIZONTAL)
        height = bottom - raw.y
    if handle.moves_top:
        y, y_source = snap_edge(raw.y, GuideType.HORIZONTAL)
        height = start.bottom - y

    rect = Rect(x=x, y=y, width=max(0, width), height=max(0, height))
    guides = [
        _edge_guide(guide_type, line, rect, sibling, snap_input.moving_id)
        for guide_type, line, sibling in matched
    ]

    return ResizeSnapOutput(rect=rect, guides=guides, x_source=x_source, y_source=y_source)

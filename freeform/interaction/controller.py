"""Drag and resize interaction state machine for a single component.

The controller turns pointer events into live rects, alignment guides and a
final committed rect. Pointer coordinates arrive in screen pixels; every
delta is divided by the current zoom scale before it touches geometry, so
the component tracks the pointer at any zoom level.

While a session is live only snapping and bounds clamping run. The
collision resolver runs once, when the pointer is released.
"""

import logging
import math
from enum import Enum
from typing import Callable, Optional, Sequence

from freeform.components.registry import aspect_ratio, max_size, min_size
from freeform.constraints.collision import find_non_overlapping_position
from freeform.constraints.geometry import clamp_to_bounds
from freeform.constraints.resolver import (
    MovingComponent,
    ResizeHandle,
    ResizeSnapInput,
    SnapInput,
    SnapModifiers,
    resolve_resize_snap,
    resolve_snap,
)
from freeform.models.schema import (
    AlignmentGuide,
    ComponentKind,
    GuideType,
    ComponentRect,
    LocalPoint,
    Rect,
    ScreenPoint,
    Size,
)
from freeform.units import (
    ALIGNMENT_TOLERANCE_PX,
    COLLISION_STEP_PX,
    GRID_SIZE_PX,
    SNAP_THRESHOLD_PX,
)

logger = logging.getLogger(__name__)

PositionCallback = Callable[[Rect], None]
LivePositionCallback = Callable[[Optional[Rect]], None]
GuidesCallback = Callable[[list[AlignmentGuide]], None]
SelectCallback = Callable[[], None]


def _guides_on_rect(guides: list[AlignmentGuide], rect: Rect) -> list[AlignmentGuide]:
    """Keep only the guides that an edge or center of ``rect`` still sits on."""
    kept = []
    for guide in guides:
        if guide.type == GuideType.VERTICAL:
            anchors = (rect.x, rect.center_x, rect.right)
        else:
            anchors = (rect.y, rect.center_y, rect.bottom)
        if any(math.isclose(guide.position, a, abs_tol=1e-6) for a in anchors):
            kept.append(guide)
    return kept


class InteractionState(str, Enum):
    """Interaction session state."""

    IDLE = "idle"
    DRAGGING = "dragging"
    RESIZING = "resizing"


class InteractionController:
    """Pointer-driven drag/resize session for one component.

    Args:
        component_id: Id of the controlled component.
        rect: Committed container-local rect.
        container: Container size as rendered on screen (zoom applied).
        kind: Component kind, drives min/max size and aspect ratio.
        scale: Current zoom scale.
        siblings: Sibling rects in the same container.
        locked: Locked components ignore pointer-down and resize-start.
        on_position_change: Called once per session with the committed rect.
        on_live_position_change: Called with the live rect, ``None`` at end.
        on_guides_change: Called with the guides to render.
        on_select: Called when a session starts.
    """

    def __init__(
        self,
        component_id: str,
        rect: Rect,
        container: Size,
        kind: ComponentKind = ComponentKind.UNKNOWN,
        scale: float = 1.0,
        siblings: Sequence[ComponentRect] = (),
        locked: bool = False,
        on_position_change: Optional[PositionCallback] = None,
        on_live_position_change: Optional[LivePositionCallback] = None,
        on_guides_change: Optional[GuidesCallback] = None,
        on_select: Optional[SelectCallback] = None,
        grid_size: float = GRID_SIZE_PX,
        threshold: float = SNAP_THRESHOLD_PX,
        tolerance: float = ALIGNMENT_TOLERANCE_PX,
        collision_step: int = COLLISION_STEP_PX,
    ) -> None:
        self.component_id = component_id
        self.kind = kind
        self.container = container
        self.locked = locked
        self.grid_size = grid_size
        self.threshold = threshold
        self.tolerance = tolerance
        self.collision_step = collision_step

        self.on_position_change = on_position_change
        self.on_live_position_change = on_live_position_change
        self.on_guides_change = on_guides_change
        self.on_select = on_select

        self._rect = rect
        self._scale = scale if scale > 0 else 1.0
        self._siblings: list[ComponentRect] = []
        self.update_siblings(siblings)

        self.state = InteractionState.IDLE
        self.handle: Optional[ResizeHandle] = None
        self._origin_pointer: Optional[ScreenPoint] = None
        self._start_rect: Optional[Rect] = None
        self._live_rect: Optional[Rect] = None

    # ------------------------------------------------------------------
    # External inputs
    # ------------------------------------------------------------------

    @property
    def rect(self) -> Rect:
        return self._rect

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def live_rect(self) -> Optional[Rect]:
        return self._live_rect

    @property
    def is_active(self) -> bool:
        return self.state != InteractionState.IDLE

    @property
    def logical_container(self) -> Size:
        """Container size in logical pixels."""
        return Size(
            width=self.container.width / self._scale,
            height=self.container.height / self._scale,
        )

    def update_position(self, rect: Rect) -> None:
        """Replace the committed rect (e.g. after an external commit)."""
        self._rect = rect

    def update_siblings(self, siblings: Sequence[ComponentRect]) -> None:
        self._siblings = [s for s in siblings if s.id != self.component_id]

    def update_scale(self, scale: float) -> None:
        if scale > 0:
            self._scale = scale

    def display_rect(self) -> Rect:
        """Live rect during a session, committed rect otherwise."""
        return self._live_rect if self._live_rect is not None else self._rect

    # ------------------------------------------------------------------
    # Session start
    # ------------------------------------------------------------------

    def pointer_down(self, pointer: ScreenPoint) -> bool:
        """Start a drag session. Returns False when the press is ignored."""
        return self._begin(pointer, InteractionState.DRAGGING, None)

    def resize_start(self, pointer: ScreenPoint, handle: ResizeHandle) -> bool:
        """Start a resize session from one of the eight handles."""
        return self._begin(pointer, InteractionState.RESIZING, handle)

    def _begin(
        self,
        pointer: ScreenPoint,
        state: InteractionState,
        handle: Optional[ResizeHandle],
    ) -> bool:
        if self.locked or self.is_active:
            return False

        self.state = state
        self.handle = handle
        self._origin_pointer = pointer
        self._start_rect = self._rect
        self._live_rect = None

        if self.on_select is not None:
            self.on_select()
        return True

    # ------------------------------------------------------------------
    # Session ticks
    # ------------------------------------------------------------------

    def pointer_move(self, pointer: ScreenPoint, modifiers: Optional[SnapModifiers] = None) -> Optional[Rect]:
        """Advance the session. Returns the new live rect, or None when idle."""
        if not self.is_active or self._origin_pointer is None or self._start_rect is None:
            return None

        modifiers = modifiers or SnapModifiers()
        dx = (pointer.x - self._origin_pointer.x) / self._scale
        dy = (pointer.y - self._origin_pointer.y) / self._scale

        if self.state == InteractionState.DRAGGING:
            live, guides = self._drag_rect(dx, dy, modifiers)
        else:
            live, guides = self._resize_rect(dx, dy, modifiers)

        self._live_rect = live
        if self.on_live_position_change is not None:
            self.on_live_position_change(live)
        if self.on_guides_change is not None:
            self.on_guides_change(guides)
        return live

    def _drag_rect(self, dx: float, dy: float, modifiers: SnapModifiers) -> tuple[Rect, list[AlignmentGuide]]:
        start = self._start_rect
        result = resolve_snap(
            SnapInput(
                raw_position=LocalPoint(x=start.x + dx, y=start.y + dy),
                moving=MovingComponent(id=self.component_id, width=start.width, height=start.height),
                siblings=self._siblings,
                modifiers=modifiers,
                threshold=self.threshold,
                grid_size=self.grid_size,
                tolerance=self.tolerance,
            )
        )
        moved = Rect(x=result.position.x, y=result.position.y, width=start.width, height=start.height)
        clamped = clamp_to_bounds(moved, self.logical_container)
        return clamped, _guides_on_rect(result.guides, clamped)

    def _raw_resize_rect(self, dx: float, dy: float, minimum: Size) -> Rect:
        start = self._start_rect
        handle = self.handle
        x, y, width, height = start.x, start.y, start.width, start.height

        if handle.moves_right:
            width = max(minimum.width, start.width + dx)
        if handle.moves_left:
            width = max(minimum.width, start.width - dx)
            x = start.right - width
        if handle.moves_bottom:
            height = max(minimum.height, start.height + dy)
        if handle.moves_top:
            height = max(minimum.height, start.height - dy)
            y = start.bottom - height

        return Rect(x=x, y=y, width=width, height=height)

    def _locked_ratio(self, modifiers: SnapModifiers) -> Optional[float]:
        """Width / height ratio to hold, or None for a freeform resize."""
        ratio = aspect_ratio(self.kind)
        start = self._start_rect
        if ratio is None and modifiers.keep_aspect_ratio and start.height > 0:
            ratio = start.width / start.height
        return ratio or None

    def _apply_aspect_ratio(self, rect: Rect, ratio: float) -> Rect:
        start = self._start_rect
        handle = self.handle

        x, y, width, height = rect.x, rect.y, rect.width, rect.height
        if handle.moves_left or handle.moves_right:
            height = width / ratio
            if handle.moves_top:
                y = start.bottom - height
        else:
            width = height * ratio

        return Rect(x=x, y=y, width=width, height=height)

    def _fit_ratio(self, rect: Rect, ratio: float, minimum: Size, maximum: Optional[Size]) -> Rect:
        """Restore ``ratio`` after snapping and clamping.

        The dimension the handle drives decides the other one. The pair is
        then grown to the minimum and shrunk to the maximum and to the room
        left in the container. Edges opposite the handle stay fixed.
        """
        start = self._start_rect
        handle = self.handle
        container = self.logical_container

        if handle.moves_left or handle.moves_right:
            width, height = rect.width, rect.width / ratio
        else:
            width, height = rect.height * ratio, rect.height

        if width < minimum.width:
            width, height = minimum.width, minimum.width / ratio
        if height < minimum.height:
            width, height = minimum.height * ratio, minimum.height

        room_width = start.right if handle.moves_left else container.width - start.x
        room_height = start.bottom if handle.moves_top else container.height - start.y
        if maximum is not None:
            room_width = min(room_width, maximum.width)
            room_height = min(room_height, maximum.height)
        if width > room_width:
            width, height = room_width, room_width / ratio
        if height > room_height:
            width, height = room_height * ratio, room_height

        x = start.right - width if handle.moves_left else start.x
        y = start.bottom - height if handle.moves_top else start.y
        return Rect(x=x, y=y, width=width, height=height)

    def _resize_rect(self, dx: float, dy: float, modifiers: SnapModifiers) -> tuple[Rect, list[AlignmentGuide]]:
        start = self._start_rect
        handle = self.handle
        minimum = min_size(self.kind)
        maximum = max_size(self.kind)
        ratio = self._locked_ratio(modifiers)

        raw = self._raw_resize_rect(dx, dy, minimum)
        if ratio is not None:
            raw = self._apply_aspect_ratio(raw, ratio)
        result = resolve_resize_snap(
            ResizeSnapInput(
                raw_rect=raw,
                start_rect=start,
                handle=handle,
                moving_id=self.component_id,
                siblings=self._siblings,
                modifiers=modifiers,
                threshold=self.threshold,
                grid_size=self.grid_size,
                tolerance=self.tolerance,
            )
        )

        rect = result.rect
        if ratio is not None:
            sized = self._fit_ratio(rect, ratio, minimum, maximum)
        else:
            max_width = maximum.width if maximum is not None else float("inf")
            max_height = maximum.height if maximum is not None else float("inf")
            width = max(minimum.width, min(max_width, rect.width))
            height = max(minimum.height, min(max_height, rect.height))

            # Keep the edge opposite the handle anchored.
            x = start.right - width if handle.moves_left else rect.x
            y = start.bottom - height if handle.moves_top else rect.y
            sized = Rect(x=x, y=y, width=width, height=height)

        clamped = clamp_to_bounds(sized, self.logical_container)
        return clamped, _guides_on_rect(result.guides, clamped)

    # ------------------------------------------------------------------
    # Session end
    # ------------------------------------------------------------------

    def pointer_up(self) -> Optional[Rect]:
        """Commit the session. Returns the committed rect, or None."""
        if not self.is_active:
            return None

        live = self._live_rect
        committed: Optional[Rect] = None

        if live is not None:
            position = find_non_overlapping_position(
                live,
                self._siblings,
                self.logical_container,
                exclude_id=self.component_id,
                step=self.collision_step,
            )
            committed = live.moved_to(position.x, position.y)
            self._rect = committed
            logger.debug(
                f"Committed {self.state.value} of '{self.component_id}' at "
                f"({committed.x}, {committed.y}, {committed.width}x{committed.height})"
            )
            if self.on_position_change is not None:
                self.on_position_change(committed)

        self._end_session()
        return committed

    def cancel(self) -> None:
        """Abort the session without committing."""
        if not self.is_active:
            return
        logger.debug(f"Cancelled {self.state.value} of '{self.component_id}'")
        self._end_session()

    def _end_session(self) -> None:
        self.state = InteractionState.IDLE
        self.handle = None
        self._origin_pointer = None
        self._start_rect = None
        self._live_rect = None

        if self.on_live_position_change is not None:
            self.on_live_position_change(None)
        if self.on_guides_change is not None:
            self.on_guides_change([])

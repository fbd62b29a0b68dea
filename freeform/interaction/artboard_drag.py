"""Moving whole artboards around the canvas.

Artboards have no siblings to snap against and no container to stay in, so
a drag is a plain scale-compensated translation. The position is committed
once, on release.
"""

import logging
from typing import Callable, Optional

from freeform.models.schema import CanvasPoint, ScreenPoint

logger = logging.getLogger(__name__)

ArtboardPositionCallback = Callable[[CanvasPoint], None]


class ArtboardDragController:
    """Pointer-driven drag session for one artboard.

    Args:
        artboard_id: Id of the dragged artboard.
        position: Committed canvas position.
        scale: Current zoom scale.
        locked: Locked artboards ignore pointer-down.
        on_position_change: Called once per session with the new position.
        on_select: Called when a session starts.
    """

    def __init__(
        self,
        artboard_id: str,
        position: CanvasPoint,
        scale: float = 1.0,
        locked: bool = False,
        on_position_change: Optional[ArtboardPositionCallback] = None,
        on_select: Optional[Callable[[], None]] = None,
    ) -> None:
        self.artboard_id = artboard_id
        self.locked = locked
        self.on_position_change = on_position_change
        self.on_select = on_select

        self._position = position
        self._scale = scale if scale > 0 else 1.0
        self._origin_pointer: Optional[ScreenPoint] = None
        self._start_position: Optional[CanvasPoint] = None
        self._live_position: Optional[CanvasPoint] = None

    @property
    def position(self) -> CanvasPoint:
        return self._position

    @property
    def is_dragging(self) -> bool:
        return self._origin_pointer is not None

    def update_position(self, position: CanvasPoint) -> None:
        self._position = position

    def update_scale(self, scale: float) -> None:
        if scale > 0:
            self._scale = scale

    def display_position(self) -> CanvasPoint:
        """Live position during a drag, committed position otherwise."""
        return self._live_position if self._live_position is not None else self._position

    def pointer_down(self, pointer: ScreenPoint) -> bool:
        """Start dragging. Returns False when the press is ignored."""
        if self.locked or self.is_dragging:
            return False

        self._origin_pointer = pointer
        self._start_position = self._position
        self._live_position = None

        if self.on_select is not None:
            self.on_select()
        return True

    def pointer_move(self, pointer: ScreenPoint) -> Optional[CanvasPoint]:
        if not self.is_dragging or self.locked:
            return None

        dx = (pointer.x - self._origin_pointer.x) / self._scale
        dy = (pointer.y - self._origin_pointer.y) / self._scale
        self._live_position = CanvasPoint(x=self._start_position.x + dx, y=self._start_position.y + dy)
        return self._live_position

    def pointer_up(self) -> Optional[CanvasPoint]:
        """Commit the drag. Returns the new position, or None if nothing moved."""
        if not self.is_dragging:
            return None

        committed = self._live_position
        if committed is not None:
            self._position = committed
            logger.debug(f"Moved artboard '{self.artboard_id}' to ({committed.x}, {committed.y})")
            if self.on_position_change is not None:
                self.on_position_change(committed)

        self._end_session()
        return committed

    def cancel(self) -> None:
        """Abort the drag, leaving the committed position in place."""
        if self.is_dragging:
            self._end_session()

    def _end_session(self) -> None:
        self._origin_pointer = None
        self._start_position = None
        self._live_position = None

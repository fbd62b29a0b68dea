"""Conversions between screen, canvas and artboard-local coordinates.

The viewport maps canvas space onto the screen as
``screen = canvas * scale + pan``. Artboard-local space is canvas space
shifted by the artboard's canvas position. Every function returns the
target space's own point type so the spaces cannot be mixed by accident.
"""

from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from freeform.models.schema import Artboard, CanvasPoint, LocalPoint, ScreenPoint, Vector
from freeform.units import (
    ARTBOARD_SPACING_PX,
    FIRST_ARTBOARD_OFFSET_PX,
    MAX_SCALE,
    MIN_SCALE,
)


class Viewport(BaseModel):
    """Zoom and pan of the canvas view."""

    model_config = ConfigDict(frozen=True)

    scale: float = Field(default=1.0, gt=0)
    pan: ScreenPoint = Field(default_factory=ScreenPoint)


def clamp_scale(scale: float, min_scale: float = MIN_SCALE, max_scale: float = MAX_SCALE) -> float:
    return min(max(scale, min_scale), max_scale)


def screen_to_canvas(point: ScreenPoint, viewport: Viewport) -> CanvasPoint:
    return CanvasPoint(
        x=(point.x - viewport.pan.x) / viewport.scale,
        y=(point.y - viewport.pan.y) / viewport.scale,
    )


def canvas_to_screen(point: CanvasPoint, viewport: Viewport) -> ScreenPoint:
    return ScreenPoint(
        x=point.x * viewport.scale + viewport.pan.x,
        y=point.y * viewport.scale + viewport.pan.y,
    )


def canvas_to_local(point: CanvasPoint, artboard: Artboard) -> LocalPoint:
    return LocalPoint(x=point.x - artboard.position.x, y=point.y - artboard.position.y)


def local_to_canvas(point: LocalPoint, artboard: Artboard) -> CanvasPoint:
    return CanvasPoint(x=point.x + artboard.position.x, y=point.y + artboard.position.y)


def screen_delta_to_canvas(dx: float, dy: float, scale: float) -> Vector:
    """Convert a pointer delta in screen pixels to logical pixels."""
    if scale <= 0:
        scale = 1.0
    return Vector(x=dx / scale, y=dy / scale)


def zoom_at(viewport: Viewport, factor: float, focus: ScreenPoint | None = None) -> Viewport:
    """Zoom by ``factor`` keeping the canvas point under ``focus`` fixed.

    Without a focus point only the scale changes.
    """
    next_scale = clamp_scale(viewport.scale * factor)
    if next_scale == viewport.scale:
        return viewport
    if focus is None:
        return viewport.model_copy(update={"scale": next_scale})

    world = screen_to_canvas(focus, viewport)
    pan = ScreenPoint(
        x=focus.x - world.x * next_scale,
        y=focus.y - world.y * next_scale,
    )
    return Viewport(scale=next_scale, pan=pan)


def is_point_in_artboard(point: CanvasPoint, artboard: Artboard) -> bool:
    bounds = artboard.bounds
    return bounds.x <= point.x <= bounds.right and bounds.y <= point.y <= bounds.bottom


def find_artboard_at(point: CanvasPoint, artboards: Sequence[Artboard]) -> Optional[Artboard]:
    """Topmost visible artboard under a canvas point (last drawn wins)."""
    for artboard in reversed(artboards):
        if artboard.visible and is_point_in_artboard(point, artboard):
            return artboard
    return None


def default_artboard_position(artboards: Sequence[Artboard]) -> CanvasPoint:
    """Canvas position for a new artboard in a left-to-right flow."""
    if not artboards:
        return CanvasPoint(x=FIRST_ARTBOARD_OFFSET_PX, y=FIRST_ARTBOARD_OFFSET_PX)

    last = artboards[-1]
    return CanvasPoint(x=last.position.x + last.width + ARTBOARD_SPACING_PX, y=last.position.y)

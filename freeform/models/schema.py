"""Pydantic v2 models for the freeform canvas.

This module defines the core data structures shared by the geometry engine,
the interaction controllers and the transfer coordinator. All measurements
are in logical canvas pixels unless otherwise specified.

Three coordinate spaces exist and each has its own point type:

- ``ScreenPoint``: pointer coordinates as delivered by the host UI.
- ``CanvasPoint``: the infinite canvas, independent of zoom.
- ``LocalPoint``: relative to the top-left corner of an artboard.

Conversions between them live in ``freeform.interaction.coordinates``.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


# ============================================================================
# Points
# ============================================================================


class ScreenPoint(BaseModel):
    """Pointer position in screen pixels."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0


class CanvasPoint(BaseModel):
    """Position on the infinite canvas."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0


class LocalPoint(BaseModel):
    """Position relative to an artboard's top-left corner."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0


class Vector(BaseModel):
    """A translation in logical pixels."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0

    @property
    def manhattan(self) -> float:
        """Manhattan magnitude."""
        return abs(self.x) + abs(self.y)


# ============================================================================
# Geometry Models
# ============================================================================


class Size(BaseModel):
    """Width/height pair."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(ge=0, description="Width in pixels")
    height: float = Field(ge=0, description="Height in pixels")


class Rect(BaseModel):
    """Axis-aligned rectangle in a single caller-specified space."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(description="Left position in pixels")
    y: float = Field(description="Top position in pixels")
    width: float = Field(ge=0, description="Width in pixels")
    height: float = Field(ge=0, description="Height in pixels")

    @property
    def right(self) -> float:
        """Right edge position."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge position."""
        return self.y + self.height

    @property
    def center_x(self) -> float:
        """Horizontal center."""
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        """Vertical center."""
        return self.y + self.height / 2

    @property
    def size(self) -> Size:
        return Size(width=self.width, height=self.height)

    def moved_to(self, x: float, y: float) -> "Rect":
        """Return a copy of this rect with a new origin."""
        return self.model_copy(update={"x": x, "y": y})


class ComponentRect(Rect):
    """A rect tagged with the id of the sibling it describes.

    Built fresh per collision/alignment query from the current component
    list; never stored.
    """

    id: str


# The alignment engine consumes the same shape under its own name.
ComponentBounds = ComponentRect


# ============================================================================
# Alignment Guides
# ============================================================================


class GuideType(str, Enum):
    """Orientation of an alignment guide line."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class AlignmentGuide(BaseModel):
    """A single alignment line, produced per pointer-move tick.

    ``position`` is the x coordinate of a vertical guide or the y coordinate
    of a horizontal one. ``start``/``end`` span the perpendicular axis.
    """

    model_config = ConfigDict(frozen=True)

    type: GuideType
    position: float
    start: float
    end: float
    component_ids: tuple[str, ...] = ()


# ============================================================================
# Components
# ============================================================================


class ComponentKind(str, Enum):
    """Supported component kinds."""

    CHART_LINE = "chart-line"
    CHART_BAR = "chart-bar"
    CHART_DOUGHNUT = "chart-doughnut"
    CHART = "chart"
    TEXT = "text"
    HEADING = "heading"
    KPI = "kpi"
    TABLE = "table"
    IMAGE = "image"
    GAUGE = "gauge"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | None) -> "ComponentKind":
        """Parse a kind string, failing closed to ``UNKNOWN``."""
        if value is None:
            return cls.UNKNOWN
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class Placement(BaseModel):
    """Position/size record of a component inside its container."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float = Field(ge=0)
    height: float = Field(ge=0)
    z_index: int = 0
    rotation: Optional[float] = Field(default=None, ge=-360.0, le=360.0)

    def as_rect(self) -> Rect:
        return Rect(x=self.x, y=self.y, width=self.width, height=self.height)


class Component(BaseModel):
    """A positioned component instance.

    Exactly one of ``position`` (inside an artboard, artboard-local) or
    ``canvas_position`` (archived on the canvas holding area) is set.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    kind: ComponentKind = ComponentKind.UNKNOWN
    size: Size
    z_index: int = 0
    rotation: Optional[float] = Field(default=None, ge=-360.0, le=360.0)
    locked: bool = False
    position: Optional[LocalPoint] = None
    canvas_position: Optional[CanvasPoint] = None
    source_artboard_id: Optional[str] = None

    @property
    def is_archived(self) -> bool:
        return self.canvas_position is not None

    @property
    def placement(self) -> Optional[Placement]:
        """Artboard-local placement, or None while archived."""
        if self.position is None:
            return None
        return Placement(
            x=self.position.x,
            y=self.position.y,
            width=self.size.width,
            height=self.size.height,
            z_index=self.z_index,
            rotation=self.rotation,
        )

    def as_component_rect(self) -> Optional[ComponentRect]:
        """Collision/alignment view of this component (artboard-local)."""
        if self.position is None:
            return None
        return ComponentRect(
            id=self.id,
            x=self.position.x,
            y=self.position.y,
            width=self.size.width,
            height=self.size.height,
        )


# ============================================================================
# Containers
# ============================================================================


class Artboard(BaseModel):
    """A fixed-dimension container of positioned components."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = "Artboard"
    position: CanvasPoint = Field(default_factory=CanvasPoint)
    width: float = Field(gt=0, description="Width in pixels")
    height: float = Field(gt=0, description="Height in pixels")
    components: tuple[Component, ...] = ()
    locked: bool = False
    visible: bool = True
    updated_at: str = Field(default_factory=utc_now)

    @property
    def size(self) -> Size:
        return Size(width=self.width, height=self.height)

    @property
    def bounds(self) -> Rect:
        """Artboard rectangle in canvas space."""
        return Rect(x=self.position.x, y=self.position.y, width=self.width, height=self.height)

    def component_rects(self, exclude_id: str | None = None) -> list[ComponentRect]:
        """Sibling snapshot for collision and alignment queries."""
        rects = []
        for component in self.components:
            if component.id == exclude_id:
                continue
            rect = component.as_component_rect()
            if rect is not None:
                rects.append(rect)
        return rects

    def get_component(self, component_id: str) -> Optional[Component]:
        for component in self.components:
            if component.id == component_id:
                return component
        return None


class Workspace(BaseModel):
    """All artboards plus the canvas holding area for archived components."""

    model_config = ConfigDict(frozen=True)

    artboards: tuple[Artboard, ...] = ()
    archived: tuple[Component, ...] = ()

    def get_artboard(self, artboard_id: str) -> Optional[Artboard]:
        for artboard in self.artboards:
            if artboard.id == artboard_id:
                return artboard
        return None

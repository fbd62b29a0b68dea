"""Layout routes: snapping, placement and alignment guides.

Every endpoint is a thin wrapper over the geometry engine. Coordinates in
requests and responses are container-local logical pixels.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from freeform.api.config import Settings, get_settings
from freeform.components.registry import get_size_spec
from freeform.constraints.alignment import find_alignment_guides
from freeform.constraints.collision import find_initial_position, find_non_overlapping_position
from freeform.constraints.resolver import (
    MovingComponent,
    ResizeHandle,
    ResizeSnapInput,
    SnapInput,
    SnapModifiers,
    SnapSource,
    resolve_resize_snap,
    resolve_snap,
)
from freeform.models.schema import (
    AlignmentGuide,
    ComponentKind,
    ComponentRect,
    LocalPoint,
    Rect,
    Size,
)

router = APIRouter()

# Request limits. The collision search grows with the square of the
# container side times the sibling count.
MAX_CONTAINER_PX = 4096
MAX_SIBLINGS = 256


class ContainerSize(Size):
    """Container size accepted by the placement endpoints."""
    width: float = Field(..., ge=0, le=MAX_CONTAINER_PX)
    height: float = Field(..., ge=0, le=MAX_CONTAINER_PX)


class SnapRequest(BaseModel):
    """Request to snap a moving rect."""
    id: str = "__moving__"
    x: float
    y: float
    width: float = Field(..., ge=0)
    height: float = Field(..., ge=0)
    siblings: list[ComponentRect] = Field(default_factory=list, max_length=MAX_SIBLINGS)
    bypass_snapping: bool = False


class SnapResponse(BaseModel):
    """Resolved position and the guides applied."""
    x: float
    y: float
    guides: list[AlignmentGuide]
    x_source: SnapSource
    y_source: SnapSource


class ResizeSnapRequest(BaseModel):
    """Request to snap a resize."""
    id: str = "__resize__"
    raw_rect: Rect
    start_rect: Rect
    handle: ResizeHandle
    siblings: list[ComponentRect] = Field(default_factory=list, max_length=MAX_SIBLINGS)
    bypass_snapping: bool = False


class ResizeSnapResponse(BaseModel):
    """Resolved rect and the guides applied."""
    rect: Rect
    guides: list[AlignmentGuide]
    x_source: SnapSource
    y_source: SnapSource


class PlaceRequest(BaseModel):
    """Request to find a non-overlapping position."""
    rect: Rect
    container: ContainerSize
    siblings: list[ComponentRect] = Field(default_factory=list, max_length=MAX_SIBLINGS)
    exclude_id: Optional[str] = None


class InitialPositionRequest(BaseModel):
    """Request for the first free slot in a container.

    Without an explicit size the kind's default size is used.
    """
    container: ContainerSize
    kind: str = ComponentKind.UNKNOWN.value
    size: Optional[Size] = None
    siblings: list[ComponentRect] = Field(default_factory=list, max_length=MAX_SIBLINGS)


class PositionResponse(BaseModel):
    """Resolved top-left position."""
    x: float
    y: float
    width: float
    height: float


class GuidesRequest(BaseModel):
    """Request for the alignment guides of a moving rect."""
    moving: ComponentRect
    siblings: list[ComponentRect] = Field(default_factory=list, max_length=MAX_SIBLINGS)
    tolerance: Optional[float] = Field(default=None, ge=0)


class GuidesResponse(BaseModel):
    guides: list[AlignmentGuide]


class SizesResponse(BaseModel):
    """Size catalog entry for a component kind."""
    kind: ComponentKind
    default: Size
    minimum: Size
    maximum: Optional[Size]
    aspect_ratio: Optional[float]


@router.post("/snap", response_model=SnapResponse)
async def snap(request: SnapRequest, settings: Settings = Depends(get_settings)):
    """Resolve alignment and grid snapping for a move or drop."""
    result = resolve_snap(
        SnapInput(
            raw_position=LocalPoint(x=request.x, y=request.y),
            moving=MovingComponent(id=request.id, width=request.width, height=request.height),
            siblings=request.siblings,
            modifiers=SnapModifiers(bypass_all_snapping=request.bypass_snapping),
            threshold=settings.snap_threshold,
            grid_size=settings.grid_size,
            tolerance=settings.alignment_tolerance,
        )
    )
    return SnapResponse(
        x=result.position.x,
        y=result.position.y,
        guides=result.guides,
        x_source=result.x_source,
        y_source=result.y_source,
    )


@router.post("/resize-snap", response_model=ResizeSnapResponse)
async def resize_snap(request: ResizeSnapRequest, settings: Settings = Depends(get_settings)):
    """Resolve snapping for the edges moved by a resize handle."""
    result = resolve_resize_snap(
        ResizeSnapInput(
            raw_rect=request.raw_rect,
            start_rect=request.start_rect,
            handle=request.handle,
            moving_id=request.id,
            siblings=request.siblings,
            modifiers=SnapModifiers(bypass_all_snapping=request.bypass_snapping),
            threshold=settings.snap_threshold,
            grid_size=settings.grid_size,
            tolerance=settings.alignment_tolerance,
        )
    )
    return ResizeSnapResponse(
        rect=result.rect,
        guides=result.guides,
        x_source=result.x_source,
        y_source=result.y_source,
    )


@router.post("/place", response_model=PositionResponse)
async def place(request: PlaceRequest, settings: Settings = Depends(get_settings)):
    """Find the nearest non-overlapping position for a rect."""
    position = find_non_overlapping_position(
        request.rect,
        request.siblings,
        request.container,
        exclude_id=request.exclude_id,
        step=settings.collision_step,
    )
    return PositionResponse(
        x=position.x,
        y=position.y,
        width=request.rect.width,
        height=request.rect.height,
    )


@router.post("/initial-position", response_model=PositionResponse)
async def initial_position(request: InitialPositionRequest):
    """Find the first free slot for a new component."""
    size = request.size or get_size_spec(ComponentKind.parse(request.kind)).default
    position = find_initial_position(size, request.siblings, request.container)
    return PositionResponse(x=position.x, y=position.y, width=size.width, height=size.height)


@router.post("/guides", response_model=GuidesResponse)
async def guides(request: GuidesRequest, settings: Settings = Depends(get_settings)):
    """Compute alignment guides for a moving rect without snapping it."""
    tolerance = request.tolerance if request.tolerance is not None else settings.alignment_tolerance
    return GuidesResponse(guides=find_alignment_guides(request.moving, request.siblings, tolerance))


@router.get("/components/{kind}/sizes", response_model=SizesResponse)
async def component_sizes(kind: str):
    """Size catalog entry. Unknown kinds resolve to the default entry."""
    component_kind = ComponentKind.parse(kind)
    spec = get_size_spec(component_kind)
    return SizesResponse(
        kind=component_kind,
        default=spec.default,
        minimum=spec.minimum,
        maximum=spec.maximum,
        aspect_ratio=spec.aspect_ratio,
    )

"""Canvas data model."""

from freeform.models.schema import (
    AlignmentGuide,
    Artboard,
    CanvasPoint,
    Component,
    ComponentBounds,
    ComponentKind,
    ComponentRect,
    GuideType,
    LocalPoint,
    Placement,
    Rect,
    ScreenPoint,
    Size,
    Vector,
    Workspace,
)

__all__ = [
    "AlignmentGuide",
    "Artboard",
    "CanvasPoint",
    "Component",
    "ComponentBounds",
    "ComponentKind",
    "ComponentRect",
    "GuideType",
    "LocalPoint",
    "Placement",
    "Rect",
    "ScreenPoint",
    "Size",
    "Vector",
    "Workspace",
]

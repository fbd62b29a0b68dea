"""Dropping new components from the component library onto a container.

The drag source owns a ``DragPayloadSession`` for the lifetime of one
library drag. The drop target reads the payload from that session and only
falls back to a serialized JSON payload when no session is active.
Malformed payloads are treated as "nothing is being dragged".
"""

import logging
from typing import Callable, Optional, Sequence

from pydantic import BaseModel, ConfigDict, ValidationError

from freeform.components.registry import default_size
from freeform.constraints.collision import find_non_overlapping_position
from freeform.constraints.resolver import MovingComponent, SnapInput, SnapModifiers, resolve_snap
from freeform.models.schema import (
    AlignmentGuide,
    ComponentKind,
    ComponentRect,
    LocalPoint,
    Placement,
    Rect,
    ScreenPoint,
    Size,
)

logger = logging.getLogger(__name__)

DROP_PREVIEW_ID = "__drop-preview__"


class ComponentCard(BaseModel):
    """Library entry being dragged. ``id`` is the component kind string."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: Optional[str] = None


class DropPreview(BaseModel):
    """Ghost rect shown while a library card hovers over a container."""

    model_config = ConfigDict(frozen=True)

    kind: ComponentKind
    position: LocalPoint
    size: Size
    bypass_snap: bool = False


class DragPayloadSession:
    """In-memory payload of one library drag.

    Started by the drag source on drag start and ended on drag end.
    """

    def __init__(self) -> None:
        self._card: Optional[ComponentCard] = None

    @property
    def current(self) -> Optional[ComponentCard]:
        return self._card

    @property
    def is_active(self) -> bool:
        return self._card is not None

    def begin(self, card: ComponentCard) -> None:
        self._card = card

    def end(self) -> None:
        self._card = None


def parse_payload(raw_payload: str | bytes | None) -> Optional[ComponentCard]:
    """Parse a serialized card, returning None for empty or malformed input."""
    if not raw_payload:
        return None
    try:
        return ComponentCard.model_validate_json(raw_payload)
    except ValidationError as exc:
        logger.debug(f"Ignoring malformed drag payload: {exc.error_count()} error(s)")
        return None


class DropHandler:
    """Drop target logic for one container.

    Args:
        container: Container rect in screen pixels (origin and rendered size).
        scale: Current zoom scale.
        siblings: Components already in the container.
        on_component_add: Called with the kind and final placement on drop.
    """

    def __init__(
        self,
        container: Rect,
        scale: float = 1.0,
        siblings: Sequence[ComponentRect] = (),
        on_component_add: Optional[Callable[[ComponentKind, Placement], None]] = None,
    ) -> None:
        self.container = container
        self.scale = scale if scale > 0 else 1.0
        self.siblings = list(siblings)
        self.on_component_add = on_component_add

        self.preview: Optional[DropPreview] = None
        self.guides: list[AlignmentGuide] = []

    @property
    def logical_container(self) -> Size:
        return Size(
            width=self.container.width / self.scale,
            height=self.container.height / self.scale,
        )

    def _card(
        self,
        session: Optional[DragPayloadSession],
        raw_payload: str | bytes | None,
    ) -> Optional[ComponentCard]:
        if session is not None and session.current is not None:
            return session.current
        return parse_payload(raw_payload)

    def _to_local(self, pointer: ScreenPoint) -> LocalPoint:
        return LocalPoint(
            x=(pointer.x - self.container.x) / self.scale,
            y=(pointer.y - self.container.y) / self.scale,
        )

    def _resolve(
        self,
        card: ComponentCard,
        pointer: ScreenPoint,
        modifiers: SnapModifiers,
    ) -> tuple[DropPreview, list[AlignmentGuide]]:
        kind = ComponentKind.parse(card.id)
        size = default_size(kind)
        result = resolve_snap(
            SnapInput(
                raw_position=self._to_local(pointer),
                moving=MovingComponent(id=DROP_PREVIEW_ID, width=size.width, height=size.height),
                siblings=self.siblings,
                modifiers=modifiers,
            )
        )
        preview = DropPreview(
            kind=kind,
            position=result.position,
            size=size,
            bypass_snap=modifiers.bypass_all_snapping,
        )
        return preview, result.guides

    def drag_over(
        self,
        pointer: ScreenPoint,
        session: Optional[DragPayloadSession] = None,
        raw_payload: str | bytes | None = None,
        modifiers: Optional[SnapModifiers] = None,
    ) -> Optional[DropPreview]:
        """Update the drop preview for the pointer position."""
        card = self._card(session, raw_payload)
        if card is None:
            self.drag_leave()
            return None

        self.preview, self.guides = self._resolve(card, pointer, modifiers or SnapModifiers())
        return self.preview

    def drag_leave(self) -> None:
        self.preview = None
        self.guides = []

    def drop(
        self,
        pointer: ScreenPoint,
        session: Optional[DragPayloadSession] = None,
        raw_payload: str | bytes | None = None,
        modifiers: Optional[SnapModifiers] = None,
    ) -> Optional[Placement]:
        """Place the dragged card. Returns the placement, or None if ignored."""
        card = self._card(session, raw_payload)
        self.drag_leave()
        if card is None:
            return None

        preview, _ = self._resolve(card, pointer, modifiers or SnapModifiers())
        rect = Rect(
            x=preview.position.x,
            y=preview.position.y,
            width=preview.size.width,
            height=preview.size.height,
        )
        position = find_non_overlapping_position(rect, self.siblings, self.logical_container)
        placement = Placement(
            x=position.x,
            y=position.y,
            width=preview.size.width,
            height=preview.size.height,
        )

        logger.debug(f"Dropped '{preview.kind.value}' at ({placement.x}, {placement.y})")
        if self.on_component_add is not None:
            self.on_component_add(preview.kind, placement)
        return placement

"""Pointer interactions, coordinate spaces and workspace transfers."""

from freeform.interaction.artboard_drag import ArtboardDragController
from freeform.interaction.controller import InteractionController, InteractionState
from freeform.interaction.coordinates import (
    Viewport,
    canvas_to_local,
    canvas_to_screen,
    clamp_scale,
    default_artboard_position,
    find_artboard_at,
    local_to_canvas,
    screen_delta_to_canvas,
    screen_to_canvas,
    zoom_at,
)
from freeform.interaction.drop import ComponentCard, DragPayloadSession, DropHandler, DropPreview
from freeform.interaction.selection import (
    SelectionState,
    ZOrderOperation,
    handle_item_click,
    items_in_selection_box,
    move_selected,
    update_z_order,
)
from freeform.interaction.transfer import TransferCoordinator

__all__ = [
    # Controllers
    "ArtboardDragController",
    "InteractionController",
    "InteractionState",
    # Coordinates
    "Viewport",
    "canvas_to_local",
    "canvas_to_screen",
    "clamp_scale",
    "default_artboard_position",
    "find_artboard_at",
    "local_to_canvas",
    "screen_delta_to_canvas",
    "screen_to_canvas",
    "zoom_at",
    # Drop
    "ComponentCard",
    "DragPayloadSession",
    "DropHandler",
    "DropPreview",
    # Selection
    "SelectionState",
    "ZOrderOperation",
    "handle_item_click",
    "items_in_selection_box",
    "move_selected",
    "update_z_order",
    # Transfer
    "TransferCoordinator",
]

"""Multi-selection and z-order helpers.

Click and box selection over component rects, moving a selection by a
delta, and re-stacking z-indices. All functions return new values and never
mutate their inputs.
"""

from enum import Enum
from typing import Sequence

from pydantic import BaseModel, ConfigDict

from freeform.models.schema import Component, ComponentRect, LocalPoint, Rect


class SelectionState(BaseModel):
    """Selected ids in selection order, plus the last clicked id."""

    model_config = ConfigDict(frozen=True)

    selected_ids: tuple[str, ...] = ()
    last_selected_id: str | None = None

    def is_selected(self, item_id: str) -> bool:
        return item_id in self.selected_ids


EMPTY_SELECTION = SelectionState()


class ZOrderOperation(str, Enum):
    BRING_TO_FRONT = "bring_to_front"
    SEND_TO_BACK = "send_to_back"
    BRING_FORWARD = "bring_forward"
    SEND_BACKWARD = "send_backward"


def handle_item_click(
    item_id: str,
    state: SelectionState,
    shift: bool = False,
    ctrl: bool = False,
) -> SelectionState:
    """Apply a click to the selection.

    Ctrl toggles the item, Shift adds it, a plain click selects only it.
    """
    if ctrl:
        if state.is_selected(item_id):
            ids = tuple(i for i in state.selected_ids if i != item_id)
        else:
            ids = state.selected_ids + (item_id,)
        return SelectionState(selected_ids=ids, last_selected_id=item_id)

    if shift:
        if state.is_selected(item_id):
            return state
        return SelectionState(selected_ids=state.selected_ids + (item_id,), last_selected_id=item_id)

    return SelectionState(selected_ids=(item_id,), last_selected_id=item_id)


def clear_selection() -> SelectionState:
    return EMPTY_SELECTION


def items_in_selection_box(items: Sequence[ComponentRect], box: Rect) -> list[str]:
    """Ids of items touching the box. Touching edges count.

    ``box`` may be given with its origin at any corner of the drag; pass a
    normalized rect (non-negative size).
    """
    return [
        item.id
        for item in items
        if not (
            item.x > box.right
            or item.right < box.x
            or item.y > box.bottom
            or item.bottom < box.y
        )
    ]


def selection_box_from_points(start: LocalPoint, end: LocalPoint) -> Rect:
    """Normalized rect spanned by a marquee drag in any direction."""
    return Rect(
        x=min(start.x, end.x),
        y=min(start.y, end.y),
        width=abs(end.x - start.x),
        height=abs(end.y - start.y),
    )


def move_selected(
    components: Sequence[Component],
    selected_ids: Sequence[str],
    dx: float,
    dy: float,
) -> list[Component]:
    """Translate the selected, positioned components by ``(dx, dy)``."""
    selected = set(selected_ids)
    moved = []
    for component in components:
        if component.id in selected and component.position is not None and not component.locked:
            component = component.model_copy(
                update={
                    "position": LocalPoint(
                        x=component.position.x + dx,
                        y=component.position.y + dy,
                    )
                }
            )
        moved.append(component)
    return moved


def update_z_order(
    components: Sequence[Component],
    target_id: str,
    operation: ZOrderOperation,
) -> list[Component]:
    """Re-stack components and renumber z-indices from 0.

    Returns the input order unchanged if ``target_id`` is not present.
    """
    order = sorted(components, key=lambda c: c.z_index)
    index = next((i for i, c in enumerate(order) if c.id == target_id), None)
    if index is None:
        return list(components)

    target = order.pop(index)
    if operation == ZOrderOperation.BRING_TO_FRONT:
        order.append(target)
    elif operation == ZOrderOperation.SEND_TO_BACK:
        order.insert(0, target)
    elif operation == ZOrderOperation.BRING_FORWARD:
        order.insert(min(index + 1, len(order)), target)
    else:
        order.insert(max(index - 1, 0), target)

    rank = {c.id: i for i, c in enumerate(order)}
    return [c.model_copy(update={"z_index": rank[c.id]}) for c in components]

"""Moving components between artboards and the canvas holding area.

The coordinator holds an immutable ``Workspace`` snapshot. Every operation
builds the complete next snapshot and swaps it in with a single assignment,
so a component is never visible in two containers or in none. When the
component is not where the caller expected, the operation logs a warning
and leaves the workspace untouched.
"""

import logging
from typing import Optional

from freeform.constraints.collision import find_non_overlapping_position
from freeform.models.schema import (
    Artboard,
    CanvasPoint,
    Component,
    LocalPoint,
    Rect,
    Workspace,
    utc_now,
)
from freeform.units import DUPLICATE_OFFSET_PX

logger = logging.getLogger(__name__)


def _without(components: tuple[Component, ...], component_id: str) -> tuple[Component, ...]:
    return tuple(c for c in components if c.id != component_id)


def _find(components: tuple[Component, ...], component_id: str) -> Optional[Component]:
    for component in components:
        if component.id == component_id:
            return component
    return None


class TransferCoordinator:
    """Owner of the workspace snapshot and its commit paths."""

    def __init__(self, workspace: Optional[Workspace] = None) -> None:
        self.workspace = workspace or Workspace()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_component_artboard(self, component_id: str) -> Optional[Artboard]:
        for artboard in self.workspace.artboards:
            if artboard.get_component(component_id) is not None:
                return artboard
        return None

    def is_archived(self, component_id: str) -> bool:
        return _find(self.workspace.archived, component_id) is not None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _replace_artboards(self, *updated: Artboard) -> tuple[Artboard, ...]:
        by_id = {a.id: a for a in updated}
        return tuple(by_id.get(a.id, a) for a in self.workspace.artboards)

    def _source(self, component_id: str, artboard_id: str) -> tuple[Optional[Artboard], Optional[Component]]:
        artboard = self.workspace.get_artboard(artboard_id)
        if artboard is None:
            logger.warning(f"Artboard '{artboard_id}' not found")
            return None, None
        component = artboard.get_component(component_id)
        if component is None:
            logger.warning(f"Component '{component_id}' not found in artboard '{artboard_id}'")
            return artboard, None
        return artboard, component

    def _holds(self, artboard: Artboard, component_id: str) -> bool:
        """True (with a warning) when ``artboard`` already has ``component_id``."""
        if artboard.get_component(component_id) is None:
            return False
        logger.warning(f"Component '{component_id}' already exists in artboard '{artboard.id}'")
        return True

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------

    def archive(self, component_id: str, source_artboard_id: str, canvas_position: CanvasPoint) -> bool:
        """Move a component from an artboard to the canvas holding area."""
        source, component = self._source(component_id, source_artboard_id)
        if component is None:
            return False

        archived = component.model_copy(
            update={
                "position": None,
                "canvas_position": canvas_position,
                "source_artboard_id": source_artboard_id,
            }
        )
        updated_source = source.model_copy(
            update={"components": _without(source.components, component_id), "updated_at": utc_now()}
        )

        self.workspace = Workspace(
            artboards=self._replace_artboards(updated_source),
            archived=self.workspace.archived + (archived,),
        )
        logger.debug(f"Archived '{component_id}' from '{source_artboard_id}'")
        return True

    def unarchive(self, component_id: str, target_artboard_id: str, position: LocalPoint) -> bool:
        """Move an archived component into an artboard."""
        component = _find(self.workspace.archived, component_id)
        if component is None:
            logger.warning(f"Component '{component_id}' not found in canvas holding area")
            return False

        target = self.workspace.get_artboard(target_artboard_id)
        if target is None:
            logger.warning(f"Artboard '{target_artboard_id}' not found")
            return False
        if self._holds(target, component_id):
            return False

        restored = component.model_copy(
            update={"position": position, "canvas_position": None, "source_artboard_id": None}
        )
        updated_target = target.model_copy(
            update={"components": target.components + (restored,), "updated_at": utc_now()}
        )

        self.workspace = Workspace(
            artboards=self._replace_artboards(updated_target),
            archived=_without(self.workspace.archived, component_id),
        )
        logger.debug(f"Unarchived '{component_id}' into '{target_artboard_id}'")
        return True

    def transfer(
        self,
        component_id: str,
        source_artboard_id: str,
        target_artboard_id: str,
        position: LocalPoint,
    ) -> bool:
        """Move a component directly between two artboards."""
        if source_artboard_id == target_artboard_id:
            return False

        source, component = self._source(component_id, source_artboard_id)
        if component is None:
            return False

        target = self.workspace.get_artboard(target_artboard_id)
        if target is None:
            logger.warning(f"Artboard '{target_artboard_id}' not found")
            return False
        if self._holds(target, component_id):
            return False

        moved = component.model_copy(update={"position": position})
        now = utc_now()
        updated_source = source.model_copy(
            update={"components": _without(source.components, component_id), "updated_at": now}
        )
        updated_target = target.model_copy(
            update={"components": target.components + (moved,), "updated_at": now}
        )

        self.workspace = self.workspace.model_copy(
            update={"artboards": self._replace_artboards(updated_source, updated_target)}
        )
        logger.debug(f"Transferred '{component_id}' from '{source_artboard_id}' to '{target_artboard_id}'")
        return True

    # ------------------------------------------------------------------
    # Commits
    # ------------------------------------------------------------------

    def move_artboard(self, artboard_id: str, position: CanvasPoint) -> bool:
        """Commit an artboard drag."""
        artboard = self.workspace.get_artboard(artboard_id)
        if artboard is None:
            logger.warning(f"Artboard '{artboard_id}' not found")
            return False

        self._commit_artboard(artboard.model_copy(update={"position": position, "updated_at": utc_now()}))
        logger.debug(f"Moved artboard '{artboard_id}' to ({position.x}, {position.y})")
        return True

    def apply_placement(self, artboard_id: str, component_id: str, rect: Rect) -> bool:
        """Commit a drag/resize result. The last write for an id wins."""
        artboard, component = self._source(component_id, artboard_id)
        if component is None:
            return False

        updated = component.model_copy(
            update={
                "position": LocalPoint(x=rect.x, y=rect.y),
                "size": rect.size,
            }
        )
        components = tuple(updated if c.id == component_id else c for c in artboard.components)
        self._commit_artboard(artboard.model_copy(update={"components": components, "updated_at": utc_now()}))
        return True

    def add_component(self, artboard_id: str, component: Component) -> bool:
        artboard = self.workspace.get_artboard(artboard_id)
        if artboard is None:
            logger.warning(f"Artboard '{artboard_id}' not found")
            return False
        if self._holds(artboard, component.id):
            return False

        self._commit_artboard(
            artboard.model_copy(
                update={"components": artboard.components + (component,), "updated_at": utc_now()}
            )
        )
        return True

    def remove_component(self, artboard_id: str, component_id: str) -> bool:
        artboard, component = self._source(component_id, artboard_id)
        if component is None:
            return False

        self._commit_artboard(
            artboard.model_copy(
                update={"components": _without(artboard.components, component_id), "updated_at": utc_now()}
            )
        )
        return True

    def duplicate_component(self, artboard_id: str, component_id: str, new_id: str) -> Optional[Component]:
        """Copy a component next to the original, avoiding overlaps.

        Returns:
            The new component, or None if the source was not found.
        """
        artboard, component = self._source(component_id, artboard_id)
        if component is None or component.position is None:
            return None

        requested = Rect(
            x=component.position.x + DUPLICATE_OFFSET_PX,
            y=component.position.y + DUPLICATE_OFFSET_PX,
            width=component.size.width,
            height=component.size.height,
        )
        position = find_non_overlapping_position(requested, artboard.component_rects(), artboard.size)
        duplicate = component.model_copy(
            update={
                "id": new_id,
                "position": position,
                "z_index": max((c.z_index for c in artboard.components), default=0) + 1,
            }
        )

        self._commit_artboard(
            artboard.model_copy(
                update={"components": artboard.components + (duplicate,), "updated_at": utc_now()}
            )
        )
        return duplicate

    def _commit_artboard(self, artboard: Artboard) -> None:
        self.workspace = self.workspace.model_copy(
            update={"artboards": self._replace_artboards(artboard)}
        )

"""Tests for cross-container transfers."""

import logging

import pytest

from freeform.constraints.geometry import overlaps_any
from freeform.interaction.transfer import TransferCoordinator
from freeform.models.schema import CanvasPoint, LocalPoint, Rect, Workspace


@pytest.fixture
def coordinator(sample_workspace: Workspace) -> TransferCoordinator:
    return TransferCoordinator(sample_workspace)


def component_ids(coordinator: TransferCoordinator, artboard_id: str) -> list[str]:
    return [c.id for c in coordinator.workspace.get_artboard(artboard_id).components]


class TestTransfer:
    """Tests for artboard-to-artboard transfers."""

    def test_transfer_is_atomic(self, coordinator: TransferCoordinator) -> None:
        assert coordinator.transfer("a2", "A", "B", LocalPoint(x=300, y=200))

        assert component_ids(coordinator, "A") == ["a1", "a3"]
        assert component_ids(coordinator, "B") == ["b1", "a2"]
        moved = coordinator.workspace.get_artboard("B").get_component("a2")
        assert moved.position == LocalPoint(x=300, y=200)

    def test_repeated_transfer_is_noop(
        self,
        coordinator: TransferCoordinator,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        coordinator.transfer("a2", "A", "B", LocalPoint(x=300, y=200))
        snapshot = coordinator.workspace

        with caplog.at_level(logging.WARNING, logger="freeform.interaction.transfer"):
            assert not coordinator.transfer("a2", "A", "B", LocalPoint(x=300, y=200))

        assert coordinator.workspace is snapshot
        assert len(component_ids(coordinator, "A")) == 2
        assert len(component_ids(coordinator, "B")) == 2
        assert "not found" in caplog.text

    def test_same_source_and_target_is_noop(self, coordinator: TransferCoordinator) -> None:
        snapshot = coordinator.workspace
        assert not coordinator.transfer("a1", "A", "A", LocalPoint(x=10, y=10))
        assert coordinator.workspace is snapshot

    def test_missing_target_artboard(self, coordinator: TransferCoordinator) -> None:
        snapshot = coordinator.workspace
        assert not coordinator.transfer("a1", "A", "Z", LocalPoint(x=10, y=10))
        assert coordinator.workspace is snapshot

    def test_target_already_holding_id_is_rejected(
        self,
        coordinator: TransferCoordinator,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        stale = coordinator.workspace.get_artboard("A").get_component("a2")
        assert coordinator.add_component("B", stale)
        snapshot = coordinator.workspace

        with caplog.at_level(logging.WARNING, logger="freeform.interaction.transfer"):
            assert not coordinator.transfer("a2", "A", "B", LocalPoint(x=300, y=200))

        assert coordinator.workspace is snapshot
        assert component_ids(coordinator, "A") == ["a1", "a2", "a3"]
        assert component_ids(coordinator, "B") == ["b1", "a2"]
        assert "already exists" in caplog.text


class TestArchive:
    """Tests for archiving to and from the canvas holding area."""

    def test_archive(self, coordinator: TransferCoordinator) -> None:
        assert coordinator.archive("a1", "A", CanvasPoint(x=-400, y=50))

        assert component_ids(coordinator, "A") == ["a2", "a3"]
        assert coordinator.is_archived("a1")
        assert coordinator.find_component_artboard("a1") is None

        archived = coordinator.workspace.archived[0]
        assert archived.position is None
        assert archived.canvas_position == CanvasPoint(x=-400, y=50)
        assert archived.source_artboard_id == "A"
        assert archived.placement is None

    def test_unarchive(self, coordinator: TransferCoordinator) -> None:
        coordinator.archive("a1", "A", CanvasPoint(x=-400, y=50))
        assert coordinator.unarchive("a1", "B", LocalPoint(x=40, y=40))

        assert coordinator.workspace.archived == ()
        restored = coordinator.workspace.get_artboard("B").get_component("a1")
        assert restored.position == LocalPoint(x=40, y=40)
        assert restored.canvas_position is None
        assert restored.source_artboard_id is None
        assert coordinator.find_component_artboard("a1").id == "B"

    def test_archive_missing_component(
        self,
        coordinator: TransferCoordinator,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        snapshot = coordinator.workspace
        with caplog.at_level(logging.WARNING, logger="freeform.interaction.transfer"):
            assert not coordinator.archive("zzz", "A", CanvasPoint(x=0, y=0))
        assert coordinator.workspace is snapshot
        assert "zzz" in caplog.text

    def test_unarchive_not_archived(self, coordinator: TransferCoordinator) -> None:
        snapshot = coordinator.workspace
        assert not coordinator.unarchive("a1", "B", LocalPoint(x=0, y=0))
        assert coordinator.workspace is snapshot


class TestCommits:
    """Tests for placement commits and component lifecycle."""

    def test_apply_placement_last_write_wins(self, coordinator: TransferCoordinator) -> None:
        coordinator.apply_placement("A", "a1", Rect(x=10, y=10, width=120, height=60))
        coordinator.apply_placement("A", "a1", Rect(x=24, y=32, width=150, height=90))

        component = coordinator.workspace.get_artboard("A").get_component("a1")
        assert component.position == LocalPoint(x=24, y=32)
        assert (component.size.width, component.size.height) == (150, 90)

    def test_duplicate_avoids_overlap(self, coordinator: TransferCoordinator) -> None:
        duplicate = coordinator.duplicate_component("A", "a1", "a1-copy")

        assert duplicate.position == LocalPoint(x=0, y=80)
        assert duplicate.z_index == 1
        artboard = coordinator.workspace.get_artboard("A")
        assert not overlaps_any(duplicate.as_component_rect(), artboard.component_rects(exclude_id="a1-copy"))

    def test_add_and_remove(self, coordinator: TransferCoordinator) -> None:
        component = coordinator.workspace.get_artboard("B").get_component("b1")
        assert not coordinator.add_component("B", component)

        assert coordinator.remove_component("B", "b1")
        assert component_ids(coordinator, "B") == []
        assert coordinator.add_component("B", component)
        assert component_ids(coordinator, "B") == ["b1"]

    def test_move_artboard(self, coordinator: TransferCoordinator) -> None:
        other = coordinator.workspace.get_artboard("B")
        assert coordinator.move_artboard("A", CanvasPoint(x=-40, y=260))

        moved = coordinator.workspace.get_artboard("A")
        assert moved.position == CanvasPoint(x=-40, y=260)
        assert [c.id for c in moved.components] == ["a1", "a2", "a3"]
        assert coordinator.workspace.get_artboard("B") is other

    def test_move_missing_artboard(self, coordinator: TransferCoordinator) -> None:
        snapshot = coordinator.workspace
        assert not coordinator.move_artboard("Z", CanvasPoint(x=0, y=0))
        assert coordinator.workspace is snapshot

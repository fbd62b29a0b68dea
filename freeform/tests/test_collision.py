"""Tests for collision resolution and initial placement."""

import logging

import pytest

from freeform.constraints.collision import find_initial_position, find_non_overlapping_position
from freeform.constraints.geometry import is_within_bounds, overlaps_any
from freeform.models.schema import ComponentRect, LocalPoint, Rect, Size


class TestFindNonOverlappingPosition:
    """Tests for the unchanged -> spiral -> stacked search."""

    def test_tight_drop_pinned(self, container: Size, top_row_siblings: list[ComponentRect]) -> None:
        """A 100x100 drop at (50, 50) lands below the top row at (2, 154)."""
        rect = Rect(x=50, y=50, width=100, height=100)
        position = find_non_overlapping_position(rect, top_row_siblings, container)
        assert position == LocalPoint(x=2, y=154)

    def test_free_rect_is_unchanged(self, container: Size, top_row_siblings: list[ComponentRect]) -> None:
        rect = Rect(x=10, y=180, width=50, height=50)
        position = find_non_overlapping_position(rect, top_row_siblings, container)
        assert position == LocalPoint(x=10, y=180)

    def test_free_rect_is_clamped_into_bounds(self, container: Size) -> None:
        rect = Rect(x=380, y=270, width=50, height=50)
        position = find_non_overlapping_position(rect, [], container)
        assert position == LocalPoint(x=350, y=250)

    @pytest.mark.parametrize("step", [0, -8, 0.5])
    def test_unusable_step_uses_default(
        self, step: float, container: Size, top_row_siblings: list[ComponentRect]
    ) -> None:
        rect = Rect(x=50, y=50, width=100, height=100)
        position = find_non_overlapping_position(rect, top_row_siblings, container, step=step)
        assert position == LocalPoint(x=2, y=154)

    def test_excluded_sibling_is_ignored(self, container: Size) -> None:
        rect = Rect(x=0, y=0, width=100, height=100)
        siblings = [ComponentRect(id="self", x=0, y=0, width=100, height=100)]
        position = find_non_overlapping_position(rect, siblings, container, exclude_id="self")
        assert position == LocalPoint(x=0, y=0)

    def test_touching_sibling_is_not_a_collision(self, container: Size) -> None:
        rect = Rect(x=100, y=0, width=100, height=100)
        siblings = [ComponentRect(id="s", x=0, y=0, width=100, height=100)]
        position = find_non_overlapping_position(rect, siblings, container)
        assert position == LocalPoint(x=100, y=0)

    def test_is_idempotent(self, container: Size, top_row_siblings: list[ComponentRect]) -> None:
        rect = Rect(x=50, y=50, width=100, height=100)
        first = find_non_overlapping_position(rect, top_row_siblings, container)
        second = find_non_overlapping_position(rect, top_row_siblings, container)
        assert first == second

    def test_does_not_mutate_inputs(self, container: Size, top_row_siblings: list[ComponentRect]) -> None:
        rect = Rect(x=50, y=50, width=100, height=100)
        before = list(top_row_siblings)
        find_non_overlapping_position(rect, top_row_siblings, container)
        assert (rect.x, rect.y) == (50, 50)
        assert top_row_siblings == before

    @pytest.mark.parametrize("origin", [(50, 50), (150, 40), (300, 100), (0, 0), (390, 10)])
    def test_result_is_free_and_in_bounds(
        self,
        origin: tuple[float, float],
        container: Size,
        top_row_siblings: list[ComponentRect],
    ) -> None:
        rect = Rect(x=origin[0], y=origin[1], width=100, height=100)
        position = find_non_overlapping_position(rect, top_row_siblings, container)
        placed = rect.moved_to(position.x, position.y)
        assert is_within_bounds(placed, container)
        assert not overlaps_any(placed, top_row_siblings)

    def test_stacked_fallback_when_full(self, caplog: pytest.LogCaptureFixture) -> None:
        """No free slot: stack below the lowest sibling, clamped to the container."""
        container = Size(width=100, height=100)
        siblings = [ComponentRect(id="full", x=0, y=0, width=100, height=100)]
        rect = Rect(x=10, y=10, width=50, height=50)

        with caplog.at_level(logging.DEBUG, logger="freeform.constraints.collision"):
            position = find_non_overlapping_position(rect, siblings, container)

        assert position == LocalPoint(x=10, y=50)
        assert "stacking" in caplog.text


class TestFindInitialPosition:
    """Tests for top-left raster placement."""

    def test_empty_container_starts_at_padding(self, container: Size) -> None:
        position = find_initial_position(Size(width=100, height=100), [], container)
        assert position == LocalPoint(x=8, y=8)

    def test_first_free_slot_in_first_row(self, container: Size) -> None:
        siblings = [ComponentRect(id="s", x=0, y=0, width=200, height=150)]
        position = find_initial_position(Size(width=100, height=100), siblings, container)
        assert position == LocalPoint(x=200, y=8)

    def test_falls_back_below_content(self, container: Size) -> None:
        siblings = [ComponentRect(id="s", x=0, y=0, width=400, height=300)]
        position = find_initial_position(Size(width=100, height=100), siblings, container)
        assert position == LocalPoint(x=8, y=200)

    def test_zero_padding_uses_default(self, container: Size) -> None:
        position = find_initial_position(Size(width=100, height=100), [], container, padding=0)
        assert position == LocalPoint(x=8, y=8)

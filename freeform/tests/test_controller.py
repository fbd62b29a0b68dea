"""Tests for the drag/resize interaction state machine."""

from typing import Optional

import pytest

from freeform.constraints.resolver import ResizeHandle, SnapModifiers
from freeform.interaction.controller import InteractionController, InteractionState
from freeform.models.schema import (
    AlignmentGuide,
    ComponentKind,
    ComponentRect,
    Rect,
    ScreenPoint,
    Size,
)


class Recorder:
    """Collects controller callbacks."""

    def __init__(self) -> None:
        self.commits: list[Rect] = []
        self.live: list[Optional[Rect]] = []
        self.guides: list[list[AlignmentGuide]] = []
        self.selects = 0

    def on_select(self) -> None:
        self.selects += 1

    def attach(self, **kwargs) -> InteractionController:
        kwargs.setdefault("component_id", "c")
        kwargs.setdefault("rect", Rect(x=0, y=0, width=100, height=100))
        kwargs.setdefault("container", Size(width=400, height=300))
        return InteractionController(
            on_position_change=self.commits.append,
            on_live_position_change=self.live.append,
            on_guides_change=self.guides.append,
            on_select=self.on_select,
            **kwargs,
        )


def as_tuple(rect: Rect) -> tuple[float, float, float, float]:
    return rect.x, rect.y, rect.width, rect.height


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


class TestDrag:
    """Tests for drag sessions."""

    def test_delta_is_scale_compensated(self, recorder: Recorder) -> None:
        controller = recorder.attach(container=Size(width=800, height=600), scale=2.0)

        assert controller.pointer_down(ScreenPoint(x=10, y=10))
        live = controller.pointer_move(ScreenPoint(x=10 + 2 * 51, y=10 + 2 * 29))

        assert as_tuple(live) == (48, 32, 100, 100)
        assert controller.state == InteractionState.DRAGGING
        assert recorder.selects == 1

    def test_release_commits_live_rect(self, recorder: Recorder) -> None:
        controller = recorder.attach()
        controller.pointer_down(ScreenPoint(x=0, y=0))
        controller.pointer_move(ScreenPoint(x=51, y=29))
        committed = controller.pointer_up()

        assert as_tuple(committed) == (48, 32, 100, 100)
        assert [as_tuple(r) for r in recorder.commits] == [(48, 32, 100, 100)]
        assert recorder.live[-1] is None
        assert recorder.guides[-1] == []
        assert controller.state == InteractionState.IDLE
        assert as_tuple(controller.rect) == (48, 32, 100, 100)

    def test_release_without_move_commits_nothing(self, recorder: Recorder) -> None:
        controller = recorder.attach()
        controller.pointer_down(ScreenPoint(x=0, y=0))

        assert controller.pointer_up() is None
        assert recorder.commits == []
        assert recorder.live == [None]
        assert recorder.guides == [[]]

    def test_live_rect_clamped_to_logical_container(self, recorder: Recorder) -> None:
        controller = recorder.attach(container=Size(width=800, height=600), scale=2.0)
        controller.pointer_down(ScreenPoint(x=0, y=0))
        live = controller.pointer_move(ScreenPoint(x=5000, y=0))
        assert live.x == 300

    def test_commit_resolves_collisions(self, recorder: Recorder) -> None:
        sibling = ComponentRect(id="s", x=200, y=0, width=100, height=100)
        controller = recorder.attach(siblings=[sibling])

        controller.pointer_down(ScreenPoint(x=0, y=0))
        live = controller.pointer_move(
            ScreenPoint(x=150, y=0), SnapModifiers(bypass_all_snapping=True)
        )
        assert as_tuple(live) == (150, 0, 100, 100)

        committed = controller.pointer_up()
        assert as_tuple(committed) == (94, 0, 100, 100)

    def test_locked_component_ignores_pointer(self, recorder: Recorder) -> None:
        controller = recorder.attach(locked=True)
        assert not controller.pointer_down(ScreenPoint(x=0, y=0))
        assert controller.pointer_move(ScreenPoint(x=50, y=50)) is None
        assert recorder.selects == 0

    def test_second_press_during_session_is_ignored(self, recorder: Recorder) -> None:
        controller = recorder.attach()
        assert controller.pointer_down(ScreenPoint(x=0, y=0))
        assert not controller.resize_start(ScreenPoint(x=0, y=0), ResizeHandle.SE)
        assert controller.state == InteractionState.DRAGGING

    def test_cancel_discards_session(self, recorder: Recorder) -> None:
        controller = recorder.attach()
        controller.pointer_down(ScreenPoint(x=0, y=0))
        controller.pointer_move(ScreenPoint(x=51, y=29))
        controller.cancel()

        assert recorder.commits == []
        assert as_tuple(controller.rect) == (0, 0, 100, 100)
        assert controller.display_rect() == controller.rect
        assert recorder.live[-1] is None
        assert controller.pointer_up() is None

    def test_guides_published_while_dragging(self, recorder: Recorder) -> None:
        sibling = ComponentRect(id="s", x=200, y=250, width=80, height=40)
        controller = recorder.attach(siblings=[sibling])
        controller.pointer_down(ScreenPoint(x=0, y=0))
        controller.pointer_move(ScreenPoint(x=203, y=0))

        assert controller.live_rect.x == 200
        assert [g.position for g in recorder.guides[-1]] == [200]

    def test_guide_dropped_when_clamp_moves_rect(self, recorder: Recorder) -> None:
        sibling = ComponentRect(id="s", x=340, y=200, width=40, height=40)
        controller = recorder.attach(siblings=[sibling])
        controller.pointer_down(ScreenPoint(x=0, y=0))
        live = controller.pointer_move(ScreenPoint(x=343, y=0))

        assert live.x == 300
        assert recorder.guides[-1] == []

    def test_update_scale_ignores_non_positive(self, recorder: Recorder) -> None:
        controller = recorder.attach()
        controller.update_scale(0)
        assert controller.scale == 1.0
        controller.update_scale(0.5)
        assert controller.scale == 0.5


class TestResize:
    """Tests for resize sessions."""

    def test_corner_resize_snaps_to_grid(self, recorder: Recorder) -> None:
        controller = recorder.attach(kind=ComponentKind.TEXT)
        controller.resize_start(ScreenPoint(x=100, y=100), ResizeHandle.SE)
        live = controller.pointer_move(ScreenPoint(x=153, y=117))

        assert controller.state == InteractionState.RESIZING
        assert as_tuple(live) == (0, 0, 152, 120)

    def test_min_size_enforced(self, recorder: Recorder) -> None:
        controller = recorder.attach(kind=ComponentKind.TEXT)
        controller.resize_start(ScreenPoint(x=100, y=50), ResizeHandle.E)
        live = controller.pointer_move(ScreenPoint(x=10, y=50))
        assert live.width == 40

    def test_west_resize_keeps_right_edge(self, recorder: Recorder) -> None:
        controller = recorder.attach(
            kind=ComponentKind.TEXT,
            rect=Rect(x=100, y=100, width=100, height=100),
        )
        controller.resize_start(ScreenPoint(x=100, y=150), ResizeHandle.W)
        live = controller.pointer_move(ScreenPoint(x=190, y=150))

        assert live.width == 40
        assert live.right == 200

    def test_max_size_enforced(self, recorder: Recorder) -> None:
        controller = recorder.attach(
            kind=ComponentKind.HEADING,
            rect=Rect(x=0, y=0, width=304, height=48),
            container=Size(width=1000, height=400),
        )
        controller.resize_start(ScreenPoint(x=304, y=48), ResizeHandle.S)
        live = controller.pointer_move(ScreenPoint(x=304, y=248))
        assert live.height == 120

    def test_kind_aspect_ratio_locked(self, recorder: Recorder) -> None:
        controller = recorder.attach(
            kind=ComponentKind.CHART_DOUGHNUT,
            rect=Rect(x=0, y=0, width=200, height=200),
            container=Size(width=1000, height=1000),
        )
        controller.resize_start(ScreenPoint(x=200, y=100), ResizeHandle.E)
        live = controller.pointer_move(ScreenPoint(x=256, y=100))
        assert as_tuple(live) == (0, 0, 256, 256)

    def test_locked_ratio_survives_grid_snap(self, recorder: Recorder) -> None:
        controller = recorder.attach(
            kind=ComponentKind.GAUGE,
            rect=Rect(x=0, y=0, width=200, height=200),
            container=Size(width=1000, height=1000),
        )
        controller.resize_start(ScreenPoint(x=200, y=100), ResizeHandle.E)
        live = controller.pointer_move(ScreenPoint(x=253, y=100))

        assert as_tuple(live) == (0, 0, 256, 256)
        assert as_tuple(controller.pointer_up()) == (0, 0, 256, 256)

    def test_locked_ratio_survives_container_clamp(self, recorder: Recorder) -> None:
        controller = recorder.attach(
            kind=ComponentKind.CHART_DOUGHNUT,
            rect=Rect(x=0, y=0, width=200, height=200),
            container=Size(width=300, height=250),
        )
        controller.resize_start(ScreenPoint(x=200, y=200), ResizeHandle.SE)
        live = controller.pointer_move(ScreenPoint(x=290, y=240))

        assert as_tuple(live) == (0, 0, 250, 250)

    def test_locked_ratio_north_west_keeps_opposite_corner(self, recorder: Recorder) -> None:
        controller = recorder.attach(
            kind=ComponentKind.GAUGE,
            rect=Rect(x=400, y=400, width=200, height=200),
            container=Size(width=1000, height=1000),
        )
        controller.resize_start(ScreenPoint(x=400, y=400), ResizeHandle.NW)
        live = controller.pointer_move(ScreenPoint(x=347, y=380))

        assert as_tuple(live) == (344, 344, 256, 256)

    def test_shift_keeps_start_ratio(self, recorder: Recorder) -> None:
        controller = recorder.attach(
            kind=ComponentKind.TEXT,
            rect=Rect(x=0, y=0, width=200, height=100),
        )
        controller.resize_start(ScreenPoint(x=200, y=50), ResizeHandle.E)
        live = controller.pointer_move(
            ScreenPoint(x=256, y=50), SnapModifiers(keep_aspect_ratio=True)
        )
        assert as_tuple(live) == (0, 0, 256, 128)

    def test_resize_commit(self, recorder: Recorder) -> None:
        controller = recorder.attach(kind=ComponentKind.TEXT)
        controller.resize_start(ScreenPoint(x=100, y=100), ResizeHandle.SE)
        controller.pointer_move(ScreenPoint(x=153, y=117))
        committed = controller.pointer_up()

        assert as_tuple(committed) == (0, 0, 152, 120)
        assert controller.handle is None

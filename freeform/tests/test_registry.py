"""Tests for component kinds, sizes and renderers."""

import pytest

from freeform.components.registry import (
    RendererRegistry,
    aspect_ratio,
    default_size,
    max_size,
    min_size,
    register_renderer,
    registry,
)
from freeform.models.schema import Component, ComponentKind, Size


class TestComponentKind:
    """Tests for fail-closed kind parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("chart-line", ComponentKind.CHART_LINE),
            ("kpi", ComponentKind.KPI),
            ("sparkline", ComponentKind.UNKNOWN),
            ("", ComponentKind.UNKNOWN),
            (None, ComponentKind.UNKNOWN),
        ],
    )
    def test_parse(self, value, expected: ComponentKind) -> None:
        assert ComponentKind.parse(value) == expected


class TestSizeCatalog:
    """Tests for per-kind sizing rules."""

    def test_known_kind_sizes(self) -> None:
        assert default_size(ComponentKind.CHART_BAR) == Size(width=400, height=256)
        assert min_size(ComponentKind.TEXT) == Size(width=40, height=24)
        assert max_size(ComponentKind.HEADING) == Size(width=800, height=120)
        assert max_size(ComponentKind.CHART) is None

    def test_doughnut_is_square(self) -> None:
        assert aspect_ratio(ComponentKind.CHART_DOUGHNUT) == 1.0
        assert aspect_ratio(ComponentKind.TEXT) is None

    def test_unknown_kind_uses_default(self) -> None:
        assert default_size(ComponentKind.UNKNOWN) == Size(width=280, height=200)
        assert min_size(ComponentKind.UNKNOWN) == Size(width=80, height=64)


class TestRendererRegistry:
    """Tests for the kind-to-renderer mapping."""

    @pytest.fixture
    def component(self) -> Component:
        return Component(id="c1", kind=ComponentKind.KPI, size=Size(width=184, height=120))

    def test_unregistered_kind_renders_placeholder(self, component: Component) -> None:
        registry = RendererRegistry()
        assert registry.render(component) == {
            "renderer": "placeholder",
            "component_id": "c1",
            "kind": "kpi",
        }

    def test_registered_renderer_is_used(self, component: Component) -> None:
        registry = RendererRegistry()
        registry.register(ComponentKind.KPI, lambda c: {"renderer": "kpi", "id": c.id})

        assert registry.is_registered(ComponentKind.KPI)
        assert registry.render(component) == {"renderer": "kpi", "id": "c1"}
        assert registry.list_kinds() == [ComponentKind.KPI]

    def test_duplicate_registration_rejected(self) -> None:
        registry = RendererRegistry()
        registry.register(ComponentKind.TEXT, lambda c: {})
        with pytest.raises(ValueError, match="already registered"):
            registry.register(ComponentKind.TEXT, lambda c: {})

    def test_unknown_kind_cannot_be_registered(self) -> None:
        with pytest.raises(ValueError):
            RendererRegistry().register(ComponentKind.UNKNOWN, lambda c: {})

    def test_unregister(self, component: Component) -> None:
        registry = RendererRegistry()
        registry.register(ComponentKind.KPI, lambda c: {"renderer": "kpi"})
        registry.unregister(ComponentKind.KPI)
        assert registry.render(component)["renderer"] == "placeholder"

    def test_register_renderer_decorator(self, component: Component) -> None:
        @register_renderer(ComponentKind.GAUGE)
        def render_gauge(c: Component) -> dict:
            return {"renderer": "gauge"}

        try:
            assert registry.resolve(ComponentKind.GAUGE) is render_gauge
        finally:
            registry.unregister(ComponentKind.GAUGE)

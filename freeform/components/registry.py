"""Component kind registry: size catalog and renderer mapping.

Kinds are a closed enum (``ComponentKind``). Each kind carries a default
drop size, a minimum and optional maximum resize size, and an optional
locked aspect ratio. Renderers are looked up through an explicit
kind-to-renderer mapping; kinds without a renderer resolve to a placeholder
so an unknown component never breaks the canvas.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from freeform.models.schema import Component, ComponentKind, Size

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SizeSpec:
    """Sizing rules for one component kind."""

    default: Size
    minimum: Size
    maximum: Size | None = None
    aspect_ratio: float | None = None  # width / height, None = freeform


def _size(width: float, height: float) -> Size:
    return Size(width=width, height=height)


SIZE_CATALOG: dict[ComponentKind, SizeSpec] = {
    ComponentKind.CHART_LINE: SizeSpec(default=_size(400, 256), minimum=_size(200, 152)),
    ComponentKind.CHART_BAR: SizeSpec(default=_size(400, 256), minimum=_size(200, 152)),
    ComponentKind.CHART_DOUGHNUT: SizeSpec(
        default=_size(280, 280), minimum=_size(152, 152), aspect_ratio=1.0
    ),
    ComponentKind.CHART: SizeSpec(default=_size(400, 256), minimum=_size(200, 152)),
    ComponentKind.GAUGE: SizeSpec(
        default=_size(280, 280), minimum=_size(152, 152), aspect_ratio=1.0
    ),
    ComponentKind.TEXT: SizeSpec(default=_size(120, 40), minimum=_size(40, 24)),
    ComponentKind.HEADING: SizeSpec(
        default=_size(304, 48), minimum=_size(80, 32), maximum=_size(800, 120)
    ),
    ComponentKind.KPI: SizeSpec(
        default=_size(184, 120), minimum=_size(104, 80), maximum=_size(400, 304)
    ),
    ComponentKind.TABLE: SizeSpec(default=_size(400, 240), minimum=_size(160, 96)),
    ComponentKind.IMAGE: SizeSpec(default=_size(280, 200), minimum=_size(40, 40)),
}

DEFAULT_SIZE_SPEC = SizeSpec(default=_size(280, 200), minimum=_size(80, 64))


def get_size_spec(kind: ComponentKind) -> SizeSpec:
    """Sizing rules for a kind, falling back to the default spec."""
    return SIZE_CATALOG.get(kind, DEFAULT_SIZE_SPEC)


def default_size(kind: ComponentKind) -> Size:
    return get_size_spec(kind).default


def min_size(kind: ComponentKind) -> Size:
    return get_size_spec(kind).minimum


def max_size(kind: ComponentKind) -> Size | None:
    return get_size_spec(kind).maximum


def aspect_ratio(kind: ComponentKind) -> float | None:
    return get_size_spec(kind).aspect_ratio


# Renderers receive the component and return an opaque render description.
Renderer = Callable[[Component], dict]


def placeholder_renderer(component: Component) -> dict:
    """Render stand-in for kinds without a registered renderer."""
    return {
        "renderer": "placeholder",
        "component_id": component.id,
        "kind": component.kind.value,
    }


class RendererRegistry:
    """Explicit mapping from component kinds to renderer implementations."""

    def __init__(self, fallback: Renderer = placeholder_renderer) -> None:
        self._renderers: dict[ComponentKind, Renderer] = {}
        self._fallback = fallback

    def register(self, kind: ComponentKind, renderer: Renderer) -> None:
        """Register a renderer for a kind.

        Raises:
            ValueError: If the kind is UNKNOWN or already registered.
        """
        if kind == ComponentKind.UNKNOWN:
            raise ValueError("Cannot register a renderer for the unknown kind")
        if kind in self._renderers:
            raise ValueError(f"Renderer for '{kind.value}' is already registered")
        self._renderers[kind] = renderer

    def unregister(self, kind: ComponentKind) -> None:
        self._renderers.pop(kind, None)

    def is_registered(self, kind: ComponentKind) -> bool:
        return kind in self._renderers

    def resolve(self, kind: ComponentKind) -> Renderer:
        """Renderer for a kind; unregistered kinds get the placeholder."""
        renderer = self._renderers.get(kind)
        if renderer is None:
            logger.debug(f"No renderer for '{kind.value}', using placeholder")
            return self._fallback
        return renderer

    def render(self, component: Component) -> dict:
        return self.resolve(component.kind)(component)

    def list_kinds(self) -> list[ComponentKind]:
        return list(self._renderers)


# Global registry instance
registry = RendererRegistry()


def register_renderer(kind: ComponentKind) -> Callable[[Renderer], Renderer]:
    """Decorator to register a renderer with the global registry.

    Usage:
        @register_renderer(ComponentKind.KPI)
        def render_kpi(component):
            ...
    """

    def decorator(renderer: Renderer) -> Renderer:
        registry.register(kind, renderer)
        return renderer

    return decorator

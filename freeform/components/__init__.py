"""Component kinds, size catalog and renderer registry."""

from freeform.components.registry import (
    DEFAULT_SIZE_SPEC,
    SIZE_CATALOG,
    RendererRegistry,
    SizeSpec,
    aspect_ratio,
    default_size,
    get_size_spec,
    max_size,
    min_size,
    placeholder_renderer,
    register_renderer,
    registry,
)

__all__ = [
    "DEFAULT_SIZE_SPEC",
    "SIZE_CATALOG",
    "RendererRegistry",
    "SizeSpec",
    "aspect_ratio",
    "default_size",
    "get_size_spec",
    "max_size",
    "min_size",
    "placeholder_renderer",
    "register_renderer",
    "registry",
]

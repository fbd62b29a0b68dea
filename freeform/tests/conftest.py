"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from freeform.api.main import app
from freeform.models.schema import (
    Artboard,
    CanvasPoint,
    Component,
    ComponentKind,
    ComponentRect,
    LocalPoint,
    Size,
    Workspace,
)


@pytest.fixture
def client() -> TestClient:
    """Create a test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def container() -> Size:
    """A small 400x300 container."""
    return Size(width=400, height=300)


@pytest.fixture
def top_row_siblings() -> list[ComponentRect]:
    """Two siblings covering the top half of a 400x300 container."""
    return [
        ComponentRect(id="left", x=0, y=0, width=200, height=150),
        ComponentRect(id="right", x=200, y=0, width=200, height=150),
    ]


def make_component(component_id: str, x: float, y: float, width: float = 100, height: float = 80) -> Component:
    """Build a positioned text component."""
    return Component(
        id=component_id,
        kind=ComponentKind.TEXT,
        size=Size(width=width, height=height),
        position=LocalPoint(x=x, y=y),
    )


@pytest.fixture
def sample_workspace() -> Workspace:
    """Artboard A with three components, artboard B with one."""
    artboard_a = Artboard(
        id="A",
        name="Artboard A",
        position=CanvasPoint(x=100, y=100),
        width=800,
        height=600,
        components=(
            make_component("a1", 0, 0),
            make_component("a2", 200, 0),
            make_component("a3", 400, 0),
        ),
    )
    artboard_b = Artboard(
        id="B",
        name="Artboard B",
        position=CanvasPoint(x=1000, y=100),
        width=800,
        height=600,
        components=(make_component("b1", 0, 0),),
    )
    return Workspace(artboards=(artboard_a, artboard_b))

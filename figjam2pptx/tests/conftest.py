"""Pytest configuration and fixtures."""

from datetime import datetime, timezone

import pytest

from figjam2pptx.config import get_settings


@pytest.fixture(autouse=True)
def reset_settings():
    """Drop cached settings so environment overrides apply per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def export_time() -> datetime:
    """A fixed export instant."""
    return datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_page() -> dict:
    """Host page snapshot."""
    return {"name": "Team Board", "width": 1920, "height": 1080}


@pytest.fixture
def rectangle_node() -> dict:
    """Host rectangle with a single solid fill."""
    return {
        "id": "1:2",
        "name": "Rectangle 1",
        "type": "RECTANGLE",
        "x": 100,
        "y": 200,
        "width": 300,
        "height": 150,
        "rotation": 0,
        "visible": True,
        "cornerRadius": 8,
        "fills": [
            {"type": "SOLID", "color": {"r": 1, "g": 0.392, "b": 0.2}, "opacity": 1},
        ],
        "strokes": [
            {"type": "SOLID", "color": {"r": 0, "g": 0, "b": 0}},
        ],
        "strokeWeight": 2,
    }


@pytest.fixture
def sticky_node() -> dict:
    """Host sticky note."""
    return {
        "id": "1:3",
        "name": "Sticky",
        "type": "STICKY",
        "x": 500,
        "y": 40,
        "width": 240,
        "height": 240,
        "fills": [{"type": "SOLID", "color": {"r": 1, "g": 0.85, "b": 0.4}}],
        "strokes": [{"type": "SOLID", "color": {"r": 0, "g": 0, "b": 0}}],
        "text": {"characters": "Ship it"},
    }


@pytest.fixture
def connector_node() -> dict:
    """Host connector with one free and one attached end."""
    return {
        "id": "1:4",
        "name": "Connector",
        "type": "CONNECTOR",
        "x": 10,
        "y": 20,
        "width": 200,
        "height": 0,
        "strokes": [{"type": "SOLID", "color": {"r": 0.2, "g": 0.2, "b": 0.2}}],
        "strokeWeight": 3,
        "connectorStart": {"position": {"x": 10, "y": 20}},
        "connectorEnd": {"endpointNodeId": "1:2", "magnet": "AUTO"},
    }


@pytest.fixture
def frame_node() -> dict:
    """Host frame containing two rectangles."""
    return {
        "id": "2:1",
        "name": "Frame",
        "type": "FRAME",
        "x": 0,
        "y": 0,
        "width": 800,
        "height": 600,
        "children": [
            {
                "id": "2:2",
                "name": "First",
                "type": "RECTANGLE",
                "x": 10,
                "y": 10,
                "width": 100,
                "height": 50,
                "cornerRadius": 0,
                "fills": [],
                "strokes": [],
                "strokeWeight": 1,
            },
            {
                "id": "2:3",
                "name": "Second",
                "type": "RECTANGLE",
                "x": 200,
                "y": 10,
                "width": 100,
                "height": 50,
                "cornerRadius": 4,
                "fills": [],
                "strokes": [],
                "strokeWeight": 1,
            },
        ],
    }

"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import pytest

VIZ_ENV_KEYS = (
    "VIZ_OUTPUT_DIR",
    "VIZ_HORIZONTAL_SPACING",
    "VIZ_VERTICAL_SPACING",
    "VIZ_START_X",
    "VIZ_START_Y",
)


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch):
    """Clear VIZ_* settings; set-then-delete so teardown also removes values loaded from a .env."""
    for key in VIZ_ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


@pytest.fixture
def mind_map_description() -> dict:
    """Scenario A: Root with two children."""
    return {
        "type": "mindMap",
        "data": {"title": "Root", "children": [{"title": "A"}, {"title": "B"}]},
    }


@pytest.fixture
def flow_chart_description() -> dict:
    """Scenario B: start -> decision -> end."""
    return {
        "type": "flowChart",
        "data": {
            "nodes": [
                {"id": "start", "type": "start", "title": "Start"},
                {"id": "decision", "type": "decision", "title": "OK?"},
                {"id": "end", "type": "end", "title": "Done"},
            ],
            "edges": [
                {"source": "start", "target": "decision"},
                {"source": "decision", "target": "end", "label": "yes"},
            ],
        },
    }


@pytest.fixture
def bar_chart_description() -> dict:
    return {
        "type": "barChart",
        "data": {
            "title": "Sales",
            "categories": ["Q1", "Q2", "Q3"],
            "values": [10, 25.5, 7],
            "colors": ["#ef4444"],
        },
    }


@pytest.fixture
def venn_description() -> dict:
    """Scenario D: three circles and one shared region."""
    return {
        "type": "vennDiagram",
        "data": {
            "circles": [
                {"id": "a", "title": "Cats", "items": ["whiskers"]},
                {"id": "b", "title": "Dogs", "items": ["bark"]},
                {"id": "c", "title": "Birds", "color": "#22c55e"},
            ],
            "intersections": [{"id": "ab", "title": "Pets", "sets": ["a", "b"]}],
        },
    }


@pytest.fixture
def arrow_description() -> dict:
    return {
        "type": "arrowDiagram",
        "data": {
            "nodes": [
                {"id": "p", "title": "Producer", "type": "rectangle", "position": {"x": 0, "y": 0}},
                {"id": "q", "title": "Queue", "type": "circle", "position": {"x": 300, "y": 0}},
                {"id": "c", "title": "Consumer?", "type": "diamond", "position": {"x": 600, "y": 50}},
            ],
            "arrows": [
                {"source": "p", "target": "q", "label": "push"},
                {"source": "q", "target": "c", "type": "dashed"},
            ],
        },
    }


@pytest.fixture
def cycle_description() -> dict:
    return {
        "type": "cycleDiagram",
        "data": {
            "nodes": [
                {"id": "plan", "title": "Plan"},
                {"id": "do", "title": "Do"},
                {"id": "check", "title": "Check"},
            ],
            "edges": [
                {"source": "plan", "target": "do"},
                {"source": "do", "target": "check"},
                {"source": "check", "target": "plan"},
            ],
        },
    }


@pytest.fixture
def hierarchy_description() -> dict:
    return {
        "type": "hierarchyDiagram",
        "data": {
            "nodes": [
                {"id": "ceo", "type": "root", "title": "CEO"},
                {"id": "cto", "type": "branch", "title": "CTO"},
                {"id": "dev", "type": "leaf", "title": "Dev"},
            ],
            "edges": [
                {"source": "ceo", "target": "cto"},
                {"source": "cto", "target": "dev"},
            ],
        },
    }

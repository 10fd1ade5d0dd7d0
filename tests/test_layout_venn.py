"""Tests for the Venn diagram layout."""
from __future__ import annotations

import math

import pytest

from vizcanvas.config import LayoutConfig
from vizcanvas.graph import NodeKind, Position, ShapeMismatchError
from vizcanvas.layout import circle_positions, layout_venn_diagram


def _circles(n: int) -> dict:
    return {"circles": [{"id": f"c{i}", "title": f"Set {i}"} for i in range(n)]}


def test_scenario_three_circles_equidistant_120_degrees(venn_description: dict) -> None:
    layout = layout_venn_diagram(venn_description["data"])
    circles = [n for n in layout.nodes if n.kind == NodeKind.CIRCLE]
    assert len(circles) == 3
    cx, cy = 500, 300
    radii = [math.hypot(c.position.x - cx, c.position.y - cy) for c in circles]
    assert radii == pytest.approx([100, 100, 100])
    angles = sorted(math.degrees(math.atan2(c.position.y - cy, c.position.x - cx)) % 360 for c in circles)
    assert angles[1] - angles[0] == pytest.approx(120)
    assert angles[2] - angles[1] == pytest.approx(120)
    coords = {(round(c.position.x, 6), round(c.position.y, 6)) for c in circles}
    assert len(coords) == 3


def test_two_circles_side_by_side() -> None:
    layout = layout_venn_diagram(_circles(2))
    assert [(n.position.x, n.position.y) for n in layout.nodes] == [(400, 300), (600, 300)]


def test_single_circle_at_center() -> None:
    assert circle_positions(1, Position(5, 6), 100) == [Position(5, 6)]
    assert circle_positions(0, Position(5, 6), 100) == []


def test_grid_for_more_than_three() -> None:
    positions = circle_positions(5, Position(500, 300), 100)
    # 3 columns, 2 rows, pitch 150
    assert positions[0] == Position(350, 225)
    assert positions[2] == Position(650, 225)
    assert positions[3] == Position(350, 375)
    assert len(set(positions)) == 5


def test_circle_styles(venn_description: dict) -> None:
    layout = layout_venn_diagram(venn_description["data"])
    circles = layout.nodes[:3]
    assert [c.style.z_index for c in circles] == [1, 2, 3]
    assert all(c.style.opacity == 0.6 and c.style.shape == "ellipse" for c in circles)
    assert circles[2].style.fill == "#22c55e"
    assert circles[0].payload["items"] == ["whiskers"]
    assert layout.edges == []


def test_intersection_label_at_centroid_above_circles(venn_description: dict) -> None:
    layout = layout_venn_diagram(venn_description["data"])
    by_id = {n.id: n for n in layout.nodes}
    label = by_id["ab"]
    a, b = by_id["a"].position, by_id["b"].position
    assert label.position.x == pytest.approx((a.x + b.x) / 2)
    assert label.position.y == pytest.approx((a.y + b.y) / 2)
    assert label.style.z_index > max(by_id[c].style.z_index for c in ("a", "b", "c"))
    assert label.payload["sets"] == ["a", "b"]


def test_intersection_unknown_set_raises() -> None:
    data = {**_circles(2), "intersections": [{"id": "x", "title": "X", "sets": ["c0", "nope"]}]}
    with pytest.raises(ShapeMismatchError) as exc:
        layout_venn_diagram(data)
    assert exc.value.field == "intersections[0].sets[1]"


def test_duplicate_intersection_id_reports_own_index() -> None:
    data = {
        **_circles(3),
        "intersections": [
            {"id": "x", "title": "X", "sets": ["c0", "c1"]},
            {"id": "x", "title": "Again", "sets": ["c1", "c2"]},
        ],
    }
    with pytest.raises(ShapeMismatchError) as exc:
        layout_venn_diagram(data)
    assert exc.value.field == "intersections[1].id"


def test_intersection_id_clashing_with_circle_raises() -> None:
    data = {**_circles(2), "intersections": [{"id": "c1", "title": "Both", "sets": ["c0", "c1"]}]}
    with pytest.raises(ShapeMismatchError) as exc:
        layout_venn_diagram(data)
    assert exc.value.field == "intersections[0].id"


def test_config_moves_center() -> None:
    cfg = LayoutConfig(horizontal_spacing=50, vertical_spacing=50, start_x=0, start_y=0)
    layout = layout_venn_diagram(_circles(2), cfg)
    assert [(n.position.x, n.position.y) for n in layout.nodes] == [(-50, 0), (50, 0)]


def test_missing_circles_raises() -> None:
    with pytest.raises(ShapeMismatchError) as exc:
        layout_venn_diagram({})
    assert exc.value.field == "circles"

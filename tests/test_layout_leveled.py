"""Tests for leveled layouts: flow chart, cycle diagram and hierarchy diagram."""
from __future__ import annotations

import pytest
from hypothesis import given, strategies as st
from hypothesis.strategies import composite

from vizcanvas.config import LayoutConfig
from vizcanvas.graph import CycleError, EdgeKind, NodeKind, ShapeMismatchError
from vizcanvas.layout import (
    compute_levels,
    find_back_edges,
    layout_cycle_diagram,
    layout_flow_chart,
    layout_hierarchy_diagram,
)


def _flow(nodes: list[str], edges: list[tuple[str, str]]) -> dict:
    return {
        "nodes": [{"id": n, "title": n.upper()} for n in nodes],
        "edges": [{"source": s, "target": t} for s, t in edges],
    }


@composite
def dags(draw):
    """Random DAG: edges only go from lower to higher index; node order is shuffled."""
    n = draw(st.integers(min_value=1, max_value=8))
    ids = [f"n{i}" for i in range(n)]
    pairs = [(i, j) for i in range(n) for j in range(i + 1, n)]
    chosen = draw(st.lists(st.sampled_from(pairs), unique=True)) if pairs else []
    order = draw(st.permutations(ids))
    return list(order), [(ids[i], ids[j]) for i, j in chosen]


def _reference_levels(edges: list[tuple[str, str]], ids: list[str]) -> dict[str, int]:
    """Longest path from any source, by index order (a topological order for `dags`)."""
    level = {n: 0 for n in ids}
    for j in sorted(ids, key=lambda s: int(s[1:])):
        preds = [level[s] + 1 for s, t in edges if t == j]
        if preds:
            level[j] = max(preds)
    return level


class TestFlowChart:
    def test_scenario_start_decision_end(self, flow_chart_description: dict) -> None:
        layout = layout_flow_chart(flow_chart_description["data"])
        assert layout.levels == {"start": 0, "decision": 1, "end": 2}
        pos = {n.id: (n.position.x, n.position.y) for n in layout.nodes}
        assert pos == {"start": (500, 100), "decision": (500, 300), "end": (500, 500)}

    def test_node_kinds_and_styles(self, flow_chart_description: dict) -> None:
        layout = layout_flow_chart(flow_chart_description["data"])
        by_id = {n.id: n for n in layout.nodes}
        assert by_id["start"].kind == NodeKind.START
        assert by_id["decision"].kind == NodeKind.DECISION
        assert by_id["decision"].style.shape == "diamond"
        assert (by_id["decision"].style.width, by_id["decision"].style.height) == (250, 200)
        assert by_id["end"].style.shape == "pill"

    def test_edges_are_smoothstep_with_labels(self, flow_chart_description: dict) -> None:
        layout = layout_flow_chart(flow_chart_description["data"])
        assert [e.kind for e in layout.edges] == [EdgeKind.SMOOTHSTEP, EdgeKind.SMOOTHSTEP]
        assert layout.edges[1].label == "yes"
        assert all(e.marker_end == "arrowclosed" for e in layout.edges)

    def test_unknown_node_type_is_process(self) -> None:
        layout = layout_flow_chart({"nodes": [{"id": "x", "title": "X", "type": "hexagon"}], "edges": []})
        assert layout.nodes[0].kind == NodeKind.PROCESS

    def test_longest_path_wins(self) -> None:
        layout = layout_flow_chart(_flow(["a", "b", "c"], [("a", "b"), ("b", "c"), ("a", "c")]))
        assert layout.levels == {"a": 0, "b": 1, "c": 2}

    def test_rows_centered_on_widest_level(self) -> None:
        data = _flow(["a", "b", "c", "d"], [("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")])
        layout = layout_flow_chart(data)
        pos = {n.id: (n.position.x, n.position.y) for n in layout.nodes}
        assert pos["a"] == (500, 100)
        assert pos["b"] == (300, 300)
        assert pos["c"] == (700, 300)
        assert pos["d"] == (500, 500)

    def test_wide_level_shifts_base_x(self) -> None:
        cfg = LayoutConfig(horizontal_spacing=400, vertical_spacing=200, start_x=0, start_y=0)
        data = _flow(["r", "x", "y", "z"], [("r", "x"), ("r", "y"), ("r", "z")])
        layout = layout_flow_chart(data, cfg)
        xs = sorted(n.position.x for n in layout.nodes if n.id != "r")
        assert xs == [0, 400, 800]
        assert layout.nodes[0].position.x == 400

    def test_color_overrides_style(self) -> None:
        data = {"nodes": [{"id": "a", "title": "A", "color": "#123456"}], "edges": []}
        node = layout_flow_chart(data).nodes[0]
        assert node.style.fill == "#123456"
        assert node.style.stroke == "#123456"

    def test_cycle_raises(self) -> None:
        with pytest.raises(CycleError) as exc:
            layout_flow_chart(_flow(["a", "b", "c"], [("a", "b"), ("b", "c"), ("c", "a")]))
        assert exc.value.field == "edges[2]"
        assert isinstance(exc.value, ShapeMismatchError)

    def test_dangling_edge_raises(self) -> None:
        with pytest.raises(ShapeMismatchError) as exc:
            layout_flow_chart(_flow(["a"], [("a", "ghost")]))
        assert exc.value.field == "edges[0].target"

    def test_duplicate_node_id_raises(self) -> None:
        with pytest.raises(ShapeMismatchError) as exc:
            layout_flow_chart(_flow(["a", "a"], []))
        assert exc.value.field == "nodes[1].id"

    def test_missing_edges_array_raises(self) -> None:
        with pytest.raises(ShapeMismatchError) as exc:
            layout_flow_chart({"nodes": []})
        assert exc.value.field == "edges"

    def test_empty_chart(self) -> None:
        layout = layout_flow_chart({"nodes": [], "edges": []})
        assert layout.nodes == [] and layout.edges == []


class TestCycleDiagram:
    def test_cycle_is_accepted_and_fully_drawn(self, cycle_description: dict) -> None:
        layout = layout_cycle_diagram(cycle_description["data"])
        assert len(layout.nodes) == 3
        assert len(layout.edges) == 3
        assert layout.levels == {"plan": 0, "do": 1, "check": 2}
        assert all(e.kind == EdgeKind.CURVED and e.animated for e in layout.edges)

    def test_self_loop_is_drawn(self) -> None:
        layout = layout_cycle_diagram(_flow(["a"], [("a", "a")]))
        assert layout.levels == {"a": 0}
        assert len(layout.edges) == 1


class TestHierarchyDiagram:
    def test_levels_and_kinds(self, hierarchy_description: dict) -> None:
        layout = layout_hierarchy_diagram(hierarchy_description["data"])
        assert layout.levels == {"ceo": 0, "cto": 1, "dev": 2}
        assert [n.kind for n in layout.nodes] == [NodeKind.ROOT, NodeKind.BRANCH, NodeKind.LEAF]
        assert all(e.kind == EdgeKind.STRAIGHT for e in layout.edges)

    def test_cycle_raises(self) -> None:
        with pytest.raises(CycleError):
            layout_hierarchy_diagram(_flow(["a", "b"], [("a", "b"), ("b", "a")]))


def test_find_back_edges() -> None:
    assert find_back_edges(["a", "b"], [("a", "b")]) == []
    assert find_back_edges(["a", "b", "c"], [("a", "b"), ("b", "c"), ("c", "a")]) == [2]
    assert find_back_edges(["a"], [("a", "a")]) == [0]


def test_compute_levels_multiple_sources() -> None:
    levels = compute_levels(["x", "y", "z"], [("x", "z"), ("y", "z")])
    assert levels == {"x": 0, "z": 1, "y": 0}


@given(dags())
def test_levels_equal_longest_path(dag) -> None:
    node_ids, edges = dag
    assert compute_levels(node_ids, edges) == _reference_levels(edges, node_ids)
    layout = layout_flow_chart(_flow(node_ids, edges))
    assert layout.levels == _reference_levels(edges, node_ids)

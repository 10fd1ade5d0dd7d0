"""Tests for the mind map layout."""
from __future__ import annotations

import pytest
from hypothesis import given, strategies as st

from vizcanvas.config import LayoutConfig
from vizcanvas.graph import NodeKind, ShapeMismatchError
from vizcanvas.layout import layout_mind_map


def _count(tree: dict) -> int:
    return 1 + sum(_count(c) for c in tree.get("children") or [])


trees = st.recursive(
    st.just({"title": "leaf"}),
    lambda kids: st.lists(kids, max_size=4).map(lambda cs: {"title": "topic", "children": cs}),
    max_leaves=40,
)


def test_scenario_root_with_two_children(mind_map_description: dict) -> None:
    layout = layout_mind_map(mind_map_description["data"])
    assert len(layout.nodes) == 3
    assert len(layout.edges) == 2
    root = layout.nodes[0]
    assert root.title == "Root"
    assert root.kind == NodeKind.ROOT
    assert all(e.source == root.id for e in layout.edges)
    assert [n.title for n in layout.nodes] == ["Root", "A", "B"]


def test_children_centered_under_parent(mind_map_description: dict) -> None:
    layout = layout_mind_map(mind_map_description["data"])
    pos = {n.title: (n.position.x, n.position.y) for n in layout.nodes}
    assert pos["Root"] == (0, 0)
    assert pos["A"] == (-150, 200)
    assert pos["B"] == (150, 200)


def test_grandchildren_follow_parent_x() -> None:
    cfg = LayoutConfig(horizontal_spacing=100, vertical_spacing=50, start_x=10, start_y=20)
    data = {"title": "R", "children": [{"title": "A", "children": [{"title": "A1"}]}, {"title": "B"}]}
    layout = layout_mind_map(data, cfg)
    by_title = {n.title: n for n in layout.nodes}
    assert by_title["A"].position.x == -40
    assert by_title["A1"].position.x == -40
    assert by_title["A1"].position.y == 120
    assert by_title["A"].kind == NodeKind.BRANCH
    assert by_title["A1"].kind == NodeKind.LEAF
    assert layout.levels[by_title["A1"].id] == 2


def test_explicit_ids_are_kept() -> None:
    data = {"id": "r", "title": "R", "children": [{"id": "k", "title": "K"}]}
    layout = layout_mind_map(data)
    assert [n.id for n in layout.nodes] == ["r", "k"]
    assert (layout.edges[0].source, layout.edges[0].target) == ("r", "k")


def test_duplicate_ids_raise() -> None:
    data = {"id": "r", "title": "R", "children": [{"id": "r", "title": "again"}]}
    with pytest.raises(ShapeMismatchError) as exc:
        layout_mind_map(data)
    assert exc.value.field == "data.children[0].id"


def test_missing_child_title_raises() -> None:
    data = {"title": "R", "children": [{"title": "A"}, {"description": "no title"}]}
    with pytest.raises(ShapeMismatchError) as exc:
        layout_mind_map(data)
    assert exc.value.field == "data.children[1].title"


def test_deep_tree_does_not_recurse() -> None:
    node: dict = {"title": "bottom"}
    for i in range(3000):
        node = {"title": f"n{i}", "children": [node]}
    layout = layout_mind_map(node)
    assert len(layout.nodes) == 3001
    assert max(layout.levels.values()) == 3000


@given(trees)
def test_tree_yields_n_nodes_and_n_minus_1_edges(tree: dict) -> None:
    layout = layout_mind_map(tree)
    n = _count(tree)
    assert len(layout.nodes) == n
    assert len(layout.edges) == n - 1
    incoming: dict[str, int] = {}
    for e in layout.edges:
        incoming[e.target] = incoming.get(e.target, 0) + 1
    root_id = layout.nodes[0].id
    assert root_id not in incoming
    assert all(incoming.get(node.id) == 1 for node in layout.nodes[1:])

"""
Flow chart, cycle and hierarchy diagrams: longest-path leveling, then rows centered
on the widest level.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any, Iterator

from ..config import LayoutConfig, default_layout_config
from ..graph.errors import CycleError, ShapeMismatchError
from ..graph.model import (
    ARROW_MARKER,
    Edge,
    EdgeKind,
    EdgeStyle,
    Node,
    NodeKind,
    Position,
    default_node_style,
)
from .base import (
    Layout,
    check_unique,
    optional_text,
    require_id,
    require_list,
    require_mapping,
    require_text,
)
from .schema import CYCLE_DIAGRAM, FLOW_CHART, HIERARCHY_DIAGRAM

logger = logging.getLogger(__name__)

# kind -> (edge kind, animated, stroke color)
_EDGE_STYLES: dict[str, tuple[EdgeKind, bool, str]] = {
    FLOW_CHART: (EdgeKind.SMOOTHSTEP, False, "#64748b"),
    CYCLE_DIAGRAM: (EdgeKind.CURVED, True, "#b1b1b7"),
    HIERARCHY_DIAGRAM: (EdgeKind.STRAIGHT, False, "#b1b1b7"),
}

_FLOW_KINDS = (NodeKind.START, NodeKind.PROCESS, NodeKind.DECISION, NodeKind.END)
_HIERARCHY_KINDS = (NodeKind.ROOT, NodeKind.BRANCH, NodeKind.LEAF)


def find_back_edges(node_ids: list[str], edges: list[tuple[str, str]]) -> list[int]:
    """Indices of edges that close a directed cycle, found by DFS in node order."""
    adj: dict[str, list[tuple[str, int]]] = {n: [] for n in node_ids}
    for i, (s, t) in enumerate(edges):
        adj[s].append((t, i))
    on_stack, done = 1, 2
    state: dict[str, int] = {}
    back: list[int] = []
    for root in node_ids:
        if root in state:
            continue
        state[root] = on_stack
        stack: list[tuple[str, Iterator[tuple[str, int]]]] = [(root, iter(adj[root]))]
        while stack:
            node, it = stack[-1]
            for target, i in it:
                st = state.get(target)
                if st == on_stack:
                    back.append(i)
                elif st is None:
                    state[target] = on_stack
                    stack.append((target, iter(adj[target])))
                    break
            else:
                state[node] = done
                stack.pop()
    return sorted(back)


def compute_levels(node_ids: list[str], edges: list[tuple[str, str]]) -> dict[str, int]:
    """
    Longest-path level of every node of a DAG, keyed in discovery order.

    Zero in-degree nodes start at level 0. Children are visited depth-first in
    ascending in-degree order; a revisit along a longer path raises the level and
    re-propagates to the successors. Input must be acyclic (see find_back_edges).
    """
    in_degree = {n: 0 for n in node_ids}
    outgoing: dict[str, list[str]] = {n: [] for n in node_ids}
    for s, t in edges:
        in_degree[t] += 1
        outgoing[s].append(t)

    levels: dict[str, int] = {}
    for source in (n for n in node_ids if in_degree[n] == 0):
        stack = [(source, 0)]
        while stack:
            node, level = stack.pop()
            if node in levels and level <= levels[node]:
                continue
            levels[node] = level
            children = sorted(outgoing[node], key=lambda t: in_degree[t])
            for child in reversed(children):
                stack.append((child, level + 1))
    return levels


def _node_kind(kind: str, raw_type: Any) -> NodeKind:
    if kind == FLOW_CHART:
        k = NodeKind.coerce(raw_type, NodeKind.PROCESS)
        return k if k in _FLOW_KINDS else NodeKind.PROCESS
    if kind == HIERARCHY_DIAGRAM:
        k = NodeKind.coerce(raw_type, NodeKind.LEAF)
        return k if k in _HIERARCHY_KINDS else NodeKind.LEAF
    return NodeKind.PROCESS


def _layout_leveled(kind: str, data: Mapping[str, Any], config: LayoutConfig | None) -> Layout:
    cfg = config or default_layout_config(kind)
    raw_nodes = require_list(data, "nodes")
    raw_edges = require_list(data, "edges")

    specs = [require_mapping(n, f"nodes[{i}]") for i, n in enumerate(raw_nodes)]
    node_ids = [require_id(n, f"nodes[{i}].id") for i, n in enumerate(specs)]
    check_unique(node_ids, "nodes")
    known = set(node_ids)

    pairs: list[tuple[str, str]] = []
    labels: list[str | None] = []
    for i, e in enumerate(raw_edges):
        e = require_mapping(e, f"edges[{i}]")
        source = require_text(e, "source", f"edges[{i}].source")
        target = require_text(e, "target", f"edges[{i}].target")
        if source not in known:
            raise ShapeMismatchError(f"edges[{i}].source", f"unknown node {source!r}")
        if target not in known:
            raise ShapeMismatchError(f"edges[{i}].target", f"unknown node {target!r}")
        pairs.append((source, target))
        labels.append(optional_text(e, "label"))

    back = find_back_edges(node_ids, pairs)
    if back and kind != CYCLE_DIAGRAM:
        i = back[0]
        raise CycleError(f"edges[{i}]", f"edge {pairs[i][0]!r} -> {pairs[i][1]!r} closes a cycle")
    back_set = set(back)
    levels = compute_levels(node_ids, [p for i, p in enumerate(pairs) if i not in back_set])

    by_level: dict[int, list[str]] = {}
    for nid, level in levels.items():
        by_level.setdefault(level, []).append(nid)
    widest = max((len(ids) for ids in by_level.values()), default=1)
    base_x = max(cfg.start_x, (widest - 1) * cfg.horizontal_spacing / 2)

    positions: dict[str, Position] = {}
    for level, ids in by_level.items():
        row_start = base_x - (len(ids) - 1) * cfg.horizontal_spacing / 2
        y = cfg.start_y + level * cfg.vertical_spacing
        for index, nid in enumerate(ids):
            positions[nid] = Position(row_start + index * cfg.horizontal_spacing, y)

    layout = Layout(kind=kind, levels=levels)
    for i, (nid, spec) in enumerate(zip(node_ids, specs)):
        node_kind = _node_kind(kind, spec.get("type"))
        style = default_node_style(node_kind)
        color = optional_text(spec, "color")
        if color:
            style = replace(style, stroke=color, fill=f"{color}33" if node_kind == NodeKind.DECISION else color)
        title = require_text(spec, "title", f"nodes[{i}].title")
        description = optional_text(spec, "description")
        layout.nodes.append(
            Node(
                id=nid,
                kind=node_kind,
                title=title,
                description=description,
                position=positions[nid],
                style=style,
                payload={
                    "visualization": kind,
                    "sourceId": nid,
                    "title": title,
                    "description": description,
                    "level": levels[nid],
                },
            )
        )

    edge_kind, animated, stroke = _EDGE_STYLES[kind]
    for i, ((source, target), label) in enumerate(zip(pairs, labels)):
        layout.edges.append(
            Edge(
                id=f"edge-{i}",
                source=source,
                target=target,
                kind=edge_kind,
                label=label,
                animated=animated,
                style=EdgeStyle(stroke=stroke, stroke_width=2),
                marker_end=ARROW_MARKER,
            )
        )
    logger.debug(
        "%s layout: %d nodes on %d levels, %d edges", kind, len(layout.nodes), len(by_level), len(layout.edges)
    )
    return layout


def layout_flow_chart(data: Mapping[str, Any], config: LayoutConfig | None = None) -> Layout:
    return _layout_leveled(FLOW_CHART, data, config)


def layout_cycle_diagram(data: Mapping[str, Any], config: LayoutConfig | None = None) -> Layout:
    """Back edges are kept as drawn edges but ignored for leveling."""
    return _layout_leveled(CYCLE_DIAGRAM, data, config)


def layout_hierarchy_diagram(data: Mapping[str, Any], config: LayoutConfig | None = None) -> Layout:
    return _layout_leveled(HIERARCHY_DIAGRAM, data, config)

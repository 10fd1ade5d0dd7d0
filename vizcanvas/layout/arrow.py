"""
Arrow diagram: node positions come from the caller; only edge styling is assigned.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..config import LayoutConfig
from ..graph.errors import ShapeMismatchError
from ..graph.model import ARROW_MARKER, Edge, EdgeKind, EdgeStyle, Node, NodeKind, Position, default_node_style
from .base import (
    Layout,
    check_unique,
    optional_text,
    require_id,
    require_list,
    require_mapping,
    require_number,
    require_text,
)
from .schema import ARROW_DIAGRAM

logger = logging.getLogger(__name__)

EDGE_COLOR = "#b1b1b7"


def _node_kind(raw_type: Any) -> NodeKind:
    t = str(raw_type or "").strip().lower()
    if t == "circle":
        return NodeKind.CIRCLE
    if t == "diamond":
        return NodeKind.DECISION
    return NodeKind.PROCESS


def _edge_for(index: int, source: str, target: str, label: str | None, raw_type: Any) -> Edge:
    dashed = str(raw_type or "").strip().lower() == "dashed"
    return Edge(
        id=f"edge-{index}",
        source=source,
        target=target,
        kind=EdgeKind.DASHED if dashed else EdgeKind.STRAIGHT,
        label=label,
        animated=dashed,
        style=EdgeStyle(stroke=EDGE_COLOR, stroke_width=2 if dashed else 1, dash="5,5" if dashed else None),
        marker_end=ARROW_MARKER,
    )


def layout_arrow_diagram(data: Mapping[str, Any], config: LayoutConfig | None = None) -> Layout:
    """`config` is accepted for a uniform signature; caller positions are used verbatim."""
    specs = [require_mapping(n, f"nodes[{i}]") for i, n in enumerate(require_list(data, "nodes"))]
    ids = [require_id(n, f"nodes[{i}].id") for i, n in enumerate(specs)]
    check_unique(ids, "nodes")
    arrows_key = "arrows" if data.get("arrows") is not None or "edges" not in data else "edges"
    raw_arrows = require_list(data, arrows_key)

    layout = Layout(kind=ARROW_DIAGRAM)
    for i, (nid, spec) in enumerate(zip(ids, specs)):
        pos = require_mapping(spec.get("position"), f"nodes[{i}].position")
        position = Position(
            require_number(pos.get("x"), f"nodes[{i}].position.x"),
            require_number(pos.get("y"), f"nodes[{i}].position.y"),
        )
        kind = _node_kind(spec.get("type"))
        title = require_text(spec, "title", f"nodes[{i}].title")
        description = optional_text(spec, "description")
        layout.nodes.append(
            Node(
                id=nid,
                kind=kind,
                title=title,
                description=description,
                position=position,
                style=default_node_style(kind),
                payload={
                    "visualization": ARROW_DIAGRAM,
                    "sourceId": nid,
                    "title": title,
                    "description": description,
                    "shape": str(spec.get("type") or "rectangle"),
                },
            )
        )

    known = set(ids)
    for i, a in enumerate(raw_arrows):
        a = require_mapping(a, f"{arrows_key}[{i}]")
        source = require_text(a, "source", f"{arrows_key}[{i}].source")
        target = require_text(a, "target", f"{arrows_key}[{i}].target")
        for end, value in (("source", source), ("target", target)):
            if value not in known:
                raise ShapeMismatchError(f"{arrows_key}[{i}].{end}", f"unknown node {value!r}")
        layout.edges.append(_edge_for(i, source, target, optional_text(a, "label"), a.get("type")))
    logger.debug("Arrow diagram layout: %d nodes, %d arrows", len(layout.nodes), len(layout.edges))
    return layout

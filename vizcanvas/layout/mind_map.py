"""
Mind map: pre-order walk of a rooted tree; siblings are spread horizontally and
centered under their parent, one directed edge per parent -> child pair.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..config import LayoutConfig, default_layout_config
from ..graph.errors import ShapeMismatchError
from ..graph.model import ARROW_MARKER, Edge, EdgeKind, EdgeStyle, Node, NodeKind, NodeStyle, Position
from .base import Layout, optional_list, optional_text, require_mapping, require_text
from .schema import MIND_MAP

logger = logging.getLogger(__name__)

EDGE_COLOR = "#94a3b8"
ROOT_BORDER = "#3b82f6"


def _node_style(is_root: bool) -> NodeStyle:
    return NodeStyle(
        shape="rounded",
        fill="#ffffff",
        stroke=ROOT_BORDER if is_root else "#e5e7eb",
        text_color="#111827",
    )


def layout_mind_map(data: Mapping[str, Any], config: LayoutConfig | None = None) -> Layout:
    """
    Root at (start_x, start_y). Child i of n under a parent at x=px sits at
    px + (i - (n-1)/2) * horizontal_spacing, y = start_y + depth * vertical_spacing.
    Walk is iterative, so deep trees do not hit the recursion limit.
    """
    cfg = config or default_layout_config(MIND_MAP)
    root = require_mapping(data, "data")
    layout = Layout(kind=MIND_MAP)
    seen: set[str] = set()

    # (item, field path, tree path, parent id, parent x, depth, sibling index, sibling count)
    stack: list[tuple[Any, str, str, str | None, float, int, int, int]] = [
        (root, "data", "0", None, cfg.start_x, 0, 0, 1)
    ]
    while stack:
        item, field_path, tree_path, parent_id, parent_x, depth, index, total = stack.pop()
        item = require_mapping(item, field_path)
        title = require_text(item, "title", f"{field_path}.title")
        node_id = str(item["id"]) if item.get("id") not in (None, "") else f"mm-{tree_path}"
        if node_id in seen:
            raise ShapeMismatchError(f"{field_path}.id", f"duplicate id {node_id!r}")
        seen.add(node_id)

        children = optional_list(item, "children", f"{field_path}.children")
        is_root = parent_id is None
        if is_root:
            x, y = cfg.start_x, cfg.start_y
            kind = NodeKind.ROOT
        else:
            x = parent_x + (index - (total - 1) / 2) * cfg.horizontal_spacing
            y = cfg.start_y + depth * cfg.vertical_spacing
            kind = NodeKind.BRANCH if children else NodeKind.LEAF

        description = optional_text(item, "description")
        layout.nodes.append(
            Node(
                id=node_id,
                kind=kind,
                title=title,
                description=description,
                position=Position(x, y),
                style=_node_style(is_root),
                payload={
                    "visualization": MIND_MAP,
                    "title": title,
                    "description": description,
                    "isRoot": is_root,
                    "path": tree_path,
                },
            )
        )
        if parent_id is not None:
            layout.edges.append(
                Edge(
                    id=f"edge-{parent_id}-{node_id}",
                    source=parent_id,
                    target=node_id,
                    kind=EdgeKind.SMOOTHSTEP,
                    style=EdgeStyle(stroke=EDGE_COLOR, stroke_width=2),
                    marker_end=ARROW_MARKER,
                )
            )
        layout.levels[node_id] = depth

        n = len(children)
        for i in range(n - 1, -1, -1):
            stack.append(
                (children[i], f"{field_path}.children[{i}]", f"{tree_path}.{i}", node_id, x, depth + 1, i, n)
            )

    logger.debug("Mind map layout: %d nodes, %d edges", len(layout.nodes), len(layout.edges))
    return layout

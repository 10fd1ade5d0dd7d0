"""
Venn diagram: fixed geometric templates by circle count. Overlap is expressed by
position and z-order only; no edges are produced.
"""
from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from ..config import LayoutConfig, default_layout_config
from ..graph.errors import ShapeMismatchError
from ..graph.model import Node, NodeKind, NodeStyle, Position, text_color_for
from .base import (
    Layout,
    check_unique,
    optional_list,
    optional_text,
    require_id,
    require_list,
    require_mapping,
    require_text,
)
from .schema import VENN_DIAGRAM

logger = logging.getLogger(__name__)

CIRCLE_RADIUS = 150
CIRCLE_OPACITY = 0.6
GRID_PITCH_FACTOR = 1.5
PALETTE = ("#3b82f6", "#ef4444", "#22c55e", "#eab308", "#a855f7", "#06b6d4")


def circle_positions(count: int, center: Position, spacing: float) -> list[Position]:
    """Template positions: 1 centered, 2 side by side, 3 at 120 degrees, N>3 on a centered grid."""
    cx, cy = center.x, center.y
    if count <= 0:
        return []
    if count == 1:
        return [Position(cx, cy)]
    if count == 2:
        return [Position(cx - spacing, cy), Position(cx + spacing, cy)]
    if count == 3:
        out = []
        for i in range(3):
            angle = i * 2 * math.pi / 3
            out.append(Position(cx + math.cos(angle) * spacing, cy + math.sin(angle) * spacing))
        return out
    cols = math.ceil(math.sqrt(count))
    rows = math.ceil(count / cols)
    pitch = spacing * GRID_PITCH_FACTOR
    return [
        Position(
            cx + (i % cols - (cols - 1) / 2) * pitch,
            cy + (i // cols - (rows - 1) / 2) * pitch,
        )
        for i in range(count)
    ]


def layout_venn_diagram(data: Mapping[str, Any], config: LayoutConfig | None = None) -> Layout:
    cfg = config or default_layout_config(VENN_DIAGRAM)
    circles = [require_mapping(c, f"circles[{i}]") for i, c in enumerate(require_list(data, "circles"))]
    ids = [require_id(c, f"circles[{i}].id") for i, c in enumerate(circles)]
    check_unique(ids, "circles")
    positions = circle_positions(len(circles), Position(cfg.start_x, cfg.start_y), cfg.horizontal_spacing)

    layout = Layout(kind=VENN_DIAGRAM)
    for i, (cid, circle, pos) in enumerate(zip(ids, circles, positions)):
        title = require_text(circle, "title", f"circles[{i}].title")
        color = optional_text(circle, "color") or PALETTE[i % len(PALETTE)]
        items = [str(it) for it in optional_list(circle, "items", f"circles[{i}].items")]
        description = optional_text(circle, "description")
        layout.nodes.append(
            Node(
                id=cid,
                kind=NodeKind.CIRCLE,
                title=title,
                description=description,
                position=pos,
                style=NodeStyle(
                    shape="ellipse",
                    fill=color,
                    stroke="#e5e7eb",
                    text_color=text_color_for(color),
                    width=CIRCLE_RADIUS * 2,
                    height=CIRCLE_RADIUS * 2,
                    z_index=i + 1,
                    opacity=CIRCLE_OPACITY,
                ),
                payload={
                    "visualization": VENN_DIAGRAM,
                    "sourceId": cid,
                    "title": title,
                    "description": description,
                    "items": items,
                    "color": color,
                    "radius": CIRCLE_RADIUS,
                },
            )
        )

    by_id = dict(zip(ids, positions))
    label_z = len(circles) + 1
    raw_intersections = optional_list(data, "intersections")
    inter_ids = [require_id(require_mapping(x, f"intersections[{i}]"), f"intersections[{i}].id")
                 for i, x in enumerate(raw_intersections)]
    check_unique(inter_ids, "intersections")
    circle_ids = set(ids)
    for i, iid in enumerate(inter_ids):
        if iid in circle_ids:
            raise ShapeMismatchError(f"intersections[{i}].id", f"id {iid!r} already used by a circle")
    for i, (iid, inter) in enumerate(zip(inter_ids, raw_intersections)):
        sets = [str(s) for s in optional_list(inter, "sets", f"intersections[{i}].sets")]
        for j, s in enumerate(sets):
            if s not in by_id:
                raise ShapeMismatchError(f"intersections[{i}].sets[{j}]", f"unknown circle {s!r}")
        members = [by_id[s] for s in sets] or positions or [Position(cfg.start_x, cfg.start_y)]
        centroid = Position(
            sum(p.x for p in members) / len(members),
            sum(p.y for p in members) / len(members),
        )
        title = require_text(inter, "title", f"intersections[{i}].title")
        layout.nodes.append(
            Node(
                id=iid,
                kind=NodeKind.GENERIC,
                title=title,
                position=centroid,
                style=NodeStyle(shape="rounded", width=120, height=40, z_index=label_z),
                payload={
                    "visualization": VENN_DIAGRAM,
                    "sourceId": iid,
                    "title": title,
                    "intersection": True,
                    "sets": sets,
                },
            )
        )
    logger.debug("Venn layout: %d circles, %d intersections", len(circles), len(raw_intersections))
    return layout

"""
Canonical node/edge values, id generation and the default style table.
"""
from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

ARROW_MARKER = "arrowclosed"
DEFAULT_NODE_WIDTH = 250
DEFAULT_NODE_HEIGHT = 100
DECISION_NODE_WIDTH = 250
DECISION_NODE_HEIGHT = 200


class NodeKind(str, Enum):
    START = "start"
    PROCESS = "process"
    DECISION = "decision"
    END = "end"
    ROOT = "root"
    BRANCH = "branch"
    LEAF = "leaf"
    CIRCLE = "circle"
    GENERIC = "generic"

    @classmethod
    def coerce(cls, value: "NodeKind | str | None", default: "NodeKind | None" = None) -> "NodeKind":
        """Enum member or its string value; unknown strings fall back to default (GENERIC)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return default or cls.GENERIC


class EdgeKind(str, Enum):
    STRAIGHT = "straight"
    SMOOTHSTEP = "smoothstep"
    CURVED = "curved"
    DASHED = "dashed"

    @classmethod
    def coerce(cls, value: "EdgeKind | str | None", default: "EdgeKind | None" = None) -> "EdgeKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return default or cls.SMOOTHSTEP


@dataclass(frozen=True)
class Position:
    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class NodeStyle:
    """Resolved visual attributes of a node (shape, colors, bounding box)."""
    shape: str = "rounded"  # rounded | rect | pill | diamond | ellipse | chart
    fill: str = "#ffffff"
    stroke: str = "#e5e7eb"
    text_color: str = "#111827"
    width: float = DEFAULT_NODE_WIDTH
    height: float = DEFAULT_NODE_HEIGHT
    z_index: int = 0
    opacity: float = 1.0


@dataclass(frozen=True)
class EdgeStyle:
    stroke: str = "#b1b1b7"
    stroke_width: float = 2
    dash: str | None = None


@dataclass(frozen=True)
class Node:
    id: str
    kind: NodeKind
    title: str
    position: Position
    description: str | None = None
    style: NodeStyle = field(default_factory=NodeStyle)
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Edge:
    id: str
    source: str
    target: str
    kind: EdgeKind = EdgeKind.SMOOTHSTEP
    label: str | None = None
    animated: bool = False
    style: EdgeStyle = field(default_factory=EdgeStyle)
    marker_end: str | None = ARROW_MARKER


class IdGenerator:
    """Monotonic id source for one session; an id is never handed out twice."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)

    def next_id(self, prefix: str = "node") -> str:
        return f"{prefix}-{next(self._counter)}"


_KIND_STYLES: dict[NodeKind, NodeStyle] = {
    NodeKind.START: NodeStyle(shape="pill", fill="#22c55e", stroke="#16a34a", text_color="#ffffff"),
    NodeKind.END: NodeStyle(shape="pill", fill="#ef4444", stroke="#dc2626", text_color="#ffffff"),
    NodeKind.DECISION: NodeStyle(
        shape="diamond",
        fill="#FFB54733",
        stroke="#FFB547",
        text_color="#111827",
        width=DECISION_NODE_WIDTH,
        height=DECISION_NODE_HEIGHT,
    ),
    NodeKind.PROCESS: NodeStyle(shape="rounded", fill="#3b82f6", stroke="#2563eb", text_color="#ffffff"),
    NodeKind.ROOT: NodeStyle(shape="rounded", fill="#3b82f6", stroke="#2563eb", text_color="#ffffff"),
    NodeKind.BRANCH: NodeStyle(shape="rounded", fill="#22c55e", stroke="#16a34a", text_color="#ffffff"),
    NodeKind.LEAF: NodeStyle(shape="rounded", fill="#6b7280", stroke="#4b5563", text_color="#ffffff"),
    NodeKind.CIRCLE: NodeStyle(shape="ellipse", fill="#ffffff", stroke="#e5e7eb", width=200, height=200),
    NodeKind.GENERIC: NodeStyle(),
}


def default_node_style(kind: NodeKind | str) -> NodeStyle:
    return _KIND_STYLES[NodeKind.coerce(kind)]


def text_color_for(fill: str) -> str:
    """Black or white text depending on the fill brightness (hex #rrggbb)."""
    hex_ = fill.lstrip("#")
    if len(hex_) < 6:
        return "#000000"
    try:
        r, g, b = int(hex_[0:2], 16), int(hex_[2:4], 16), int(hex_[4:6], 16)
    except ValueError:
        return "#000000"
    brightness = (r * 299 + g * 587 + b * 114) / 1000
    return "#000000" if brightness > 128 else "#FFFFFF"


def create_node(
    kind: NodeKind | str,
    title: str,
    description: str | None = None,
    position: Position | tuple[float, float] = Position(0, 0),
    *,
    ids: IdGenerator,
    style: NodeStyle | None = None,
    payload: dict[str, Any] | None = None,
    prefix: str = "node",
) -> Node:
    """Build a node with a fresh id from `ids`."""
    k = NodeKind.coerce(kind)
    if not isinstance(position, Position):
        position = Position(float(position[0]), float(position[1]))
    return Node(
        id=ids.next_id(prefix),
        kind=k,
        title=title,
        description=description or None,
        position=position,
        style=style or default_node_style(k),
        payload=dict(payload or {}),
    )


def create_edge(
    source_id: str,
    target_id: str,
    label: str | None = None,
    kind: EdgeKind | str = EdgeKind.SMOOTHSTEP,
    *,
    ids: IdGenerator,
    animated: bool = False,
    style: EdgeStyle | None = None,
    marker_end: str | None = ARROW_MARKER,
) -> Edge:
    """Pure constructor; endpoint existence is checked by SceneGraph.insert_edge."""
    return Edge(
        id=ids.next_id("edge"),
        source=source_id,
        target=target_id,
        kind=EdgeKind.coerce(kind),
        label=label or None,
        animated=animated,
        style=style or EdgeStyle(),
        marker_end=marker_end,
    )

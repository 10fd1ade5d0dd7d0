"""Graph model: nodes, edges, ids, styles and the error taxonomy."""
from .errors import VizCanvasError, ShapeMismatchError, CycleError, DanglingReferenceError
from .model import (
    ARROW_MARKER,
    NodeKind,
    EdgeKind,
    Position,
    NodeStyle,
    EdgeStyle,
    Node,
    Edge,
    IdGenerator,
    default_node_style,
    text_color_for,
    create_node,
    create_edge,
)

__all__ = [
    "VizCanvasError",
    "ShapeMismatchError",
    "CycleError",
    "DanglingReferenceError",
    "ARROW_MARKER",
    "NodeKind",
    "EdgeKind",
    "Position",
    "NodeStyle",
    "EdgeStyle",
    "Node",
    "Edge",
    "IdGenerator",
    "default_node_style",
    "text_color_for",
    "create_node",
    "create_edge",
]

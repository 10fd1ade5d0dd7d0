"""Scene: the live graph, per-kind merge of layouts, and the interactive session."""
from .graph import SceneGraph, payload_key
from .composer import (
    MERGE_POLICY,
    DroppedEdge,
    MergePolicy,
    MergeReport,
    apply_visualization,
    merge_layout,
)
from .session import TOOLBAR_SHAPES, CanvasSession, MutationResult

__all__ = [
    "SceneGraph",
    "payload_key",
    "MERGE_POLICY",
    "DroppedEdge",
    "MergePolicy",
    "MergeReport",
    "apply_visualization",
    "merge_layout",
    "TOOLBAR_SHAPES",
    "CanvasSession",
    "MutationResult",
]

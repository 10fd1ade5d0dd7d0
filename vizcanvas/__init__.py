"""vizcanvas: lay out structured visualization descriptions onto an editable node/edge canvas."""
from .graph import CycleError, DanglingReferenceError, ShapeMismatchError, VizCanvasError
from .layout import layout_description, parse_description
from .scene import CanvasSession, MergeReport, MutationResult, SceneGraph, apply_visualization
from .export import PortableDocument, export_snapshot

__all__ = [
    "VizCanvasError",
    "ShapeMismatchError",
    "CycleError",
    "DanglingReferenceError",
    "parse_description",
    "layout_description",
    "SceneGraph",
    "CanvasSession",
    "MergeReport",
    "MutationResult",
    "apply_visualization",
    "PortableDocument",
    "export_snapshot",
]

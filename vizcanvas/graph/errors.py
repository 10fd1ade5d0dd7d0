"""Error taxonomy for layout and scene construction."""
from __future__ import annotations


class VizCanvasError(ValueError):
    """Base class for engine errors."""


class ShapeMismatchError(VizCanvasError):
    """A visualization description is malformed; `field` names the offending path."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}")


class CycleError(ShapeMismatchError):
    """A flow chart or hierarchy description contains a directed cycle."""


class DanglingReferenceError(VizCanvasError):
    """An edge was about to be inserted with an endpoint missing from the scene."""

    def __init__(self, edge_id: str, missing_id: str) -> None:
        self.edge_id = edge_id
        self.missing_id = missing_id
        super().__init__(f"Edge {edge_id!r} references missing node {missing_id!r}")

"""
Interactive canvas session: toolbar adds, selection, connect/delete, drag and rename.
Operations against missing ids are soft no-ops; each call returns a MutationResult.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from ..config import LayoutConfig
from ..export.snapshot import PortableDocument, export_snapshot
from ..graph.model import EdgeKind, EdgeStyle, NodeKind, Position, create_edge, create_node
from .composer import MergeReport, apply_visualization
from .graph import SceneGraph

logger = logging.getLogger(__name__)

CONNECT_COLOR = "#b1b1b7"

# Toolbar shape names -> node kinds
TOOLBAR_SHAPES: dict[str, NodeKind] = {
    "rectangle": NodeKind.GENERIC,
    "text": NodeKind.GENERIC,
    "circle": NodeKind.CIRCLE,
    "diamond": NodeKind.DECISION,
}


@dataclass
class MutationResult:
    added_node_ids: list[str] = field(default_factory=list)
    removed_node_ids: list[str] = field(default_factory=list)
    added_edge_ids: list[str] = field(default_factory=list)
    removed_edge_ids: list[str] = field(default_factory=list)
    selected_node_id: str | None = None

    @property
    def changed(self) -> bool:
        return bool(self.added_node_ids or self.removed_node_ids or self.added_edge_ids or self.removed_edge_ids)


def _kind_for(kind: NodeKind | str) -> tuple[NodeKind, str]:
    if isinstance(kind, NodeKind):
        return kind, kind.value
    name = str(kind).strip().lower()
    if name in TOOLBAR_SHAPES:
        return TOOLBAR_SHAPES[name], name
    k = NodeKind.coerce(name)
    return k, k.value


class CanvasSession:
    """One user's canvas: a SceneGraph plus the single-selection state."""

    def __init__(self, scene: SceneGraph | None = None) -> None:
        self.scene = scene if scene is not None else SceneGraph()

    @property
    def selected_node_id(self) -> str | None:
        return self.scene.selected_node_id

    def _result(self, **kwargs: Any) -> MutationResult:
        return MutationResult(selected_node_id=self.scene.selected_node_id, **kwargs)

    def add_node(self, kind: NodeKind | str, position: Position | tuple[float, float], title: str = "") -> MutationResult:
        node_kind, shape = _kind_for(kind)
        node = create_node(
            node_kind,
            title,
            position=position,
            ids=self.scene.ids,
            payload={"freeform": True, "shape": shape},
        )
        self.scene.insert_node(node)
        logger.debug("Added %s node %s", shape, node.id)
        return self._result(added_node_ids=[node.id])

    def select_node(self, node_id: str) -> MutationResult:
        if self.scene.has_node(node_id):
            self.scene.selected_node_id = node_id
        return self._result()

    def clear_selection(self) -> MutationResult:
        self.scene.selected_node_id = None
        return self._result()

    def delete_selected_node(self) -> MutationResult:
        """Remove the selected node and every edge touching it, then clear the selection."""
        node_id = self.scene.selected_node_id
        if node_id is None or not self.scene.has_node(node_id):
            self.scene.selected_node_id = None
            return self._result()
        removed_edges = self.scene.remove_node(node_id)
        self.scene.selected_node_id = None
        logger.debug("Deleted node %s and %d edge(s)", node_id, len(removed_edges))
        return self._result(removed_node_ids=[node_id], removed_edge_ids=removed_edges)

    def connect(self, source_id: str, target_id: str, label: str | None = None) -> MutationResult:
        if not (self.scene.has_node(source_id) and self.scene.has_node(target_id)):
            logger.debug("Connect ignored: %s -> %s (missing node)", source_id, target_id)
            return self._result()
        edge = create_edge(
            source_id,
            target_id,
            label,
            EdgeKind.SMOOTHSTEP,
            ids=self.scene.ids,
            style=EdgeStyle(stroke=CONNECT_COLOR, stroke_width=2),
        )
        self.scene.insert_edge(edge)
        return self._result(added_edge_ids=[edge.id])

    def move_node(self, node_id: str, position: Position | tuple[float, float]) -> MutationResult:
        node = self.scene.node(node_id)
        if node is not None:
            if not isinstance(position, Position):
                position = Position(float(position[0]), float(position[1]))
            self.scene.replace_node(replace(node, position=position))
        return self._result()

    def rename_node(self, node_id: str, title: str) -> MutationResult:
        node = self.scene.node(node_id)
        if node is not None:
            self.scene.replace_node(replace(node, title=title))
        return self._result()

    def delete_edge(self, edge_id: str) -> MutationResult:
        if self.scene.remove_edge(edge_id):
            return self._result(removed_edge_ids=[edge_id])
        return self._result()

    def apply(self, description: Mapping[str, Any] | str, config: LayoutConfig | None = None) -> MergeReport:
        return apply_visualization(self.scene, description, config)

    def export(self) -> PortableDocument:
        return export_snapshot(self.scene)

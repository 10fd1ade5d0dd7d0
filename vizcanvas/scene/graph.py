"""
In-memory scene graph: insertion-ordered nodes and edges plus the current selection.
Every write goes through these methods so no edge can reference a missing node.
"""
from __future__ import annotations

import json
from collections.abc import Iterable

from ..graph.errors import DanglingReferenceError, VizCanvasError
from ..graph.model import Edge, IdGenerator, Node


def payload_key(node: Node) -> tuple[str, str]:
    """(kind, canonical payload JSON) used for duplicate detection."""
    return node.kind.value, json.dumps(node.payload, sort_keys=True, separators=(",", ":"), default=str)


class SceneGraph:
    def __init__(self, ids: IdGenerator | None = None) -> None:
        self._nodes: dict[str, Node] = {}
        self._edges: dict[str, Edge] = {}
        self.selected_node_id: str | None = None
        self.ids = ids or IdGenerator()

    @property
    def nodes(self) -> list[Node]:
        return list(self._nodes.values())

    @property
    def edges(self) -> list[Edge]:
        return list(self._edges.values())

    def node(self, node_id: str) -> Node | None:
        return self._nodes.get(node_id)

    def edge(self, edge_id: str) -> Edge | None:
        return self._edges.get(edge_id)

    def has_node(self, node_id: str | None) -> bool:
        return node_id is not None and node_id in self._nodes

    def node_ids(self) -> set[str]:
        return set(self._nodes)

    def edges_touching(self, node_id: str) -> list[Edge]:
        return [e for e in self._edges.values() if e.source == node_id or e.target == node_id]

    def dangling_edges(self) -> list[Edge]:
        """Edges whose endpoints are missing; always empty unless the invariant is broken."""
        return [e for e in self._edges.values() if e.source not in self._nodes or e.target not in self._nodes]

    def find_duplicate(self, node: Node) -> Node | None:
        key = payload_key(node)
        for existing in self._nodes.values():
            if payload_key(existing) == key:
                return existing
        return None

    def _check_edge(self, edge: Edge, node_ids: Iterable[str] | None = None) -> None:
        present = self._nodes if node_ids is None else node_ids
        for end in (edge.source, edge.target):
            if end not in present:
                raise DanglingReferenceError(edge.id, end)

    def insert_node(self, node: Node) -> None:
        if node.id in self._nodes:
            raise VizCanvasError(f"Node id {node.id!r} already in scene")
        self._nodes[node.id] = node

    def insert_edge(self, edge: Edge) -> None:
        if edge.id in self._edges:
            raise VizCanvasError(f"Edge id {edge.id!r} already in scene")
        self._check_edge(edge)
        self._edges[edge.id] = edge

    def extend(self, nodes: list[Node], edges: list[Edge]) -> None:
        """Insert nodes then edges; everything is checked before anything is written."""
        new_ids = [n.id for n in nodes]
        present = set(self._nodes) | set(new_ids)
        if len(present) != len(self._nodes) + len(new_ids):
            raise VizCanvasError("Duplicate node id in batch")
        edge_ids = [e.id for e in edges]
        if len(set(edge_ids) | set(self._edges)) != len(self._edges) + len(edge_ids):
            raise VizCanvasError("Duplicate edge id in batch")
        for e in edges:
            self._check_edge(e, present)
        for n in nodes:
            self._nodes[n.id] = n
        for e in edges:
            self._edges[e.id] = e

    def replace_node(self, node: Node) -> None:
        if node.id not in self._nodes:
            raise VizCanvasError(f"Node id {node.id!r} not in scene")
        self._nodes[node.id] = node

    def remove_node(self, node_id: str) -> list[str]:
        """Remove a node and every edge touching it; returns the removed edge ids."""
        if node_id not in self._nodes:
            return []
        removed = [e.id for e in self.edges_touching(node_id)]
        for eid in removed:
            del self._edges[eid]
        del self._nodes[node_id]
        if self.selected_node_id == node_id:
            self.selected_node_id = None
        return removed

    def remove_edge(self, edge_id: str) -> bool:
        return self._edges.pop(edge_id, None) is not None

    def replace_contents(self, nodes: list[Node], edges: list[Edge]) -> None:
        """Swap in a new node/edge set wholesale (validated before the swap)."""
        new_nodes = {n.id: n for n in nodes}
        if len(new_nodes) != len(nodes):
            raise VizCanvasError("Duplicate node id in replacement")
        new_edges = {e.id: e for e in edges}
        if len(new_edges) != len(edges):
            raise VizCanvasError("Duplicate edge id in replacement")
        for e in edges:
            self._check_edge(e, new_nodes)
        self._nodes = new_nodes
        self._edges = new_edges
        if self.selected_node_id not in self._nodes:
            self.selected_node_id = None

    def __repr__(self) -> str:
        return f"SceneGraph(nodes={len(self._nodes)}, edges={len(self._edges)}, selected={self.selected_node_id!r})"

"""
Scene composer: merge a layout into the scene with the per-kind replace/append policy,
assign scene ids, deduplicate, and drop (and report) edges that would dangle.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from ..config import LayoutConfig, get_layout_config
from ..layout import STRATEGIES, Layout, parse_description
from ..layout.schema import (
    ARROW_DIAGRAM,
    BAR_CHART,
    CYCLE_DIAGRAM,
    FLOW_CHART,
    HIERARCHY_DIAGRAM,
    MIND_MAP,
    VENN_DIAGRAM,
)
from .graph import SceneGraph, payload_key

logger = logging.getLogger(__name__)


class MergePolicy(str, Enum):
    REPLACE = "replace"
    APPEND = "append"


# Not uniform: charts and Venn diagrams take over the canvas, diagrams accumulate.
MERGE_POLICY: dict[str, MergePolicy] = {
    BAR_CHART: MergePolicy.REPLACE,
    VENN_DIAGRAM: MergePolicy.REPLACE,
    MIND_MAP: MergePolicy.APPEND,
    FLOW_CHART: MergePolicy.APPEND,
    CYCLE_DIAGRAM: MergePolicy.APPEND,
    HIERARCHY_DIAGRAM: MergePolicy.APPEND,
    ARROW_DIAGRAM: MergePolicy.APPEND,
}


@dataclass(frozen=True)
class DroppedEdge:
    edge_id: str
    source: str
    target: str
    reason: str


@dataclass
class MergeReport:
    kind: str
    policy: MergePolicy
    added_node_ids: list[str] = field(default_factory=list)
    added_edge_ids: list[str] = field(default_factory=list)
    removed_node_ids: list[str] = field(default_factory=list)
    removed_edge_ids: list[str] = field(default_factory=list)
    skipped_nodes: dict[str, str] = field(default_factory=dict)  # layout id -> existing scene id
    skipped_edge_ids: list[str] = field(default_factory=list)
    dropped_edges: list[DroppedEdge] = field(default_factory=list)
    id_map: dict[str, str] = field(default_factory=dict)  # layout id -> scene id


def merge_layout(scene: SceneGraph, layout: Layout, policy: MergePolicy) -> MergeReport:
    """Stage the merge, then commit it in one step."""
    report = MergeReport(kind=layout.kind, policy=policy)
    append = policy is MergePolicy.APPEND

    existing_by_key = {payload_key(n): n.id for n in scene.nodes} if append else {}
    staged_nodes = []
    for node in layout.nodes:
        if append:
            dup = existing_by_key.get(payload_key(node))
            if dup is not None:
                report.skipped_nodes[node.id] = dup
                report.id_map[node.id] = dup
                continue
        scene_id = scene.ids.next_id(layout.kind)
        staged_nodes.append(replace(node, id=scene_id))
        report.id_map[node.id] = scene_id

    def resolve(end: str) -> str | None:
        if end in report.id_map:
            return report.id_map[end]
        if append and scene.has_node(end):
            return end
        return None

    seen_links = {(e.source, e.target, e.kind, e.label) for e in scene.edges} if append else set()
    staged_edges = []
    for edge in layout.edges:
        source, target = resolve(edge.source), resolve(edge.target)
        if source is None or target is None:
            missing = edge.source if source is None else edge.target
            drop = DroppedEdge(edge.id, edge.source, edge.target, f"node {missing!r} not in merged node set")
            report.dropped_edges.append(drop)
            logger.warning("Dropped edge %s (%s -> %s): %s", edge.id, edge.source, edge.target, drop.reason)
            continue
        link = (source, target, edge.kind, edge.label)
        if link in seen_links:
            report.skipped_edge_ids.append(edge.id)
            continue
        seen_links.add(link)
        staged_edges.append(replace(edge, id=scene.ids.next_id("edge"), source=source, target=target))

    if append:
        scene.extend(staged_nodes, staged_edges)
    else:
        report.removed_node_ids = [n.id for n in scene.nodes]
        report.removed_edge_ids = [e.id for e in scene.edges]
        scene.replace_contents(staged_nodes, staged_edges)

    report.added_node_ids = [n.id for n in staged_nodes]
    report.added_edge_ids = [e.id for e in staged_edges]
    if report.skipped_nodes:
        logger.info("Skipped %d duplicate node(s) already in scene", len(report.skipped_nodes))
    return report


def apply_visualization(
    scene: SceneGraph,
    description: Mapping[str, Any] | str,
    config: LayoutConfig | None = None,
) -> MergeReport:
    """
    Lay out one description and merge it into `scene`. Parsing and layout run first,
    so a malformed description raises ShapeMismatchError with the scene untouched.
    """
    desc = parse_description(description)
    kind = desc["type"]
    layout = STRATEGIES[kind](desc["data"], config or get_layout_config(kind))
    report = merge_layout(scene, layout, MERGE_POLICY[kind])
    logger.info(
        "%s (%s): +%d nodes, +%d edges, -%d nodes, %d dropped edge(s)",
        kind,
        report.policy.value,
        len(report.added_node_ids),
        len(report.added_edge_ids),
        len(report.removed_node_ids),
        len(report.dropped_edges),
    )
    return report

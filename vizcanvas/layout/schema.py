"""
Visualization description schema: one variant per visualization kind, tagged by "type".
"""
from __future__ import annotations

from typing import Any, TypedDict

BAR_CHART = "barChart"
MIND_MAP = "mindMap"
FLOW_CHART = "flowChart"
VENN_DIAGRAM = "vennDiagram"
ARROW_DIAGRAM = "arrowDiagram"
CYCLE_DIAGRAM = "cycleDiagram"
HIERARCHY_DIAGRAM = "hierarchyDiagram"

VISUALIZATION_KINDS = (
    BAR_CHART,
    MIND_MAP,
    FLOW_CHART,
    VENN_DIAGRAM,
    ARROW_DIAGRAM,
    CYCLE_DIAGRAM,
    HIERARCHY_DIAGRAM,
)


class PositionSpec(TypedDict):
    x: float
    y: float


class BarChartData(TypedDict, total=False):
    title: str
    description: str
    categories: list[str]
    values: list[float]
    colors: list[str]


class MindMapItem(TypedDict, total=False):
    id: str
    title: str
    description: str
    children: list["MindMapItem"]


class GraphNodeSpec(TypedDict, total=False):
    id: str
    title: str
    description: str
    type: str
    color: str
    position: PositionSpec


class GraphEdgeSpec(TypedDict, total=False):
    source: str
    target: str
    label: str
    type: str


class GraphData(TypedDict, total=False):
    title: str
    nodes: list[GraphNodeSpec]
    edges: list[GraphEdgeSpec]


class ArrowDiagramData(TypedDict, total=False):
    nodes: list[GraphNodeSpec]
    arrows: list[GraphEdgeSpec]


class VennCircle(TypedDict, total=False):
    id: str
    title: str
    description: str
    items: list[str]
    color: str


class VennIntersection(TypedDict, total=False):
    id: str
    title: str
    sets: list[str]


class VennDiagramData(TypedDict, total=False):
    circles: list[VennCircle]
    intersections: list[VennIntersection]


class VisualizationDescription(TypedDict):
    type: str
    data: dict[str, Any]

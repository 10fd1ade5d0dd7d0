"""Layout: visualization description -> positioned nodes and styled edges (pure functions)."""
from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from ..config import LayoutConfig
from .arrow import layout_arrow_diagram
from .bar_chart import layout_bar_chart
from .base import Layout
from .leveled import (
    compute_levels,
    find_back_edges,
    layout_cycle_diagram,
    layout_flow_chart,
    layout_hierarchy_diagram,
)
from .mind_map import layout_mind_map
from .parse import normalize_description, parse_description
from .schema import (
    ARROW_DIAGRAM,
    BAR_CHART,
    CYCLE_DIAGRAM,
    FLOW_CHART,
    HIERARCHY_DIAGRAM,
    MIND_MAP,
    VENN_DIAGRAM,
    VISUALIZATION_KINDS,
    VisualizationDescription,
)
from .venn import circle_positions, layout_venn_diagram

STRATEGIES: dict[str, Callable[[Mapping[str, Any], LayoutConfig | None], Layout]] = {
    BAR_CHART: layout_bar_chart,
    MIND_MAP: layout_mind_map,
    FLOW_CHART: layout_flow_chart,
    VENN_DIAGRAM: layout_venn_diagram,
    ARROW_DIAGRAM: layout_arrow_diagram,
    CYCLE_DIAGRAM: layout_cycle_diagram,
    HIERARCHY_DIAGRAM: layout_hierarchy_diagram,
}


def layout_description(
    description: Mapping[str, Any] | str,
    config: LayoutConfig | None = None,
) -> Layout:
    """Normalize a description and run the strategy registered for its type."""
    desc = parse_description(description)
    return STRATEGIES[desc["type"]](desc["data"], config)


__all__ = [
    "Layout",
    "STRATEGIES",
    "VISUALIZATION_KINDS",
    "VisualizationDescription",
    "BAR_CHART",
    "MIND_MAP",
    "FLOW_CHART",
    "VENN_DIAGRAM",
    "ARROW_DIAGRAM",
    "CYCLE_DIAGRAM",
    "HIERARCHY_DIAGRAM",
    "parse_description",
    "normalize_description",
    "layout_description",
    "layout_bar_chart",
    "layout_mind_map",
    "layout_flow_chart",
    "layout_cycle_diagram",
    "layout_hierarchy_diagram",
    "layout_venn_diagram",
    "layout_arrow_diagram",
    "compute_levels",
    "find_back_edges",
    "circle_positions",
]

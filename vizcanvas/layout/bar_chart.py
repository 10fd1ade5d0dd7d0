"""
Bar chart: a single chart node at the origin; bar rendering is left to the renderer.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..config import LayoutConfig, default_layout_config
from ..graph.errors import ShapeMismatchError
from ..graph.model import Node, NodeKind, NodeStyle, Position
from .base import Layout, optional_list, optional_text, require_list, require_number
from .schema import BAR_CHART

logger = logging.getLogger(__name__)

DEFAULT_BAR_COLOR = "#3b82f6"
CHART_MIN_WIDTH = 400
CHART_WIDTH_PER_CATEGORY = 100
CHART_HEIGHT = 300


def _resolve_colors(colors: list[Any], count: int) -> list[str]:
    """Per-bar color: explicit color at the index, else the first color, else the default."""
    fallback = str(colors[0]) if colors and colors[0] else DEFAULT_BAR_COLOR
    out = []
    for i in range(count):
        c = colors[i] if i < len(colors) and colors[i] else fallback
        out.append(str(c))
    return out


def layout_bar_chart(data: Mapping[str, Any], config: LayoutConfig | None = None) -> Layout:
    cfg = config or default_layout_config(BAR_CHART)
    categories = [str(c) for c in require_list(data, "categories")]
    raw_values = require_list(data, "values")
    if len(categories) != len(raw_values):
        raise ShapeMismatchError(
            "values",
            f"{len(raw_values)} values for {len(categories)} categories",
        )
    values = [require_number(v, f"values[{i}]") for i, v in enumerate(raw_values)]
    colors = _resolve_colors(optional_list(data, "colors"), len(categories))

    width = max(CHART_MIN_WIDTH, len(categories) * CHART_WIDTH_PER_CATEGORY)
    node = Node(
        id="bar-chart",
        kind=NodeKind.GENERIC,
        title=optional_text(data, "title") or "",
        description=optional_text(data, "description"),
        position=Position(cfg.start_x, cfg.start_y),
        style=NodeStyle(shape="chart", width=width, height=CHART_HEIGHT),
        payload={
            "visualization": BAR_CHART,
            "categories": categories,
            "values": values,
            "colors": colors,
        },
    )
    logger.debug("Bar chart layout: %d categories", len(categories))
    return Layout(kind=BAR_CHART, nodes=[node])

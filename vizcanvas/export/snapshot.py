"""
Portable snapshot of a scene: styled shapes with absolute coordinates and styled
connectors with endpoint coordinates. Exports of an unchanged scene are identical.
"""
from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..graph.model import Node

if TYPE_CHECKING:
    from ..scene.graph import SceneGraph

_PAYLOAD_SKIP = ("title", "description")


def _r(v: float) -> float:
    return round(float(v), 2)


@dataclass(frozen=True)
class Shape:
    id: str
    kind: str
    shape: str
    x: float  # top-left
    y: float
    width: float
    height: float
    fill: str
    stroke: str
    text_color: str
    opacity: float
    z_index: int
    title: str
    description: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2

    def boundary_point(self, toward: tuple[float, float]) -> tuple[float, float]:
        """Point where the ray from the center toward `toward` leaves the outline."""
        cx, cy = self.center
        dx, dy = toward[0] - cx, toward[1] - cy
        if dx == 0 and dy == 0:
            return cx, cy
        hw, hh = self.width / 2, self.height / 2
        if self.shape == "ellipse" and hw > 0 and hh > 0:
            t = 1 / math.sqrt((dx / hw) ** 2 + (dy / hh) ** 2)
        elif self.shape == "diamond" and hw > 0 and hh > 0:
            t = 1 / (abs(dx) / hw + abs(dy) / hh)
        else:
            tx = hw / abs(dx) if dx else math.inf
            ty = hh / abs(dy) if dy else math.inf
            t = min(tx, ty)
        t = min(t, 1.0)
        return cx + dx * t, cy + dy * t


@dataclass(frozen=True)
class Connector:
    id: str
    source: str
    target: str
    x1: float
    y1: float
    x2: float
    y2: float
    label: str | None
    kind: str
    animated: bool
    stroke: str
    stroke_width: float
    dash: str | None
    marker_end: str | None


@dataclass(frozen=True)
class Bounds:
    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 0.0
    max_y: float = 0.0

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class PortableDocument:
    shapes: list[Shape]
    connectors: list[Connector]
    bounds: Bounds

    def shape(self, shape_id: str) -> Shape | None:
        for s in self.shapes:
            if s.id == shape_id:
                return s
        return None

    def connector_endpoints(self, c: Connector) -> tuple[tuple[float, float], tuple[float, float]]:
        """Endpoints clipped to the source/target outlines, for drawing."""
        src, dst = self.shape(c.source), self.shape(c.target)
        start, end = (c.x1, c.y1), (c.x2, c.y2)
        if src is not None:
            start = src.boundary_point(end)
        if dst is not None:
            end = dst.boundary_point((c.x1, c.y1))
        return start, end

    def to_dict(self) -> dict[str, Any]:
        return {
            "shapes": [asdict(s) for s in self.shapes],
            "connectors": [asdict(c) for c in self.connectors],
            "bounds": asdict(self.bounds),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True, indent=2, ensure_ascii=False)


def _shape_for(node: Node) -> Shape:
    st = node.style
    return Shape(
        id=node.id,
        kind=node.kind.value,
        shape=st.shape,
        x=_r(node.position.x - st.width / 2),
        y=_r(node.position.y - st.height / 2),
        width=_r(st.width),
        height=_r(st.height),
        fill=st.fill,
        stroke=st.stroke,
        text_color=st.text_color,
        opacity=st.opacity,
        z_index=st.z_index,
        title=node.title,
        description=node.description,
        data={k: v for k, v in node.payload.items() if k not in _PAYLOAD_SKIP},
    )


def export_snapshot(scene: "SceneGraph") -> PortableDocument:
    """Shapes in (z_index, insertion) order; connector endpoints at the shape centers. Selection is not exported."""
    indexed = list(enumerate(scene.nodes))
    indexed.sort(key=lambda pair: (pair[1].style.z_index, pair[0]))
    shapes = [_shape_for(n) for _, n in indexed]
    centers = {n.id: (_r(n.position.x), _r(n.position.y)) for n in scene.nodes}

    connectors = []
    for e in scene.edges:
        (x1, y1), (x2, y2) = centers[e.source], centers[e.target]
        connectors.append(
            Connector(
                id=e.id,
                source=e.source,
                target=e.target,
                x1=x1,
                y1=y1,
                x2=x2,
                y2=y2,
                label=e.label,
                kind=e.kind.value,
                animated=e.animated,
                stroke=e.style.stroke,
                stroke_width=e.style.stroke_width,
                dash=e.style.dash,
                marker_end=e.marker_end,
            )
        )

    if shapes:
        bounds = Bounds(
            min_x=min(s.x for s in shapes),
            min_y=min(s.y for s in shapes),
            max_x=max(s.x + s.width for s in shapes),
            max_y=max(s.y + s.height for s in shapes),
        )
    else:
        bounds = Bounds()
    return PortableDocument(shapes=shapes, connectors=connectors, bounds=bounds)


def snapshot_filename(stem: str, extension: str, when: datetime | None = None) -> str:
    """`canvas.png`, or `canvas-20260101-120000.png` when a timestamp is given."""
    ext = extension.lstrip(".")
    if when is None:
        return f"{stem}.{ext}"
    return f"{stem}-{when.strftime('%Y%m%d-%H%M%S')}.{ext}"


def write_snapshot_json(doc: PortableDocument, out_path: Path | str) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(doc.to_json() + "\n", encoding="utf-8")
    return out_path

"""
Render a PortableDocument to SVG, or to a standalone HTML page embedding the SVG.
"""
from __future__ import annotations

import html
from pathlib import Path
from typing import Any

from .snapshot import Connector, PortableDocument, Shape

MARGIN = 40
CHART_PADDING = 24
CHART_LABEL_HEIGHT = 20


def _esc(s: Any) -> str:
    return html.escape(str(s))


def _n(v: float) -> str:
    """Compact number for attributes (no trailing .0)."""
    v = round(float(v), 2)
    return str(int(v)) if v == int(v) else str(v)


def _marker_id(color: str) -> str:
    return "arrow-" + "".join(ch for ch in color if ch.isalnum())


def _markers(doc: PortableDocument) -> str:
    colors = sorted({c.stroke for c in doc.connectors if c.marker_end})
    return "\n".join(
        f'<marker id="{_marker_id(col)}" markerWidth="10" markerHeight="10" refX="9" refY="3" orient="auto">'
        f'<path d="M0,0 L10,3 L0,6 z" fill="{_esc(col)}"/></marker>'
        for col in colors
    )


def _chart_bars(s: Shape) -> list[str]:
    values = [float(v) for v in s.data.get("values") or []]
    categories = s.data.get("categories") or []
    colors = s.data.get("colors") or []
    if not values:
        return []
    top = max(max(values), 0.0) or 1.0
    inner_w = s.width - 2 * CHART_PADDING
    inner_h = s.height - 2 * CHART_PADDING - CHART_LABEL_HEIGHT * 2
    slot = inner_w / len(values)
    base_y = s.y + s.height - CHART_PADDING - CHART_LABEL_HEIGHT
    parts = []
    for i, v in enumerate(values):
        h = max(v, 0.0) / top * inner_h
        bx = s.x + CHART_PADDING + i * slot + slot * 0.15
        color = colors[i] if i < len(colors) else "#3b82f6"
        parts.append(
            f'<rect class="bar" x="{_n(bx)}" y="{_n(base_y - h)}" width="{_n(slot * 0.7)}" height="{_n(h)}" fill="{_esc(color)}"/>'
        )
        label = categories[i] if i < len(categories) else ""
        parts.append(
            f'<text x="{_n(bx + slot * 0.35)}" y="{_n(base_y + 14)}" text-anchor="middle" font-size="11" fill="#374151">{_esc(label)}</text>'
        )
    return parts


def _render_shape(s: Shape) -> str:
    cx, cy = s.center
    common = f'fill="{_esc(s.fill)}" stroke="{_esc(s.stroke)}" stroke-width="2" opacity="{_n(s.opacity)}"'
    parts = [f'<g class="shape shape-{_esc(s.shape)}" data-id="{_esc(s.id)}" data-kind="{_esc(s.kind)}">']
    if s.shape == "ellipse":
        parts.append(f'<ellipse cx="{_n(cx)}" cy="{_n(cy)}" rx="{_n(s.width / 2)}" ry="{_n(s.height / 2)}" {common}/>')
    elif s.shape == "diamond":
        pts = f"{_n(cx)},{_n(s.y)} {_n(s.x + s.width)},{_n(cy)} {_n(cx)},{_n(s.y + s.height)} {_n(s.x)},{_n(cy)}"
        parts.append(f'<polygon points="{pts}" {common}/>')
    else:
        rx = {"rect": 0, "pill": s.height / 2, "chart": 4}.get(s.shape, 8)
        parts.append(
            f'<rect x="{_n(s.x)}" y="{_n(s.y)}" width="{_n(s.width)}" height="{_n(s.height)}" rx="{_n(rx)}" {common}/>'
        )
    if s.shape == "chart":
        parts.extend(_chart_bars(s))
        title_y = s.y + CHART_PADDING
    else:
        title_y = cy - 6 if s.description else cy + 5
    if s.title:
        parts.append(
            f'<text x="{_n(cx)}" y="{_n(title_y)}" text-anchor="middle" font-size="14" font-weight="bold" fill="{_esc(s.text_color)}">{_esc(s.title)}</text>'
        )
    if s.description and s.shape != "chart":
        parts.append(
            f'<text x="{_n(cx)}" y="{_n(cy + 14)}" text-anchor="middle" font-size="11" fill="{_esc(s.text_color)}">{_esc(s.description)}</text>'
        )
    parts.append("</g>")
    return "\n".join(parts)


def _render_connector(doc: PortableDocument, c: Connector) -> str:
    (x1, y1), (x2, y2) = doc.connector_endpoints(c)
    attrs = [f'stroke="{_esc(c.stroke)}"', f'stroke-width="{_n(c.stroke_width)}"', 'fill="none"']
    if c.dash:
        attrs.append(f'stroke-dasharray="{_esc(c.dash)}"')
    if c.marker_end:
        attrs.append(f'marker-end="url(#{_marker_id(c.stroke)})"')
    css = "connector animated" if c.animated else "connector"
    if c.kind == "smoothstep":
        my = (y1 + y2) / 2
        d = f"M{_n(x1)},{_n(y1)} L{_n(x1)},{_n(my)} L{_n(x2)},{_n(my)} L{_n(x2)},{_n(y2)}"
    elif c.kind == "curved":
        d = f"M{_n(x1)},{_n(y1)} C{_n(x1)},{_n((y1 + y2) / 2)} {_n(x2)},{_n((y1 + y2) / 2)} {_n(x2)},{_n(y2)}"
    else:
        d = f"M{_n(x1)},{_n(y1)} L{_n(x2)},{_n(y2)}"
    out = [f'<path class="{css}" data-id="{_esc(c.id)}" d="{d}" {" ".join(attrs)}/>']
    if c.label:
        out.append(
            f'<text class="connector-label" x="{_n((x1 + x2) / 2)}" y="{_n((y1 + y2) / 2 - 4)}" text-anchor="middle" font-size="11" fill="#374151">{_esc(c.label)}</text>'
        )
    return "\n".join(out)


def render_snapshot_svg(doc: PortableDocument) -> str:
    """SVG document; connectors are drawn beneath shapes."""
    b = doc.bounds
    if doc.shapes:
        vx, vy = b.min_x - MARGIN, b.min_y - MARGIN
        vw, vh = b.width + 2 * MARGIN, b.height + 2 * MARGIN
    else:
        vx, vy, vw, vh = 0, 0, 200, 100
    connectors = "\n".join(_render_connector(doc, c) for c in doc.connectors)
    shapes = "\n".join(_render_shape(s) for s in doc.shapes)
    return f'''<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" viewBox="{_n(vx)} {_n(vy)} {_n(vw)} {_n(vh)}" width="{_n(vw)}" height="{_n(vh)}" font-family="sans-serif">
  <defs>
{_markers(doc)}
  </defs>
  <g id="connectors">
{connectors}
  </g>
  <g id="shapes">
{shapes}
  </g>
</svg>
'''


def write_snapshot_svg(doc: PortableDocument, out_path: Path | str) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(render_snapshot_svg(doc), encoding="utf-8")
    return out_path


def write_snapshot_html(doc: PortableDocument, out_path: Path | str, *, title: str = "Canvas") -> Path:
    out_path = Path(out_path)
    svg = render_snapshot_svg(doc).split("\n", 1)[1]  # drop the XML declaration
    html_content = f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8"/>
<meta name="viewport" content="width=device-width, initial-scale=1"/>
<title>{_esc(title)}</title>
<style>
  :root {{ font-family: sans-serif; font-size: 16px; color: #222; }}
  body {{ margin: 0; background: #f8fafc; }}
  .canvas-root {{ display: flex; justify-content: center; padding: 1rem; }}
  .canvas-root svg {{ background: #ffffff; max-width: 100%; height: auto; box-shadow: 0 1px 3px rgba(0,0,0,0.1); }}
  .connector.animated {{ animation: dash 1s linear infinite; }}
  @keyframes dash {{ to {{ stroke-dashoffset: -10; }} }}
</style>
</head>
<body>
<div class="canvas-root">
{svg}
</div>
</body>
</html>
"""
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(html_content, encoding="utf-8")
    return out_path

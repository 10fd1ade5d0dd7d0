"""
Rasterize a PortableDocument to PNG with Pillow ("Save as Image").
"""
from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any

from .markup import CHART_LABEL_HEIGHT, CHART_PADDING, MARGIN
from .snapshot import PortableDocument, Shape

logger = logging.getLogger(__name__)

FONT_PATHS = [
    "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/noto/NotoSansCJK-Regular.ttc",
]


def _load_font(size: int) -> Any:
    from PIL import ImageFont

    for try_path in FONT_PATHS:
        try:
            return ImageFont.truetype(try_path, size)
        except OSError:
            continue
    return ImageFont.load_default()


def _rgba(color: str, opacity: float = 1.0) -> tuple[int, int, int, int]:
    from PIL import ImageColor

    try:
        rgb = ImageColor.getrgb(color)
    except ValueError:
        logger.debug("Unparseable color %r, using black", color)
        rgb = (0, 0, 0)
    alpha = rgb[3] if len(rgb) == 4 else 255
    return rgb[0], rgb[1], rgb[2], int(round(alpha * max(0.0, min(1.0, opacity))))


def _dash_pattern(dash: str | None) -> list[float]:
    if not dash:
        return []
    try:
        return [float(p) for p in dash.replace(",", " ").split() if float(p) > 0]
    except ValueError:
        return []


def _draw_line(draw: Any, start: tuple[float, float], end: tuple[float, float], fill: Any, width: int, dash: list[float]) -> None:
    if not dash:
        draw.line([start, end], fill=fill, width=width)
        return
    length = math.dist(start, end)
    if length == 0:
        return
    ux, uy = (end[0] - start[0]) / length, (end[1] - start[1]) / length
    pos, i, on = 0.0, 0, True
    while pos < length:
        step = min(dash[i % len(dash)], length - pos)
        if on:
            a = (start[0] + ux * pos, start[1] + uy * pos)
            b = (start[0] + ux * (pos + step), start[1] + uy * (pos + step))
            draw.line([a, b], fill=fill, width=width)
        pos += step
        i += 1
        on = not on


def _draw_arrowhead(draw: Any, start: tuple[float, float], end: tuple[float, float], fill: Any, size: float) -> None:
    angle = math.atan2(end[1] - start[1], end[0] - start[0])
    left = (end[0] - size * math.cos(angle - 0.4), end[1] - size * math.sin(angle - 0.4))
    right = (end[0] - size * math.cos(angle + 0.4), end[1] - size * math.sin(angle + 0.4))
    draw.polygon([end, left, right], fill=fill)


def _centered_text(draw: Any, center: tuple[float, float], text: str, fill: Any, font: Any) -> None:
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    draw.text((center[0] - (right - left) / 2, center[1] - (bottom - top) / 2), text, fill=fill, font=font)


def _draw_shape(draw: Any, s: Shape, tx: Any, scale: float, font: Any, small_font: Any) -> None:
    x0, y0 = tx(s.x, s.y)
    x1, y1 = tx(s.x + s.width, s.y + s.height)
    fill = _rgba(s.fill, s.opacity)
    outline = _rgba(s.stroke, s.opacity)
    width = max(1, int(round(2 * scale)))
    if s.shape == "ellipse":
        draw.ellipse([x0, y0, x1, y1], fill=fill, outline=outline, width=width)
    elif s.shape == "diamond":
        mx, my = (x0 + x1) / 2, (y0 + y1) / 2
        draw.polygon([(mx, y0), (x1, my), (mx, y1), (x0, my)], fill=fill, outline=outline)
    else:
        radius = {"rect": 0, "pill": (y1 - y0) / 2, "chart": 4 * scale}.get(s.shape, 8 * scale)
        draw.rounded_rectangle([x0, y0, x1, y1], radius=radius, fill=fill, outline=outline, width=width)

    text_fill = _rgba(s.text_color)
    cx, cy = (x0 + x1) / 2, (y0 + y1) / 2
    if s.shape == "chart":
        values = [float(v) for v in s.data.get("values") or []]
        colors = s.data.get("colors") or []
        if values:
            top = max(max(values), 0.0) or 1.0
            pad, label_h = CHART_PADDING * scale, CHART_LABEL_HEIGHT * scale
            slot = (x1 - x0 - 2 * pad) / len(values)
            base_y = y1 - pad - label_h
            inner_h = (y1 - y0) - 2 * pad - 2 * label_h
            for i, v in enumerate(values):
                h = max(v, 0.0) / top * inner_h
                bx = x0 + pad + i * slot + slot * 0.15
                color = colors[i] if i < len(colors) else "#3b82f6"
                draw.rectangle([bx, base_y - h, bx + slot * 0.7, base_y], fill=_rgba(color))
        if s.title:
            _centered_text(draw, (cx, y0 + CHART_PADDING * scale), s.title, text_fill, font)
        return
    if s.title:
        _centered_text(draw, (cx, cy - (8 * scale if s.description else 0)), s.title, text_fill, font)
    if s.description:
        _centered_text(draw, (cx, cy + 12 * scale), s.description, text_fill, small_font)


def render_snapshot_png(doc: PortableDocument, out_path: Path | str, scale: float = 1.0) -> Path:
    """Draw connectors then shapes (in document order) on a white canvas; returns out_path."""
    from PIL import Image, ImageDraw

    out_path = Path(out_path)
    b = doc.bounds
    if doc.shapes:
        origin_x, origin_y = b.min_x - MARGIN, b.min_y - MARGIN
        w, h = b.width + 2 * MARGIN, b.height + 2 * MARGIN
    else:
        origin_x, origin_y, w, h = 0.0, 0.0, 200.0, 100.0
    canvas_w, canvas_h = max(1, int(math.ceil(w * scale))), max(1, int(math.ceil(h * scale)))

    def tx(x: float, y: float) -> tuple[float, float]:
        return (x - origin_x) * scale, (y - origin_y) * scale

    img = Image.new("RGB", (canvas_w, canvas_h), (255, 255, 255))
    draw = ImageDraw.Draw(img, "RGBA")
    font = _load_font(max(10, int(14 * scale)))
    small_font = _load_font(max(8, int(11 * scale)))

    for c in doc.connectors:
        start, end = doc.connector_endpoints(c)
        start, end = tx(*start), tx(*end)
        color = _rgba(c.stroke)
        width = max(1, int(round(c.stroke_width * scale)))
        _draw_line(draw, start, end, color, width, [d * scale for d in _dash_pattern(c.dash)])
        if c.marker_end:
            _draw_arrowhead(draw, start, end, color, 10 * scale)
        if c.label:
            _centered_text(draw, ((start[0] + end[0]) / 2, (start[1] + end[1]) / 2 - 8 * scale), c.label, _rgba("#374151"), small_font)

    for s in doc.shapes:
        _draw_shape(draw, s, tx, scale, font, small_font)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    img.save(out_path, "PNG")
    logger.debug("Wrote %dx%d PNG to %s", canvas_w, canvas_h, out_path)
    return out_path

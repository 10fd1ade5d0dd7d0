"""Export: portable snapshot of a scene and its JSON/SVG/HTML/PNG/XMind writers."""
from .snapshot import (
    Bounds,
    Connector,
    PortableDocument,
    Shape,
    export_snapshot,
    snapshot_filename,
    write_snapshot_json,
)
from .markup import render_snapshot_svg, write_snapshot_svg, write_snapshot_html
from .raster import render_snapshot_png
from .xmind import build_xmind, load_xmind_topic_titles, load_xmind_parent_child_pairs

__all__ = [
    "Bounds",
    "Connector",
    "PortableDocument",
    "Shape",
    "export_snapshot",
    "snapshot_filename",
    "write_snapshot_json",
    "render_snapshot_svg",
    "write_snapshot_svg",
    "write_snapshot_html",
    "render_snapshot_png",
    "build_xmind",
    "load_xmind_topic_titles",
    "load_xmind_parent_child_pairs",
]

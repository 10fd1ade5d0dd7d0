#!/usr/bin/env python3
"""
Root entry: apply visualization descriptions (JSON files) to one canvas -> export.
Supports --format json,svg,html,png,xmind and --timestamp for dated filenames.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from datetime import datetime
from pathlib import Path

_ROOT = Path(__file__).resolve().parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from vizcanvas.config import load_env, get_output_dir
from vizcanvas.graph import ShapeMismatchError
from vizcanvas.scene import CanvasSession
from vizcanvas.export import (
    build_xmind,
    render_snapshot_png,
    snapshot_filename,
    write_snapshot_html,
    write_snapshot_json,
    write_snapshot_svg,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

FORMATS = ("json", "svg", "html", "png", "xmind")


def _parse_formats(raw: str) -> list[str]:
    """Comma-separated format list -> ordered unique names; raises ValueError on unknown names."""
    out: list[str] = []
    for part in raw.split(","):
        name = part.strip().lower()
        if not name:
            continue
        if name not in FORMATS:
            raise ValueError(f"Unknown format {name!r} (choose from {', '.join(FORMATS)})")
        if name not in out:
            out.append(name)
    return out


def _write_outputs(session: CanvasSession, out_dir: Path, stem: str, formats: list[str], when: datetime | None) -> list[Path]:
    doc = session.export()
    written: list[Path] = []
    for fmt in formats:
        path = out_dir / snapshot_filename(stem, fmt, when)
        if fmt == "json":
            written.append(write_snapshot_json(doc, path))
        elif fmt == "svg":
            written.append(write_snapshot_svg(doc, path))
        elif fmt == "html":
            written.append(write_snapshot_html(doc, path, title=stem))
        elif fmt == "png":
            written.append(render_snapshot_png(doc, path))
        elif fmt == "xmind":
            written.append(build_xmind(session.scene, path, sheet_title=stem))
        logger.info("Wrote %s", path)
    return written


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Apply visualization descriptions (JSON) to one canvas, in order, and export it."
    )
    parser.add_argument(
        "descriptions",
        nargs="+",
        metavar="DESCRIPTION.json",
        help="Visualization description files ({\"type\": ..., \"data\": ...}); applied in order",
    )
    parser.add_argument(
        "--out-dir",
        metavar="DIR",
        default=None,
        help="Output directory (default: VIZ_OUTPUT_DIR or output/)",
    )
    parser.add_argument(
        "--name",
        metavar="STEM",
        default="canvas",
        help="Output filename stem (default: canvas)",
    )
    parser.add_argument(
        "--format",
        default="json,html",
        help=f"Comma-separated export formats: {','.join(FORMATS)} (default: json,html)",
    )
    parser.add_argument(
        "--timestamp",
        action="store_true",
        help="Append -YYYYmmdd-HHMMSS to output filenames",
    )
    args = parser.parse_args(argv)

    try:
        formats = _parse_formats(args.format)
    except ValueError as e:
        logger.error("%s", e)
        return 1

    load_env()
    out_dir = Path(args.out_dir) if args.out_dir else get_output_dir()

    paths = [Path(p) for p in args.descriptions]
    missing = [p for p in paths if not p.is_file()]
    if missing:
        for p in missing:
            logger.error("Description file not found: %s", p)
        return 1

    session = CanvasSession()
    t0 = time.perf_counter()
    for path in paths:
        try:
            report = session.apply(path.read_text(encoding="utf-8"))
        except ShapeMismatchError as e:
            logger.error("%s: malformed description (%s)", path, e)
            return 1
        except ValueError as e:
            # bad VIZ_* env values
            logger.error("%s: %s", path, e)
            return 1
        logger.info(
            "%s: %s (%s) +%d node(s), +%d edge(s)",
            path.name,
            report.kind,
            report.policy.value,
            len(report.added_node_ids),
            len(report.added_edge_ids),
        )
        for drop in report.dropped_edges:
            logger.warning("%s: dropped edge %s -> %s (%s)", path.name, drop.source, drop.target, drop.reason)

    scene = session.scene
    logger.info("Canvas: %d node(s), %d edge(s)", len(scene.nodes), len(scene.edges))

    when = datetime.now() if args.timestamp else None
    written = _write_outputs(session, out_dir, args.name, formats, when)
    logger.info("Done in %.2fs: %s", time.perf_counter() - t0, json.dumps([str(p) for p in written], ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Load .env from project root; expose VIZ_OUTPUT_DIR and per-kind layout spacing.
Call load_env() before reading os.environ directly; the getters call it themselves.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path


@dataclass(frozen=True)
class LayoutConfig:
    """Spacing and origin handed to a layout strategy."""
    horizontal_spacing: float
    vertical_spacing: float
    start_x: float = 0.0
    start_y: float = 0.0


# Defaults per visualization kind; venn uses start_x/start_y as the diagram center
# and horizontal_spacing as the circle offset.
_DEFAULT_CONFIGS: dict[str, LayoutConfig] = {
    "barChart": LayoutConfig(horizontal_spacing=0, vertical_spacing=0, start_x=0, start_y=0),
    "mindMap": LayoutConfig(horizontal_spacing=300, vertical_spacing=200, start_x=0, start_y=0),
    "flowChart": LayoutConfig(horizontal_spacing=400, vertical_spacing=200, start_x=500, start_y=100),
    "cycleDiagram": LayoutConfig(horizontal_spacing=400, vertical_spacing=200, start_x=500, start_y=100),
    "hierarchyDiagram": LayoutConfig(horizontal_spacing=400, vertical_spacing=200, start_x=500, start_y=100),
    "vennDiagram": LayoutConfig(horizontal_spacing=100, vertical_spacing=100, start_x=500, start_y=300),
    "arrowDiagram": LayoutConfig(horizontal_spacing=0, vertical_spacing=0, start_x=0, start_y=0),
}

_ENV_FIELDS = {
    "VIZ_HORIZONTAL_SPACING": "horizontal_spacing",
    "VIZ_VERTICAL_SPACING": "vertical_spacing",
    "VIZ_START_X": "start_x",
    "VIZ_START_Y": "start_y",
}


def _project_root() -> Path:
    """Project root (directory containing vizcanvas/)."""
    p = Path(__file__).resolve()
    # vizcanvas/config/config.py -> two levels up
    for _ in range(3):
        p = p.parent
        if (p / "vizcanvas").is_dir() and (p / "main.py").is_file():
            return p
    return Path.cwd()


def load_env() -> None:
    """Load env vars from project root .env if present."""
    root = _project_root()
    env_file = root / ".env"
    if not env_file.is_file():
        return
    for line in env_file.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, _, v = line.partition("=")
        k, v = k.strip(), v.strip().strip("'\"")
        if k and v:
            os.environ.setdefault(k, v)


def get_output_dir() -> Path:
    """Export root; default <project_root>/output."""
    load_env()
    out = os.environ.get("VIZ_OUTPUT_DIR")
    if out:
        return Path(out)
    return _project_root() / "output"


def default_layout_config(kind: str) -> LayoutConfig:
    """Built-in spacing for one visualization kind (no env overrides)."""
    try:
        return _DEFAULT_CONFIGS[kind]
    except KeyError:
        raise ValueError(f"No layout defaults for visualization type {kind!r}") from None


def get_layout_config(kind: str) -> LayoutConfig:
    """Per-kind defaults overridden by VIZ_HORIZONTAL_SPACING, VIZ_VERTICAL_SPACING, VIZ_START_X, VIZ_START_Y."""
    load_env()
    cfg = default_layout_config(kind)
    overrides: dict[str, float] = {}
    for env_key, field_name in _ENV_FIELDS.items():
        raw = os.environ.get(env_key)
        if raw is None or not raw.strip():
            continue
        try:
            overrides[field_name] = float(raw)
        except ValueError:
            raise ValueError(f"{env_key} must be a number, got {raw!r}") from None
    return replace(cfg, **overrides) if overrides else cfg

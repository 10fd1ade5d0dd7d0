"""Config: load .env, expose VIZ_OUTPUT_DIR and layout spacing (VIZ_* overrides)."""
from .config import (
    LayoutConfig,
    load_env,
    get_output_dir,
    default_layout_config,
    get_layout_config,
)

__all__ = [
    "LayoutConfig",
    "load_env",
    "get_output_dir",
    "default_layout_config",
    "get_layout_config",
]

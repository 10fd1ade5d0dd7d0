"""Tests for vizcanvas.config."""
from __future__ import annotations

import os
from pathlib import Path

import pytest

from vizcanvas.config import LayoutConfig, default_layout_config, get_layout_config, get_output_dir, load_env


def test_get_output_dir_default() -> None:
    """Without VIZ_OUTPUT_DIR, get_output_dir returns <root>/output."""
    got = get_output_dir()
    assert got.name == "output"


def test_get_output_dir_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("VIZ_OUTPUT_DIR", str(tmp_path / "exports"))
    assert get_output_dir() == tmp_path / "exports"


def test_default_layout_configs() -> None:
    assert default_layout_config("mindMap") == LayoutConfig(300, 200, 0, 0)
    assert default_layout_config("flowChart") == LayoutConfig(400, 200, 500, 100)
    assert default_layout_config("hierarchyDiagram") == default_layout_config("flowChart")
    venn = default_layout_config("vennDiagram")
    assert (venn.start_x, venn.start_y, venn.horizontal_spacing) == (500, 300, 100)


def test_default_layout_config_unknown_kind() -> None:
    with pytest.raises(ValueError, match="pieChart"):
        default_layout_config("pieChart")


def test_get_layout_config_env_override(monkeypatch) -> None:
    monkeypatch.setenv("VIZ_HORIZONTAL_SPACING", "123")
    monkeypatch.setenv("VIZ_START_Y", "-40.5")
    cfg = get_layout_config("flowChart")
    assert cfg.horizontal_spacing == 123.0
    assert cfg.start_y == -40.5
    # untouched fields keep the per-kind default
    assert cfg.vertical_spacing == 200
    assert cfg.start_x == 500


def test_get_layout_config_blank_env_ignored(monkeypatch) -> None:
    monkeypatch.setenv("VIZ_VERTICAL_SPACING", "   ")
    assert get_layout_config("mindMap") == default_layout_config("mindMap")


def test_get_layout_config_invalid_number(monkeypatch) -> None:
    monkeypatch.setenv("VIZ_START_X", "left")
    with pytest.raises(ValueError, match="VIZ_START_X"):
        get_layout_config("mindMap")


def test_load_env_reads_dotenv_without_override(monkeypatch, tmp_path: Path) -> None:
    """Values in .env fill gaps but never replace variables already set."""
    (tmp_path / ".env").write_text(
        "# comment\nVIZ_START_X=7\nVIZ_START_Y='9'\nnot a setting\n",
        encoding="utf-8",
    )
    monkeypatch.setattr("vizcanvas.config.config._project_root", lambda: tmp_path)
    monkeypatch.setenv("VIZ_START_Y", "3")
    load_env()
    assert os.environ["VIZ_START_X"] == "7"
    assert os.environ["VIZ_START_Y"] == "3"
    cfg = get_layout_config("flowChart")
    assert (cfg.start_x, cfg.start_y) == (7.0, 3.0)

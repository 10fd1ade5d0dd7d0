"""
Accept a visualization description from a producer (dict or raw text) and normalize it
to {"type": <kind>, "data": {...}}. Only the shape is checked here; each strategy
validates its own fields.
"""
from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any

from ..graph.errors import ShapeMismatchError
from .schema import BAR_CHART, MIND_MAP, VISUALIZATION_KINDS, VisualizationDescription

logger = logging.getLogger(__name__)


def _extract_json_text(raw: str) -> str:
    """Pull the JSON object out of producer text (markdown fence or surrounding prose)."""
    raw = raw.strip()
    m = re.search(r"```(?:json)?\s*(\{[\s\S]*\})\s*```", raw)
    if m:
        return m.group(1)
    m = re.search(r"\{[\s\S]*\}", raw)
    if m:
        return m.group(0)
    return raw


def normalize_description(obj: Mapping[str, Any]) -> VisualizationDescription:
    """Check the type tag and flatten the producer's nesting variants into `data`."""
    if not isinstance(obj, Mapping):
        raise ShapeMismatchError("description", f"expected an object, got {type(obj).__name__}")
    kind = obj.get("type")
    if kind not in VISUALIZATION_KINDS:
        raise ShapeMismatchError(
            "type",
            f"unknown visualization type {kind!r}; expected one of {', '.join(VISUALIZATION_KINDS)}",
        )
    if "data" in obj:
        data = obj["data"]
        if not isinstance(data, Mapping):
            raise ShapeMismatchError("data", f"expected an object, got {type(data).__name__}")
        data = dict(data)
    else:
        data = {k: v for k, v in obj.items() if k not in ("type", "reasoning", "position")}

    # Producer form: data.barChart.{categories, values, colors}
    if kind == BAR_CHART and isinstance(data.get("barChart"), Mapping):
        nested = dict(data.pop("barChart"))
        data = {**data, **nested}
    if kind == MIND_MAP and isinstance(data.get("root"), Mapping):
        data = dict(data["root"])
    return {"type": kind, "data": data}


def parse_description(raw: str | bytes | Mapping[str, Any]) -> VisualizationDescription:
    """Parse producer output (JSON text, fenced JSON, or an already-decoded dict)."""
    if isinstance(raw, Mapping):
        return normalize_description(raw)
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ShapeMismatchError("description", f"not valid UTF-8: {e}") from e
    text = _extract_json_text(raw)
    if not text:
        raise ShapeMismatchError("description", "empty input")
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as e:
        raise ShapeMismatchError("description", f"not valid JSON: {e}") from e
    desc = normalize_description(obj)
    logger.debug("Parsed %s description", desc["type"])
    return desc

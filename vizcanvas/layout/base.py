"""
Layout result type and the field checks shared by the strategies.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..graph.errors import ShapeMismatchError
from ..graph.model import Edge, Node


@dataclass
class Layout:
    """Positioned nodes and styled edges for one description; ids are layout-local."""
    kind: str
    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    levels: dict[str, int] = field(default_factory=dict)


def require_mapping(value: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ShapeMismatchError(path, f"expected an object, got {type(value).__name__}")
    return value


def require_list(data: Mapping[str, Any], key: str, path: str | None = None) -> list[Any]:
    path = path or key
    if key not in data or data[key] is None:
        raise ShapeMismatchError(path, "required array is missing")
    value = data[key]
    if not isinstance(value, (list, tuple)):
        raise ShapeMismatchError(path, f"expected an array, got {type(value).__name__}")
    return list(value)


def optional_list(data: Mapping[str, Any], key: str, path: str | None = None) -> list[Any]:
    if data.get(key) is None:
        return []
    return require_list(data, key, path)


def require_text(data: Mapping[str, Any], key: str, path: str) -> str:
    value = data.get(key)
    if value is None or isinstance(value, (dict, list, bool)):
        raise ShapeMismatchError(path, "required text is missing")
    return str(value)


def optional_text(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def require_number(value: Any, path: str) -> float:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ShapeMismatchError(path, f"expected a number, got {value!r}")
    return float(value)


def require_id(data: Mapping[str, Any], path: str) -> str:
    value = data.get("id")
    if value is None or isinstance(value, (dict, list, bool)) or str(value) == "":
        raise ShapeMismatchError(path, "required id is missing")
    return str(value)


def check_unique(ids: list[str], path: str) -> None:
    seen: set[str] = set()
    for i, nid in enumerate(ids):
        if nid in seen:
            raise ShapeMismatchError(f"{path}[{i}].id", f"duplicate id {nid!r}")
        seen.add(nid)

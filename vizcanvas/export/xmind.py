"""
Export the scene's tree structure to an XMind mind map; edges become parent-child links.
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..scene.graph import SceneGraph


def _children_by_node(scene: "SceneGraph") -> dict[str, list[str]]:
    children: dict[str, list[str]] = {n.id: [] for n in scene.nodes}
    for e in scene.edges:
        if e.target not in children[e.source]:
            children[e.source].append(e.target)
    return children


def _roots(scene: "SceneGraph") -> list[str]:
    """Nodes without an incoming edge, in insertion order."""
    targets = {e.target for e in scene.edges}
    return [n.id for n in scene.nodes if n.id not in targets]


def build_xmind(scene: "SceneGraph", out_path: Path | str, *, sheet_title: str = "Canvas") -> Path:
    """
    Build an XMind workbook from the scene. A single root node becomes the root topic;
    several roots hang under a topic named `sheet_title`. Nodes reachable twice are
    written once (first parent wins); nodes only reachable through a cycle are
    attached to the root topic.
    """
    try:
        from py_xmind16 import Workbook
    except ImportError as e:
        raise ImportError("py-xmind16 is required for XMind export. Install with: pip install py-xmind16") from e

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    workbook = Workbook()
    sheet = workbook.create_sheet(sheet_title)
    root = sheet.get_root_topic()

    nodes = scene.nodes
    if not nodes:
        root.title = "(No content)"
        workbook.save(str(out_path))
        return out_path

    titles = {n.id: n.title or n.id for n in nodes}
    children = _children_by_node(scene)

    def add_children(parent_topic: Any, node_id: str, visited: set[str]) -> None:
        # Pre-order stack walk, children in edge order.
        stack: list[tuple[Any, str]] = [(parent_topic, node_id)]
        while stack:
            topic, current = stack.pop()
            pending = []
            for child in children[current]:
                if child in visited:
                    continue
                visited.add(child)
                pending.append((topic.add_subtopic(titles[child]), child))
            stack.extend(reversed(pending))

    roots = _roots(scene)
    visited: set[str] = set()
    if len(roots) == 1:
        root.title = titles[roots[0]]
        visited.add(roots[0])
        add_children(root, roots[0], visited)
    else:
        root.title = sheet_title
        for rid in roots:
            visited.add(rid)
            sub = root.add_subtopic(titles[rid])
            add_children(sub, rid, visited)

    for n in nodes:
        if n.id not in visited:
            visited.add(n.id)
            sub = root.add_subtopic(titles[n.id])
            add_children(sub, n.id, visited)

    workbook.save(str(out_path))
    return out_path


def _sheets(xmind_path: Path | str) -> list[Any]:
    from py_xmind16 import Workbook

    w = Workbook.load(str(xmind_path))
    return [w.get_sheet(i) for i in range(w.sheet_count)]


def load_xmind_topic_titles(xmind_path: Path | str) -> list[str]:
    """All topic titles in traversal order."""
    titles: list[str] = []
    for sheet in _sheets(xmind_path):
        stack = [sheet.root_topic] if sheet.root_topic else []
        while stack:
            topic = stack.pop()
            t = getattr(topic, "title", None)
            if t:
                titles.append(str(t).strip())
            stack.extend(reversed(list(getattr(topic, "subtopics", None) or [])))
    return titles


def load_xmind_parent_child_pairs(xmind_path: Path | str) -> list[tuple[str, str]]:
    """(parent_title, child_title) for each link in the workbook."""
    pairs: list[tuple[str, str]] = []
    for sheet in _sheets(xmind_path):
        stack: list[tuple[str | None, Any]] = [(None, sheet.root_topic)] if sheet.root_topic else []
        while stack:
            parent_title, topic = stack.pop()
            t = getattr(topic, "title", None)
            if not t:
                continue
            current = str(t).strip()
            if parent_title is not None:
                pairs.append((parent_title, current))
            stack.extend((current, st) for st in reversed(list(getattr(topic, "subtopics", None) or [])))
    return pairs

"""Corpus tree builder: flat relative paths into an ordered hierarchy."""

from __future__ import annotations

import posixpath
from collections.abc import Iterable
from dataclasses import dataclass, field

from dodo.models.corpus import FileNode, NodeType


@dataclass
class _Dir:
    name: str
    path: str
    dirs: dict[str, _Dir] = field(default_factory=dict)
    files: dict[str, str] = field(default_factory=dict)  # path -> display name


def normalize_path(path: str) -> str:
    """Strip leading ``/`` and ``./`` and drop empty segments."""
    parts = [p for p in path.replace("\\", "/").split("/") if p and p != "."]
    return "/".join(parts)


def display_name(filename: str) -> str:
    """File name without its extension, e.g. ``"user-system.md"`` -> ``"user-system"``."""
    stem, _ext = posixpath.splitext(posixpath.basename(filename))
    return stem or filename


def build_tree(paths: Iterable[str], directories: Iterable[str] = ()) -> list[FileNode]:
    """Build the sorted corpus tree.

    Args:
        paths: Corpus-relative file paths, in any order.
        directories: Extra directory paths to show even when they hold no files.

    Returns:
        Top-level nodes. Directories come before files at every level; each
        group is ordered by name, then path. Two files sharing a prefix share
        one directory node for it.
    """
    root = _Dir(name="", path="")

    for raw in directories:
        rel = normalize_path(raw)
        if rel:
            _ensure_dir(root, rel.split("/"))

    for raw in paths:
        rel = normalize_path(raw)
        if not rel:
            continue
        *parents, filename = rel.split("/")
        parent = _ensure_dir(root, parents)
        parent.files[rel] = display_name(filename)

    return _to_nodes(root)


def _ensure_dir(root: _Dir, segments: list[str]) -> _Dir:
    node = root
    for segment in segments:
        child = node.dirs.get(segment)
        if child is None:
            path = f"{node.path}/{segment}" if node.path else segment
            child = _Dir(name=segment, path=path)
            node.dirs[segment] = child
        node = child
    return node


def _to_nodes(directory: _Dir) -> list[FileNode]:
    dirs = sorted(directory.dirs.values(), key=lambda d: (d.name, d.path))
    files = sorted(directory.files.items(), key=lambda item: (item[1], item[0]))
    nodes = [
        FileNode(name=d.name, path=d.path, type=NodeType.DIR, children=_to_nodes(d))
        for d in dirs
    ]
    nodes.extend(
        FileNode(name=name, path=path, type=NodeType.FILE)
        for path, name in files
    )
    return nodes


def count_files(node: FileNode) -> int:
    if node.type == NodeType.FILE:
        return 1
    return sum(count_files(child) for child in node.children or [])

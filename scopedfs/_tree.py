from __future__ import annotations

from collections.abc import Iterable

from ._host import HostDirectoryHandle, HostHandle
from ._typing import FilterKind, TreeNode
from ._walk import read_children


def to_filter_kind(files: bool, dirs: bool) -> FilterKind:
    if files and dirs:
        return "all"
    if not files and not dirs:
        return "none"
    return "file" if files else "dir"


def filter_entries(kind: FilterKind, entries: Iterable[HostHandle]) -> list[HostHandle]:
    if kind == "none":
        return []
    if kind == "all":
        return list(entries)
    wanted = "file" if kind == "file" else "directory"
    return [entry for entry in entries if entry.kind == wanted]


def check_depth(depth: int) -> None:
    if depth < 1:
        raise ValueError(f"depth must be >= 1, got {depth}.")


async def build_tree(
    directory: HostDirectoryHandle,
    kind: FilterKind,
    max_depth: int,
    depth: int = 1,
) -> list[TreeNode]:
    """Snapshot the subtree of *directory* down to *max_depth* levels.

    The filter is applied before descending: a directory excluded by *kind*
    hides its whole subtree, matching descendants included.
    """
    if kind == "none":
        return []
    entries = await read_children(directory)
    if entries is None:
        return []

    nodes: list[TreeNode] = []
    for entry in filter_entries(kind, entries):
        if entry.kind == "file" or depth == max_depth:
            nodes.append(TreeNode(handle=entry, children=None))
        else:
            children = await build_tree(entry, kind, max_depth, depth + 1)
            nodes.append(TreeNode(handle=entry, children=children))
    return nodes


def flatten_tree(tree: list[TreeNode]) -> list[HostHandle]:
    """Pre-order: every entry precedes its own children."""
    result: list[HostHandle] = []
    for node in tree:
        result.append(node["handle"])
        if node["children"]:
            result.extend(flatten_tree(node["children"]))
    return result


async def render_tree(
    directory: HostDirectoryHandle,
    kind: FilterKind,
    max_depth: int,
    depth: int = 1,
) -> list[str]:
    lines = [f"{directory.name}/"]
    if kind == "none":
        return lines
    entries = await read_children(directory)
    if entries is None:
        return lines

    filtered = filter_entries(kind, entries)
    last_index = len(filtered) - 1
    for index, entry in enumerate(filtered):
        is_last = index == last_index
        connector = "└─" if is_last else "├─"
        if entry.kind == "file":
            lines.append(f"{connector} {entry.name}")
        elif depth == max_depth:
            lines.append(f"{connector} {entry.name}/")
        else:
            inner = await render_tree(entry, kind, max_depth, depth + 1)
            continuation = "  " if is_last else "│ "
            lines.append(f"{connector} {inner[0]}")
            lines.extend(f"{continuation} {line}" for line in inner[1:])
    return lines

"""Size tree builder and text renderer for directory hierarchies."""

from __future__ import annotations

import os
from typing import Callable

from DuTree.aggregator import Aggregator
from DuTree.entry_utils import mark_name, safe_name
from DuTree.filesystems.base import ChildEntry, FilesystemProvider
from DuTree.filesystems.local import LocalFilesystem
from DuTree.formatting import format_size
from DuTree.models import FileKind, TreeNode
from DuTree.scanner import PathNotFoundError

UNICODE_GLYPHS = ("└── ", "├── ", "│   ")
ASCII_GLYPHS = ("`-- ", "+-- ", "|   ")


def collect_entries(
    path: str,
    base_path: str,
    depth: int = 1,
    max_depth: int | None = None,
    aggregator: Aggregator | None = None,
) -> list[tuple[str, int, bool]]:
    """Collect ``(relative_path, size, is_dir)`` for entries below *path*.

    *depth* is the level of the children of *path* (1 for the children of
    *base_path*); levels deeper than *max_depth* are not collected. A
    directory's size always covers its whole subtree, even beyond
    *max_depth*. The order of the returned list is not significant.

    Directories are listed level by level, each level in parallel. Every
    directory is listed once: sizes of collected directories are summed
    from their children, and only directories on the depth boundary are
    sized by a separate walk.
    """
    if aggregator is None:
        with Aggregator() as owned:
            return collect_entries(path, base_path, depth, max_depth, owned)

    if max_depth is not None and depth > max_depth:
        return []

    listed: dict[str, list[tuple[ChildEntry, int]]] = {}
    boundary: list[str] = []
    frontier = [path]
    while frontier:
        levels = aggregator.read_levels(frontier)
        descend = max_depth is None or depth < max_depth
        next_frontier: list[str] = []
        for dir_path in frontier:
            listed[dir_path] = levels[dir_path]
            subdirs = [
                child.path for child, _ in levels[dir_path]
                if child.kind is FileKind.DIRECTORY
            ]
            (next_frontier if descend else boundary).extend(subdirs)
        frontier = next_frontier
        depth += 1

    # listed is in breadth-first order, so children are summed before parents
    sizes = aggregator.sizes_of(boundary)
    for dir_path in reversed(listed):
        sizes[dir_path] = sum(
            length if child.kind is FileKind.FILE else sizes.get(child.path, 0)
            for child, length in listed[dir_path]
        )

    entries: list[tuple[str, int, bool]] = []
    for level in listed.values():
        for child, length in level:
            relative = os.path.relpath(child.path, base_path)
            if child.kind is FileKind.FILE:
                entries.append((relative, length, False))
            elif child.kind is FileKind.DIRECTORY:
                entries.append((relative, sizes[child.path], True))
    return entries


def build_tree(
    entries: list[tuple[str, int, bool]],
    sep: str = os.sep,
) -> TreeNode:
    """Assemble flat relative paths into a tree under a synthetic root.

    Intermediate nodes that never appear as an entry keep the defaults
    (size 0, not a directory).
    """
    root = TreeNode()
    for path, size, is_dir in entries:
        node = root
        for part in path.split(sep):
            node = node.children.setdefault(part, TreeNode())
        node.size = size
        node.is_dir = is_dir
    return root


def render_tree(
    node: TreeNode,
    prefix: str = "",
    use_ascii: bool = False,
    size_formatter: Callable[[int], str] = format_size,
) -> str:
    """Render the children of *node* as indented text, one line per entry.

    Example output:
        ├── src/  (2.1 kB)
        │   └── main.py*  (2.1 kB)
        └── README.md*  (120 Bytes)
    """
    branch_last, branch_mid, pipe = ASCII_GLYPHS if use_ascii else UNICODE_GLYPHS
    lines: list[str] = []

    children = sorted(node.children.items())
    for i, (name, child) in enumerate(children):
        is_last = i == len(children) - 1
        connector = branch_last if is_last else branch_mid
        label = mark_name(safe_name(name), child.is_dir)
        lines.append(f"{prefix}{connector}{label}  ({size_formatter(child.size)})\n")

        if child.children:
            extension = "    " if is_last else pipe
            lines.append(
                render_tree(child, prefix + extension, use_ascii, size_formatter)
            )
    return "".join(lines)


def build_size_tree(
    path: str,
    depth: int | None = None,
    fs: FilesystemProvider | None = None,
    max_workers: int | None = None,
) -> TreeNode:
    """Collect and assemble the size tree of *path*, at most *depth* levels deep."""
    path = str(path)
    with Aggregator(fs=fs, max_workers=max_workers) as aggregator:
        entries = collect_entries(path, path, 1, depth, aggregator)
    return build_tree(entries, aggregator.fs.sep)


def tree_for_root(
    path: str,
    depth: int | None = None,
    fs: FilesystemProvider | None = None,
    max_workers: int | None = None,
) -> TreeNode:
    """Return the size tree of a root path, with the root's own size set.

    A file root gives a childless node holding the file's length.

    Raises:
        PathNotFoundError: *path* does not exist.
    """
    fs = fs or LocalFilesystem()
    path = str(path)
    if not fs.exists(path):
        raise PathNotFoundError(path)
    if fs.is_file(path):
        return TreeNode(size=fs.file_length(path))
    tree = build_size_tree(path, depth, fs=fs, max_workers=max_workers)
    tree.size = sum(child.size for child in tree.children.values())
    tree.is_dir = True
    return tree


def root_label(path: str, node: TreeNode) -> str:
    """Return the header line name for a root, marked like its entries."""
    stripped = str(path).rstrip(os.sep + (os.altsep or ""))
    if not stripped:
        return safe_name(str(path))
    return mark_name(safe_name(stripped), node.is_dir)


def generate_tree(
    path: str,
    depth: int | None = None,
    use_ascii: bool = False,
    fs: FilesystemProvider | None = None,
    max_workers: int | None = None,
) -> str:
    """Render the size tree of *path*, at most *depth* levels deep."""
    tree = build_size_tree(path, depth, fs=fs, max_workers=max_workers)
    return render_tree(tree, use_ascii=use_ascii)

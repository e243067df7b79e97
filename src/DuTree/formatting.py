"""Human-readable sizes, JSON output and table layout."""

from __future__ import annotations

import json

import humanize
from rich.table import Table
from rich.text import Text

from DuTree.entry_utils import display_name
from DuTree.models import Entry, TreeNode

DIR_STYLE = "blue"
FILE_STYLE = "green"


def format_size(size: int) -> str:
    """Format a byte count with decimal SI units, e.g. ``1.5 kB``."""
    return humanize.naturalsize(size)


def entries_to_json(entries: list[Entry]) -> str:
    return json.dumps(
        [{"name": e.name, "size": e.size, "is_dir": e.is_dir} for e in entries],
        indent=2,
    )


def tree_to_dict(node: TreeNode) -> dict:
    """Convert a tree into nested plain dicts, children sorted by name."""
    return {
        "size": node.size,
        "is_dir": node.is_dir,
        "children": {
            name: tree_to_dict(child) for name, child in sorted(node.children.items())
        },
    }


def tree_to_json(node: TreeNode) -> str:
    return json.dumps(tree_to_dict(node)["children"], indent=2)


def build_table(
    entries: list[Entry],
    truncate: bool = True,
    color: bool = True,
) -> Table:
    """Lay out entries as a borderless two-column table.

    Entries are shown in the order given; sorting is up to the caller.
    """
    table = Table(show_header=False, box=None, pad_edge=False, width=80)
    table.add_column("Name", overflow="fold")
    table.add_column("Size", justify="right")
    for entry in entries:
        style = (DIR_STYLE if entry.is_dir else FILE_STYLE) if color else None
        table.add_row(
            Text(display_name(entry, truncate=truncate)),
            format_size(entry.size),
            style=style,
        )
    return table

"""Data classes for DuTree."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class FileKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"
    UNKNOWN = "unknown"  # type lookup failed


@dataclass
class Entry:
    name: str
    size: int = 0
    is_dir: bool = False


@dataclass
class TreeNode:
    """One path segment of a size tree.

    The root node is synthetic; only its descendants are rendered.
    """

    size: int = 0
    is_dir: bool = False
    children: dict[str, TreeNode] = field(default_factory=dict)


@dataclass
class ScanResult:
    table: dict[str, Entry] = field(default_factory=dict)
    roots: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.table

    @property
    def last_root_missing(self) -> bool:
        """True when the last supplied root did not exist."""
        return bool(self.roots) and bool(self.missing) and self.missing[-1] == self.roots[-1]

    @property
    def total_size(self) -> int:
        return sum(entry.size for entry in self.table.values())

    def entries(self) -> list[Entry]:
        return list(self.table.values())

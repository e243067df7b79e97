"""Shared fixtures: an in-memory filesystem provider with failure injection."""

from __future__ import annotations

import pytest

from DuTree.filesystems.base import (
    ChildEntry,
    FilesystemProvider,
    Metadata,
    MetadataError,
    ReadError,
)
from DuTree.models import FileKind

ROOT = "/data"


class FakeFilesystem(FilesystemProvider):
    """Filesystem built from nested dicts.

    An int value is a file of that length, a dict is a directory, ``"link"``
    is a symlink and ``"?"`` an entry whose type cannot be determined.
    """

    sep = "/"

    def __init__(self, tree: dict, unreadable=(), broken=()):
        self.tree = tree
        self.unreadable = set(unreadable)
        self.broken = set(broken)
        self.listed: list[str] = []

    def _lookup(self, path: str):
        if path == ROOT:
            return self.tree
        if not path.startswith(ROOT + "/"):
            return None
        node = self.tree
        for part in path[len(ROOT) + 1:].split("/"):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def join(self, parent: str, name: str) -> str:
        return f"{parent}/{name}"

    def exists(self, path: str) -> bool:
        return self._lookup(path) is not None

    def is_file(self, path: str) -> bool:
        return isinstance(self._lookup(path), int)

    def is_directory(self, path: str) -> bool:
        return isinstance(self._lookup(path), dict)

    def list_children(self, path: str) -> list[ChildEntry]:
        node = self._lookup(path)
        if not isinstance(node, dict) or path in self.unreadable:
            raise ReadError(path, "Permission denied")
        self.listed.append(path)
        kinds = []
        for name, value in node.items():
            if isinstance(value, dict):
                kind = FileKind.DIRECTORY
            elif isinstance(value, int):
                kind = FileKind.FILE
            elif value == "link":
                kind = FileKind.SYMLINK
            else:
                kind = FileKind.UNKNOWN
            kinds.append(ChildEntry(name=name, path=self.join(path, name), kind=kind))
        return kinds

    def metadata(self, path: str) -> Metadata:
        node = self._lookup(path)
        if node is None or path in self.broken:
            raise MetadataError(path, "No such file or directory")
        if isinstance(node, int):
            return Metadata(length=node, is_file=True, is_dir=False)
        return Metadata(length=0, is_file=False, is_dir=isinstance(node, dict))


@pytest.fixture
def make_fs():
    return FakeFilesystem


@pytest.fixture
def sample_fs():
    return FakeFilesystem(
        {
            "README.md": 100,
            "src": {
                "main.py": 200,
                "utils.py": 300,
                "pkg": {"mod.py": 400, "data": {"blob.bin": 1000}},
            },
            "empty": {},
            "link": "link",
        }
    )

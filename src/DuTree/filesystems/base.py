"""Abstract base class for filesystem providers."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass

from DuTree.models import FileKind


class ReadError(Exception):
    """Raised when a directory cannot be listed."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        super().__init__(f"Cannot read directory {path}: {reason}" if reason else f"Cannot read directory {path}")


class MetadataError(Exception):
    """Raised when the metadata of an entry cannot be read."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        super().__init__(f"Cannot stat {path}: {reason}" if reason else f"Cannot stat {path}")


@dataclass(frozen=True)
class ChildEntry:
    name: str
    path: str
    kind: FileKind


@dataclass(frozen=True)
class Metadata:
    length: int
    is_file: bool
    is_dir: bool


class FilesystemProvider(ABC):
    """Read-only view of a filesystem used by the aggregator and tree builder."""

    sep: str = os.sep

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return True if *path* refers to an existing entry."""

    @abstractmethod
    def is_file(self, path: str) -> bool:
        """Return True if *path* is a regular file."""

    @abstractmethod
    def is_directory(self, path: str) -> bool:
        """Return True if *path* is a directory."""

    @abstractmethod
    def list_children(self, path: str) -> list[ChildEntry]:
        """List the immediate children of a directory.

        Raises:
            ReadError: the directory cannot be listed.
        """

    @abstractmethod
    def metadata(self, path: str) -> Metadata:
        """Return length and type flags for *path*.

        Raises:
            MetadataError: the entry cannot be stat'ed.
        """

    def join(self, parent: str, name: str) -> str:
        return os.path.join(parent, name)

    def file_length(self, path: str) -> int:
        """Return the byte length of a file, or 0 if it cannot be read."""
        try:
            return self.metadata(path).length
        except MetadataError:
            return 0

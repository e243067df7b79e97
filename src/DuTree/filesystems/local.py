"""Filesystem provider backed by the local operating system."""

from __future__ import annotations

import os
import stat

from DuTree.filesystems.base import (
    ChildEntry,
    FilesystemProvider,
    Metadata,
    MetadataError,
    ReadError,
)
from DuTree.models import FileKind


def _classify(entry: os.DirEntry) -> FileKind:
    """Classify a directory entry without following symbolic links."""
    try:
        if entry.is_symlink():
            return FileKind.SYMLINK
        if entry.is_file(follow_symlinks=False):
            return FileKind.FILE
        if entry.is_dir(follow_symlinks=False):
            return FileKind.DIRECTORY
    except OSError:
        return FileKind.UNKNOWN
    return FileKind.OTHER


class LocalFilesystem(FilesystemProvider):
    """Provider for the local filesystem using ``os.scandir`` and ``os.stat``."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def is_directory(self, path: str) -> bool:
        return os.path.isdir(path)

    def list_children(self, path: str) -> list[ChildEntry]:
        try:
            with os.scandir(path) as it:
                return [
                    ChildEntry(name=entry.name, path=entry.path, kind=_classify(entry))
                    for entry in it
                ]
        except OSError as exc:
            raise ReadError(path, exc.strerror or str(exc)) from exc

    def metadata(self, path: str) -> Metadata:
        try:
            st = os.stat(path)
        except OSError as exc:
            raise MetadataError(path, exc.strerror or str(exc)) from exc
        return Metadata(
            length=st.st_size,
            is_file=stat.S_ISREG(st.st_mode),
            is_dir=stat.S_ISDIR(st.st_mode),
        )

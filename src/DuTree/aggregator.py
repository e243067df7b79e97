"""Recursive, parallel directory size aggregation."""

from __future__ import annotations

import logging
import os
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from functools import partial
from typing import Iterable

from DuTree.filesystems.base import (
    ChildEntry,
    FilesystemProvider,
    MetadataError,
    ReadError,
)
from DuTree.filesystems.local import LocalFilesystem
from DuTree.models import FileKind

logger = logging.getLogger(__name__)


def _read_level(fs: FilesystemProvider, path: str) -> list[tuple[ChildEntry, int]]:
    """List *path* as ``(child, length)`` pairs.

    Only files carry a length. Unreadable directories list as empty and
    unreadable files have length 0.
    """
    try:
        children = fs.list_children(path)
    except ReadError as exc:
        logger.debug("Skipping unreadable directory: %s", exc)
        return []

    level: list[tuple[ChildEntry, int]] = []
    for child in children:
        length = 0
        if child.kind is FileKind.FILE:
            try:
                length = fs.metadata(child.path).length
            except MetadataError as exc:
                logger.debug("Counting unreadable file as empty: %s", exc)
        level.append((child, length))
    return level


def _list_level(fs: FilesystemProvider, path: str) -> tuple[int, list[str]]:
    """Sum the immediate files of *path* and return its subdirectories."""
    level = _read_level(fs, path)
    file_bytes = sum(length for _, length in level)
    subdirs = [child.path for child, _ in level if child.kind is FileKind.DIRECTORY]
    return file_bytes, subdirs


class Aggregator:
    """Computes recursive directory sizes on a fixed-size thread pool.

    Each pool task lists exactly one directory. The calling thread collects
    finished tasks, adds their byte counts to the total of the root they
    belong to and submits the subdirectories they found, so no worker ever
    blocks on another worker.

    There is no cycle detection. Symbolic links are never followed, but a
    filesystem that is cyclic through other means (bind mounts, for
    example) makes the walk run forever.
    """

    def __init__(
        self,
        fs: FilesystemProvider | None = None,
        max_workers: int | None = None,
    ):
        self.fs = fs or LocalFilesystem()
        self.max_workers = max_workers or os.cpu_count() or 1
        self._pool = ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="dutree"
        )

    def __enter__(self) -> Aggregator:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._pool.shutdown(wait=True)

    def size_of(self, path: str) -> int:
        """Return the total size in bytes of all files beneath *path*."""
        return self.sizes_of([path])[path]

    def read_levels(self, paths: list[str]) -> dict[str, list[tuple[ChildEntry, int]]]:
        """List several directories in parallel, see ``_read_level``."""
        return dict(zip(paths, self._pool.map(partial(_read_level, self.fs), paths)))

    def sizes_of(self, paths: Iterable[str]) -> dict[str, int]:
        """Return the recursive size of each directory in *paths*.

        All roots share one walk so sibling directories are sized in
        parallel. Totals are sums, so completion order does not matter.
        """
        totals: dict[str, int] = {}
        pending: dict[Future, str] = {}
        for root in paths:
            if root in totals:
                continue
            totals[root] = 0
            pending[self._pool.submit(_list_level, self.fs, root)] = root

        while pending:
            done, _ = wait(pending, return_when=FIRST_COMPLETED)
            for future in done:
                root = pending.pop(future)
                file_bytes, subdirs = future.result()
                totals[root] += file_bytes
                for subdir in subdirs:
                    pending[self._pool.submit(_list_level, self.fs, subdir)] = root
        return totals


def aggregate_size(
    path: str,
    fs: FilesystemProvider | None = None,
    max_workers: int | None = None,
) -> int:
    """Return the recursive size of the directory at *path*.

    A missing or unreadable directory yields 0.
    """
    with Aggregator(fs=fs, max_workers=max_workers) as aggregator:
        return aggregator.size_of(str(path))

"""Top-level scan: one sized entry per immediate child of each root path."""

from __future__ import annotations

import logging
import os
from typing import Iterable

from DuTree.aggregator import Aggregator
from DuTree.filesystems.base import FilesystemProvider, ReadError
from DuTree.models import Entry, FileKind, ScanResult

logger = logging.getLogger(__name__)


class PathNotFoundError(Exception):
    """Raised when a root path does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"{path} does not exist")


def _base_name(path: str) -> str:
    return os.path.basename(os.path.normpath(path)) or path


def scan_root(
    path: str,
    aggregator: Aggregator,
    errors: list[str] | None = None,
) -> list[Entry]:
    """Return one Entry per immediate child of *path*.

    A file root yields a single entry for the file itself. Children whose
    type cannot be determined are skipped and reported in *errors*.

    Raises:
        PathNotFoundError: *path* does not exist.
    """
    fs = aggregator.fs
    if not fs.exists(path):
        raise PathNotFoundError(path)

    if fs.is_file(path):
        return [Entry(name=_base_name(path), size=fs.file_length(path), is_dir=False)]

    try:
        children = fs.list_children(path)
    except ReadError as exc:
        logger.warning("%s", exc)
        if errors is not None:
            errors.append(str(exc))
        return []

    entries: list[Entry] = []
    dirs = []
    for child in children:
        if child.kind is FileKind.FILE:
            entries.append(Entry(name=child.name, size=fs.file_length(child.path)))
        elif child.kind is FileKind.DIRECTORY:
            dirs.append(child)
        elif child.kind is FileKind.UNKNOWN:
            message = f"{child.path}: cannot determine file type, skipped"
            logger.warning("%s", message)
            if errors is not None:
                errors.append(message)

    sizes = aggregator.sizes_of(child.path for child in dirs)
    entries.extend(
        Entry(name=child.name, size=sizes[child.path], is_dir=True) for child in dirs
    )
    return entries


def scan_paths(
    paths: Iterable[str],
    fs: FilesystemProvider | None = None,
    max_workers: int | None = None,
) -> ScanResult:
    """Scan every root in order and merge the entries into one table.

    The table is keyed by entry name. When two roots yield the same name
    the later one replaces the earlier one.
    """
    result = ScanResult()
    with Aggregator(fs=fs, max_workers=max_workers) as aggregator:
        for path in paths:
            path = str(path)
            result.roots.append(path)
            try:
                entries = scan_root(path, aggregator, result.errors)
            except PathNotFoundError as exc:
                logger.info("%s", exc)
                result.missing.append(path)
                continue

            for entry in entries:
                if entry.name in result.table:
                    logger.info("Entry %r from %s replaces an earlier one", entry.name, path)
                result.table[entry.name] = entry
    return result

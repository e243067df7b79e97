"""Sorting and display-name helpers for scan entries."""

from __future__ import annotations

import os

from DuTree.models import Entry

MAX_FILENAME_LENGTH = 25


def sort_by_size(entries: list[Entry]) -> list[Entry]:
    """Return the entries largest first. Equal sizes keep their order."""
    return sorted(entries, key=lambda e: e.size, reverse=True)


def sort_by_name(entries: list[Entry]) -> list[Entry]:
    """Return the entries in ascending name order."""
    return sorted(entries, key=lambda e: e.name)


def truncate_filename(name: str, max_length: int = MAX_FILENAME_LENGTH) -> str:
    """Shorten the stem of *name* to *max_length* characters.

    The extension is kept: ``"x" * 30 + ".txt"`` becomes
    ``"x" * 25 + "....txt"``.
    """
    stem, ext = os.path.splitext(name)
    if len(stem) > max_length:
        stem = f"{stem[:max_length]}..."
    return f"{stem}{ext}"


def safe_name(name: str) -> str:
    """Return *name* with undecodable bytes replaced by U+FFFD.

    ``os.scandir`` returns names that are not valid UTF-8 with surrogate
    escapes, which cannot be written to a UTF-8 stream.
    """
    return os.fsencode(name).decode("utf-8", "replace")


def mark_name(name: str, is_dir: bool) -> str:
    """Append ``/`` to directory names and ``*`` to file names."""
    return f"{name}/" if is_dir else f"{name}*"


def display_name(entry: Entry, truncate: bool = True) -> str:
    """Return the printable, marked name shown for an entry."""
    name = safe_name(entry.name)
    if truncate:
        name = truncate_filename(name)
    return mark_name(name, entry.is_dir)

"""Tests for entry_utils module."""

from DuTree.entry_utils import (
    MAX_FILENAME_LENGTH,
    display_name,
    mark_name,
    safe_name,
    sort_by_name,
    sort_by_size,
    truncate_filename,
)
from DuTree.models import Entry


def _entries():
    return [
        Entry("file1.txt", 100),
        Entry("docs", 300, True),
        Entry("file2.txt", 200),
    ]


class TestSortBySize:
    def test_largest_first(self):
        assert [e.name for e in sort_by_size(_entries())] == ["docs", "file2.txt", "file1.txt"]

    def test_ties_keep_order(self):
        entries = [Entry("b", 5), Entry("a", 5), Entry("c", 9)]
        assert [e.name for e in sort_by_size(entries)] == ["c", "b", "a"]

    def test_does_not_mutate_input(self):
        entries = _entries()
        sort_by_size(entries)
        assert [e.name for e in entries] == ["file1.txt", "docs", "file2.txt"]


class TestSortByName:
    def test_ascending(self):
        assert [e.name for e in sort_by_name(_entries())] == ["docs", "file1.txt", "file2.txt"]

    def test_empty(self):
        assert sort_by_name([]) == []


class TestTruncateFilename:
    def test_short_name_unchanged(self):
        assert truncate_filename("README.md") == "README.md"

    def test_long_stem_truncated(self):
        name = "x" * 30 + ".txt"
        assert truncate_filename(name) == "x" * MAX_FILENAME_LENGTH + "....txt"

    def test_exact_length_unchanged(self):
        name = "y" * MAX_FILENAME_LENGTH
        assert truncate_filename(name) == name

    def test_no_extension(self):
        assert truncate_filename("z" * 40) == "z" * MAX_FILENAME_LENGTH + "..."

    def test_custom_length(self):
        assert truncate_filename("abcdefgh.py", max_length=3) == "abc....py"


class TestDisplayName:
    def test_directory_gets_slash(self):
        assert display_name(Entry("docs", 1, True)) == "docs/"

    def test_file_gets_star(self):
        assert display_name(Entry("a.txt", 1, False)) == "a.txt*"

    def test_truncation_optional(self):
        entry = Entry("q" * 40, 1, False)
        assert display_name(entry, truncate=False) == "q" * 40 + "*"
        assert display_name(entry).endswith("...*")

    def test_undecodable_name(self):
        assert display_name(Entry("bad\udcff.txt", 1, False)) == "bad�.txt*"


class TestMarkName:
    def test_directory(self):
        assert mark_name("src", True) == "src/"

    def test_file(self):
        assert mark_name("main.py", False) == "main.py*"


class TestSafeName:
    def test_valid_name_unchanged(self):
        assert safe_name("résumé.txt") == "résumé.txt"

    def test_surrogate_escape_replaced(self):
        assert safe_name("caf\udce9") == "caf�"

"""Tests for formatting module."""

import json

from rich.console import Console

from DuTree.formatting import (
    build_table,
    entries_to_json,
    format_size,
    tree_to_dict,
    tree_to_json,
)
from DuTree.models import Entry, TreeNode


class TestFormatSize:
    def test_bytes(self):
        assert format_size(19) == "19 Bytes"

    def test_decimal_units(self):
        assert format_size(1500) == "1.5 kB"
        assert format_size(2_000_000) == "2.0 MB"

    def test_zero(self):
        assert format_size(0) == "0 Bytes"


class TestEntriesToJson:
    def test_fields(self):
        data = json.loads(entries_to_json([Entry("src", 10, True), Entry("a.txt", 3)]))
        assert data == [
            {"name": "src", "size": 10, "is_dir": True},
            {"name": "a.txt", "size": 3, "is_dir": False},
        ]

    def test_empty(self):
        assert json.loads(entries_to_json([])) == []


class TestTreeToDict:
    def test_nested(self):
        root = TreeNode(
            children={
                "src": TreeNode(
                    size=5, is_dir=True, children={"a.py": TreeNode(size=5)}
                ),
            }
        )
        assert tree_to_dict(root) == {
            "size": 0,
            "is_dir": False,
            "children": {
                "src": {
                    "size": 5,
                    "is_dir": True,
                    "children": {"a.py": {"size": 5, "is_dir": False, "children": {}}},
                }
            },
        }

    def test_json_drops_synthetic_root(self):
        root = TreeNode(children={"b": TreeNode(size=1), "a": TreeNode(size=2)})
        data = json.loads(tree_to_json(root))
        assert list(data) == ["a", "b"]


class TestBuildTable:
    def _render(self, table) -> str:
        console = Console(width=80, no_color=True, record=True)
        console.print(table)
        return console.export_text()

    def test_rows(self):
        text = self._render(build_table([Entry("docs", 2000, True), Entry("a.txt", 5)]))
        assert "docs/" in text
        assert "2.0 kB" in text
        assert "a.txt" in text
        assert "5 Bytes" in text

    def test_truncates_long_names(self):
        entry = Entry("n" * 40 + ".log", 1)
        assert "n" * 25 + "....log" in self._render(build_table([entry]))
        assert "n" * 40 in self._render(build_table([entry], truncate=False))

    def test_row_styles(self):
        table = build_table([Entry("d", 1, True), Entry("f", 1)])
        assert [row.style for row in table.rows] == ["blue", "green"]

    def test_no_color(self):
        table = build_table([Entry("d", 1, True)], color=False)
        assert table.rows[0].style is None

    def test_markup_in_names_is_literal(self):
        text = self._render(build_table([Entry("[bold]x", 1), Entry("[red]", 2, True)]))
        assert "[bold]x*" in text
        assert "[red]/" in text

    def test_undecodable_name(self):
        text = self._render(build_table([Entry("bad\udcff.txt", 1)]))
        assert "bad\ufffd.txt*" in text

"""Command-line interface for DuTree.

Prints a size table for the children of each root path, or a size tree
with ``--tree``.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from DuTree.config import ConfigurationError, Settings, load_settings
from DuTree.disks import list_disks
from DuTree.entry_utils import safe_name, sort_by_name, sort_by_size
from DuTree.filesystems.local import LocalFilesystem
from DuTree.formatting import (
    build_table,
    entries_to_json,
    format_size,
    tree_to_dict,
)
from DuTree.scanner import PathNotFoundError, scan_paths
from DuTree.tree_builder import render_tree, root_label, tree_for_root

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dutree",
        description="Show the size of files and folders.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="files or folders to measure (default: current directory)",
    )
    parser.add_argument(
        "-s", "--sort-by-size",
        action="store_true",
        default=settings.sort_by_size,
        help="sort the output by size, largest first",
    )
    parser.add_argument("-t", "--tree", action="store_true", help="show a size tree")
    parser.add_argument(
        "-d", "--depth",
        type=_positive_int,
        default=settings.depth,
        help="maximum tree depth (default: unlimited)",
    )
    parser.add_argument(
        "-a", "--ascii",
        action="store_true",
        default=settings.use_ascii,
        help="draw the tree with ASCII characters",
    )
    parser.add_argument("-j", "--json", action="store_true", help="print JSON")
    parser.add_argument(
        "--disks", action="store_true", help="show total and free space of mounted disks"
    )
    parser.add_argument(
        "-w", "--workers",
        type=_positive_int,
        default=settings.max_workers,
        help="number of worker threads (default: number of CPUs)",
    )
    parser.add_argument(
        "--no-truncate",
        dest="truncate",
        action="store_false",
        default=settings.truncate_names,
        help="show long file names in full",
    )
    parser.add_argument("--no-color", action="store_true", help="disable colors")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def _setup_logging(verbose: bool, console: Console) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _report_missing(console: Console, path: str) -> None:
    console.print(f"[bold red]{escape(safe_name(path))}[/] [red]does not exist[/]", soft_wrap=True)


def _run_table(args: argparse.Namespace, console: Console, err_console: Console) -> int:
    logger.debug("Scanning %s", args.paths)
    with err_console.status("Computing..."):
        result = scan_paths(args.paths, max_workers=args.workers)

    for path in result.missing:
        _report_missing(console, path)
    if result.last_root_missing:
        return 1

    if result.is_empty:
        console.print("No files or folders found")
        return 1 if result.missing else 0

    entries = result.entries()
    entries = sort_by_size(entries) if args.sort_by_size else sort_by_name(entries)

    if args.json:
        console.out(entries_to_json(entries), highlight=False)
    else:
        console.print(build_table(entries, truncate=args.truncate, color=not args.no_color))
        if len(args.paths) == 1:
            total = format_size(result.total_size)
            console.print(f"\n[green]Total size:[/] [bold green]{total}[/]")
    return 1 if result.missing else 0


def _run_tree(args: argparse.Namespace, console: Console, err_console: Console) -> int:
    fs = LocalFilesystem()
    exit_code = 0
    trees = {}
    for path in args.paths:
        logger.debug("Building tree for %s", path)
        try:
            with err_console.status(f"Computing {escape(safe_name(path))}..."):
                tree = tree_for_root(path, args.depth, fs=fs, max_workers=args.workers)
        except PathNotFoundError:
            _report_missing(console, path)
            exit_code = 1
            continue

        if args.json:
            trees[path] = tree_to_dict(tree)
            continue

        console.out(f"{root_label(path, tree)}  ({format_size(tree.size)})", highlight=False)
        console.out(render_tree(tree, use_ascii=args.ascii), end="", highlight=False)

    if args.json:
        console.out(json.dumps(trees, indent=2), highlight=False)
    return exit_code


def _run_disks(args: argparse.Namespace, console: Console) -> int:
    disks = list_disks()
    if args.json:
        console.out(json.dumps([asdict(d) for d in disks], indent=2), highlight=False)
        return 0

    table = Table(box=None, pad_edge=False)
    for column in ("Mount", "Device", "Type"):
        table.add_column(column)
    for column in ("Total", "Used", "Free", "Use%"):
        table.add_column(column, justify="right")
    for d in disks:
        table.add_row(
            d.mountpoint,
            d.device,
            d.fstype,
            format_size(d.total),
            format_size(d.used),
            format_size(d.free),
            f"{d.percent_used:.1f}%",
        )
    console.print(table)
    return 0


def main(argv: list[str] | None = None) -> int:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print(f"dutree: {exc}", file=sys.stderr)
        return 2

    args = build_parser(settings).parse_args(argv)
    console = Console(no_color=args.no_color)
    err_console = Console(stderr=True, no_color=args.no_color)
    _setup_logging(args.verbose, err_console)

    if args.disks:
        return _run_disks(args, console)
    if args.tree:
        return _run_tree(args, console, err_console)
    return _run_table(args, console, err_console)


if __name__ == "__main__":
    sys.exit(main())

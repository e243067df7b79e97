"""Streamlit UI for DuTree."""

from __future__ import annotations

import streamlit as st

from DuTree.config import ConfigurationError, load_settings
from DuTree.disks import list_disks
from DuTree.entry_utils import display_name, sort_by_name, sort_by_size
from DuTree.formatting import entries_to_json, format_size
from DuTree.models import ScanResult
from DuTree.scanner import PathNotFoundError, scan_paths
from DuTree.tree_builder import render_tree, root_label, tree_for_root


def _qp(key: str, default: str = "") -> str:
    """Read a query parameter, returning *default* if absent."""
    params = st.query_params
    return params.get(key, default)


def _qp_flag(key: str, default: bool) -> bool:
    raw = _qp(key)
    if not raw:
        return default
    return raw.lower() in ("1", "true", "yes", "on")


def _qp_int(key: str, default: int) -> int:
    """Read an integer query parameter, returning *default* if absent or malformed."""
    try:
        return int(_qp(key) or default)
    except ValueError:
        return default


def parse_paths_input(raw: str) -> list[str]:
    """Split a comma-separated string into individual paths.

    Whitespace around each path is stripped. Empty segments are ignored.
    """
    if not raw or not raw.strip():
        return []
    return [p.strip() for p in raw.split(",") if p.strip()]


def main() -> None:
    st.set_page_config(
        page_title="DuTree",
        page_icon="📁",
        layout="wide",
    )

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        st.error(f"Invalid configuration: {exc}")
        return

    st.title("DuTree")
    st.caption("Show how much space files and folders take up.")

    with st.sidebar:
        st.subheader("Options")
        sort_by_size = st.checkbox(
            "Sort by size", value=_qp_flag("sort", settings.sort_by_size)
        )
        tree_mode = st.checkbox("Tree view", value=_qp_flag("tree", False))
        use_ascii = st.checkbox(
            "ASCII tree", value=_qp_flag("ascii", settings.use_ascii), disabled=not tree_mode
        )
        default_depth = _qp_int("depth", settings.depth or 0)
        depth = st.number_input(
            "Max depth",
            min_value=0,
            max_value=64,
            value=min(max(default_depth, 0), 64),
            help="0 shows every level.",
            disabled=not tree_mode,
        )
        workers = st.number_input(
            "Worker threads",
            min_value=0,
            max_value=256,
            value=settings.max_workers or 0,
            help="0 uses one thread per CPU.",
        )

    raw_paths = st.text_input(
        "Paths (comma-separated)",
        value=_qp("paths", "."),
        placeholder="/home/me, /var/log",
    )

    scan_clicked = st.button("Scan", type="primary", use_container_width=True)

    if scan_clicked:
        paths = parse_paths_input(raw_paths)
        if not paths:
            st.error("Please enter at least one path.")
        elif tree_mode:
            _run_tree(paths, int(depth) or None, use_ascii, int(workers) or None)
        else:
            _run_scan(paths, sort_by_size, int(workers) or None)

    with st.expander("Disks", expanded=False):
        disks = list_disks()
        st.dataframe(
            [
                {
                    "Mount": d.mountpoint,
                    "Device": d.device,
                    "Type": d.fstype,
                    "Total": format_size(d.total),
                    "Used": format_size(d.used),
                    "Free": format_size(d.free),
                    "Use %": round(d.percent_used, 1),
                }
                for d in disks
            ],
            use_container_width=True,
        )


def _show_missing(result: ScanResult) -> None:
    for path in result.missing:
        st.error(f"`{path}` does not exist.")


def _run_scan(paths: list[str], by_size: bool, workers: int | None) -> None:
    with st.spinner("Computing..."):
        result = scan_paths(paths, max_workers=workers)

    _show_missing(result)
    if result.errors:
        with st.expander(f"⚠ {len(result.errors)} entries skipped", expanded=False):
            for err in result.errors:
                st.text(err)

    if result.is_empty:
        st.warning("No files or folders found.")
        return

    entries = result.entries()
    entries = sort_by_size(entries) if by_size else sort_by_name(entries)
    st.dataframe(
        [
            {"Name": display_name(e, truncate=False), "Size": format_size(e.size), "Bytes": e.size}
            for e in entries
        ],
        use_container_width=True,
    )
    st.info(f"Total size: {format_size(result.total_size)}")

    st.download_button(
        label="Download JSON",
        data=entries_to_json(entries),
        file_name="dutree.json",
        mime="application/json",
        use_container_width=True,
    )


def _run_tree(paths: list[str], depth: int | None, use_ascii: bool, workers: int | None) -> None:
    for path in paths:
        try:
            with st.spinner(f"Computing {path}..."):
                tree = tree_for_root(path, depth=depth, max_workers=workers)
        except PathNotFoundError:
            st.error(f"`{path}` does not exist.")
            continue
        header = f"{root_label(path, tree)}  ({format_size(tree.size)})"
        st.code(f"{header}\n{render_tree(tree, use_ascii=use_ascii)}", language=None)


if __name__ == "__main__":
    main()

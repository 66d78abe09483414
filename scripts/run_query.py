"""
Demo script: load a file through the public API and run a few queries.

Usage:
    uv run python scripts/run_query.py inputs/cars.json
    uv run python scripts/run_query.py inputs/cars.csv --sort name --desc
    uv run python scripts/run_query.py inputs/cars.json --search luxury --export outputs/cars.csv

Prints the column names, the requested page, and optionally writes the
(unsorted, unfiltered) table back out via write_export().
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("run_query")


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------

def _option(name: str, default: str | None = None) -> str | None:
    """Return the value following ``--name`` on the command line."""
    flag = f"--{name}"
    if flag in sys.argv:
        idx = sys.argv.index(flag)
        if idx + 1 < len(sys.argv):
            return sys.argv[idx + 1]
    return default


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> int:
    import tabstore
    from tabstore.exceptions import TabStoreError

    if len(sys.argv) < 2 or sys.argv[1].startswith("--"):
        print(__doc__)
        return 2

    input_path = Path(sys.argv[1])
    try:
        store = tabstore.open(input_path)
    except (FileNotFoundError, TabStoreError) as exc:
        log.error("Could not load %s: %s", input_path, exc)
        return 1

    log.info("Columns: %s", store.column_names())

    records = store.get_all()
    search = _option("search")
    if search is not None:
        records = store.search_all(search)
        log.info("search_all(%r) -> %d record(s)", search, len(records))

    sort_column = _option("sort")
    if sort_column is not None:
        # sort_by_column() orders the whole table; keep only the search hits
        ordered = store.sort_by_column(sort_column, ascending="--desc" not in sys.argv)
        if search is not None:
            ordered = [r for r in ordered if r in records]
        records = ordered

    raw_page_size = _option("page-size", str(store.config.default_page_size))
    try:
        page_size = int(raw_page_size)
    except ValueError:
        page_size = 0
    if page_size < 1:
        log.error("--page-size must be a positive integer, got %r", raw_page_size)
        return 2
    for record in records[:page_size]:
        log.info("  %s", record)
    if len(records) > page_size:
        log.info("  ... %d more", len(records) - page_size)

    export_path = _option("export")
    if export_path is not None:
        written = tabstore.write_export(store, export_path)
        log.info("Wrote %s", written)

    return 0


if __name__ == "__main__":
    sys.exit(main())

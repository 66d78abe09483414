"""
tabstore: in-process tabular data store for semi-structured records.

Ingests CSV, JSON (arrays or JSON Lines), plain text and Parquet,
normalizes them into keyed records despite missing or heterogeneous
fields, and serves filter / search / sort / distinct / pagination
queries plus CSV and JSON export.

Public API surface:

- ``open(path, ...)`` -- **recommended entry point**. Parses a file by
  its extension and returns a populated ``TabularStore``.

- ``load(stream, file_name, ...)`` -- Same, from an already-open
  stream. Can reload into an existing store.

- ``TabularStore`` -- the store itself (CRUD, queries, export).

- ``FormatDispatcher`` -- extension -> parser routing, for callers that
  want raw rows.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, AnyStr

from tabstore.config import StoreConfig, load_config, save_config
from tabstore.dispatch import FormatDispatcher
from tabstore.export import write_export
from tabstore.records import result_to_records, rows_to_records
from tabstore.store import Page, TabularStore

__all__ = [
    "open",
    "load",
    "FormatDispatcher",
    "Page",
    "StoreConfig",
    "TabularStore",
    "load_config",
    "rows_to_records",
    "save_config",
    "write_export",
]

logger = logging.getLogger(__name__)


def load(
    stream: IO[AnyStr],
    file_name: str | Path,
    store: TabularStore | None = None,
    config: StoreConfig | None = None,
) -> TabularStore:
    """Parse *stream* and load its records into a store.

    Orchestration:
      1. ``FormatDispatcher.parse()`` picks the parser by extension.
      2. ``result_to_records()`` pairs rows with the header (or assigns
         ``config.text_column`` for header-less input).
      3. ``TabularStore.initialize()`` replaces the table.

    Parsing and reshaping finish before the store is touched, so a
    failure leaves *store* exactly as it was.

    Args:
        stream: Readable text or binary stream.
        file_name: Name whose extension selects the parser.
        store: Store to reload. A new one is created when ``None``.
        config: Settings; defaults to ``store.config`` or ``StoreConfig()``.

    Returns:
        The populated store.

    Raises:
        UnsupportedFormatError: If the extension has no parser.
        ParsingError: If the content is malformed.
    """
    if config is None:
        config = store.config if store is not None else StoreConfig()
    dispatcher = FormatDispatcher(config)

    result = dispatcher.parse(stream, file_name)
    records = result_to_records(result, text_column=config.text_column)

    if store is None:
        store = TabularStore(config)
    store.initialize(records)
    logger.info("Loaded %d record(s) from %s", len(records), file_name)
    return store


def open(
    path: str | Path,
    store: TabularStore | None = None,
    config: StoreConfig | None = None,
) -> TabularStore:
    """Open a file and load it into a store.

    Examples::

        store = tabstore.open("cars.json")
        store.sort_by_column("name")
        page = store.page(1, 20)

    Raises:
        FileNotFoundError: If *path* does not exist.
        UnsupportedFormatError: If the extension has no parser.
        ParsingError: If the content is malformed.
    """
    path = Path(path)
    if config is None:
        config = store.config if store is not None else StoreConfig()
    # Fail on the extension before touching the file system
    FormatDispatcher(config).parser_for(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    with path.open("rb") as f:
        return load(f, path.name, store=store, config=config)

"""
Exporter for tabstore.

Renders records as CSV or JSON text, and writes a store to disk as
CSV, JSON or Parquet.

CSV escaping rules (``escape_csv_value``):
- ``None`` or ``""`` -> ``""`` (a quoted empty cell, so an empty value
  stays distinguishable from a missing separator).
- Values containing a comma, double quote, CR or LF are wrapped in
  double quotes with inner quotes doubled.
- Everything else is written as-is.

pandas' ``to_csv`` writes empty cells bare, so CSV text is assembled
here rather than through a DataFrame. Parquet goes through pandas +
pyarrow.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from tabstore.cells import stringify
from tabstore.config import StoreConfig
from tabstore.exceptions import ExportError
from tabstore.records import records_to_rows

if TYPE_CHECKING:
    from tabstore.store import TabularStore

logger = logging.getLogger(__name__)

_SUPPORTED_FORMATS = {"csv", "json", "parquet"}
_CSV_SPECIALS = (",", '"', "\n", "\r")


def escape_csv_value(value: Any) -> str:
    """Escape one cell for CSV output."""
    text = stringify(value)
    if not text:
        return '""'
    if any(ch in text for ch in _CSV_SPECIALS):
        return '"' + text.replace('"', '""') + '"'
    return text


def to_csv_text(
    records: list[dict[str, Any]],
    columns: list[str],
    line_terminator: str = "\n",
) -> str:
    """Render records as CSV text in *columns* order.

    Every line, including the last, ends with *line_terminator*.
    Returns ``""`` when there are no records.
    """
    rows = records_to_rows(records, columns)
    if not rows:
        return ""
    lines = [",".join(escape_csv_value(cell) for cell in row) for row in rows]
    return line_terminator.join(lines) + line_terminator


def to_json_text(records: list[dict[str, Any]], indent: int = 2) -> str:
    """Render records as an indented JSON array of objects."""
    return json.dumps(records, indent=indent, ensure_ascii=False, default=str)


def _infer_format(path: Path) -> str:
    return path.suffix.lower().lstrip(".")


def write_export(
    store: TabularStore,
    path: str | Path,
    output_format: Literal["csv", "json", "parquet"] | None = None,
    config: StoreConfig | None = None,
) -> str:
    """Write the store's table to *path*.

    Args:
        store: The store to export.
        path: Destination file. Parent directories are created.
        output_format: ``"csv"``, ``"json"`` or ``"parquet"``. Inferred
            from the file suffix when ``None``.
        config: Supplies the output encoding. Defaults to the store's.

    Returns:
        The written path as a string.

    Raises:
        ExportError: If the format is unsupported or the write fails.
    """
    path = Path(path)
    config = config or store.config
    fmt = (output_format or _infer_format(path)).lower()
    if fmt not in _SUPPORTED_FORMATS:
        raise ExportError(
            f"Unsupported output format: '{fmt}'. "
            f"Supported formats: {sorted(_SUPPORTED_FORMATS)}"
        )

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if fmt == "csv":
            # newline="" keeps the configured terminator unchanged on Windows
            with open(path, "w", encoding=config.output_encoding, newline="") as f:
                f.write(store.export_csv())
        elif fmt == "json":
            with open(path, "w", encoding=config.output_encoding) as f:
                f.write(store.export_json())
        else:  # parquet
            frame = store.to_frame()
            frame = frame.apply(
                lambda col: col.map(lambda v: None if v is None else stringify(v))
            )
            frame.to_parquet(path, index=False, engine="pyarrow")
    except Exception as exc:
        raise ExportError(f"Failed to write {path.name} as {fmt}: {exc}") from exc

    logger.info(
        "Exported %d record(s) -> %s (%s)", store.count(), path.name, fmt
    )
    return str(path)

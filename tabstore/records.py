"""
Row <-> record reshaping for tabstore.

Parsers produce positional rows; the store holds keyed records. This
module converts between the two:

- ``rows_to_records`` pairs each data row with the header. Short rows
  are padded with ``""``; cells past the header width are dropped with
  a warning (typically a quoted field containing the delimiter, which
  the delimited parser splits verbatim).
- ``records_to_rows`` is the inverse, aligning records to a column list
  and filling missing keys with ``""``. The CSV exporter builds on it.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from tabstore.cells import stringify
from tabstore.exceptions import ParsingError
from tabstore.parsers.base import ParseResult
from tabstore.parsers.structured import union_keys

logger = logging.getLogger(__name__)

Record = dict[str, Any]


def rows_to_records(
    rows: list[list[str]],
    has_header: bool = True,
    text_column: str = "value",
) -> list[Record]:
    """Reshape parsed rows into keyed records.

    Args:
        rows: Rows as returned by a parser.
        has_header: If True, ``rows[0]`` holds the column names.
            Otherwise every row is data and its first cell is stored
            under *text_column*.
        text_column: Column name for header-less input.

    Returns:
        One record per data row, in input order.

    Raises:
        ParsingError: If the header contains duplicate column names.
    """
    return result_to_records(
        ParseResult(rows=rows, has_header=has_header), text_column=text_column
    )


def result_to_records(result: ParseResult, text_column: str = "value") -> list[Record]:
    """Reshape a ParseResult into keyed records (see ``rows_to_records``)."""
    if not result.has_header:
        return [{text_column: row[0] if row else ""} for row in result.data_rows]

    header = result.header
    duplicates = [name for name, n in Counter(header).items() if n > 1]
    if duplicates:
        raise ParsingError(f"Duplicate column names in header: {duplicates}")

    width = len(header)
    records: list[Record] = []
    truncated = 0
    for row in result.data_rows:
        if len(row) > width:
            truncated += 1
        cells = list(row[:width]) + [""] * (width - len(row))
        records.append(dict(zip(header, cells)))

    if truncated:
        logger.warning(
            "%d row(s) had more cells than the %d header columns; extra cells dropped",
            truncated,
            width,
        )
    return records


def records_to_rows(
    records: list[Record],
    columns: list[str] | None = None,
) -> list[list[str]]:
    """Align records to a header and stringify every cell.

    Args:
        records: Records to flatten.
        columns: Header order. Defaults to the union of keys across
            *records* in first-seen order.

    Returns:
        ``[header, *rows]``, or ``[]`` when there are no records.
    """
    if not records:
        return []
    header = list(columns) if columns is not None else union_keys(records)
    rows = [header]
    for record in records:
        rows.append([stringify(record.get(col)) for col in header])
    return rows

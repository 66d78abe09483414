"""
Tabular store for tabstore.

``TabularStore`` owns the canonical in-memory table: an ordered list of
records (``dict`` of column name -> cell value). It exposes CRUD,
query, sort, pagination and export over the whole table; there are no
secondary indexes.

Isolation: the live table never leaves the store. Every read returns a
deep copy and every write stores a deep copy, so callers can mutate
what they get (or what they passed in) without touching the store.

Identity is positional. An index is valid only until the next insert or
delete before it; the store does not track indexes held by callers.

Two behaviors are kept on purpose:
- ``sort_by_column`` puts records lacking the column after all others,
  in original order, whichever direction is requested.
- ``column_names`` (and therefore ``export_csv``) uses the keys of the
  first record only, even if later records carry other keys.

The store is single-owner: operations run to completion and nothing is
locked. Callers that share one instance must serialize access.
"""

from __future__ import annotations

import copy
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable

import numpy as np
import pandas as pd

from tabstore.cells import is_blank, stringify
from tabstore.compare import sort_key
from tabstore.config import StoreConfig
from tabstore.exceptions import (
    IndexOutOfRangeError,
    InvalidArgumentError,
    NullArgumentError,
)
from tabstore.export import to_csv_text, to_json_text
from tabstore.parsers.structured import union_keys

logger = logging.getLogger(__name__)

Record = dict[str, Any]


# ---------------------------------------------------------------------------
# Page -- result of TabularStore.page()
# ---------------------------------------------------------------------------

@dataclass
class Page:
    """One page of records.

    Attributes:
        items: Copies of the records on this page (may be empty when the
            page number is past the end).
        total_pages: ``ceil(total_count / page_size)``; 0 for an empty table.
        page_number: The requested 1-based page number.
        page_size: The requested page size.
        total_count: Number of records in the table.
    """

    items: list[Record] = field(default_factory=list)
    total_pages: int = 0
    page_number: int = 1
    page_size: int = 10
    total_count: int = 0

    def __iter__(self):
        # Allows ``items, total_pages = store.page(...)``
        return iter((self.items, self.total_pages))


# ---------------------------------------------------------------------------
# TabularStore
# ---------------------------------------------------------------------------

class TabularStore:
    """In-memory table of records with query and export operations.

    Attributes:
        config: Settings for export formatting and pagination defaults.
    """

    def __init__(self, config: StoreConfig | None = None) -> None:
        self.config = config or StoreConfig()
        self._records: list[Record] = []

    def __repr__(self) -> str:
        return f"TabularStore(count={len(self._records)}, columns={self.column_names()})"

    def __len__(self) -> int:
        return len(self._records)

    # -- Private helpers ----------------------------------------------------

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._records):
            raise IndexOutOfRangeError(
                f"Index {index} is out of range (count={len(self._records)})"
            )

    @staticmethod
    def _require_record(record: Record | None, name: str = "record") -> None:
        if record is None:
            raise NullArgumentError(f"'{name}' must not be None")

    @staticmethod
    def _copy(records: Iterable[Record]) -> list[Record]:
        return [copy.deepcopy(r) for r in records]

    # -- Lifecycle ----------------------------------------------------------

    def initialize(self, records: Iterable[Record]) -> None:
        """Replace the table with an independent copy of *records*.

        No shape validation is done. The previous table is kept if
        copying fails part-way.
        """
        self._require_record(records, "records")
        new_records = self._copy(records)
        self._records = new_records
        logger.info(
            "Initialized store with %d record(s), %d column(s) in first record",
            len(new_records),
            len(new_records[0]) if new_records else 0,
        )

    def clear(self) -> None:
        """Remove every record."""
        self._records.clear()
        logger.info("Cleared store")

    # -- Read ---------------------------------------------------------------

    def get_all(self) -> list[Record]:
        """Return a copy of the whole table."""
        return self._copy(self._records)

    def get_by_index(self, index: int) -> Record:
        """Return a copy of the record at *index*.

        Raises:
            IndexOutOfRangeError: If *index* is negative or >= count.
        """
        self._check_index(index)
        return copy.deepcopy(self._records[index])

    def count(self) -> int:
        """Number of records in the table."""
        return len(self._records)

    # -- Write --------------------------------------------------------------

    def add(self, record: Record) -> int:
        """Append a copy of *record* and return its index.

        Raises:
            NullArgumentError: If *record* is ``None``.
        """
        self._require_record(record)
        self._records.append(copy.deepcopy(record))
        index = len(self._records) - 1
        logger.debug("Added record at index %d", index)
        return index

    def update(self, index: int, record: Record) -> None:
        """Replace the record at *index* with a copy of *record*.

        This is a full replacement; keys absent from *record* are gone
        afterwards.

        Raises:
            IndexOutOfRangeError: If *index* is invalid.
            NullArgumentError: If *record* is ``None``.
        """
        self._check_index(index)
        self._require_record(record)
        self._records[index] = copy.deepcopy(record)
        logger.debug("Updated record at index %d", index)

    def delete(self, index: int) -> None:
        """Remove the record at *index*; later records shift down by one.

        Raises:
            IndexOutOfRangeError: If *index* is invalid.
        """
        self._check_index(index)
        del self._records[index]
        logger.debug("Deleted record at index %d (count=%d)", index, len(self._records))

    # -- Query --------------------------------------------------------------

    def filter_by_column(self, column: str, substring: str) -> list[Record]:
        """Records whose *column* value contains *substring*, ignoring case.

        Records that lack *column*, or hold ``None`` in it, are skipped.
        Original table order is kept.
        """
        if substring is None:
            raise NullArgumentError("'substring' must not be None")
        needle = substring.lower()
        matches = [
            r for r in self._records
            if column in r
            and r[column] is not None
            and needle in stringify(r[column]).lower()
        ]
        logger.debug(
            "filter_by_column(%r, %r) -> %d match(es)", column, substring, len(matches)
        )
        return self._copy(matches)

    def search_all(self, term: str | None) -> list[Record]:
        """Records with any value containing *term*, ignoring case.

        A blank or whitespace-only *term* returns the whole table.
        """
        if is_blank(term):
            return self.get_all()
        needle = term.lower()
        matches = [
            r for r in self._records
            if any(
                v is not None and needle in stringify(v).lower()
                for v in r.values()
            )
        ]
        logger.debug("search_all(%r) -> %d match(es)", term, len(matches))
        return self._copy(matches)

    def sort_by_column(self, column: str | None, ascending: bool = True) -> list[Record]:
        """Return the table sorted by *column*; the store is not modified.

        Records holding *column* are stably sorted with
        :func:`tabstore.compare.compare_values`. Records lacking it
        follow, in original order, regardless of *ascending*. A blank
        *column* or an empty table returns an unsorted copy.
        """
        if is_blank(column) or not self._records:
            return self.get_all()

        having = [r for r in self._records if column in r]
        missing = [r for r in self._records if column not in r]
        # sorted() is stable in both directions
        ordered = sorted(
            having,
            key=lambda r: sort_key(r[column]),
            reverse=not ascending,
        )
        return self._copy(ordered + missing)

    def distinct_values(self, column: str) -> list[str]:
        """Distinct non-blank string values of *column*, ascending."""
        values = {
            stringify(r[column]) for r in self._records if column in r
        }
        return sorted(v for v in values if not is_blank(v))

    def column_names(self) -> list[str]:
        """Keys of the first record, in its key order; ``[]`` when empty."""
        if not self._records:
            return []
        return list(self._records[0].keys())

    def page(self, page_number: int, page_size: int | None = None) -> Page:
        """Return one page of records.

        Args:
            page_number: 1-based page number.
            page_size: Records per page. Defaults to
                ``config.default_page_size``.

        Raises:
            InvalidArgumentError: If *page_number* or *page_size* < 1.
        """
        if page_size is None:
            page_size = self.config.default_page_size
        if page_number < 1 or page_size < 1:
            raise InvalidArgumentError(
                "Page number and page size must be greater than 0 "
                f"(got page_number={page_number}, page_size={page_size})"
            )
        total = len(self._records)
        start = (page_number - 1) * page_size
        items = self._copy(self._records[start:start + page_size])
        return Page(
            items=items,
            total_pages=math.ceil(total / page_size),
            page_number=page_number,
            page_size=page_size,
            total_count=total,
        )

    # -- Export -------------------------------------------------------------

    def export_json(self) -> str:
        """Serialize the table as an indented JSON array of objects."""
        return to_json_text(self._records, indent=self.config.json_indent)

    def export_csv(self) -> str:
        """Serialize the table as CSV using ``column_names()`` as header.

        Returns ``""`` for an empty table. Missing keys render as an
        escaped empty cell.
        """
        return to_csv_text(
            self._records,
            self.column_names(),
            line_terminator=self.config.line_terminator,
        )

    # -- pandas interop -----------------------------------------------------

    def to_frame(self) -> pd.DataFrame:
        """Return the table as a DataFrame over the union of all keys.

        Cells missing from a record are ``None``. Values are left as-is
        (object dtype).
        """
        columns = union_keys(self._records)
        rows = [[copy.deepcopy(r.get(c)) for c in columns] for r in self._records]
        return pd.DataFrame(rows, columns=columns, dtype=object)

    def initialize_from_frame(self, df: pd.DataFrame) -> None:
        """Replace the table with the rows of *df*.

        NaN / NA cells become ``None`` and numpy scalars become plain
        Python values.
        """
        self._require_record(df, "df")
        cells = df.astype(object).where(pd.notna(df), None)
        records = [
            {str(col): _to_python(v) for col, v in zip(cells.columns, row)}
            for row in cells.itertuples(index=False, name=None)
        ]
        self.initialize(records)


def _to_python(value: Any) -> Any:
    if isinstance(value, np.generic):
        return value.item()
    return value

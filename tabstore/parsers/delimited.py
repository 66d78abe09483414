"""
Delimited-text parser (CSV / TSV) for tabstore.

Each non-empty line is split verbatim on a single delimiter character.
There is deliberately no quote handling on read: a quoted field that
contains the delimiter is split like any other text. This is the
minimal counterpart of the exporter's escaping, so a file exported with
embedded commas or quotes does not reload cell-for-cell.

The first line is the header; no header-type detection is attempted.
"""

from __future__ import annotations

import logging
from typing import IO, AnyStr

from tabstore.parsers.base import BaseParser, ParseResult

logger = logging.getLogger(__name__)


class DelimitedTextParser(BaseParser):
    """Parser for comma- (or other single-character-) delimited text."""

    format_name = "delimited"
    has_header = True

    def __init__(self, delimiter: str = ",", encoding: str = "utf-8-sig") -> None:
        super().__init__(encoding=encoding)
        if len(delimiter) != 1:
            raise ValueError(f"Delimiter must be a single character, got {delimiter!r}")
        self.delimiter = delimiter

    def parse(self, stream: IO[AnyStr]) -> ParseResult:
        rows = [line.split(self.delimiter) for line in self.read_lines(stream)]
        logger.debug(
            "Parsed %d delimited rows (delimiter=%r)", len(rows), self.delimiter
        )
        return self._result(rows)

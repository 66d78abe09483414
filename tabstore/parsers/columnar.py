"""
Columnar (Parquet) parser for tabstore.

Reads a Parquet stream with pandas + pyarrow and flattens it into the
same header-plus-string-rows shape as the text parsers, so a file
written by ``write_export(..., "parquet")`` can be loaded back through
the dispatcher.
"""

from __future__ import annotations

import io
import logging
from typing import IO, AnyStr

import pandas as pd

from tabstore.cells import stringify
from tabstore.exceptions import ParsingError
from tabstore.parsers.base import BaseParser, ParseResult

logger = logging.getLogger(__name__)


class ColumnarParser(BaseParser):
    """Parser for Parquet files.

    Parquet is binary and self-describing, so unlike the text parsers
    this one takes no encoding.
    """

    format_name = "columnar"
    has_header = True

    def __init__(self) -> None:
        super().__init__()

    def parse(self, stream: IO[AnyStr]) -> ParseResult:
        data = stream.read()
        if isinstance(data, str):
            raise ParsingError("Parquet input must be opened in binary mode")
        try:
            df = pd.read_parquet(io.BytesIO(data), engine="pyarrow")
        except Exception as exc:
            raise ParsingError(f"Malformed Parquet input: {exc}") from exc

        header = [str(col) for col in df.columns]
        if not header:
            return self._result([])

        cells = df.astype(object).where(pd.notna(df), None)
        rows = [header]
        for values in cells.itertuples(index=False, name=None):
            rows.append([stringify(v) for v in values])

        logger.debug("Parsed Parquet: %d rows x %d cols", len(df), len(header))
        return self._result(rows)

"""
Parsers sub-package for tabstore.

Contains format-specific parsers that turn a raw input stream into an
ordered table of string cells (``rows[0]`` is the header when the
format has one).

Design: Strategy Pattern
- base.py defines the BaseParser ABC and the ParseResult container.
- delimited.py implements DelimitedTextParser for CSV/TSV.
- lines.py implements LineTextParser for plain text (one cell per line).
- structured.py implements StructuredDataParser for JSON arrays and
  JSON Lines, reconciling heterogeneous keys into one header.
- columnar.py implements ColumnarParser for Parquet via pandas/pyarrow.

The FormatDispatcher (dispatch.py) selects the parser by file extension.
"""

from tabstore.parsers.base import BaseParser, ParseResult
from tabstore.parsers.columnar import ColumnarParser
from tabstore.parsers.delimited import DelimitedTextParser
from tabstore.parsers.lines import LineTextParser
from tabstore.parsers.structured import StructuredDataParser

__all__ = [
    "BaseParser",
    "ParseResult",
    "ColumnarParser",
    "DelimitedTextParser",
    "LineTextParser",
    "StructuredDataParser",
]

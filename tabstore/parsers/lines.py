"""
Line-text parser for tabstore.

Every non-empty line becomes a single-cell row. Plain text has no
header row, so ``ParseResult.has_header`` is False and the reshaping
step assigns the configured ``text_column`` name.
"""

from __future__ import annotations

import logging
from typing import IO, AnyStr

from tabstore.parsers.base import BaseParser, ParseResult

logger = logging.getLogger(__name__)


class LineTextParser(BaseParser):
    """Parser for plain text, one record per line."""

    format_name = "lines"
    has_header = False

    def parse(self, stream: IO[AnyStr]) -> ParseResult:
        rows = [[line] for line in self.read_lines(stream)]
        logger.debug("Parsed %d text lines", len(rows))
        return self._result(rows)

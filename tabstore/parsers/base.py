"""
Base parser protocol / ABC for tabstore.

All format-specific parsers implement this interface. The contract is:
1. parse() takes a readable stream and returns a ParseResult.
2. ParseResult.rows is an ordered list of string-cell rows. When
   ``has_header`` is True, ``rows[0]`` holds the column names.

Parsers never see the file name; extension-based selection is the
dispatcher's job.
"""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import IO, AnyStr

from tabstore.exceptions import ParsingError


@dataclass
class ParseResult:
    """Standardized output from any parser.

    Attributes:
        rows: Parsed rows; every cell is a string.
        has_header: Whether ``rows[0]`` is a header row.
        format_name: Name of the parser that produced the rows
            (e.g., ``"delimited"``, ``"structured"``).
    """
    rows: list[list[str]] = field(default_factory=list)
    has_header: bool = True
    format_name: str = ""

    @property
    def header(self) -> list[str]:
        """Column names, or ``[]`` for header-less or empty results."""
        if self.has_header and self.rows:
            return list(self.rows[0])
        return []

    @property
    def data_rows(self) -> list[list[str]]:
        """Rows excluding the header."""
        return self.rows[1:] if self.has_header else list(self.rows)


class BaseParser(ABC):
    """Abstract base class for record parsers.

    Subclasses set ``format_name`` and ``has_header``; both are copied
    onto every ParseResult the parser returns.
    """

    format_name: str = ""
    has_header: bool = True

    def __init__(self, encoding: str = "utf-8-sig") -> None:
        self.encoding = encoding

    @abstractmethod
    def parse(self, stream: IO[AnyStr]) -> ParseResult:
        """Parse a whole input stream.

        Args:
            stream: A readable text or binary stream.

        Returns:
            ParseResult with string rows.

        Raises:
            ParsingError: If the stream content is malformed.
        """

    def _result(self, rows: list[list[str]]) -> ParseResult:
        return ParseResult(
            rows=rows, has_header=self.has_header, format_name=self.format_name
        )

    def read_text(self, stream: IO[AnyStr]) -> str:
        """Read the whole stream as text, decoding bytes if needed."""
        data = stream.read()
        if isinstance(data, bytes):
            try:
                return data.decode(self.encoding)
            except UnicodeDecodeError as exc:
                raise ParsingError(
                    f"Input is not valid {self.encoding} text: {exc}"
                ) from exc
        # A text stream opened without utf-8-sig keeps the BOM
        return data.lstrip("\ufeff")

    def read_lines(self, stream: IO[AnyStr]) -> list[str]:
        """Return the non-empty lines of the stream, without line endings."""
        text = self.read_text(stream)
        lines = (line.rstrip("\r\n") for line in io.StringIO(text, newline=""))
        return [line for line in lines if line]

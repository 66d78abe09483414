"""
Format dispatch for tabstore.

Selects a parser from the case-insensitive extension of the input's
file name. There is no content sniffing and no fallback: an extension
with no registered parser raises UnsupportedFormatError.

Design: Strategy Pattern
- FormatDispatcher holds an ``extension -> parser`` registry filled at
  construction from the built-in table below.
- read() returns the parser's rows; parse() also reports whether the
  rows carry a header, which the reshaping step needs.
- New formats are added with register() -- no other component changes.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, AnyStr

from tabstore.config import StoreConfig
from tabstore.exceptions import UnsupportedFormatError
from tabstore.parsers import (
    BaseParser,
    ColumnarParser,
    DelimitedTextParser,
    LineTextParser,
    ParseResult,
    StructuredDataParser,
)

logger = logging.getLogger(__name__)


def _builtin_parsers(config: StoreConfig) -> dict[str, BaseParser]:
    encoding = config.encoding
    jsonl = StructuredDataParser(lines=True, encoding=encoding)
    return {
        ".csv": DelimitedTextParser(config.csv_delimiter, encoding=encoding),
        ".tsv": DelimitedTextParser("\t", encoding=encoding),
        ".txt": LineTextParser(encoding=encoding),
        ".json": StructuredDataParser(encoding=encoding),
        ".jsonl": jsonl,
        ".ndjson": jsonl,
        ".parquet": ColumnarParser(),
    }


def _normalize_extension(extension: str) -> str:
    ext = extension.strip().lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


def _extension_of(file_name: str | Path) -> str:
    name = Path(file_name).name
    suffix = Path(name).suffix
    # A dot-only name such as ".csv" is all extension
    if not suffix and name.startswith(".") and name.count(".") == 1:
        suffix = name
    return suffix.lower()


class FormatDispatcher:
    """Routes an input stream to the parser registered for its extension.

    Attributes:
        config: Settings used to build the built-in parsers.
    """

    def __init__(self, config: StoreConfig | None = None) -> None:
        self.config = config or StoreConfig()
        self._parsers: dict[str, BaseParser] = _builtin_parsers(self.config)

    def __repr__(self) -> str:
        return f"FormatDispatcher(extensions={self.supported_extensions})"

    @property
    def supported_extensions(self) -> list[str]:
        """Registered extensions, sorted (e.g., ``[".csv", ".json", ...]``)."""
        return sorted(self._parsers)

    def register(self, extension: str, parser: BaseParser) -> None:
        """Register (or replace) the parser for *extension*.

        The leading dot is optional and case is ignored.
        """
        ext = _normalize_extension(extension)
        if not ext or ext == ".":
            raise ValueError(f"Invalid extension: {extension!r}")
        if ext in self._parsers:
            logger.info("Replacing parser for %s with %s", ext, type(parser).__name__)
        self._parsers[ext] = parser

    def parser_for(self, file_name: str | Path) -> BaseParser:
        """Return the parser registered for *file_name*'s extension.

        Raises:
            UnsupportedFormatError: If no parser matches.
        """
        extension = _extension_of(file_name)
        parser = self._parsers.get(extension)
        if parser is None:
            raise UnsupportedFormatError(
                f"File type '{extension or '(none)'}' is not supported: {file_name}. "
                f"Supported extensions: {self.supported_extensions}"
            )
        return parser

    def parse(self, stream: IO[AnyStr], file_name: str | Path) -> ParseResult:
        """Parse *stream* with the parser selected by *file_name*."""
        parser = self.parser_for(file_name)
        result = parser.parse(stream)
        logger.info(
            "Parsed %s with %s parser: %d row(s), header=%s",
            file_name,
            result.format_name,
            len(result.rows),
            result.has_header,
        )
        return result

    def read(self, stream: IO[AnyStr], file_name: str | Path) -> list[list[str]]:
        """Parse *stream* and return its rows (header first, if any)."""
        return self.parse(stream, file_name).rows

    def read_path(self, path: str | Path) -> ParseResult:
        """Open *path* in binary mode and parse it by its extension."""
        path = Path(path)
        # Resolve the parser first so an unknown extension fails before I/O
        self.parser_for(path)
        with open(path, "rb") as f:
            return self.parse(f, path.name)

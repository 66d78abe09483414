"""
Structured-data parser (JSON / JSON Lines) for tabstore.

Decodes the whole input into an ordered sequence of key -> value
objects and flattens them into a header plus aligned rows.

Objects are allowed to disagree about their keys. The header is the
union of every key seen across all objects, in first-seen order, and
each object emits one row aligned to that header with ``""`` for keys
it lacks (or holds as ``null``). Without this reconciliation an object
missing a field would produce a narrower row and misalign every column
after the gap.

Input shapes:
- JSON: a single array of objects. ``null`` (or an empty array) yields
  an empty result; any other top-level value is a ParsingError.
- JSON Lines: one object per non-empty line.
"""

from __future__ import annotations

import json
import logging
from typing import IO, Any, AnyStr

from tabstore.cells import stringify
from tabstore.exceptions import ParsingError
from tabstore.parsers.base import BaseParser, ParseResult

logger = logging.getLogger(__name__)


def union_keys(objects: list[dict[str, Any]]) -> list[str]:
    """Return every key across *objects*, in first-seen order."""
    # dict preserves insertion order and gives set-like membership
    seen: dict[str, None] = {}
    for obj in objects:
        for key in obj:
            seen.setdefault(key, None)
    return list(seen)


def objects_to_rows(objects: list[dict[str, Any]]) -> list[list[str]]:
    """Flatten objects into ``[header, *rows]`` using the key union.

    Returns ``[]`` when *objects* is empty.
    """
    if not objects:
        return []
    header = union_keys(objects)
    rows = [header]
    for obj in objects:
        rows.append([stringify(obj.get(key)) for key in header])
    return rows


class StructuredDataParser(BaseParser):
    """Parser for JSON arrays of objects and JSON Lines files."""

    format_name = "structured"
    has_header = True

    def __init__(self, lines: bool = False, encoding: str = "utf-8-sig") -> None:
        super().__init__(encoding=encoding)
        self.lines = lines

    def parse(self, stream: IO[AnyStr]) -> ParseResult:
        if self.lines:
            objects = self._decode_lines(stream)
        else:
            objects = self._decode_document(stream)

        rows = objects_to_rows(objects)
        logger.debug(
            "Parsed %d objects into %d columns",
            len(objects),
            len(rows[0]) if rows else 0,
        )
        return self._result(rows)

    def _decode_document(self, stream: IO[AnyStr]) -> list[dict[str, Any]]:
        text = self.read_text(stream)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ParsingError(f"Malformed JSON input: {exc}") from exc

        if data is None:
            return []
        if not isinstance(data, list):
            raise ParsingError(
                f"Expected a JSON array of objects, got {type(data).__name__}"
            )
        for position, item in enumerate(data):
            _require_object(item, f"array element {position}")
        return data

    def _decode_lines(self, stream: IO[AnyStr]) -> list[dict[str, Any]]:
        objects: list[dict[str, Any]] = []
        for line_number, line in enumerate(self.read_lines(stream), start=1):
            if not line.strip():
                continue
            try:
                item = json.loads(line)
            except json.JSONDecodeError as exc:
                raise ParsingError(
                    f"Malformed JSON on line {line_number}: {exc}"
                ) from exc
            _require_object(item, f"line {line_number}")
            objects.append(item)
        return objects


def _require_object(item: Any, where: str) -> None:
    if not isinstance(item, dict):
        raise ParsingError(
            f"Expected a JSON object at {where}, got {type(item).__name__}"
        )

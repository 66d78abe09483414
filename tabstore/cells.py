"""
Cell value stringification for tabstore.

Every component that needs the textual form of a cell (parsers, search,
distinct values, CSV export, the comparator's fallback branch) goes
through ``stringify`` so that the same value always renders the same
way.
"""

from __future__ import annotations

import json
from typing import Any


def stringify(value: Any) -> str:
    """Return the natural string form of a cell value.

    - ``None`` becomes ``""`` (never ``"None"`` or ``"null"``).
    - Booleans render as JSON literals (``true`` / ``false``).
    - Lists and dicts render as compact JSON.
    - Everything else uses ``str()``.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
    return str(value)


def is_blank(value: str | None) -> bool:
    """True for ``None``, ``""`` and whitespace-only strings."""
    return value is None or not value.strip()

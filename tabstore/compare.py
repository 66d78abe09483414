"""
Value comparator for tabstore.

Defines a total order over heterogeneous cell values so that sorting
never fails, even on a column that mixes strings, numbers and ``None``:

1. ``None`` sorts before any present value; two ``None`` are equal.
2. Values of the same comparable kind (both numbers, both strings, both
   booleans, or the same type) use their natural ordering. A float NaN
   sorts before every other number and equals another NaN.
3. If the kinds differ, or the natural comparison raises, both values
   are compared ordinally by their string form.

Rule 3 means a column with mixed kinds is not guaranteed a consistent
total order (``2 < 10`` numerically but ``"10" < "2"`` as text). That
behavior is kept as-is; callers that need numeric ordering should load
numeric cells.
"""

from __future__ import annotations

import functools
import math
import numbers
from typing import Any

from tabstore.cells import stringify


def _kind(value: Any) -> type | str:
    # bool is a numbers.Number; keep it apart from ints and floats
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, numbers.Number):
        return "number"
    if isinstance(value, str):
        return "str"
    return type(value)


def _ordinal(left: str, right: str) -> int:
    return (left > right) - (left < right)


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def compare_values(left: Any, right: Any) -> int:
    """Three-way compare two cell values; returns -1, 0 or 1."""
    if left is None and right is None:
        return 0
    if left is None:
        return -1
    if right is None:
        return 1

    kind = _kind(left)
    if kind == _kind(right):
        if kind == "number" and (_is_nan(left) or _is_nan(right)):
            return _is_nan(right) - _is_nan(left)
        try:
            return (left > right) - (left < right)
        except TypeError:
            pass
    return _ordinal(stringify(left), stringify(right))


# Key wrapper for sorted() / list.sort()
sort_key = functools.cmp_to_key(compare_values)

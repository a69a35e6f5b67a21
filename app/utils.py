"""Utility helpers for the catalog viewer."""

from __future__ import annotations

import math
import re
from typing import Any


LEADING_FLOAT_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

SORT_FLOOR = 0


def parse_leading_float(value: Any) -> float:
    """Return the number at the start of ``value`` or the sort floor.

    ``"7.5/10"`` parses as ``7.5``; empty strings, ``None`` and text without a
    leading number fall back to ``0``.
    """

    if isinstance(value, bool) or value is None:
        return float(SORT_FLOOR)
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = LEADING_FLOAT_RE.match(str(value))
        if not match:
            return float(SORT_FLOOR)
        number = float(match.group(1))
    if math.isnan(number) or math.isinf(number):
        return float(SORT_FLOOR)
    return number


def parse_leading_int(value: Any) -> int:
    """Return the integer at the start of ``value`` or the sort floor."""

    if isinstance(value, bool) or value is None:
        return SORT_FLOOR
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return SORT_FLOOR
        return int(value)
    match = LEADING_INT_RE.match(str(value))
    if not match:
        return SORT_FLOOR
    return int(match.group(1))


def first_non_empty(*candidates: Any) -> str:
    """Return the first truthy candidate as text, or an empty string."""

    for candidate in candidates:
        if candidate:
            return str(candidate)
    return ""

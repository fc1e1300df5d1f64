"""Normalization helpers.

Centralizes defensive parsing and placeholder handling for WAQI payloads,
which use ``"-"`` for "no reading" and mix strings and numbers freely.
"""

from __future__ import annotations

import math
from typing import Any

_PLACEHOLDERS = frozenset({"", "-", "--"})


def safe_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and value.strip() in _PLACEHOLDERS:
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(round(parsed))


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def non_negative_or_none(value: Any) -> int | None:
    """Parse an AQI-like reading; negative values count as missing."""
    parsed = safe_int(value)
    if parsed is None or parsed < 0:
        return None
    return parsed


def safe_geo(value: Any) -> tuple[float, float] | None:
    """Parse a ``[lat, lng]`` pair as used in WAQI ``geo`` fields."""
    if not isinstance(value, (list, tuple)) or len(value) < 2:
        return None
    lat = safe_float(value[0])
    lng = safe_float(value[1])
    if lat is None or lng is None:
        return None
    return lat, lng

"""Normalization helpers shared by the scoring and aggregation functions.

Records arrive from the database layer with nullable numerics and timestamps
in whatever form the client returned. Everything here turns those into values
that are safe to do arithmetic on. All timestamps are normalized to aware UTC.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time, timezone
from typing import Any, Optional


def coerce_number(value: Any, default: float = 0.0) -> float:
    """Return ``value`` as a float, or ``default`` when it is missing.

    ``None``, empty strings and NaN all count as missing.
    """
    if value is None:
        return default
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return default
    number = float(value)
    if math.isnan(number):
        return default
    return number


def optional_number(value: Any) -> Optional[float]:
    """Like coerce_number but keeps "missing" as ``None``."""
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    number = float(value)
    if math.isnan(number):
        return None
    return number


def to_utc(value: Any) -> Optional[datetime]:
    """Parse a timestamp into an aware UTC datetime.

    Accepts datetimes, dates and ISO-8601 strings (a trailing ``Z`` included).
    Naive values are taken to be UTC; a bare date is midnight UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Cannot interpret {value!r} as a timestamp")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (62.5 -> 63)."""
    return int(math.floor(value + 0.5))


def safe_mean(values: list[float]) -> float:
    """Arithmetic mean, 0 for an empty list."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))

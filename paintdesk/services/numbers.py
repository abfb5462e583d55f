from __future__ import annotations

import math
from typing import Any


def to_number(value: Any, default: float = 0.0) -> float:
    """
    Coerce form input to a float.

    None, empty strings, non-numeric strings, NaN and +/-inf all become
    `default`. Numeric strings ("12.5") are parsed.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return default
    try:
        num = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(num):
        return default
    return num


def to_non_negative(value: Any, default: float = 0.0) -> float:
    """Same as to_number, but anything <= 0 collapses to `default`."""
    num = to_number(value, default)
    return num if num > 0 else default

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from paintdesk.services.numbers import to_non_negative, to_number

DEFAULT_WALL_SPEED = 150.0  # sqft/hr per coat
DEFAULT_CEILING_SPEED = 120.0  # sqft/hr per coat
DEFAULT_TRIM_SPEED = 50.0  # linear ft/hr per coat
DEFAULT_HOURS_PER_DAY = 8.0


@dataclass(frozen=True)
class ProductivityRates:
    wall_speed: float = DEFAULT_WALL_SPEED
    ceiling_speed: float = DEFAULT_CEILING_SPEED
    trim_speed: float = DEFAULT_TRIM_SPEED


def _surface_hours(amount: Any, speed: Any, coats: Any, default_speed: float) -> float:
    a = to_non_negative(amount)
    s = to_number(speed, default_speed)
    if a <= 0 or s <= 0:
        return 0.0
    c = to_number(coats, 1.0)
    return (a / s) * max(c, 0.0)


def estimate_hours(
    wall_sq_ft: Any = 0,
    ceiling_sq_ft: Any = 0,
    trim_linear_ft: Any = 0,
    wall_coats: Any = 1,
    ceiling_coats: Any = 1,
    trim_coats: Any = 1,
    wall_speed: Any = DEFAULT_WALL_SPEED,
    ceiling_speed: Any = DEFAULT_CEILING_SPEED,
    trim_speed: Any = DEFAULT_TRIM_SPEED,
    efficiency: Any = 1,
) -> float:
    """
    Labor hours for walls, ceiling and trim.

    efficiency < 1 models a faster-than-baseline crew, > 1 a slower one.
    Result is rounded to 2 decimals.
    """
    total = (
        _surface_hours(wall_sq_ft, wall_speed, wall_coats, DEFAULT_WALL_SPEED)
        + _surface_hours(ceiling_sq_ft, ceiling_speed, ceiling_coats, DEFAULT_CEILING_SPEED)
        + _surface_hours(trim_linear_ft, trim_speed, trim_coats, DEFAULT_TRIM_SPEED)
    )
    eff = to_number(efficiency, 1.0)
    return round(total * max(eff, 0.0), 2)


def estimate_hours_with_rates(
    wall_sq_ft: Any = 0,
    ceiling_sq_ft: Any = 0,
    trim_linear_ft: Any = 0,
    rates: ProductivityRates = ProductivityRates(),
    efficiency: Any = 1,
) -> float:
    return estimate_hours(
        wall_sq_ft=wall_sq_ft,
        ceiling_sq_ft=ceiling_sq_ft,
        trim_linear_ft=trim_linear_ft,
        wall_speed=rates.wall_speed,
        ceiling_speed=rates.ceiling_speed,
        trim_speed=rates.trim_speed,
        efficiency=efficiency,
    )


def hours_to_days(hours: Any, hours_per_day: Any = DEFAULT_HOURS_PER_DAY) -> int:
    h = to_non_negative(hours)
    per_day = to_non_negative(hours_per_day, DEFAULT_HOURS_PER_DAY)
    if h <= 0:
        return 0
    return math.ceil(h / per_day)

from __future__ import annotations

from enum import Enum
from typing import Union

FEET_PER_METER = 3.28084
INCHES_PER_FOOT = 12.0

CONVERSION_CONSTANTS = {
    "METERS_TO_FEET": FEET_PER_METER,
    "FEET_TO_METERS": 0.3048,
    "INCHES_TO_FEET": 1 / INCHES_PER_FOOT,
    "FEET_TO_INCHES": INCHES_PER_FOOT,
}


class MeasurementUnit(str, Enum):
    FT = "ft"
    M = "m"
    IN = "in"


UnitLike = Union[MeasurementUnit, str]

_DISPLAY_NAMES = {
    MeasurementUnit.FT: "feet",
    MeasurementUnit.M: "meters",
    MeasurementUnit.IN: "inches",
}


class UnsupportedUnitError(ValueError):
    def __init__(self, unit: object):
        self.unit = unit
        super().__init__(f"Unsupported measurement unit: {unit}")


def parse_unit(unit: UnitLike) -> MeasurementUnit:
    if isinstance(unit, MeasurementUnit):
        return unit
    try:
        return MeasurementUnit(str(unit).strip().lower())
    except ValueError:
        raise UnsupportedUnitError(unit) from None


def _meters_factor(is_area: bool) -> float:
    return FEET_PER_METER ** 2 if is_area else FEET_PER_METER


def _inches_factor(is_area: bool) -> float:
    return INCHES_PER_FOOT ** 2 if is_area else INCHES_PER_FOOT


def to_feet(value: float, from_unit: UnitLike, *, is_area: bool = False) -> float:
    """
    Convert a measurement to feet.

    With is_area=True the squared factor is used (m² -> ft², in² -> ft²).
    A zero value short-circuits before the unit is looked at.
    """
    if value == 0:
        return 0
    unit = parse_unit(from_unit)
    if unit is MeasurementUnit.FT:
        return value
    if unit is MeasurementUnit.M:
        return value * _meters_factor(is_area)
    return value / _inches_factor(is_area)


def from_feet(value: float, to_unit: UnitLike, *, is_area: bool = False) -> float:
    if value == 0:
        return 0
    unit = parse_unit(to_unit)
    if unit is MeasurementUnit.FT:
        return value
    if unit is MeasurementUnit.M:
        return value / _meters_factor(is_area)
    return value * _inches_factor(is_area)


def convert(
    value: float,
    from_unit: UnitLike,
    to_unit: UnitLike,
    *,
    is_area: bool = False,
) -> float:
    if parse_unit(from_unit) is parse_unit(to_unit):
        return value
    return from_feet(to_feet(value, from_unit, is_area=is_area), to_unit, is_area=is_area)


def format_measurement(value: float, unit: UnitLike, decimals: int = 1) -> str:
    return f"{value:.{decimals}f} {parse_unit(unit).value}"


def unit_display_name(unit: UnitLike) -> str:
    try:
        return _DISPLAY_NAMES[parse_unit(unit)]
    except UnsupportedUnitError:
        return str(unit)

import itertools

import pytest

from paintdesk.services.units import (
    CONVERSION_CONSTANTS,
    FEET_PER_METER,
    MeasurementUnit,
    UnsupportedUnitError,
    convert,
    format_measurement,
    from_feet,
    parse_unit,
    to_feet,
    unit_display_name,
)

UNITS = ["ft", "m", "in"]


def test_to_feet_factors():
    assert to_feet(10, "ft") == 10
    assert to_feet(10, "m") == pytest.approx(32.8084)
    assert to_feet(24, "in") == pytest.approx(2.0)


def test_from_feet_is_inverse_mapping():
    assert from_feet(FEET_PER_METER, "m") == pytest.approx(1.0)
    assert from_feet(2, "in") == pytest.approx(24.0)
    assert from_feet(7.5, MeasurementUnit.FT) == 7.5


def test_area_flag_uses_squared_factors():
    assert to_feet(144, "in", is_area=True) == pytest.approx(1.0)
    assert to_feet(1, "m", is_area=True) == pytest.approx(FEET_PER_METER ** 2)
    assert to_feet(150, "ft", is_area=True) == 150


@pytest.mark.parametrize("u1,u2", list(itertools.product(UNITS, UNITS)))
@pytest.mark.parametrize("v", [0, 0.5, 1, 12.25, 1000])
def test_round_trip(u1, u2, v):
    back = convert(convert(v, u1, u2), u2, u1)
    assert back == pytest.approx(v, abs=1e-6)


def test_same_unit_is_identity():
    assert convert(3.3, "m", "M ") == 3.3


def test_zero_short_circuits_even_for_bad_unit():
    assert to_feet(0, "yards") == 0
    assert from_feet(0, "yards") == 0


def test_unsupported_unit_raises():
    with pytest.raises(UnsupportedUnitError) as exc:
        to_feet(5, "yd")
    assert exc.value.unit == "yd"
    assert isinstance(exc.value, ValueError)

    with pytest.raises(UnsupportedUnitError):
        convert(5, "ft", "cm")


def test_parse_unit_normalizes_case_and_whitespace():
    assert parse_unit(" FT ") is MeasurementUnit.FT


def test_display_helpers():
    assert format_measurement(12.46, "ft") == "12.5 ft"
    assert unit_display_name("m") == "meters"
    assert unit_display_name("furlong") == "furlong"


def test_conversion_constants():
    assert CONVERSION_CONSTANTS["METERS_TO_FEET"] == FEET_PER_METER
    assert CONVERSION_CONSTANTS["FEET_TO_INCHES"] == 12

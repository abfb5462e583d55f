import pytest

from paintdesk.estimating.hours import ProductivityRates, estimate_hours, estimate_hours_with_rates, hours_to_days


def test_all_zero_is_zero():
    assert estimate_hours() == 0
    assert estimate_hours(0, 0, 0) == 0


def test_formula_and_rounding():
    # 300/150*2 + 240/120*1 + 100/50*1 = 4 + 2 + 2
    assert estimate_hours(wall_sq_ft=300, ceiling_sq_ft=240, trim_linear_ft=100, wall_coats=2) == 8.0
    assert estimate_hours(wall_sq_ft=100) == 0.67


def test_efficiency_scales_result():
    base = estimate_hours(wall_sq_ft=300)
    assert estimate_hours(wall_sq_ft=300, efficiency=0.5) == pytest.approx(base / 2)
    assert estimate_hours(wall_sq_ft=300, efficiency=1.5) == pytest.approx(base * 1.5)


def test_non_positive_speed_drops_term():
    assert estimate_hours(wall_sq_ft=300, wall_speed=0, trim_linear_ft=50) == 1.0


def test_invalid_inputs_fall_back():
    assert estimate_hours(wall_sq_ft="abc", ceiling_sq_ft=None, trim_linear_ft=-10) == 0
    assert estimate_hours(wall_sq_ft=150, wall_speed=None, efficiency=None) == 1.0


@pytest.mark.parametrize(
    "field", ["wall_sq_ft", "ceiling_sq_ft", "trim_linear_ft", "wall_coats", "ceiling_coats", "trim_coats"]
)
def test_monotonic_in_each_input(field):
    base = dict(
        wall_sq_ft=200,
        ceiling_sq_ft=120,
        trim_linear_ft=60,
        wall_coats=1,
        ceiling_coats=1,
        trim_coats=1,
    )
    previous = estimate_hours(**base)
    for step in range(1, 6):
        bumped = dict(base, **{field: base[field] + step * 10})
        current = estimate_hours(**bumped)
        assert current >= previous
        previous = current


def test_rates_object():
    rates = ProductivityRates(wall_speed=100)
    assert estimate_hours_with_rates(wall_sq_ft=300, rates=rates) == 3.0


def test_hours_to_days():
    assert hours_to_days(16, 8) == 2
    assert hours_to_days(17, 8) == 3
    assert hours_to_days(0, 8) == 0
    assert hours_to_days(0.1) == 1
    assert hours_to_days(10, 0) == 2

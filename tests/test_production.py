import pytest

from paintdesk.estimating.production import ProductionTask, estimate_production, production_hours


def test_hours_scale_with_modifier():
    assert production_hours(800, 160, 25) == 6.25
    assert production_hours("120", "40") == 3
    assert production_hours(100, 50, -150) == 0


@pytest.mark.parametrize("measurement,rate", [(0, 100), (100, 0), ("", 100), (100, None), (-5, 100)])
def test_missing_measurement_or_rate_is_zero_hours(measurement, rate):
    assert production_hours(measurement, rate) == 0


def test_estimate_rollup():
    tasks = [
        ProductionTask("Walls", measurement=800, production_rate=160, modifier_percent=25),
        ProductionTask("Trim", measurement=120, production_rate=40, unit="linear ft"),
    ]
    est = estimate_production(tasks, materials_estimate=200)
    assert est.labor_rate == 45
    assert est.total_labor_hours == 9.25
    assert est.labor_cost == pytest.approx(416.25)
    assert est.subtotal == pytest.approx(616.25)
    assert est.overhead_amount == pytest.approx(92.4375)
    assert est.profit_amount == pytest.approx(354.34375)
    assert est.total == pytest.approx(1063.03125)


def test_custom_rates():
    est = estimate_production(
        [ProductionTask("Ceiling", measurement=300, production_rate=100)],
        labor_rate=60,
        overhead_percent=0,
        profit_percent=0,
    )
    assert est.total == 180


def test_empty_estimate():
    est = estimate_production([])
    assert est.total_labor_hours == 0
    assert est.total == 0


def test_as_text():
    est = estimate_production([ProductionTask("Walls", measurement=800, production_rate=160, modifier_percent=25)])
    text = est.as_text()
    assert text.startswith("PRODUCTION RATE ESTIMATE")
    assert "  - Hours: 6.25h" in text
    assert "Labor Rate: $45/hr" in text
    assert text.splitlines()[-1].startswith("TOTAL: $")

import pytest

from paintdesk.estimating.models import PaintBase, RoomFeature
from paintdesk.estimating.paint import (
    LinearCoverage,
    gallons_by_paint_base,
    gallons_for_area,
    gallons_for_linear_or_area,
    paint_quantity,
)

COVERAGE = 400.0


@pytest.mark.parametrize("unit", ["ft", "m", "in"])
@pytest.mark.parametrize("coats", [None, 0, 1, 3])
def test_zero_magnitude_gives_zero_gallons(unit, coats):
    assert gallons_for_linear_or_area(0, coats, unit) == 0


@pytest.mark.parametrize("bad", [None, "", "abc", -5, float("nan"), float("inf")])
def test_invalid_magnitude_gives_zero(bad):
    assert gallons_for_linear_or_area(bad, 2, "ft") == 0


def test_coats_scale_before_conversion():
    assert gallons_for_linear_or_area(300, 2, "ft") == pytest.approx(600 / COVERAGE)
    assert gallons_for_linear_or_area(100, 2, "m") == pytest.approx(
        gallons_for_linear_or_area(200, 1, "m")
    )


def test_missing_coats_use_default():
    assert gallons_for_linear_or_area(400, None, "ft") == pytest.approx(1.0)
    assert gallons_for_linear_or_area(400, 0, "ft", default_coats=2) == pytest.approx(2.0)


def test_numeric_string_magnitude():
    assert gallons_for_linear_or_area("800", 1, "ft") == pytest.approx(2.0)


def test_area_variant_in_square_inches():
    # 144 sq in == 1 sq ft
    assert gallons_for_area(144 * 400, 1, "in") == pytest.approx(1.0)


def test_custom_coverage_model():
    assert gallons_for_linear_or_area(350, 1, "ft", coverage=LinearCoverage(350)) == pytest.approx(1.0)
    assert gallons_for_linear_or_area(350, 1, "ft", coverage=lambda feet: feet * 2) == 700


def test_gallons_grouped_by_paint_base():
    features = [
        RoomFeature(name="a", magnitude=200, coats=2, paint_base=PaintBase.LATEX),
        RoomFeature(name="b", magnitude=400, paint_base=PaintBase.LATEX),
        RoomFeature(name="c", magnitude=400, paint_base=PaintBase.OIL_BASED),
        RoomFeature(name="d", magnitude=None),
    ]
    out = gallons_by_paint_base(features, "ft")
    assert out[PaintBase.LATEX] == pytest.approx(2.0)
    assert out[PaintBase.OIL_BASED] == pytest.approx(1.0)
    assert out[None] == 0


def test_paint_quantity_reports_feet_and_coats():
    q = paint_quantity(300, 2, "ft")
    assert q.coats == 2
    assert q.feet == 600
    assert q.gallons == pytest.approx(1.5)

    empty = paint_quantity("", None, "m", default_coats=2)
    assert empty.coats == 2
    assert empty.feet == 0
    assert empty.gallons == 0

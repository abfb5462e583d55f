import pytest

from paintdesk.catalog.painting import (
    choose_bundle,
    compute_painting_estimate,
    estimate_from_sku,
    painting_catalog,
    round2,
    scope_text,
)
from paintdesk.catalog.sku import parse_sku

ROOM_STANDARD = "S1 U1 SC2 SYS2 PR2 F3 M1 A1 H2"


@pytest.fixture(scope="module")
def catalog():
    return painting_catalog()


def test_round2():
    assert round2(2.52747) == 2.53
    assert round2(0.125) == 0.13


def test_standard_room_unit_price(catalog):
    est = estimate_from_sku(ROOM_STANDARD, catalog=catalog)
    # 1.85 x 1.0 x 1.15 x 1.08 x 1.0 x 1.0 x 1.1 = 2.52747
    assert est.complete
    assert [li.id for li in est.items] == ["base"]
    base = est.items[0]
    assert base.title == "Paint scope base"
    assert base.unit_price == 2.53
    assert base.note == "per ft² baseline"
    assert est.subtotal == pytest.approx(2.53)
    assert est.tax == 0
    assert est.total == pytest.approx(2.53)
    assert est.bundle_id == "P2"


def test_quantity_scales_base_line(catalog):
    est = estimate_from_sku(ROOM_STANDARD, quantity=400, catalog=catalog)
    assert est.items[0].qty == 400
    assert est.subtotal == pytest.approx(1012)


def test_tax_is_rounded_to_cents(catalog):
    est = estimate_from_sku(ROOM_STANDARD, tax_rate=0.1, catalog=catalog)
    assert est.tax == 0.25
    assert est.total == pytest.approx(2.78)


def test_incomplete_selection_prices_to_nothing(catalog):
    sel = parse_sku(catalog, ROOM_STANDARD)
    del sel["sheen"]
    est = compute_painting_estimate(sel, catalog=catalog)
    assert not est.complete
    assert est.items == []
    assert est.total == 0

    sel["sheen"] = "F99"
    assert compute_painting_estimate(sel, catalog=catalog).total == 0


def test_cabinets_use_enamel_bundle_and_conditions(catalog):
    est = estimate_from_sku("S6 U4 SC6 SYS5 PR3 F4 M4 A1 H3 (C5)", catalog=catalog)
    assert est.bundle_id == "P5"
    assert [li.id for li in est.items] == ["base", "cond-C5"]
    # 55 x 2.2 x 1.35 x 1.35 x 1.35 x 1.0 x 1.2 = 357.246...
    assert est.items[0].unit_price == pytest.approx(357.25)
    assert est.items[1].title == "Condition: C5 - Heavy grease (kitchen cabinets/walls)"
    assert est.subtotal == pytest.approx(477.25)


def test_zero_lines_kept_only_with_note(catalog):
    sel = parse_sku(catalog, ROOM_STANDARD)
    sel["conditions"] = ["R1"]
    sel["addons"] = ["AD5", "AD1"]
    est = compute_painting_estimate(sel, catalog=catalog)
    ids = [li.id for li in est.items]
    assert ids == ["base", "cond-R1", "add-AD1"]
    assert est.items[1].note == "Included"
    assert est.items[1].amount == 0
    assert est.items[2].title == "Add-on: AD1 - Remove/install outlet covers"


@pytest.mark.parametrize(
    "sel,expected",
    [
        ({"surface": "S6", "prep": "PR1"}, "P5"),
        ({"system": "SYS5", "method": "M4", "prep": "PR1"}, "P5"),
        ({"system": "SYS5", "method": "M1", "prep": "PR3"}, "P3"),
        ({"prep": "PR4"}, "P4"),
        ({}, "P2"),
    ],
)
def test_bundle_choice(catalog, sel, expected):
    assert choose_bundle(sel, catalog) == expected


def test_scope_text(catalog):
    assert scope_text(parse_sku(catalog, ROOM_STANDARD), catalog) == (
        "All walls (room): Walls. Paint system: Spot-prime + 2 coats. "
        "Prep level: Standard. Application: Brush & roll. Finish: Eggshell."
    )
    assert scope_text({}, catalog).startswith("Scope: Surface.")

import pytest

from paintdesk.catalog import CatalogError, Dimension, get_catalog
from paintdesk.catalog.base import CatalogEntry, EntryKind, combine_price
from paintdesk.catalog.drywall import (
    DRYWALL,
    choose_bundle,
    compute_drywall_estimate,
    drywall_catalog,
    estimate_from_sku,
    per_unit_price,
)
from paintdesk.catalog.loader import catalog_from_dict


@pytest.fixture(scope="module")
def catalog():
    return drywall_catalog()


def test_registry_returns_drywall(catalog):
    assert get_catalog(DRYWALL) is catalog
    with pytest.raises(KeyError):
        get_catalog("wallpaper")


def test_combine_price():
    assert combine_price(220, [1.25, 1.15], [45]) == pytest.approx(361.25)
    assert combine_price(100) == 100


def test_unknown_id_is_same_as_omitted(catalog):
    base = {"repair_type": "T10", "size": "S2", "orientation": "O2"}
    with_unknown = dict(base, access="A99", finish="nope")
    assert per_unit_price(with_unknown, catalog) == per_unit_price(base, catalog)


def test_duplicate_entry_id_is_rejected():
    entries = [CatalogEntry("A1", "one"), CatalogEntry("A1", "again")]
    with pytest.raises(CatalogError):
        Dimension("access", entries)


def test_bad_catalog_documents():
    with pytest.raises(CatalogError):
        catalog_from_dict({"dimensions": []})
    with pytest.raises(CatalogError):
        catalog_from_dict(
            {"name": "x", "dimensions": [{"name": "d", "entries": [{"id": "A", "kind": "discount"}]}]}
        )
    with pytest.raises(CatalogError):
        catalog_from_dict(
            {"name": "x", "dimensions": [{"name": "d", "entries": [{"id": "A", "bundle": "NOPE"}]}]}
        )


def test_dimension_lookups_never_raise(catalog):
    access = catalog["access"]
    assert access.multiplier("A2") == 1.15
    assert access.multiplier("ZZ") == 1.0
    assert access.adder(None) == 0
    assert access.label_for("ZZ") == "ZZ"
    assert catalog["repair_type"].get("T8").kind is EntryKind.ADDER


def test_estimate_with_repair_adder(catalog):
    sel = {
        "repair_type": "T10",
        "size": "S2",
        "orientation": "O2",
        "access": "A2",
        "finish": "F1",
        "paint_scope": "P0",
        "protection": "H1",
    }
    est = compute_drywall_estimate(sel, catalog=catalog)
    # 220 x 1.25 x 1.15 + 45 = 361.25
    assert est.labor_subtotal == 361
    assert est.modifiers_total == 0
    assert est.subtotal == 361
    assert est.tax == 30  # 29.78 rounded
    assert est.total == 391
    assert est.multiplier == pytest.approx(1.4375)
    assert est.sku == "T10 S2 O2 A2 F1 P0 H1"
    assert est.bundle_id == "S2"


def test_estimate_with_modifiers_and_quantity(catalog):
    est = estimate_from_sku("T8 S2 O1 A1 F1 P3 (W1,W2) H3", quantity=2, catalog=catalog)
    # (220 x 1.3 x 1.2 + 60) x 2 = 806.4
    assert est.labor_subtotal == 806
    assert est.modifiers_total == 180
    assert est.subtotal == 986
    assert est.tax == 81
    assert est.total == 1067
    assert est.bundle_id == "S4"

    titles = [i.title for i in est.items]
    assert titles == [
        "Drywall repair (2x)",
        "Stain-block primer required",
        "Soft board removal required",
        "Estimated tax",
    ]
    assert est.items[0].description == "Base S2 + T8 with multipliers"
    assert est.items[1].amount == 60
    assert est.items[-1].description == "Tax rate 8.25%"


def test_quantity_is_at_least_one(catalog):
    one = estimate_from_sku("T2 S1 O1 A1 F1 P0 H2", quantity=1, catalog=catalog)
    assert estimate_from_sku("T2 S1 O1 A1 F1 P0 H2", quantity=0, catalog=catalog).total == one.total
    assert estimate_from_sku("T2 S1 O1 A1 F1 P0 H2", quantity="x", catalog=catalog).total == one.total
    assert one.labor_subtotal == 132


def test_missing_size_prices_at_zero(catalog):
    est = compute_drywall_estimate({"repair_type": "T8"}, tax_rate=0, catalog=catalog)
    assert est.labor_subtotal == 60
    assert est.sku == "T8 S? O? A? F? P? H?"


def test_bundle_follows_paint_scope(catalog):
    assert choose_bundle({"paint_scope": "P5"}, catalog) == "S5"
    assert choose_bundle({"paint_scope": "P1"}, catalog) == "S3"
    assert choose_bundle({}, catalog) == "S2"
    assert choose_bundle({"paint_scope": "P42"}, catalog) == "S2"

    bundle = estimate_from_sku("T2 S1 O1 A1 F1 P5 H2", catalog=catalog).bundle(catalog)
    assert bundle.id == "S5"
    assert bundle.steps


def test_stop_and_refer_note_survives(catalog):
    assert catalog["repair_type"].get("T9").note == "Stop & refer"
    assert catalog["modifiers"].get("W3").note == "Refer"


def test_price_breakdown_keeps_parts(catalog):
    breakdown = catalog.price(0.0, {"repair_type": "T10", "size": "S2", "orientation": "O2"})
    assert breakdown.base == 220
    assert breakdown.multipliers == {"orientation:O2": 1.25}
    assert breakdown.adder_total == 45
    assert catalog["orientation"].ids() == ["O1", "O2", "O3"]

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from paintdesk.estimating.totals import DEFAULT_TAX_RATE, js_round
from paintdesk.services.numbers import to_number

from .base import Bundle, Catalog, EntryKind, register
from .loader import load_catalog, load_records
from .sku import Preset, build_sku, parse_sku, presets_from_records

logger = logging.getLogger(__name__)

DRYWALL = "drywall"

MODIFIERS = "modifiers"


@register(DRYWALL)
def drywall_catalog() -> Catalog:
    return load_catalog("drywall.yaml")


def drywall_presets() -> List[Preset]:
    return presets_from_records(load_records("presets_drywall.yaml"))


@dataclass(frozen=True)
class LineItem:
    title: str
    description: str
    amount: float


@dataclass(frozen=True)
class DrywallEstimate:
    sku: str
    bundle_id: str
    quantity: float
    multiplier: float
    labor_subtotal: int
    modifiers_total: float
    subtotal: float
    tax: int
    total: float
    items: List[LineItem] = field(default_factory=list)

    def bundle(self, catalog: Optional[Catalog] = None) -> Optional[Bundle]:
        return (catalog or drywall_catalog()).bundles.get(self.bundle_id)


def choose_bundle(selection: Mapping[str, Any], catalog: Optional[Catalog] = None) -> str:
    catalog = catalog or drywall_catalog()
    scope = catalog["paint_scope"].get(selection.get("paint_scope"))
    if scope and scope.bundle:
        return scope.bundle
    return catalog.default_bundle or "S2"


def compute_drywall_estimate(
    selection: Mapping[str, Any],
    quantity: Any = 1,
    tax_rate: float = DEFAULT_TAX_RATE,
    catalog: Optional[Catalog] = None,
) -> DrywallEstimate:
    """
    Price one drywall repair SKU.

    per unit = base(size) x orientation x access x finish x paint scope
               x protection + repair-type adder
    labor    = per unit x quantity, rounded half-up to whole dollars
    Modifiers are flat amounts per unit. Missing size means base 0.
    """
    catalog = catalog or drywall_catalog()
    qty = max(1.0, to_number(quantity, 1.0))

    singles = {k: v for k, v in selection.items() if k != MODIFIERS}
    breakdown = catalog.price(0.0, singles)
    labor_subtotal = js_round(breakdown.price * qty)

    picked = [
        e
        for e in (catalog[MODIFIERS].get(i) for i in (selection.get(MODIFIERS) or []))
        if e is not None and e.kind is EntryKind.ADDER
    ]
    modifiers_total = sum(e.value for e in picked) * qty

    subtotal = labor_subtotal + modifiers_total
    tax = js_round(subtotal * tax_rate)

    size = selection.get("size") or ""
    repair = selection.get("repair_type") or ""
    items = [
        LineItem(
            title=f"Drywall repair ({qty:g}x)",
            description=f"Base {size} + {repair} with multipliers",
            amount=labor_subtotal,
        )
    ]
    items.extend(
        LineItem(title=e.label, description="Condition modifier / adder", amount=e.value * qty)
        for e in picked
    )
    items.append(
        LineItem(
            title="Estimated tax",
            description=f"Tax rate {tax_rate * 100:.2f}%",
            amount=tax,
        )
    )

    estimate = DrywallEstimate(
        sku=build_sku(catalog, dict(selection)),
        bundle_id=choose_bundle(selection, catalog),
        quantity=qty,
        multiplier=breakdown.multiplier,
        labor_subtotal=labor_subtotal,
        modifiers_total=modifiers_total,
        subtotal=subtotal,
        tax=tax,
        total=subtotal + tax,
        items=items,
    )
    logger.debug("drywall estimate %s: total=%s", estimate.sku, estimate.total)
    return estimate


def estimate_from_sku(
    sku: str,
    quantity: Any = 1,
    tax_rate: float = DEFAULT_TAX_RATE,
    catalog: Optional[Catalog] = None,
) -> DrywallEstimate:
    catalog = catalog or drywall_catalog()
    return compute_drywall_estimate(parse_sku(catalog, sku), quantity, tax_rate, catalog)


def per_unit_price(selection: Mapping[str, Any], catalog: Optional[Catalog] = None) -> float:
    """Unrounded price of one unit, before modifiers."""
    catalog = catalog or drywall_catalog()
    singles: Dict[str, Any] = {k: v for k, v in selection.items() if k != MODIFIERS}
    return catalog.price(0.0, singles).price

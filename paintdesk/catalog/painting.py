from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from paintdesk.estimating.totals import js_round
from paintdesk.services.numbers import to_number

from .base import Bundle, Catalog, EntryKind, register
from .loader import load_catalog, load_records
from .sku import Preset, build_sku, parse_sku, presets_from_records

logger = logging.getLogger(__name__)

PAINTING = "painting"

CONDITIONS = "conditions"
ADDONS = "addons"

# cabinets, or bonding primer sprayed in a booth, get the enamel bundle
CABINET_SURFACE = "S6"
ENAMEL_SYSTEM = "SYS5"
ENAMEL_METHOD = "M4"
ENAMEL_BUNDLE = "P5"


@register(PAINTING)
def painting_catalog() -> Catalog:
    return load_catalog("painting.yaml")


def painting_presets() -> List[Preset]:
    return presets_from_records(load_records("presets_painting.yaml"))


def round2(n: float) -> float:
    return js_round(n * 100) / 100


@dataclass(frozen=True)
class PaintingLineItem:
    id: str
    title: str
    qty: float
    unit_price: float
    note: Optional[str] = None

    @property
    def amount(self) -> float:
        return self.qty * self.unit_price


@dataclass(frozen=True)
class PaintingEstimate:
    sku: str
    bundle_id: str
    scope_text: str
    items: List[PaintingLineItem] = field(default_factory=list)
    subtotal: float = 0.0
    tax: float = 0.0
    total: float = 0.0

    @property
    def complete(self) -> bool:
        return bool(self.items)

    def bundle(self, catalog: Optional[Catalog] = None) -> Optional[Bundle]:
        return (catalog or painting_catalog()).bundles.get(self.bundle_id)


def choose_bundle(selection: Mapping[str, Any], catalog: Optional[Catalog] = None) -> str:
    catalog = catalog or painting_catalog()
    if selection.get("surface") == CABINET_SURFACE:
        return ENAMEL_BUNDLE
    if selection.get("system") == ENAMEL_SYSTEM and selection.get("method") == ENAMEL_METHOD:
        return ENAMEL_BUNDLE
    prep = catalog["prep"].get(selection.get("prep"))
    if prep and prep.bundle:
        return prep.bundle
    return catalog.default_bundle or "P2"


def scope_text(selection: Mapping[str, Any], catalog: Optional[Catalog] = None) -> str:
    catalog = catalog or painting_catalog()

    def label(dim: str, fallback: str) -> str:
        return catalog[dim].label_for(selection.get(dim), fallback)

    return (
        f"{label('scope', 'Scope')}: {label('surface', 'Surface')}. "
        f"Paint system: {label('system', 'System')}. "
        f"Prep level: {label('prep', 'Prep')}. "
        f"Application: {label('method', 'Method')}. "
        f"Finish: {label('sheen', 'Sheen')}."
    )


def _flat_items(catalog: Catalog, dim_name: str, ids: Any, prefix: str, title: str) -> List[PaintingLineItem]:
    out = []
    dim = catalog[dim_name]
    for entry_id in ids or []:
        e = dim.get(entry_id)
        if e is None or e.kind is not EntryKind.ADDER:
            logger.debug("painting: unknown %s id %s ignored", dim_name, entry_id)
            continue
        out.append(
            PaintingLineItem(
                id=f"{prefix}-{e.id}",
                title=f"{title}: {e.id} - {e.label}",
                qty=1,
                unit_price=e.value,
                note=e.note,
            )
        )
    return out


def compute_painting_estimate(
    selection: Mapping[str, Any],
    quantity: Any = 1,
    tax_rate: float = 0.0,
    catalog: Optional[Catalog] = None,
) -> PaintingEstimate:
    """
    Price one painting SKU.

    Unit price is the unit's base rate times the surface, prep, system,
    method, access and occupancy factors, rounded to cents. Conditions
    and add-ons are flat qty-1 lines; $0 lines without a note are dropped.
    An incomplete selection prices to an empty estimate.
    """
    catalog = catalog or painting_catalog()
    sku = build_sku(catalog, dict(selection))
    bundle_id = choose_bundle(selection, catalog)
    text = scope_text(selection, catalog)

    if not catalog.is_complete(selection):
        return PaintingEstimate(sku=sku, bundle_id=bundle_id, scope_text=text)

    qty = max(1.0, to_number(quantity, 1.0))
    singles = {k: v for k, v in selection.items() if k in catalog.dimensions and not catalog[k].multi}
    breakdown = catalog.price(0.0, singles)
    unit = catalog["unit"].get(selection.get("unit"))

    items = [
        PaintingLineItem(
            id="base",
            title="Paint scope base",
            qty=qty,
            unit_price=round2(breakdown.price),
            note=unit.note if unit else None,
        )
    ]
    items += _flat_items(catalog, CONDITIONS, selection.get(CONDITIONS), "cond", "Condition")
    items += _flat_items(catalog, ADDONS, selection.get(ADDONS), "add", "Add-on")
    items = [li for li in items if li.unit_price > 0 or li.note]

    subtotal = sum(li.amount for li in items)
    tax = round2(subtotal * tax_rate)
    estimate = PaintingEstimate(
        sku=sku,
        bundle_id=bundle_id,
        scope_text=text,
        items=items,
        subtotal=subtotal,
        tax=tax,
        total=subtotal + tax,
    )
    logger.debug("painting estimate %s: total=%s", sku, estimate.total)
    return estimate


def estimate_from_sku(
    sku: str,
    quantity: Any = 1,
    tax_rate: float = 0.0,
    catalog: Optional[Catalog] = None,
) -> PaintingEstimate:
    catalog = catalog or painting_catalog()
    return compute_painting_estimate(parse_sku(catalog, sku), quantity, tax_rate, catalog)

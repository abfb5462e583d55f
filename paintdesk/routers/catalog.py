# paintdesk/routers/catalog.py
from typing import Callable, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from paintdesk.catalog import catalog_registry, get_catalog
from paintdesk.catalog.base import Bundle, Catalog
from paintdesk.catalog.drywall import DRYWALL, compute_drywall_estimate, drywall_presets
from paintdesk.catalog.painting import PAINTING, compute_painting_estimate, painting_presets
from paintdesk.catalog.sku import Preset, parse_sku, sku_labels
from paintdesk.config import Settings, get_settings
from paintdesk.core.logging_config import logger
from paintdesk.observability.metrics import track_estimate
from paintdesk.schemas.catalog import (
    BundleOut,
    CatalogOut,
    DrywallEstimateOut,
    DrywallEstimateRequest,
    DrywallLineItemOut,
    LabelsOut,
    PaintingEstimateOut,
    PaintingEstimateRequest,
    PaintingLineItemOut,
    PresetOut,
)

router = APIRouter(prefix="/catalog", tags=["catalog"])

_PRESETS: Dict[str, Callable[[], List[Preset]]] = {
    DRYWALL: drywall_presets,
    PAINTING: painting_presets,
}


def _catalog_or_404(kind: str) -> Catalog:
    if kind not in catalog_registry:
        raise HTTPException(status_code=404, detail=f"Unknown catalog: {kind}")
    return get_catalog(kind)


def _bundle_out(bundle: Optional[Bundle]) -> Optional[BundleOut]:
    if bundle is None:
        return None
    return BundleOut(id=bundle.id, title=bundle.title, steps=list(bundle.steps))


@router.get("/{kind}", response_model=CatalogOut)
def get_catalog_tables(kind: str) -> CatalogOut:
    return CatalogOut(**_catalog_or_404(kind).to_dict())


@router.get("/{kind}/presets", response_model=List[PresetOut])
def list_presets(kind: str) -> List[PresetOut]:
    catalog = _catalog_or_404(kind)
    return [
        PresetOut(
            id=p.id,
            name=p.name,
            sku=p.sku,
            labels=sku_labels(catalog, p.sku),
            selection=p.selection(catalog),
        )
        for p in _PRESETS[kind]()
    ]


@router.get("/{kind}/labels", response_model=LabelsOut)
def labels(kind: str, sku: str = Query(..., min_length=1)) -> LabelsOut:
    catalog = _catalog_or_404(kind)
    codes: Dict[str, str] = {}
    for name, value in parse_sku(catalog, sku).items():
        for code in [value] if isinstance(value, str) else value:
            codes[code] = catalog[name].label_for(code)
    return LabelsOut(sku=sku, labels=sku_labels(catalog, sku), codes=codes)


@router.post(f"/{DRYWALL}/estimate", response_model=DrywallEstimateOut)
def drywall_estimate(
    payload: DrywallEstimateRequest, settings: Settings = Depends(get_settings)
) -> DrywallEstimateOut:
    catalog = get_catalog(DRYWALL)
    selection = parse_sku(catalog, payload.sku) if payload.sku else payload.selection()
    tax_rate = settings.drywall_tax_rate if payload.tax_rate is None else payload.tax_rate

    with track_estimate(DRYWALL):
        est = compute_drywall_estimate(selection, payload.quantity, tax_rate, catalog)

    logger.info("drywall_estimated", sku=est.sku, total=est.total)
    return DrywallEstimateOut(
        sku=est.sku,
        labels=sku_labels(catalog, est.sku),
        bundle_id=est.bundle_id,
        bundle=_bundle_out(est.bundle(catalog)),
        quantity=est.quantity,
        multiplier=est.multiplier,
        labor_subtotal=est.labor_subtotal,
        modifiers_total=est.modifiers_total,
        subtotal=est.subtotal,
        tax=est.tax,
        total=est.total,
        items=[DrywallLineItemOut(title=i.title, description=i.description, amount=i.amount) for i in est.items],
    )


@router.post(f"/{PAINTING}/estimate", response_model=PaintingEstimateOut)
def painting_estimate(
    payload: PaintingEstimateRequest, settings: Settings = Depends(get_settings)
) -> PaintingEstimateOut:
    catalog = get_catalog(PAINTING)
    selection = parse_sku(catalog, payload.sku) if payload.sku else payload.selection()
    tax_rate = settings.painting_tax_rate if payload.tax_rate is None else payload.tax_rate

    with track_estimate(PAINTING) as outcome:
        est = compute_painting_estimate(selection, payload.quantity, tax_rate, catalog)
        if not est.complete:
            outcome["result"] = "incomplete"

    logger.info("painting_estimated", sku=est.sku, total=est.total, complete=est.complete)
    return PaintingEstimateOut(
        sku=est.sku,
        labels=sku_labels(catalog, est.sku),
        bundle_id=est.bundle_id,
        bundle=_bundle_out(est.bundle(catalog)),
        scope_text=est.scope_text,
        complete=est.complete,
        items=[
            PaintingLineItemOut(
                id=li.id,
                title=li.title,
                qty=li.qty,
                unit_price=li.unit_price,
                amount=li.amount,
                note=li.note,
            )
            for li in est.items
        ],
        subtotal=est.subtotal,
        tax=est.tax,
        total=est.total,
    )

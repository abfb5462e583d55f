# paintdesk/routers/estimates.py
from typing import List, Optional

from fastapi import APIRouter, Depends

from paintdesk.catalog.quick import quick_estimate
from paintdesk.catalog.tasks import default_task_catalog
from paintdesk.config import Settings, get_settings
from paintdesk.core.logging_config import logger
from paintdesk.estimating.hours import estimate_hours, hours_to_days
from paintdesk.estimating.labor import project_totals, task_cost
from paintdesk.estimating.paint import LinearCoverage, paint_quantity
from paintdesk.estimating.production import estimate_production
from paintdesk.estimating.summary import estimate_work_items, invoice_line_items, price_summary, summarize_rooms
from paintdesk.estimating.totals import calculate_costs, to_cents
from paintdesk.observability.metrics import track_estimate
from paintdesk.schemas.estimate import (
    ConvertRequest,
    ConvertResponse,
    CostsRequest,
    CostsResponse,
    FeatureCostOut,
    GallonsRequest,
    GallonsResponse,
    HoursRequest,
    HoursResponse,
    InvoiceLineItemOut,
    InvoiceSummaryOut,
    LaborTaskOut,
    ProductionRequest,
    ProductionResponse,
    QuickEstimateRequest,
    QuickEstimateResponse,
    RoomsRequest,
    RoomsResponse,
    TaskCostOut,
    TaskTotalsRequest,
    TaskTotalsResponse,
    WorkItemOut,
)
from paintdesk.services.units import convert, format_measurement

router = APIRouter(prefix="/estimates", tags=["estimates"])

UNSPECIFIED_BASE = "unspecified"


def _or(value, default):
    return default if value is None else value


@router.post("/convert", response_model=ConvertResponse)
def convert_measurement(payload: ConvertRequest) -> ConvertResponse:
    result = convert(payload.value, payload.from_unit, payload.to_unit, is_area=payload.is_area)
    return ConvertResponse(
        value=payload.value,
        from_unit=payload.from_unit,
        to_unit=payload.to_unit,
        is_area=payload.is_area,
        result=result,
        formatted=format_measurement(result, payload.to_unit),
    )


@router.post("/gallons", response_model=GallonsResponse)
def gallons(payload: GallonsRequest, settings: Settings = Depends(get_settings)) -> GallonsResponse:
    with track_estimate("gallons"):
        q = paint_quantity(
            payload.magnitude,
            payload.coats,
            payload.unit,
            settings.default_coats,
            coverage=LinearCoverage(settings.coverage_ft_per_gallon),
            is_area=payload.is_area,
        )
    return GallonsResponse(gallons=q.gallons, feet=q.feet, coats=q.coats)


@router.post("/hours", response_model=HoursResponse)
def hours(payload: HoursRequest, settings: Settings = Depends(get_settings)) -> HoursResponse:
    with track_estimate("hours"):
        total = estimate_hours(
            wall_sq_ft=payload.wall_sq_ft,
            ceiling_sq_ft=payload.ceiling_sq_ft,
            trim_linear_ft=payload.trim_linear_ft,
            wall_coats=payload.wall_coats,
            ceiling_coats=payload.ceiling_coats,
            trim_coats=payload.trim_coats,
            wall_speed=_or(payload.wall_speed, settings.wall_speed),
            ceiling_speed=_or(payload.ceiling_speed, settings.ceiling_speed),
            trim_speed=_or(payload.trim_speed, settings.trim_speed),
            efficiency=_or(payload.efficiency, settings.efficiency),
        )
        days = hours_to_days(total, _or(payload.hours_per_day, settings.hours_per_day))
    return HoursResponse(hours=total, days=days)


@router.get("/tasks", response_model=List[LaborTaskOut])
def list_tasks(search: Optional[str] = None) -> List[LaborTaskOut]:
    return [LaborTaskOut.from_domain(t) for t in default_task_catalog().search(search)]


@router.post("/tasks/totals", response_model=TaskTotalsResponse)
def task_totals(payload: TaskTotalsRequest) -> TaskTotalsResponse:
    tasks = [t.to_domain() for t in payload.tasks]
    totals = project_totals(tasks, payload.include_material_costs)
    rows = []
    for t in tasks:
        c = task_cost(t)
        rows.append(
            TaskCostOut(
                name=c.name,
                hours=c.hours,
                labor_cost=c.labor_cost,
                material_cost=c.material_cost,
                total_cost=c.total_cost,
            )
        )
    return TaskTotalsResponse(
        total_labor_cost=totals.total_labor_cost,
        total_material_cost=totals.total_material_cost,
        total_cost=totals.total_cost,
        include_material_costs=totals.include_material_costs,
        tasks=rows,
    )


def _costs_out(calc) -> CostsResponse:
    return CostsResponse(**calc.as_dict(), total_with_taxes_cents=to_cents(calc.total_with_taxes))


@router.post("/rooms", response_model=RoomsResponse)
def rooms(payload: RoomsRequest, settings: Settings = Depends(get_settings)) -> RoomsResponse:
    with track_estimate("rooms"):
        domain_rooms = [r.to_domain() for r in payload.rooms]
        summary = summarize_rooms(
            domain_rooms,
            payload.unit,
            settings.estimate_config(),
            include_material_costs=payload.include_material_costs,
        )
        items = invoice_line_items(domain_rooms, payload.include_material_costs)
        work_items = estimate_work_items(summary, settings.cost_per_gallon, settings.hour_rate)
        calc = price_summary(
            summary,
            payload.discount.to_domain() if payload.discount else None,
            cost_per_gallon=settings.cost_per_gallon,
            hour_rate=settings.hour_rate,
            profit_margin=settings.profit_margin,
            tax_rate=settings.tax_rate,
            payment_fee_rate=settings.payment_fee_rate,
            payment_fee_fixed=settings.payment_fee_fixed,
        )

    logger.info(
        "rooms_estimated",
        rooms=len(domain_rooms),
        total_cost=summary.totals.total_cost,
        total_hours=summary.total_hours,
        total_with_taxes=calc.total_with_taxes,
    )
    return RoomsResponse(
        unit=summary.unit,
        summary=InvoiceSummaryOut(**summary.as_invoice_summary()),
        gallons_by_section={s.value: g for s, g in summary.gallons_by_section.items()},
        gallons_by_paint_base={
            (b.value if b else UNSPECIFIED_BASE): g for b, g in summary.gallons_by_paint_base.items()
        },
        feature_costs=[
            FeatureCostOut(room=f.room, feature=f.feature, section=f.section, cost=f.cost)
            for f in summary.feature_costs
        ],
        room_costs=summary.room_costs,
        line_items=[InvoiceLineItemOut(**i.as_dict()) for i in items],
        work_items=[WorkItemOut(label=w.label, cost=w.cost) for w in work_items],
        costs=_costs_out(calc),
    )


@router.post("/costs", response_model=CostsResponse)
def costs(payload: CostsRequest, settings: Settings = Depends(get_settings)) -> CostsResponse:
    with track_estimate("costs"):
        calc = calculate_costs(
            payload.subtotal,
            payload.discount.to_domain() if payload.discount else None,
            profit_margin=_or(payload.profit_margin, settings.profit_margin),
            tax_rate=_or(payload.tax_rate, settings.tax_rate),
            payment_fee_rate=_or(payload.payment_fee_rate, settings.payment_fee_rate),
            payment_fee_fixed=_or(payload.payment_fee_fixed, settings.payment_fee_fixed),
        )
    return _costs_out(calc)


@router.post("/production", response_model=ProductionResponse)
def production(payload: ProductionRequest, settings: Settings = Depends(get_settings)) -> ProductionResponse:
    with track_estimate("production"):
        est = estimate_production(
            [t.to_domain() for t in payload.tasks],
            labor_rate=_or(payload.labor_rate, settings.production_labor_rate),
            materials_estimate=payload.materials_estimate,
            overhead_percent=_or(payload.overhead_percent, settings.overhead_percent),
            profit_percent=_or(payload.profit_percent, settings.production_profit_percent),
        )
    logger.info("production_estimated", tasks=len(est.tasks), hours=est.total_labor_hours, total=est.total)
    return ProductionResponse.from_domain(est)


@router.post("/quick", response_model=QuickEstimateResponse)
def quick(payload: QuickEstimateRequest) -> QuickEstimateResponse:
    with track_estimate("quick"):
        est = quick_estimate(
            payload.project_type,
            square_footage=payload.square_footage,
            paint_type=payload.paint_type,
            extras=payload.extras,
            crew_size=payload.crew_size,
        )
    logger.info("quick_estimated", project_type=est.project_type, low=est.price_low, high=est.price_high)
    return QuickEstimateResponse(
        project_type=est.project_type,
        square_footage=est.square_footage,
        crew_size=est.crew_size,
        rate=est.rate,
        extras=est.extras,
        extras_cost=est.extras_cost,
        days=est.days,
        price_low=est.price_low,
        price_high=est.price_high,
    )

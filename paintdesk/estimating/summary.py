from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from paintdesk.estimating.hours import (
    DEFAULT_HOURS_PER_DAY,
    ProductivityRates,
    estimate_hours,
    hours_to_days,
)
from paintdesk.estimating.labor import ProjectTotals, feature_totals, task_cost
from paintdesk.estimating.models import (
    TRIM_SECTIONS,
    PaintBase,
    Room,
    Section,
)
from paintdesk.estimating.paint import (
    CoverageModel,
    LinearCoverage,
    coated_magnitude,
    gallons_by_paint_base,
    gallons_for_linear_or_area,
)
from paintdesk.estimating.totals import (
    DEFAULT_COST_PER_GALLON,
    DEFAULT_HOUR_RATE,
    DEFAULT_PAYMENT_FEE_FIXED,
    DEFAULT_PAYMENT_FEE_RATE,
    DEFAULT_PROFIT_MARGIN,
    DEFAULT_TAX_RATE,
    CostCalculation,
    DiscountConfig,
    calculate_costs,
)
from paintdesk.services.numbers import to_non_negative, to_number
from paintdesk.services.units import UnitLike, parse_unit, to_feet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EstimateConfig:
    """Knobs for a room estimate. Passed explicitly; nothing reads globals."""

    coverage: CoverageModel = field(default_factory=LinearCoverage)
    rates: ProductivityRates = field(default_factory=ProductivityRates)
    efficiency: float = 1.0
    hours_per_day: float = DEFAULT_HOURS_PER_DAY
    default_coats: int = 1


@dataclass(frozen=True)
class FeatureCost:
    room: str
    feature: str
    section: Section
    cost: float


@dataclass(frozen=True)
class InvoiceLineItem:
    description: str
    quantity: float
    rate: float

    @property
    def amount(self) -> float:
        return self.quantity * self.rate

    def as_dict(self) -> Dict:
        return {
            "description": self.description,
            "quantity": self.quantity,
            "rate": self.rate,
            "amount": self.amount,
        }


@dataclass(frozen=True)
class EstimateSummary:
    unit: str
    magnitude_by_section: Dict[Section, float]
    gallons_by_section: Dict[Section, float]
    gallons_by_paint_base: Dict[Optional[PaintBase], float]
    total_hours: float
    total_days: int
    totals: ProjectTotals
    feature_costs: List[FeatureCost]
    room_costs: Dict[str, float]

    @property
    def total_gallons(self) -> float:
        return sum(self.gallons_by_section.values())

    def as_invoice_summary(self) -> Dict[str, float]:
        return {
            "total_labor_cost": self.totals.total_labor_cost,
            "total_material_cost": self.totals.total_material_cost,
            "total_cost": self.totals.total_cost,
            "total_gallons": self.total_gallons,
            "total_hours": self.total_hours,
            "total_days": self.total_days,
        }


def _features(rooms: Iterable[Room]):
    for room in rooms:
        for feature in room.features:
            yield room, feature


def summarize_rooms(
    rooms: Iterable[Room],
    unit: UnitLike,
    config: Optional[EstimateConfig] = None,
    include_material_costs: bool = True,
) -> EstimateSummary:
    cfg = config or EstimateConfig()
    unit = parse_unit(unit)
    rooms = list(rooms)

    magnitude: Dict[Section, float] = {s: 0.0 for s in Section}
    for _, feature in _features(rooms):
        magnitude[feature.section] += coated_magnitude(feature, cfg.default_coats)

    # coats are already folded into the magnitudes above
    gallons = {
        s: gallons_for_linear_or_area(m, 1, unit, coverage=cfg.coverage, is_area=s.is_area)
        for s, m in magnitude.items()
    }

    by_base: Dict[Optional[PaintBase], float] = {}
    for area in (False, True):
        features = [f for _, f in _features(rooms) if f.section.is_area is area]
        part = gallons_by_paint_base(
            features,
            unit,
            coverage=cfg.coverage,
            is_area=area,
            default_coats=cfg.default_coats,
        )
        for base, g in part.items():
            by_base[base] = by_base.get(base, 0.0) + g

    trims = sum(magnitude[s] for s in TRIM_SECTIONS)
    hours = estimate_hours(
        wall_sq_ft=to_feet(magnitude[Section.WALLS], unit),
        ceiling_sq_ft=to_feet(magnitude[Section.CEILING], unit, is_area=True),
        trim_linear_ft=to_feet(trims, unit),
        wall_speed=cfg.rates.wall_speed,
        ceiling_speed=cfg.rates.ceiling_speed,
        trim_speed=cfg.rates.trim_speed,
        efficiency=cfg.efficiency,
    )

    labor = 0.0
    materials = 0.0
    feature_costs: List[FeatureCost] = []
    room_costs: Dict[str, float] = {}
    for room, feature in _features(rooms):
        part = feature_totals(feature, room.include_material_costs)
        labor += part.total_labor_cost
        materials += part.total_material_cost
        feature_costs.append(FeatureCost(room.name, feature.name, feature.section, part.total_cost))
        room_costs[room.name] = room_costs.get(room.name, 0.0) + part.total_cost
    for room in rooms:
        room_costs.setdefault(room.name, 0.0)

    totals = ProjectTotals(
        total_labor_cost=labor,
        total_material_cost=materials,
        include_material_costs=include_material_costs,
    )
    summary = EstimateSummary(
        unit=unit.value,
        magnitude_by_section=magnitude,
        gallons_by_section=gallons,
        gallons_by_paint_base=by_base,
        total_hours=hours,
        total_days=hours_to_days(hours, cfg.hours_per_day),
        totals=totals,
        feature_costs=feature_costs,
        room_costs=room_costs,
    )
    logger.debug(
        "summarized %d rooms: %.2f gal, %.2f h, $%.2f",
        len(rooms),
        summary.total_gallons,
        hours,
        totals.total_cost,
    )
    return summary


def invoice_line_items(
    rooms: Iterable[Room],
    include_material_costs: bool = True,
) -> List[InvoiceLineItem]:
    """One line per room/feature/task (hours x rate), plus material lines."""
    items: List[InvoiceLineItem] = []
    for room, feature in _features(rooms):
        for task in feature.work_labor or []:
            c = task_cost(task)
            items.append(
                InvoiceLineItem(
                    description=f"{room.name} - {feature.name}: {task.name}",
                    quantity=c.hours,
                    rate=to_number(task.rate),
                )
            )
            if not (include_material_costs and room.include_material_costs and feature.include_material_costs):
                continue
            for m in task.materials:
                items.append(
                    InvoiceLineItem(
                        description=f"{room.name} - {feature.name}: {m.name or 'Material'}",
                        quantity=to_non_negative(m.quantity),
                        rate=to_number(m.price),
                    )
                )
    return items


# -------------------------
# Priced rollup
# -------------------------
@dataclass(frozen=True)
class WorkItem:
    label: str
    cost: float


def estimate_work_items(
    summary: EstimateSummary,
    cost_per_gallon: Any = DEFAULT_COST_PER_GALLON,
    hour_rate: Any = DEFAULT_HOUR_RATE,
    materials: Any = 0.0,
) -> List[WorkItem]:
    """Paint (gallons x cost), labor (hours x rate) and a flat materials line."""
    return [
        WorkItem("Paint Cost", summary.total_gallons * to_non_negative(cost_per_gallon)),
        WorkItem("Labor Cost", summary.total_hours * to_non_negative(hour_rate)),
        WorkItem("Materials", to_non_negative(materials)),
    ]


def price_summary(
    summary: EstimateSummary,
    discount: Optional[DiscountConfig] = None,
    *,
    cost_per_gallon: Any = DEFAULT_COST_PER_GALLON,
    hour_rate: Any = DEFAULT_HOUR_RATE,
    materials: Any = 0.0,
    profit_margin: Any = DEFAULT_PROFIT_MARGIN,
    tax_rate: Any = DEFAULT_TAX_RATE,
    payment_fee_rate: Any = DEFAULT_PAYMENT_FEE_RATE,
    payment_fee_fixed: Any = DEFAULT_PAYMENT_FEE_FIXED,
) -> CostCalculation:
    items = estimate_work_items(summary, cost_per_gallon, hour_rate, materials)
    return calculate_costs(
        sum(i.cost for i in items),
        discount,
        profit_margin=profit_margin,
        tax_rate=tax_rate,
        payment_fee_rate=payment_fee_rate,
        payment_fee_fixed=payment_fee_fixed,
    )

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List

from paintdesk.services.numbers import to_non_negative, to_number

DEFAULT_LABOR_RATE = 45.0  # $/hour
DEFAULT_OVERHEAD_PERCENT = 15.0
DEFAULT_PROFIT_PERCENT = 50.0


def production_hours(measurement: Any, production_rate: Any, modifier_percent: Any = 0) -> float:
    """
    measurement / rate, scaled by the modifier percentage (+25 -> x1.25).
    A missing measurement or rate gives 0 hours.
    """
    m = to_non_negative(measurement)
    rate = to_non_negative(production_rate)
    if m <= 0 or rate <= 0:
        return 0.0
    factor = max(0.0, 1 + to_number(modifier_percent) / 100)
    return m / rate * factor


@dataclass(frozen=True)
class ProductionTask:
    name: str
    measurement: Any = 0
    production_rate: Any = 0  # units per hour, e.g. 150 ft²/h
    unit: str = "ft²"
    modifier_percent: Any = 0

    @property
    def hours(self) -> float:
        return production_hours(self.measurement, self.production_rate, self.modifier_percent)


@dataclass(frozen=True)
class ProductionEstimate:
    tasks: List[ProductionTask] = field(default_factory=list)
    labor_rate: float = DEFAULT_LABOR_RATE
    total_labor_hours: float = 0.0
    labor_cost: float = 0.0
    materials_estimate: float = 0.0
    subtotal: float = 0.0
    overhead_percent: float = DEFAULT_OVERHEAD_PERCENT
    overhead_amount: float = 0.0
    profit_percent: float = DEFAULT_PROFIT_PERCENT
    profit_amount: float = 0.0
    total: float = 0.0

    def as_text(self) -> str:
        lines = ["PRODUCTION RATE ESTIMATE", "", "TASKS:"]
        for t in self.tasks:
            lines += [
                f"  {t.name}",
                f"  - Measurement: {to_number(t.measurement):g} {t.unit}",
                f"  - Rate: {to_number(t.production_rate):g} {t.unit}/hr",
                f"  - Modifiers: +{to_number(t.modifier_percent):g}%",
                f"  - Hours: {t.hours:.2f}h",
            ]
        lines += [
            "",
            "PRICING:",
            f"Total Labor Hours: {self.total_labor_hours:.2f}h",
            f"Labor Rate: ${self.labor_rate:g}/hr",
            f"Labor Cost: ${self.labor_cost:.2f}",
            f"Materials: ${self.materials_estimate:.2f}",
            f"Subtotal: ${self.subtotal:.2f}",
            f"Overhead ({self.overhead_percent:g}%): ${self.overhead_amount:.2f}",
            f"Profit ({self.profit_percent:g}%): ${self.profit_amount:.2f}",
            f"TOTAL: ${self.total:.2f}",
        ]
        return "\n".join(lines)


def estimate_production(
    tasks: Iterable[ProductionTask],
    labor_rate: Any = DEFAULT_LABOR_RATE,
    materials_estimate: Any = 0.0,
    overhead_percent: Any = DEFAULT_OVERHEAD_PERCENT,
    profit_percent: Any = DEFAULT_PROFIT_PERCENT,
) -> ProductionEstimate:
    """
    Labor from production rates, kept apart from materials.

    subtotal = hours x labor rate + materials
    overhead = subtotal x overhead%
    profit   = (subtotal + overhead) x profit%
    """
    tasks = list(tasks)
    rate = to_non_negative(labor_rate)
    materials = to_non_negative(materials_estimate)
    overhead_pct = to_non_negative(overhead_percent)
    profit_pct = to_non_negative(profit_percent)

    hours = sum(t.hours for t in tasks)
    labor_cost = hours * rate
    subtotal = labor_cost + materials
    overhead = subtotal * overhead_pct / 100
    profit = (subtotal + overhead) * profit_pct / 100

    return ProductionEstimate(
        tasks=tasks,
        labor_rate=rate,
        total_labor_hours=hours,
        labor_cost=labor_cost,
        materials_estimate=materials,
        subtotal=subtotal,
        overhead_percent=overhead_pct,
        overhead_amount=overhead,
        profit_percent=profit_pct,
        profit_amount=profit,
        total=subtotal + overhead + profit,
    )

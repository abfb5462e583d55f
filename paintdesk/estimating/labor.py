from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Mapping, Optional

from paintdesk.estimating.models import LaborMaterial, LaborTask, RoomFeature
from paintdesk.services.numbers import to_non_negative, to_number

logger = logging.getLogger(__name__)


# -------------------------
# Cost math
# -------------------------
@dataclass(frozen=True)
class TaskCost:
    name: str
    hours: float
    labor_cost: float
    material_cost: float

    @property
    def total_cost(self) -> float:
        return self.labor_cost + self.material_cost


@dataclass(frozen=True)
class ProjectTotals:
    """
    Labor and materials are kept as separate sums so the
    "include material costs" switch can be flipped without re-summing.
    """

    total_labor_cost: float = 0.0
    total_material_cost: float = 0.0
    include_material_costs: bool = True

    @property
    def total_cost(self) -> float:
        materials = self.total_material_cost if self.include_material_costs else 0.0
        return self.total_labor_cost + materials

    def with_material_costs(self, include: bool) -> "ProjectTotals":
        return replace(self, include_material_costs=include)

    def as_dict(self) -> Dict[str, float]:
        return {
            "total_labor_cost": self.total_labor_cost,
            "total_material_cost": self.total_material_cost,
            "total_cost": self.total_cost,
        }


def material_cost(material: LaborMaterial) -> float:
    return to_non_negative(material.quantity) * to_number(material.price)


def task_cost(task: LaborTask) -> TaskCost:
    hours = to_non_negative(task.hours)
    labor = hours * to_number(task.rate)
    materials = sum(material_cost(m) for m in (task.materials or []))
    return TaskCost(name=task.name, hours=hours, labor_cost=labor, material_cost=materials)


def feature_totals(feature: RoomFeature, include_material_costs: bool = True) -> ProjectTotals:
    """
    Labor and materials of one feature. Materials only count when both the
    caller (usually the room) and the feature itself include them.
    """
    counted = include_material_costs and feature.include_material_costs
    labor = 0.0
    materials = 0.0
    for t in feature.work_labor or []:
        c = task_cost(t)
        labor += c.labor_cost
        if counted:
            materials += c.material_cost
    return ProjectTotals(total_labor_cost=labor, total_material_cost=materials)


def feature_cost(feature: RoomFeature, include_material_costs: bool = True) -> float:
    if not feature.work_labor:
        return 0.0
    return feature_totals(feature, include_material_costs).total_cost


def project_totals(
    tasks: Iterable[LaborTask],
    include_material_costs: bool = True,
) -> ProjectTotals:
    labor = 0.0
    materials = 0.0
    for t in tasks:
        c = task_cost(t)
        labor += c.labor_cost
        materials += c.material_cost
    return ProjectTotals(
        total_labor_cost=labor,
        total_material_cost=materials,
        include_material_costs=include_material_costs,
    )


def task_breakdown(tasks: Iterable[LaborTask], include_material_costs: bool = True) -> List[Dict]:
    rows = []
    for t in tasks:
        c = task_cost(t)
        mat = c.material_cost if include_material_costs else 0.0
        rows.append(
            {
                "name": c.name,
                "hours": c.hours,
                "labor_cost": c.labor_cost,
                "material_cost": mat,
                "total_cost": c.labor_cost + mat,
            }
        )
    return rows


# -------------------------
# Task catalog
# -------------------------
class LaborTaskCatalog:
    """Default task definitions (hours, rate, materials) keyed by name."""

    def __init__(self, tasks: Iterable[LaborTask]):
        self._tasks: Dict[str, LaborTask] = {}
        for t in tasks:
            self._tasks[t.name] = t

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __iter__(self):
        return iter(self._tasks.values())

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, name: str) -> Optional[LaborTask]:
        return self._tasks.get(name)

    def names(self) -> List[str]:
        return list(self._tasks)

    def search(self, term: Optional[str]) -> List[LaborTask]:
        q = (term or "").strip().lower()
        if not q:
            return list(self._tasks.values())
        out = []
        for t in self._tasks.values():
            if q in t.name.lower() or q in (t.description or "").lower():
                out.append(t)
            elif any(q in (m.name or "").lower() for m in t.materials):
                out.append(t)
        return out

    @classmethod
    def from_records(cls, records: Iterable[Mapping]) -> "LaborTaskCatalog":
        tasks = []
        for r in records:
            tasks.append(
                LaborTask(
                    name=str(r["name"]),
                    hours=float(r.get("hours", 0) or 0),
                    rate=float(r.get("rate", 0) or 0),
                    description=r.get("description"),
                    materials=[
                        LaborMaterial(
                            quantity=float(m.get("quantity", 0) or 0),
                            price=float(m.get("price", 0) or 0),
                            name=m.get("name"),
                            unit=str(m.get("unit", "ea")),
                        )
                        for m in (r.get("materials") or [])
                    ],
                )
            )
        return cls(tasks)


# -------------------------
# Editing session
# -------------------------
@dataclass
class TaskSelection:
    """
    Selected task names for one feature while it is being edited.

    Membership is keyed by name. Hours edited during the session are
    remembered per name, also after the task is deselected, so toggling a
    task off and on again keeps the edited value.
    """

    catalog: LaborTaskCatalog
    selected: List[str] = field(default_factory=list)
    custom_hours: Dict[str, float] = field(default_factory=dict)
    include_material_costs: bool = True

    @classmethod
    def from_feature(cls, feature: RoomFeature, catalog: LaborTaskCatalog) -> "TaskSelection":
        sel = cls(catalog=catalog, include_material_costs=feature.include_material_costs)
        for t in feature.work_labor or []:
            sel.selected.append(t.name)
            sel.custom_hours[t.name] = to_non_negative(t.hours)
        return sel

    def is_selected(self, name: str) -> bool:
        return name in self.selected

    def toggle(self, name: str) -> bool:
        """Returns True if the task is selected after the call."""
        if name in self.selected:
            self.selected = [n for n in self.selected if n != name]
            return False
        self.selected = [*self.selected, name]
        return True

    def set_hours(self, name: str, hours: float) -> float:
        value = max(0.0, to_number(hours))
        self.custom_hours[name] = value
        return value

    def hours_for(self, name: str) -> float:
        if name in self.custom_hours:
            return self.custom_hours[name]
        task = self.catalog.get(name)
        return task.hours if task else 0.0

    def tasks(self) -> List[LaborTask]:
        out = []
        for name in self.selected:
            base = self.catalog.get(name)
            if base is None:
                logger.debug("task %s not in catalog, skipped", name)
                continue
            out.append(replace(base, hours=self.hours_for(name), materials=list(base.materials)))
        return out

    def totals(self, include_material_costs: Optional[bool] = None) -> ProjectTotals:
        if include_material_costs is None:
            include_material_costs = self.include_material_costs
        return project_totals(self.tasks(), include_material_costs)

    def apply_to(self, feature: RoomFeature) -> RoomFeature:
        feature.work_labor = self.tasks()
        feature.include_material_costs = self.include_material_costs
        return feature

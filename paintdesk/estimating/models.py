from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class PaintBase(str, Enum):
    OIL_BASED = "oil-based"
    WATER_BASED = "water-based"
    LATEX = "latex"
    ACRYLIC = "acrylic"


class Section(str, Enum):
    WALLS = "walls"
    CROWN_MOLDING = "crown_molding"
    CHAIR_RAIL = "chair_rail"
    BASEBOARD = "baseboard"
    WAINSCOTING = "wainscoting"
    CEILING = "ceiling"
    FLOOR = "floor"

    @property
    def is_area(self) -> bool:
        return self in AREA_SECTIONS

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


AREA_SECTIONS = frozenset({Section.CEILING, Section.FLOOR})
TRIM_SECTIONS = frozenset(
    {Section.CROWN_MOLDING, Section.CHAIR_RAIL, Section.BASEBOARD, Section.WAINSCOTING}
)


class DuplicateTaskError(ValueError):
    def __init__(self, names: List[str]):
        self.names = names
        super().__init__(f"Duplicate labor task names: {', '.join(names)}")


@dataclass
class LaborMaterial:
    quantity: Union[float, str] = 0.0
    price: Union[float, str] = 0.0
    name: Optional[str] = None
    unit: str = "ea"


@dataclass
class LaborTask:
    """
    A named unit of billable work. The name is the task's key inside a
    feature's task list; there is no separate id.
    """

    name: str
    hours: Union[float, str] = 0.0
    rate: Union[float, str] = 0.0
    materials: List[LaborMaterial] = field(default_factory=list)
    description: Optional[str] = None


@dataclass
class RoomFeature:
    name: str
    section: Section = Section.WALLS
    magnitude: Optional[Union[float, str]] = None
    coats: Optional[Union[float, str]] = None
    paint_base: Optional[PaintBase] = None
    work_labor: Optional[List[LaborTask]] = None
    include_material_costs: bool = True

    def attach_task(self, task: LaborTask) -> None:
        tasks = [t for t in (self.work_labor or []) if t.name != task.name]
        tasks.append(task)
        self.work_labor = tasks

    def detach_task(self, name: str) -> None:
        if self.work_labor:
            self.work_labor = [t for t in self.work_labor if t.name != name]

    def task_names(self) -> List[str]:
        return [t.name for t in (self.work_labor or [])]


@dataclass
class Room:
    name: str
    features: List[RoomFeature] = field(default_factory=list)
    description: Optional[str] = None
    floor_number: Optional[int] = None
    include_material_costs: bool = True


def check_unique_task_names(tasks: List[LaborTask]) -> None:
    seen = set()
    dupes: List[str] = []
    for t in tasks:
        if t.name in seen and t.name not in dupes:
            dupes.append(t.name)
        seen.add(t.name)
    if dupes:
        raise DuplicateTaskError(dupes)

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Mapping, Optional

from paintdesk.estimating.totals import js_round
from paintdesk.services.numbers import to_non_negative

from .base import CatalogError
from .loader import read_yaml

logger = logging.getLogger(__name__)

QUICK_ESTIMATE_FILE = "quick_estimate.yaml"


@dataclass(frozen=True)
class ProjectType:
    name: str
    productivity: float
    extras: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class QuickEstimateTables:
    project_types: Dict[str, ProjectType]
    paint_types: Dict[str, float]
    default_project_type: str = "interior"
    default_square_footage: float = 3000
    default_crew_size: int = 2
    base_rate: float = 1.5
    high_factor: float = 1.2

    @staticmethod
    def from_dict(raw: Mapping[str, Any]) -> "QuickEstimateTables":
        if not isinstance(raw, Mapping) or not raw.get("project_types"):
            raise CatalogError(f"{QUICK_ESTIMATE_FILE}: needs 'project_types'")
        types = {}
        for name, t in raw["project_types"].items():
            productivity = float(t.get("productivity") or 0)
            if productivity <= 0:
                raise CatalogError(f"{QUICK_ESTIMATE_FILE}: {name} needs a positive productivity")
            extras = {str(k): float(v) for k, v in (t.get("extras") or {}).items()}
            types[str(name)] = ProjectType(str(name), productivity, extras)
        default_type = str(raw.get("default_project_type", "interior"))
        if default_type not in types:
            raise CatalogError(f"{QUICK_ESTIMATE_FILE}: unknown default_project_type '{default_type}'")
        return QuickEstimateTables(
            project_types=types,
            paint_types={str(k): float(v) for k, v in (raw.get("paint_types") or {}).items()},
            default_project_type=default_type,
            default_square_footage=float(raw.get("default_square_footage", 3000)),
            default_crew_size=int(raw.get("default_crew_size", 2)),
            base_rate=float(raw.get("base_rate", 1.5)),
            high_factor=float(raw.get("high_factor", 1.2)),
        )


@lru_cache(maxsize=None)
def quick_estimate_tables() -> QuickEstimateTables:
    tables = QuickEstimateTables.from_dict(read_yaml(QUICK_ESTIMATE_FILE))
    logger.info("loaded quick estimate tables (%d project types)", len(tables.project_types))
    return tables


@dataclass(frozen=True)
class QuickEstimate:
    project_type: str
    square_footage: int
    crew_size: int
    rate: float
    extras: List[str]
    extras_cost: float
    days: int
    price_low: int
    price_high: int


def quick_estimate(
    project_type: Optional[str],
    square_footage: Any = None,
    paint_type: Optional[str] = None,
    extras: Iterable[str] = (),
    crew_size: Any = None,
    tables: Optional[QuickEstimateTables] = None,
) -> QuickEstimate:
    """
    Ballpark days and price range from square footage alone.

    Missing or zero square footage and crew fall back to the table
    defaults. Extras that do not belong to the project type are ignored.
    """
    tables = tables or quick_estimate_tables()
    ptype = tables.project_types.get(project_type or "")
    if ptype is None:
        # unknown type: default productivity, no extras
        logger.debug("quick estimate: unknown project type %r", project_type)
        type_name = ""
        productivity = tables.project_types[tables.default_project_type].productivity
        known_extras: Dict[str, float] = {}
    else:
        type_name = ptype.name
        productivity = ptype.productivity
        known_extras = ptype.extras

    sqft = int(to_non_negative(square_footage)) or int(tables.default_square_footage)
    crew = int(to_non_negative(crew_size)) or tables.default_crew_size

    days = math.ceil(sqft / (productivity * crew))
    rate = tables.base_rate + tables.paint_types.get(paint_type or "", 0.0)

    applied = [e for e in dict.fromkeys(extras) if e in known_extras]
    extras_cost = sum(known_extras[e] for e in applied)

    low = sqft * rate + extras_cost
    return QuickEstimate(
        project_type=type_name,
        square_footage=sqft,
        crew_size=crew,
        rate=rate,
        extras=applied,
        extras_cost=extras_cost,
        days=days,
        price_low=js_round(low),
        price_high=js_round(low * tables.high_factor),
    )

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional

from paintdesk.estimating.models import PaintBase, RoomFeature
from paintdesk.services.numbers import to_non_negative, to_number
from paintdesk.services.units import UnitLike, to_feet

DEFAULT_COVERAGE_FT_PER_GALLON = 400.0

# feet (or square feet) -> gallons
CoverageModel = Callable[[float], float]


@dataclass(frozen=True)
class LinearCoverage:
    """
    One gallon covers a fixed number of feet per coat.

    The same rate is used for linear footage (trim) and square footage
    (walls/ceilings). Swap in a different CoverageModel to separate them.
    """

    ft_per_gallon: float = DEFAULT_COVERAGE_FT_PER_GALLON

    def __call__(self, feet: float) -> float:
        if self.ft_per_gallon <= 0:
            return 0.0
        return feet / self.ft_per_gallon


def effective_coats(coats: Any, default_coats: int = 1) -> float:
    n = to_number(coats)
    return n if n > 0 else default_coats


@dataclass(frozen=True)
class PaintQuantity:
    coats: float
    feet: float
    gallons: float


def paint_quantity(
    magnitude: Any,
    coats: Any,
    unit: UnitLike,
    default_coats: int = 1,
    *,
    coverage: Optional[CoverageModel] = None,
    is_area: bool = False,
) -> PaintQuantity:
    """Coated footage in feet and the gallons it takes."""
    n = effective_coats(coats, default_coats)
    amount = to_non_negative(magnitude)
    if amount <= 0:
        return PaintQuantity(coats=n, feet=0.0, gallons=0.0)

    # coats scale the raw magnitude before unit conversion
    feet = to_feet(amount * n, unit, is_area=is_area)
    model = coverage or LinearCoverage()
    return PaintQuantity(coats=n, feet=feet, gallons=model(feet))


def gallons_for_linear_or_area(
    magnitude: Any,
    coats: Any,
    unit: UnitLike,
    default_coats: int = 1,
    *,
    coverage: Optional[CoverageModel] = None,
    is_area: bool = False,
) -> float:
    return paint_quantity(
        magnitude, coats, unit, default_coats, coverage=coverage, is_area=is_area
    ).gallons


def gallons_for_area(
    magnitude: Any,
    coats: Any,
    unit: UnitLike,
    default_coats: int = 1,
    *,
    coverage: Optional[CoverageModel] = None,
) -> float:
    return gallons_for_linear_or_area(
        magnitude, coats, unit, default_coats, coverage=coverage, is_area=True
    )


def coated_magnitude(feature: RoomFeature, default_coats: int = 1) -> float:
    amount = to_non_negative(feature.magnitude)
    if amount <= 0:
        return 0.0
    return amount * effective_coats(feature.coats, default_coats)


def gallons_by_paint_base(
    features: Iterable[RoomFeature],
    unit: UnitLike,
    *,
    coverage: Optional[CoverageModel] = None,
    is_area: bool = False,
    default_coats: int = 1,
) -> Dict[Optional[PaintBase], float]:
    totals: Dict[Optional[PaintBase], float] = {}
    for f in features:
        totals[f.paint_base] = totals.get(f.paint_base, 0.0) + coated_magnitude(f, default_coats)

    return {
        base: gallons_for_linear_or_area(total, 1, unit, coverage=coverage, is_area=is_area)
        for base, total in totals.items()
    }

# paintdesk/schemas/estimate.py
from __future__ import annotations

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from paintdesk.estimating.models import (
    LaborMaterial,
    LaborTask,
    PaintBase,
    Room,
    RoomFeature,
    Section,
    check_unique_task_names,
)
from paintdesk.estimating.production import ProductionEstimate, ProductionTask
from paintdesk.estimating.totals import DiscountConfig, DiscountType

# Form fields (magnitudes, coats, hours, quantities) may arrive as numeric or
# empty strings; the domain coerces them.
FormNumber = Optional[Union[float, str]]
Magnitude = FormNumber


# ----------------------------
# Units / gallons / hours
# ----------------------------
class ConvertRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    value: float = Field(allow_inf_nan=False)
    from_unit: str
    to_unit: str
    is_area: bool = False


class ConvertResponse(BaseModel):
    value: float
    from_unit: str
    to_unit: str
    is_area: bool
    result: float
    formatted: str


class GallonsRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    magnitude: Magnitude = None
    coats: FormNumber = None
    unit: str = "ft"
    is_area: bool = False


class GallonsResponse(BaseModel):
    gallons: float
    feet: float
    coats: float


class HoursRequest(BaseModel):
    """Speeds, efficiency and hours/day fall back to server settings when omitted."""

    model_config = ConfigDict(extra="forbid")

    wall_sq_ft: FormNumber = 0
    ceiling_sq_ft: FormNumber = 0
    trim_linear_ft: FormNumber = 0
    wall_coats: FormNumber = 1
    ceiling_coats: FormNumber = 1
    trim_coats: FormNumber = 1
    wall_speed: Optional[float] = None
    ceiling_speed: Optional[float] = None
    trim_speed: Optional[float] = None
    efficiency: Optional[float] = None
    hours_per_day: Optional[float] = None


class HoursResponse(BaseModel):
    hours: float
    days: int


# ----------------------------
# Labor tasks
# ----------------------------
class LaborMaterialIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    quantity: FormNumber = 0
    price: FormNumber = 0
    name: Optional[str] = None
    unit: str = "ea"

    def to_domain(self) -> LaborMaterial:
        return LaborMaterial(quantity=self.quantity, price=self.price, name=self.name, unit=self.unit)


class LaborTaskIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    hours: FormNumber = 0
    rate: FormNumber = 0
    materials: List[LaborMaterialIn] = Field(default_factory=list)
    description: Optional[str] = None

    def to_domain(self) -> LaborTask:
        return LaborTask(
            name=self.name,
            hours=self.hours,
            rate=self.rate,
            materials=[m.to_domain() for m in self.materials],
            description=self.description,
        )


class LaborMaterialOut(BaseModel):
    quantity: float
    price: float
    name: Optional[str] = None
    unit: str = "ea"


class LaborTaskOut(BaseModel):
    name: str
    hours: float
    rate: float
    description: Optional[str] = None
    materials: List[LaborMaterialOut] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, task: LaborTask) -> "LaborTaskOut":
        return cls(
            name=task.name,
            hours=task.hours,
            rate=task.rate,
            description=task.description,
            materials=[
                LaborMaterialOut(quantity=m.quantity, price=m.price, name=m.name, unit=m.unit)
                for m in task.materials
            ],
        )


class TaskTotalsRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tasks: List[LaborTaskIn] = Field(default_factory=list)
    include_material_costs: bool = True


class TaskCostOut(BaseModel):
    name: str
    hours: float
    labor_cost: float
    material_cost: float
    total_cost: float


class TaskTotalsResponse(BaseModel):
    total_labor_cost: float
    total_material_cost: float
    total_cost: float
    include_material_costs: bool
    tasks: List[TaskCostOut]


# ----------------------------
# Cost rollup
# ----------------------------
class DiscountIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: DiscountType = DiscountType.PERCENTAGE
    value: float = Field(0, ge=0)

    def to_domain(self) -> DiscountConfig:
        return DiscountConfig(type=self.type, value=self.value)


class CostsRequest(BaseModel):
    """Rates fall back to server settings when omitted."""

    model_config = ConfigDict(extra="forbid")

    subtotal: float = Field(ge=0)
    discount: Optional[DiscountIn] = None
    profit_margin: Optional[float] = Field(None, ge=0)
    tax_rate: Optional[float] = Field(None, ge=0)
    payment_fee_rate: Optional[float] = Field(None, ge=0)
    payment_fee_fixed: Optional[float] = Field(None, ge=0)


class CostsResponse(BaseModel):
    subtotal: float
    discount_amount: float
    total_after_discount: float
    profit_amount: float
    total_with_profit: float
    taxes_to_pay: float
    payment_system_fee: float
    company_fees_total: float
    total_with_taxes: float
    total_with_taxes_cents: int


# ----------------------------
# Rooms
# ----------------------------
class RoomFeatureIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    section: Section = Section.WALLS
    magnitude: Magnitude = None
    coats: FormNumber = None
    paint_base: Optional[PaintBase] = None
    work_labor: Optional[List[LaborTaskIn]] = None
    include_material_costs: bool = True

    def to_domain(self) -> RoomFeature:
        tasks = None
        if self.work_labor is not None:
            tasks = [t.to_domain() for t in self.work_labor]
            check_unique_task_names(tasks)
        return RoomFeature(
            name=self.name,
            section=self.section,
            magnitude=self.magnitude,
            coats=self.coats,
            paint_base=self.paint_base,
            work_labor=tasks,
            include_material_costs=self.include_material_costs,
        )


class RoomIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    description: Optional[str] = None
    floor_number: Optional[int] = None
    features: List[RoomFeatureIn] = Field(default_factory=list)
    include_material_costs: bool = True

    def to_domain(self) -> Room:
        return Room(
            name=self.name,
            description=self.description,
            floor_number=self.floor_number,
            features=[f.to_domain() for f in self.features],
            include_material_costs=self.include_material_costs,
        )


class RoomsRequest(BaseModel):
    """Work-item prices and fee rates come from server settings."""

    model_config = ConfigDict(extra="forbid")

    rooms: List[RoomIn] = Field(default_factory=list)
    unit: str = "ft"
    include_material_costs: bool = True
    discount: Optional[DiscountIn] = None


class InvoiceSummaryOut(BaseModel):
    total_labor_cost: float
    total_material_cost: float
    total_cost: float
    total_gallons: float
    total_hours: float
    total_days: int


class FeatureCostOut(BaseModel):
    room: str
    feature: str
    section: Section
    cost: float


class InvoiceLineItemOut(BaseModel):
    description: str
    quantity: float
    rate: float
    amount: float


class WorkItemOut(BaseModel):
    label: str
    cost: float


class RoomsResponse(BaseModel):
    unit: str
    summary: InvoiceSummaryOut
    gallons_by_section: Dict[str, float]
    gallons_by_paint_base: Dict[str, float]
    feature_costs: List[FeatureCostOut]
    room_costs: Dict[str, float]
    line_items: List[InvoiceLineItemOut]
    work_items: List[WorkItemOut]
    costs: CostsResponse


# ----------------------------
# Production rate estimate
# ----------------------------
class ProductionTaskIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    measurement: FormNumber = 0
    production_rate: FormNumber = 0
    unit: str = "ft²"
    modifier_percent: FormNumber = 0

    def to_domain(self) -> ProductionTask:
        return ProductionTask(
            name=self.name,
            measurement=self.measurement,
            production_rate=self.production_rate,
            unit=self.unit,
            modifier_percent=self.modifier_percent,
        )


class ProductionRequest(BaseModel):
    """Labor rate, overhead and profit fall back to server settings when omitted."""

    model_config = ConfigDict(extra="forbid")

    tasks: List[ProductionTaskIn] = Field(default_factory=list)
    labor_rate: Optional[float] = Field(None, ge=0)
    materials_estimate: FormNumber = 0
    overhead_percent: Optional[float] = Field(None, ge=0)
    profit_percent: Optional[float] = Field(None, ge=0)


class ProductionTaskOut(BaseModel):
    name: str
    unit: str
    hours: float


class ProductionResponse(BaseModel):
    tasks: List[ProductionTaskOut]
    labor_rate: float
    total_labor_hours: float
    labor_cost: float
    materials_estimate: float
    subtotal: float
    overhead_percent: float
    overhead_amount: float
    profit_percent: float
    profit_amount: float
    total: float
    text: str

    @classmethod
    def from_domain(cls, est: ProductionEstimate) -> "ProductionResponse":
        return cls(
            tasks=[ProductionTaskOut(name=t.name, unit=t.unit, hours=t.hours) for t in est.tasks],
            labor_rate=est.labor_rate,
            total_labor_hours=est.total_labor_hours,
            labor_cost=est.labor_cost,
            materials_estimate=est.materials_estimate,
            subtotal=est.subtotal,
            overhead_percent=est.overhead_percent,
            overhead_amount=est.overhead_amount,
            profit_percent=est.profit_percent,
            profit_amount=est.profit_amount,
            total=est.total,
            text=est.as_text(),
        )


# ----------------------------
# Quick estimate
# ----------------------------
class QuickEstimateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    project_type: Optional[str] = None  # interior | exterior
    square_footage: FormNumber = None
    paint_type: Optional[str] = None  # standard | eco | premium
    extras: List[str] = Field(default_factory=list)
    crew_size: FormNumber = None


class QuickEstimateResponse(BaseModel):
    project_type: str
    square_footage: int
    crew_size: int
    rate: float
    extras: List[str]
    extras_cost: float
    days: int
    price_low: int
    price_high: int

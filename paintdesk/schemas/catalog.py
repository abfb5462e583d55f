# paintdesk/schemas/catalog.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class EntryOut(BaseModel):
    id: str
    label: str
    kind: str
    value: float
    group: Optional[str] = None
    note: Optional[str] = None
    bundle: Optional[str] = None


class DimensionOut(BaseModel):
    name: str
    label: str
    multi: bool
    required: bool
    sku_marker: str = ""
    entries: List[EntryOut]


class BundleOut(BaseModel):
    id: str
    title: str
    steps: List[str]


class CatalogOut(BaseModel):
    name: str
    sku_order: List[str]
    dimensions: List[DimensionOut]
    bundles: List[BundleOut]


class PresetOut(BaseModel):
    id: str
    name: str
    sku: str
    labels: str
    selection: Dict[str, Any]


class LabelsOut(BaseModel):
    sku: str
    labels: str
    codes: Dict[str, str]


class DrywallEstimateRequest(BaseModel):
    """Either a full `sku` string or individual dimension ids."""

    model_config = ConfigDict(extra="forbid")

    sku: Optional[str] = None
    repair_type: Optional[str] = None
    size: Optional[str] = None
    orientation: Optional[str] = None
    access: Optional[str] = None
    finish: Optional[str] = None
    paint_scope: Optional[str] = None
    protection: Optional[str] = None
    modifiers: List[str] = Field(default_factory=list)
    quantity: float = 1
    tax_rate: Optional[float] = Field(None, ge=0)

    def selection(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"sku", "quantity", "tax_rate"}, exclude_none=True)


class DrywallLineItemOut(BaseModel):
    title: str
    description: str
    amount: float


class DrywallEstimateOut(BaseModel):
    sku: str
    labels: str
    bundle_id: str
    bundle: Optional[BundleOut] = None
    quantity: float
    multiplier: float
    labor_subtotal: float
    modifiers_total: float
    subtotal: float
    tax: float
    total: float
    items: List[DrywallLineItemOut]


class PaintingEstimateRequest(BaseModel):
    """Either a full `sku` string or individual dimension ids."""

    model_config = ConfigDict(extra="forbid")

    sku: Optional[str] = None
    surface: Optional[str] = None
    unit: Optional[str] = None
    scope: Optional[str] = None
    system: Optional[str] = None
    prep: Optional[str] = None
    sheen: Optional[str] = None
    method: Optional[str] = None
    access: Optional[str] = None
    occupancy: Optional[str] = None
    conditions: List[str] = Field(default_factory=list)
    addons: List[str] = Field(default_factory=list)
    quantity: float = 1
    tax_rate: Optional[float] = Field(None, ge=0)

    def selection(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"sku", "quantity", "tax_rate"}, exclude_none=True)


class PaintingLineItemOut(BaseModel):
    id: str
    title: str
    qty: float
    unit_price: float
    amount: float
    note: Optional[str] = None


class PaintingEstimateOut(BaseModel):
    sku: str
    labels: str
    bundle_id: str
    bundle: Optional[BundleOut] = None
    scope_text: str
    complete: bool
    items: List[PaintingLineItemOut]
    subtotal: float
    tax: float
    total: float

from .hours import ProductivityRates, estimate_hours, hours_to_days  # noqa
from .labor import LaborTaskCatalog, ProjectTotals, TaskSelection, feature_cost, feature_totals, project_totals, task_cost  # noqa
from .models import LaborMaterial, LaborTask, PaintBase, Room, RoomFeature, Section  # noqa
from .paint import PaintQuantity, gallons_for_area, gallons_for_linear_or_area, paint_quantity  # noqa
from .production import ProductionEstimate, ProductionTask, estimate_production  # noqa
from .summary import EstimateConfig, estimate_work_items, price_summary, summarize_rooms  # noqa

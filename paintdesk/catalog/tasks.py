from __future__ import annotations

from functools import lru_cache

from paintdesk.estimating.labor import LaborTaskCatalog

from .loader import load_records


@lru_cache(maxsize=None)
def default_task_catalog() -> LaborTaskCatalog:
    return LaborTaskCatalog.from_records(load_records("labor_tasks.yaml"))

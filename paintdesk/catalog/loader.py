from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .base import Bundle, Catalog, CatalogEntry, CatalogError, Dimension

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / "data"


def read_yaml(name: str, data_dir: Optional[Path] = None) -> Any:
    path = (data_dir or DATA_DIR) / name
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except FileNotFoundError:
        raise CatalogError(f"catalog data file missing: {path}") from None
    except yaml.YAMLError as e:
        raise CatalogError(f"invalid YAML in {path}: {e}") from e


def catalog_from_dict(raw: Dict[str, Any]) -> Catalog:
    """Build and validate a Catalog from its YAML document."""
    if not isinstance(raw, dict) or not raw.get("name"):
        raise CatalogError("catalog document needs a 'name'")

    dimensions: List[Dimension] = []
    for d in raw.get("dimensions") or []:
        if not d.get("name"):
            raise CatalogError(f"catalog '{raw['name']}': dimension without name")
        dimensions.append(
            Dimension(
                str(d["name"]),
                [CatalogEntry.from_dict(e) for e in d.get("entries") or []],
                label=d.get("label"),
                multi=bool(d.get("multi", False)),
                required=bool(d.get("required", False)),
                sku_marker=str(d.get("sku_marker") or ""),
            )
        )

    bundles: Dict[str, Bundle] = {}
    for b in raw.get("bundles") or []:
        bid = str(b["id"])
        if bid in bundles:
            raise CatalogError(f"catalog '{raw['name']}': duplicate bundle '{bid}'")
        bundles[bid] = Bundle(id=bid, title=str(b.get("title", bid)), steps=tuple(b.get("steps") or ()))

    catalog = Catalog(
        str(raw["name"]),
        dimensions,
        sku_order=raw.get("sku_order"),
        bundles=bundles,
        default_bundle=raw.get("default_bundle"),
    )

    # every bundle reference must resolve
    for dim in catalog.dimensions.values():
        for e in dim:
            if e.bundle and e.bundle not in bundles:
                raise CatalogError(
                    f"catalog '{catalog.name}': {dim.name} {e.id} points at unknown bundle '{e.bundle}'"
                )
    return catalog


@lru_cache(maxsize=None)
def load_catalog(filename: str) -> Catalog:
    catalog = catalog_from_dict(read_yaml(filename))
    logger.info(
        "loaded catalog %s (%d dimensions, %d bundles)",
        catalog.name,
        len(catalog.dimensions),
        len(catalog.bundles),
    )
    return catalog


@lru_cache(maxsize=None)
def load_records(filename: str) -> tuple:
    raw = read_yaml(filename) or []
    if not isinstance(raw, list):
        raise CatalogError(f"{filename}: expected a list")
    return tuple(raw)

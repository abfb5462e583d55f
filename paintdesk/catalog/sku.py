from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .base import Catalog, Dimension

logger = logging.getLogger(__name__)

LABEL_SEPARATOR = " • "

_TOKEN_RE = re.compile(r"\([^)]*\)|\S+")

SelectionDict = Dict[str, Union[str, List[str]]]


def build_sku(catalog: Catalog, selection: SelectionDict) -> str:
    """
    Compound SKU string in catalog order.

    Unselected single dimensions print as a placeholder ("T?"); multi
    dimensions print sorted in parentheses, or nothing when empty.
    """
    parts: List[str] = []
    for name in catalog.sku_order:
        dim = catalog[name]
        value = selection.get(name)
        if dim.multi:
            ids = sorted(v for v in (value or []) if v)
            if ids:
                parts.append("(" + ",".join(dim.sku_marker + i for i in ids) + ")")
        else:
            parts.append(value if isinstance(value, str) and value else dim.placeholder)
    return " ".join(parts)


def _group_ids(token: str) -> List[str]:
    return [t.strip() for t in token.strip("()").split(",") if t.strip()]


def _multi_dimension(catalog: Catalog, ids: List[str]) -> Optional[Dimension]:
    multi = [catalog[n] for n in catalog.sku_order if catalog[n].multi]
    for dim in multi:
        if dim.sku_marker and ids and ids[0].startswith(dim.sku_marker):
            return dim
    for dim in multi:
        if not dim.sku_marker:
            return dim
    return None


def parse_sku(catalog: Catalog, sku: str) -> SelectionDict:
    """
    Split a compound SKU back into a selection.

    Plain tokens fill the single dimensions positionally; placeholders
    ("T?") leave their slot empty. Parenthesized groups go to a multi
    dimension, "+"-prefixed ids to the dimension with that marker.
    """
    singles = [n for n in catalog.sku_order if not catalog[n].multi]
    selection: SelectionDict = {}
    pos = 0
    for token in _TOKEN_RE.findall(sku or ""):
        if token.startswith("("):
            ids = _group_ids(token)
            dim = _multi_dimension(catalog, ids)
            if dim is None:
                logger.debug("sku %r: no multi dimension for %s", sku, token)
                continue
            ids = [i[len(dim.sku_marker):] if dim.sku_marker and i.startswith(dim.sku_marker) else i for i in ids]
            existing = selection.setdefault(dim.name, [])
            existing.extend(i for i in ids if i not in existing)
            continue
        if pos >= len(singles):
            logger.debug("sku %r: extra token %s ignored", sku, token)
            continue
        name = singles[pos]
        pos += 1
        if not token.endswith("?"):
            selection[name] = token
    return selection


def _codes(catalog: Catalog, sku: str) -> Iterable[Tuple[Dimension, str]]:
    selection = parse_sku(catalog, sku)
    for name in catalog.sku_order:
        value = selection.get(name)
        if value is None:
            continue
        dim = catalog[name]
        for code in [value] if isinstance(value, str) else value:
            yield dim, code


def sku_labels(catalog: Catalog, sku: str) -> str:
    """Readable labels joined with " • "; unknown codes fall back to the code."""
    return LABEL_SEPARATOR.join(dim.label_for(code) for dim, code in _codes(catalog, sku))


def single_sku_label(catalog: Catalog, code: str) -> str:
    """First dimension (in SKU order) that knows `code`, else the code itself."""
    code = (code or "").strip()
    for name in catalog.sku_order:
        dim = catalog[name]
        bare = code[len(dim.sku_marker):] if dim.sku_marker and code.startswith(dim.sku_marker) else code
        entry = dim.get(bare)
        if entry:
            return entry.label
    return code


@dataclass(frozen=True)
class Preset:
    """A named SKU ("Quick Template"). Carries no pricing of its own."""

    id: str
    name: str
    sku: str

    def selection(self, catalog: Catalog) -> SelectionDict:
        return parse_sku(catalog, self.sku)


def presets_from_records(records: Iterable[dict]) -> List[Preset]:
    out = []
    seen = set()
    for r in records:
        p = Preset(id=str(r["id"]), name=str(r.get("name", r["id"])), sku=str(r["sku"]))
        if p.id in seen:
            logger.warning("duplicate preset id %s skipped", p.id)
            continue
        seen.add(p.id)
        out.append(p)
    return out

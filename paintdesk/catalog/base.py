from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Malformed catalog data (raised at load time, never while pricing)."""


class EntryKind(str, Enum):
    BASE = "base"  # value is the starting price
    MULTIPLIER = "multiplier"
    ADDER = "adder"
    LABEL = "label"  # no pricing effect


@dataclass(frozen=True)
class CatalogEntry:
    id: str
    label: str
    kind: EntryKind = EntryKind.LABEL
    value: float = 0.0
    group: Optional[str] = None
    note: Optional[str] = None
    bundle: Optional[str] = None

    @property
    def multiplier(self) -> float:
        return self.value if self.kind is EntryKind.MULTIPLIER else 1.0

    @property
    def adder(self) -> float:
        return self.value if self.kind is EntryKind.ADDER else 0.0

    @staticmethod
    def from_dict(raw: Mapping[str, Any]) -> "CatalogEntry":
        try:
            kind = EntryKind(raw.get("kind", EntryKind.LABEL.value))
        except ValueError:
            raise CatalogError(f"entry {raw.get('id')!r}: unknown kind {raw.get('kind')!r}") from None
        if not raw.get("id"):
            raise CatalogError(f"entry without id: {dict(raw)!r}")
        return CatalogEntry(
            id=str(raw["id"]),
            label=str(raw.get("label", raw["id"])),
            kind=kind,
            value=float(raw.get("value", 0) or 0),
            group=raw.get("group"),
            note=raw.get("note"),
            bundle=raw.get("bundle"),
        )


class Dimension:
    """
    A closed table of entries with unique ids.

    Lookups never raise: an absent or unknown id has multiplier 1.0,
    adder 0 and its own id as label.
    """

    def __init__(
        self,
        name: str,
        entries: Iterable[CatalogEntry],
        *,
        label: Optional[str] = None,
        multi: bool = False,
        required: bool = False,
        sku_marker: str = "",
    ):
        self.name = name
        self.label = label or name.replace("_", " ").title()
        self.multi = multi
        self.required = required
        # prefix written before each id of this dimension in a SKU, e.g. "+AD7"
        self.sku_marker = sku_marker
        self._entries: Dict[str, CatalogEntry] = {}
        for e in entries:
            if e.id in self._entries:
                raise CatalogError(f"dimension '{name}': duplicate id '{e.id}'")
            self._entries[e.id] = e

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries

    def __iter__(self):
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, entry_id: Optional[str]) -> Optional[CatalogEntry]:
        if not entry_id:
            return None
        return self._entries.get(entry_id)

    def multiplier(self, entry_id: Optional[str]) -> float:
        e = self.get(entry_id)
        return e.multiplier if e else 1.0

    def adder(self, entry_id: Optional[str]) -> float:
        e = self.get(entry_id)
        return e.adder if e else 0.0

    def label_for(self, entry_id: Optional[str], default: Optional[str] = None) -> str:
        e = self.get(entry_id)
        if e:
            return e.label
        return default if default is not None else (entry_id or "")

    def ids(self) -> List[str]:
        return list(self._entries)

    @property
    def placeholder(self) -> str:
        """Stand-in like "T?" for an unselected id."""
        first = next(iter(self._entries), "")
        return first.rstrip("0123456789") + "?"


def combine_price(
    base: float,
    multipliers: Iterable[float] = (),
    adders: Iterable[float] = (),
) -> float:
    """base x every multiplier, then + the sum of the adders."""
    price = float(base)
    for m in multipliers:
        price *= m
    return price + sum(adders)


@dataclass(frozen=True)
class PriceBreakdown:
    base: float
    multipliers: Dict[str, float] = field(default_factory=dict)
    adders: Dict[str, float] = field(default_factory=dict)

    @property
    def multiplier(self) -> float:
        return combine_price(1.0, self.multipliers.values())

    @property
    def adder_total(self) -> float:
        return sum(self.adders.values())

    @property
    def price(self) -> float:
        return combine_price(self.base, self.multipliers.values(), self.adders.values())


Selection = Mapping[str, Union[None, str, Sequence[str]]]


def _ids(value: Union[None, str, Sequence[str]]) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [v for v in value if v]


@dataclass(frozen=True)
class Bundle:
    id: str
    title: str
    steps: Tuple[str, ...] = ()


class Catalog:
    """
    A set of dimensions plus the bundles their entries point at.

    `sku_order` is the order dimensions appear in a compound SKU string.
    """

    def __init__(
        self,
        name: str,
        dimensions: Sequence[Dimension],
        *,
        sku_order: Optional[Sequence[str]] = None,
        bundles: Optional[Mapping[str, Bundle]] = None,
        default_bundle: Optional[str] = None,
    ):
        self.name = name
        self.dimensions: Dict[str, Dimension] = {}
        for d in dimensions:
            if d.name in self.dimensions:
                raise CatalogError(f"catalog '{name}': duplicate dimension '{d.name}'")
            self.dimensions[d.name] = d
        self.sku_order: List[str] = list(sku_order or self.dimensions)
        for dim_name in self.sku_order:
            if dim_name not in self.dimensions:
                raise CatalogError(f"catalog '{name}': sku_order names unknown dimension '{dim_name}'")
        self.bundles: Dict[str, Bundle] = dict(bundles or {})
        self.default_bundle = default_bundle

    def __getitem__(self, name: str) -> Dimension:
        return self.dimensions[name]

    @property
    def required(self) -> List[str]:
        return [n for n, d in self.dimensions.items() if d.required]

    def is_complete(self, selection: Selection) -> bool:
        """Every required dimension has a known id."""
        for name in self.required:
            value = selection.get(name)
            if not isinstance(value, str) or value not in self.dimensions[name]:
                return False
        return True

    def entries_for(self, selection: Selection) -> List[Tuple[Dimension, CatalogEntry]]:
        out = []
        for name, value in selection.items():
            dim = self.dimensions.get(name)
            if dim is None:
                logger.debug("catalog %s: ignoring unknown dimension %s", self.name, name)
                continue
            for entry_id in _ids(value):
                entry = dim.get(entry_id)
                if entry is None:
                    logger.debug("catalog %s: unknown %s id %s treated as absent", self.name, name, entry_id)
                    continue
                out.append((dim, entry))
        return out

    def price(self, base: float, selection: Selection) -> PriceBreakdown:
        """
        Resolve each selected id through its entry kind.

        BASE entries override `base`; unknown ids are skipped.
        """
        multipliers: Dict[str, float] = {}
        adders: Dict[str, float] = {}
        for dim, entry in self.entries_for(selection):
            key = f"{dim.name}:{entry.id}"
            if entry.kind is EntryKind.BASE:
                base = entry.value
            elif entry.kind is EntryKind.MULTIPLIER:
                multipliers[key] = entry.value
            elif entry.kind is EntryKind.ADDER:
                adders[key] = entry.value
        return PriceBreakdown(base=base, multipliers=multipliers, adders=adders)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "sku_order": self.sku_order,
            "dimensions": [
                {
                    "name": d.name,
                    "label": d.label,
                    "multi": d.multi,
                    "required": d.required,
                    "sku_marker": d.sku_marker,
                    "entries": [
                        {
                            "id": e.id,
                            "label": e.label,
                            "kind": e.kind.value,
                            "value": e.value,
                            "group": e.group,
                            "note": e.note,
                            "bundle": e.bundle,
                        }
                        for e in d
                    ],
                }
                for d in self.dimensions.values()
            ],
            "bundles": [
                {"id": b.id, "title": b.title, "steps": list(b.steps)} for b in self.bundles.values()
            ],
        }


# Registry: catalog name -> loader
catalog_registry: Dict[str, Callable[[], Catalog]] = {}


def register(name: str) -> Callable[[Callable[[], Catalog]], Callable[[], Catalog]]:
    """
    Decorator to register a catalog loader by name.
    Fails fast on duplicate registrations.
    """

    def deco(fn: Callable[[], Catalog]) -> Callable[[], Catalog]:
        if name in catalog_registry and catalog_registry[name] is not fn:
            raise ValueError(f"Duplicate catalog registration for '{name}'")
        catalog_registry[name] = fn
        return fn

    return deco


def get_catalog(name: str) -> Catalog:
    try:
        loader = catalog_registry[name]
    except KeyError:
        raise KeyError(f"unknown catalog: {name}") from None
    return loader()

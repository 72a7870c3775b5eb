"""Per-category item counts and stock valuation.

Items reference their category by id, or (legacy rows) only by a free-text
name. Lookup keys live in two prefixed key spaces so an id can never collide
with a name: ``id:<id>`` and ``name:<trimmed lowercase name>``. Items are
resolved by id first and by name second; unresolved items are left out.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional


@dataclass
class CategoryMetrics:
    category_id: int
    total_items: int = 0
    total_value: float = 0.0


def _get(obj: Any, key: str, default=None):
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)


def _to_number(value) -> float:
    try:
        n = float(value)
    except (TypeError, ValueError):
        return 0.0
    return n if math.isfinite(n) else 0.0


def normalize_name(value) -> str:
    return str(value or "").strip().lower()


def _id_key(value) -> Optional[str]:
    if value is None or value == "":
        return None
    try:
        return f"id:{int(value)}"
    except (TypeError, ValueError):
        return None


def _name_key(value) -> Optional[str]:
    name = normalize_name(value)
    return f"name:{name}" if name else None


def build_category_lookup(categories: Iterable[Any]) -> Dict[str, CategoryMetrics]:
    """Map both key spaces onto one shared bucket per category.

    With duplicate names the first category given (newest first from the
    store) owns the name key.
    """
    lookup: Dict[str, CategoryMetrics] = {}
    for category in categories:
        key = _id_key(_get(category, "id"))
        if key is None:
            continue
        bucket = lookup.setdefault(key, CategoryMetrics(category_id=int(_get(category, "id"))))
        name_key = _name_key(_get(category, "name"))
        if name_key:
            lookup.setdefault(name_key, bucket)
    return lookup


def resolve_bucket(lookup: Dict[str, CategoryMetrics], item: Any) -> Optional[CategoryMetrics]:
    key = _id_key(_get(item, "category_id"))
    if key is not None and key in lookup:
        return lookup[key]
    name_key = _name_key(_get(item, "category_name"))
    if name_key is not None:
        return lookup.get(name_key)
    return None


def rollup_category_metrics(categories: Iterable[Any], items: Iterable[Any]) -> Dict[int, CategoryMetrics]:
    """Aggregate ``items`` into the given ``categories``.

    Accepts ORM rows or plain dicts. Every category id is present in the
    result, zero-filled when no item matched. Never raises on partial data.
    """
    categories = list(categories or [])
    lookup = build_category_lookup(categories)

    for item in items or []:
        if item is None or _get(item, "active", True) in (False, 0):
            continue
        bucket = resolve_bucket(lookup, item)
        if bucket is None:
            continue
        bucket.total_items += 1
        bucket.total_value += _to_number(_get(item, "stock_qty")) * _to_number(_get(item, "unit_cost"))

    out: Dict[int, CategoryMetrics] = {}
    for key, bucket in lookup.items():
        if key.startswith("id:"):
            out[bucket.category_id] = bucket
    return out


def attach_metrics(categories: List[Any], items: Iterable[Any]) -> List[dict]:
    """Category rows (as dicts) with ``total_items``/``total_value`` merged in, in input order."""
    metrics = rollup_category_metrics(categories, items)
    rows = []
    for category in categories:
        row = dict(category) if isinstance(category, dict) else dict(category.to_schema)
        m = metrics.get(int(row["id"])) if row.get("id") is not None else None
        row["total_items"] = m.total_items if m else 0
        row["total_value"] = round(m.total_value, 2) if m else 0.0
        rows.append(row)
    return rows

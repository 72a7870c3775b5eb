"""
Seed demo inventory categories + items for one branch.

Run locally (from backend/):
  python -m scripts.seed_demo_inventory --branch 1

It uses the same DATABASE_* env vars as the backend (dotenv supported by core.config).
Existing active categories with the same name are reused, so re-running is safe.
"""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import dataclass
from typing import Optional

from db.database import async_session_maker
from schemas.inventory import CategoryCreate, InventoryItemUpdate
from services.categories import CategoryStore
from services.items import ItemStore
from services.rollup import normalize_name, rollup_category_metrics


@dataclass(frozen=True)
class SeedCategory:
    name: str
    icon: str
    description: Optional[str] = None


@dataclass(frozen=True)
class SeedItem:
    name: str
    category: str
    stock_qty: float
    unit: str
    unit_cost: float
    reorder_level: float = 0


SEED_CATEGORIES: list[SeedCategory] = [
    SeedCategory(name="Meat", icon="meat", description="Fresh cuts, poultry, and processed meats"),
    SeedCategory(name="Seafood", icon="seafood", description="Fish, shellfish, and frozen seafood"),
    SeedCategory(name="Vegetables", icon="vegetables", description="Fresh produce, roots, and leafy greens"),
    SeedCategory(name="Dairy", icon="dairy", description="Milk, cheese, butter, and cream"),
    SeedCategory(name="Beverages", icon="beverages", description="Coffee, tea, sodas, and juices"),
]

SEED_ITEMS: list[SeedItem] = [
    SeedItem(name="Chicken Breast", category="Meat", stock_qty=20, unit="kg", unit_cost=6.5, reorder_level=5),
    SeedItem(name="Salmon Fillet", category="Seafood", stock_qty=8, unit="kg", unit_cost=18, reorder_level=3),
    SeedItem(name="Tomatoes", category="Vegetables", stock_qty=15, unit="kg", unit_cost=1.2, reorder_level=5),
    SeedItem(name="Whole Milk", category="Dairy", stock_qty=24, unit="l", unit_cost=0.9, reorder_level=10),
    SeedItem(name="Espresso Beans", category="Beverages", stock_qty=6, unit="kg", unit_cost=14, reorder_level=2),
]


async def main(branch_id: int) -> None:
    async with async_session_maker() as db:
        categories = CategoryStore(db)
        items = ItemStore(db)

        existing = {normalize_name(c.name): c.id for c in await categories.get_all(branch_id)}
        created = 0
        for c in SEED_CATEGORIES:
            if normalize_name(c.name) in existing:
                continue
            new_id = await categories.create(
                CategoryCreate(branch_id=branch_id, name=c.name, icon=c.icon, description=c.description)
            )
            existing[normalize_name(c.name)] = new_id
            created += 1

        known_items = {normalize_name(it.item_name) for it in await items.get_all(branch_id)}
        added = 0
        for it in SEED_ITEMS:
            if normalize_name(it.name) in known_items:
                continue
            await items.create(
                InventoryItemUpdate(
                    item_name=it.name,
                    category_id=existing.get(normalize_name(it.category)),
                    category_name=it.category,
                    stock_qty=it.stock_qty,
                    unit=it.unit,
                    unit_cost=it.unit_cost,
                    reorder_level=it.reorder_level,
                ),
                branch_id=branch_id,
            )
            added += 1

        metrics = rollup_category_metrics(await categories.get_all(branch_id), await items.get_all(branch_id))
        total_value = sum(m.total_value for m in metrics.values())

        print(
            f"Done. Categories created: {created}. Items created: {added}. "
            f"Branch {branch_id} stock value: {total_value:.2f}."
        )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--branch", type=int, default=1)
    args = parser.parse_args()
    asyncio.run(main(args.branch))

"""
Inventory tables (branch-scoped, soft-deleted through ACTIVE).

Models:
- InventoryCategory (category records; never physically deleted)
- InventoryItem (stock lines; reference a category by id or by free-text name)
- UnitCostHistory (append-only log of unit cost changes per item)

Tables are created lazily by the stores through the guards below.
"""

from ..schema import SchemaGuard
from .category import InventoryCategory
from .item import InventoryItem, UnitCostHistory

category_schema = SchemaGuard("inventory_categories", InventoryCategory.__table__)
item_schema = SchemaGuard("inventory_items", InventoryItem.__table__, UnitCostHistory.__table__)

__all__ = [
    "InventoryCategory",
    "InventoryItem",
    "UnitCostHistory",
    "category_schema",
    "item_schema",
]

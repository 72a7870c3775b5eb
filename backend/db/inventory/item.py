from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String, Text, Uuid
from sqlalchemy.sql import func

from ..database import Base


class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    branch_id = Column(Integer, nullable=False, index=True)

    item_name = Column(String(120), nullable=False)
    # no FK: items entered with only a free-text category name must still load
    category_id = Column(Integer, nullable=True, index=True)
    category_name = Column(String(120), nullable=True)

    stock_qty = Column(Numeric(12, 3), nullable=False, default=0)
    unit = Column(String(20), nullable=False, default="pcs")
    unit_cost = Column(Numeric(12, 2), nullable=False, default=0)
    reorder_level = Column(Numeric(12, 3), nullable=False, default=0)
    status_flag = Column(String(20), nullable=False, default="In Stock")
    active = Column(Boolean, nullable=False, default=True, index=True)

    encoded_by = Column(Uuid, nullable=True)
    encoded_dt = Column(DateTime, nullable=True, server_default=func.now())
    edited_by = Column(Uuid, nullable=True)
    edited_dt = Column(DateTime, nullable=True)

    @property
    def to_schema(self):
        return {
            "id": self.id,
            "branch_id": self.branch_id,
            "item_name": self.item_name,
            "category_id": self.category_id,
            "category_name": self.category_name,
            "stock_qty": float(self.stock_qty or 0),
            "unit": self.unit,
            "unit_cost": float(self.unit_cost or 0),
            "reorder_level": float(self.reorder_level or 0),
            "status_flag": self.status_flag,
            "active": bool(self.active),
            "encoded_by": self.encoded_by,
            "encoded_dt": self.encoded_dt,
            "edited_by": self.edited_by,
            "edited_dt": self.edited_dt,
        }


class UnitCostHistory(Base):
    __tablename__ = "inventory_unit_cost_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    inventory_id = Column(Integer, nullable=False, index=True)
    branch_id = Column(Integer, nullable=False, index=True)
    old_unit_cost = Column(Numeric(12, 2), nullable=False, default=0)
    new_unit_cost = Column(Numeric(12, 2), nullable=False, default=0)
    change_type = Column(Text, nullable=False, default="INITIAL")  # INITIAL|INCREASE|DECREASE
    changed_by = Column(Uuid, nullable=True)
    changed_at = Column(DateTime, nullable=False, server_default=func.now(), index=True)

    @property
    def to_schema(self):
        return {
            "id": self.id,
            "inventory_id": self.inventory_id,
            "branch_id": self.branch_id,
            "old_unit_cost": float(self.old_unit_cost or 0),
            "new_unit_cost": float(self.new_unit_cost or 0),
            "change_type": self.change_type,
            "changed_by": self.changed_by,
            "changed_at": self.changed_at,
        }

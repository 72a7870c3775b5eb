from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, Uuid
from sqlalchemy.sql import func

from ..database import Base


class InventoryCategory(Base):
    __tablename__ = "inventory_categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    branch_id = Column(Integer, nullable=False, index=True)

    # not unique per branch: legacy data carries duplicates
    name = Column(String(120), nullable=False)
    # 'Inventory' | 'Maintenance' | 'Utilities / Bills' | 'Salary & Rent' | 'Others'
    category_type = Column(String(80), nullable=False, default="Inventory", index=True)
    description = Column(Text, nullable=True)
    icon = Column(String(80), nullable=True)
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
            "name": self.name,
            "category_type": self.category_type,
            "description": self.description,
            "icon": self.icon,
            "active": bool(self.active),
            "encoded_by": self.encoded_by,
            "encoded_dt": self.encoded_dt,
            "edited_by": self.edited_by,
            "edited_dt": self.edited_dt,
        }

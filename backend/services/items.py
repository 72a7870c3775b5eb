"""Inventory item store.

Same soft-delete and audit model as categories. Every unit cost change is
appended to ``inventory_unit_cost_history``: an INITIAL row on create and an
INCREASE/DECREASE row when an update actually moves the cost.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import get_logger
from db.inventory import InventoryItem, UnitCostHistory, item_schema
from db.schema import SchemaGuard
from schemas.inventory import InventoryItemUpdate

logger = get_logger(__name__)


def _money(x) -> Decimal:
    return Decimal(str(x or 0)).quantize(Decimal("0.01"))


class ItemStore:
    def __init__(self, session: AsyncSession, schema: SchemaGuard = item_schema):
        self.session = session
        self.schema = schema

    async def ensure_schema(self) -> None:
        await self.schema.ensure(self.session.bind)

    async def get_all(self, branch_id: Optional[int] = None) -> List[InventoryItem]:
        await self.ensure_schema()
        stmt = select(InventoryItem).where(InventoryItem.active.is_(True))
        if branch_id is not None:
            stmt = stmt.where(InventoryItem.branch_id == int(branch_id))
        res = await self.session.execute(
            stmt.order_by(InventoryItem.id.desc()).execution_options(populate_existing=True)
        )
        return list(res.scalars().all())

    async def get_by_id(self, item_id: int) -> Optional[InventoryItem]:
        await self.ensure_schema()
        res = await self.session.execute(
            select(InventoryItem)
            .where(InventoryItem.id == item_id, InventoryItem.active.is_(True))
            .execution_options(populate_existing=True)
        )
        return res.scalar_one_or_none()

    async def create(
        self, data: InventoryItemUpdate, branch_id: int, acting_user_id: Optional[UUID] = None
    ) -> int:
        await self.ensure_schema()
        now = datetime.now()
        unit_cost = _money(data.unit_cost)
        model = InventoryItem(
            branch_id=int(branch_id),
            item_name=data.item_name.strip(),
            category_id=int(data.category_id) if data.category_id else None,
            category_name=data.category_name or None,
            stock_qty=Decimal(str(data.stock_qty or 0)),
            unit=data.unit or "pcs",
            unit_cost=unit_cost,
            reorder_level=Decimal(str(data.reorder_level or 0)),
            status_flag=data.status_flag or "In Stock",
            active=True,
            encoded_by=acting_user_id,
            encoded_dt=now,
        )
        self.session.add(model)
        await self.session.flush()

        self.session.add(
            UnitCostHistory(
                inventory_id=model.id,
                branch_id=model.branch_id,
                old_unit_cost=unit_cost,
                new_unit_cost=unit_cost,
                change_type="INITIAL",
                changed_by=acting_user_id,
                changed_at=now,
            )
        )
        await self.session.commit()
        logger.debug("Created inventory item %s (%s) in branch %s", model.id, model.item_name, model.branch_id)
        return model.id

    async def update(
        self, item_id: int, data: InventoryItemUpdate, acting_user_id: Optional[UUID] = None
    ) -> bool:
        await self.ensure_schema()
        res = await self.session.execute(
            select(InventoryItem.branch_id, InventoryItem.unit_cost).where(
                InventoryItem.id == item_id, InventoryItem.active.is_(True)
            )
        )
        existing = res.first()
        if existing is None:
            return False

        now = datetime.now()
        old_cost = _money(existing.unit_cost)
        new_cost = _money(data.unit_cost)
        result = await self.session.execute(
            update(InventoryItem)
            .where(InventoryItem.id == item_id, InventoryItem.active.is_(True))
            .values(
                item_name=data.item_name.strip(),
                category_id=int(data.category_id) if data.category_id else None,
                category_name=data.category_name or None,
                stock_qty=Decimal(str(data.stock_qty or 0)),
                unit=data.unit or "pcs",
                unit_cost=new_cost,
                reorder_level=Decimal(str(data.reorder_level or 0)),
                status_flag=data.status_flag or "In Stock",
                edited_by=acting_user_id,
                edited_dt=now,
            )
            .execution_options(synchronize_session=False)
        )
        changed = result.rowcount > 0
        if changed and old_cost != new_cost:
            self.session.add(
                UnitCostHistory(
                    inventory_id=item_id,
                    branch_id=int(existing.branch_id),
                    old_unit_cost=old_cost,
                    new_unit_cost=new_cost,
                    change_type="INCREASE" if new_cost > old_cost else "DECREASE",
                    changed_by=acting_user_id,
                    changed_at=now,
                )
            )
        await self.session.commit()
        return changed

    async def delete(self, item_id: int, acting_user_id: Optional[UUID] = None) -> bool:
        await self.ensure_schema()
        res = await self.session.execute(
            update(InventoryItem)
            .where(InventoryItem.id == item_id, InventoryItem.active.is_(True))
            .values(active=False, edited_by=acting_user_id, edited_dt=datetime.now())
            .execution_options(synchronize_session=False)
        )
        await self.session.commit()
        return res.rowcount > 0

    async def cost_history(self, item_id: int) -> List[UnitCostHistory]:
        """Unit cost changes for one item, newest first."""
        await self.ensure_schema()
        res = await self.session.execute(
            select(UnitCostHistory)
            .where(UnitCostHistory.inventory_id == item_id)
            .order_by(UnitCostHistory.changed_at.desc(), UnitCostHistory.id.desc())
        )
        return list(res.scalars().all())

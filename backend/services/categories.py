"""Category store: branch-scoped CRUD with soft-delete."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.logger import get_logger
from db.inventory import InventoryCategory, category_schema
from db.schema import SchemaGuard
from schemas.inventory import DEFAULT_CATEGORY_TYPE, CategoryCreate, CategoryUpdate

logger = get_logger(__name__)


class CategoryStore:
    """Persistence for inventory categories.

    Every read filters ``active``; ``delete`` only flips the flag. Update and
    delete report ``False`` when no active row matched, whether the id never
    existed or was already deleted.

    Args:
        session: Request-scoped async session.
        schema: Guard that creates the table on first use.
    """

    def __init__(self, session: AsyncSession, schema: SchemaGuard = category_schema):
        self.session = session
        self.schema = schema

    async def ensure_schema(self) -> None:
        await self.schema.ensure(self.session.bind)

    async def get_all(self, branch_id: Optional[int] = None) -> List[InventoryCategory]:
        """Active categories, newest first, optionally for a single branch."""
        await self.ensure_schema()
        stmt = select(InventoryCategory).where(InventoryCategory.active.is_(True))
        if branch_id is not None:
            stmt = stmt.where(InventoryCategory.branch_id == int(branch_id))
        res = await self.session.execute(
            stmt.order_by(InventoryCategory.id.desc()).execution_options(populate_existing=True)
        )
        return list(res.scalars().all())

    async def get_by_id(self, category_id: int) -> Optional[InventoryCategory]:
        await self.ensure_schema()
        res = await self.session.execute(
            select(InventoryCategory)
            .where(InventoryCategory.id == category_id, InventoryCategory.active.is_(True))
            .execution_options(populate_existing=True)
        )
        return res.scalar_one_or_none()

    async def create(self, data: CategoryCreate, acting_user_id: Optional[UUID] = None) -> int:
        """Insert an active category and return its new id."""
        await self.ensure_schema()
        model = InventoryCategory(
            branch_id=int(data.branch_id),
            name=data.name.strip(),
            category_type=data.category_type or DEFAULT_CATEGORY_TYPE,
            description=data.description or None,
            icon=data.icon or None,
            active=True,
            encoded_by=acting_user_id,
            encoded_dt=datetime.now(),
        )
        self.session.add(model)
        await self.session.commit()
        logger.debug("Created category %s (%s) in branch %s", model.id, model.name, model.branch_id)
        return model.id

    async def update(
        self, category_id: int, data: CategoryUpdate, acting_user_id: Optional[UUID] = None
    ) -> bool:
        """Replace the editable fields of an active category. Branch and ``active`` never change here."""
        await self.ensure_schema()
        res = await self.session.execute(
            update(InventoryCategory)
            .where(InventoryCategory.id == category_id, InventoryCategory.active.is_(True))
            .values(
                name=data.name.strip(),
                category_type=data.category_type or DEFAULT_CATEGORY_TYPE,
                description=data.description or None,
                icon=data.icon or None,
                edited_by=acting_user_id,
                edited_dt=datetime.now(),
            )
            .execution_options(synchronize_session=False)
        )
        await self.session.commit()
        changed = res.rowcount > 0
        if changed:
            logger.debug("Updated category %s", category_id)
        return changed

    async def delete(self, category_id: int, acting_user_id: Optional[UUID] = None) -> bool:
        """Soft-delete: flip ``active`` off and stamp the edit audit."""
        await self.ensure_schema()
        res = await self.session.execute(
            update(InventoryCategory)
            .where(InventoryCategory.id == category_id, InventoryCategory.active.is_(True))
            .values(active=False, edited_by=acting_user_id, edited_dt=datetime.now())
            .execution_options(synchronize_session=False)
        )
        await self.session.commit()
        changed = res.rowcount > 0
        if changed:
            logger.debug("Soft-deleted category %s", category_id)
        return changed

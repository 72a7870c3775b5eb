from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db.database import get_async_session
from services.categories import CategoryStore
from services.items import ItemStore


def parse_branch_id(raw) -> Optional[int]:
    """Query-string branch id; empty, 'all', non-positive or garbage gives None."""
    if raw is None:
        return None
    s = str(raw).strip()
    if not s or s.lower() == "all":
        return None
    try:
        value = int(s)
    except ValueError:
        return None
    return value if value > 0 else None


def resolve_branch_id(raw, user) -> Optional[int]:
    """Explicit request value first, else the user's default branch.

    An explicit 'all' is honoured and not replaced by the user's branch.
    """
    if raw is not None and str(raw).strip().lower() == "all":
        return None
    parsed = parse_branch_id(raw)
    if parsed is not None:
        return parsed
    return getattr(user, "branch_id", None)


async def get_category_store(db: AsyncSession = Depends(get_async_session)) -> CategoryStore:
    return CategoryStore(db)


async def get_item_store(db: AsyncSession = Depends(get_async_session)) -> ItemStore:
    return ItemStore(db)

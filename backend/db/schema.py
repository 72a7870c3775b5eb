"""Lazy, one-shot table bootstrap.

Stores call ``await guard.ensure(engine)`` before every statement. The first
caller starts a single creation task; callers arriving while it runs await the
same task; once it succeeds every later call is a flag check. A failed attempt
is reported to everyone waiting on it and the next call starts a fresh one.
"""

import asyncio
from typing import Optional

from sqlalchemy import Table
from sqlalchemy.ext.asyncio import AsyncEngine

from core.logger import get_logger
from .database import Base

logger = get_logger(__name__)


class SchemaGuard:
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    DONE = "done"

    def __init__(self, name: str, *tables: Table):
        self.name = name
        self.tables = list(tables)
        self._state = self.NOT_STARTED
        self._pending: Optional[asyncio.Task] = None

    @property
    def state(self) -> str:
        return self._state

    @property
    def ready(self) -> bool:
        return self._state == self.DONE

    async def ensure(self, engine: AsyncEngine) -> None:
        if self._state == self.DONE:
            return
        if self._pending is None:
            self._state = self.IN_PROGRESS
            self._pending = asyncio.ensure_future(self._run(engine))
        # shield: a cancelled caller must not cancel the shared attempt
        await asyncio.shield(self._pending)

    async def _run(self, engine: AsyncEngine) -> None:
        try:
            await self._initialize(engine)
        except BaseException:
            self._state = self.NOT_STARTED
            logger.error("Schema bootstrap for %s failed", self.name)
            raise
        else:
            self._state = self.DONE
            logger.info("Schema for %s is ready", self.name)
        finally:
            self._pending = None

    async def _initialize(self, engine: AsyncEngine) -> None:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, tables=self.tables, checkfirst=True)

    def reset(self) -> None:
        """Forget a completed bootstrap (used when the engine is swapped, e.g. in tests)."""
        self._state = self.NOT_STARTED
        self._pending = None

"""Shared pytest fixtures for all tests."""

import os

# keep the app's module-level engine off PostgreSQL; tests bind their own engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./unused-test.db")

import uuid
from types import SimpleNamespace

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from db.inventory import category_schema, item_schema
from services.categories import CategoryStore
from services.items import ItemStore


@pytest_asyncio.fixture
async def engine(tmp_path):
    """SQLite database file under tmp_path with fresh schema guards.

    Yields:
        AsyncEngine: Engine bound to the temporary database.
    """
    category_schema.reset()
    item_schema.reset()
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'inventory.db'}")
    yield eng
    category_schema.reset()
    item_schema.reset()
    await eng.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_maker):
    async with session_maker() as s:
        yield s


@pytest.fixture
def categories(session):
    """CategoryStore over the test database."""
    return CategoryStore(session)


@pytest.fixture
def items(session):
    """ItemStore over the test database."""
    return ItemStore(session)


@pytest.fixture
def user():
    """Stand-in for the authenticated fastapi-users user."""
    return SimpleNamespace(
        id=uuid.uuid4(),
        email="manager@example.com",
        branch_id=1,
        is_active=True,
        is_superuser=False,
        is_verified=True,
    )


@pytest_asyncio.fixture
async def client(session_maker, user):
    """HTTP client against the app with auth and sessions overridden."""
    from core.auth import current_active_user
    from db.database import get_async_session
    from main import app

    async def _session():
        async with session_maker() as s:
            yield s

    app.dependency_overrides[get_async_session] = _session
    app.dependency_overrides[current_active_user] = lambda: user
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()

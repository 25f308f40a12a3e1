"""Integration test fixtures for database and HTTP client operations.

Every test gets a freshly created schema on the configured database
(SQLite by default) and talks to the real app through httpx.
Uses polyfactory for type-safe test data generation.
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlmodel import SQLModel

from src.app import models  # noqa: F401  registers every table on SQLModel.metadata
from src.app.core import db
from src.app.main import create_app
from src.app.models import MembershipRole, Tenant, User
from tests.helpers import create_member, create_tenant, create_user


@pytest.fixture(scope="function")
async def engine() -> AsyncGenerator[AsyncEngine]:
    """The app's own engine, on an empty schema."""
    await db.dispose_engine()
    test_engine = db.get_engine()

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await db.dispose_engine()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for arranging and inspecting data.

    Rows changed through the API are stale here until refreshed; use
    session.refresh() or populate_existing before asserting on them.
    """
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def tenant(db_session: AsyncSession) -> Tenant:
    """An ACTIVE tenant with default settings (public signup, no approval)."""
    return await create_tenant(db_session)


@pytest.fixture
async def other_tenant(db_session: AsyncSession) -> Tenant:
    return await create_tenant(db_session)


@pytest.fixture
async def owner(db_session: AsyncSession, tenant: Tenant) -> User:
    user, _ = await create_member(db_session, tenant, role=MembershipRole.OWNER)
    return user


@pytest.fixture
async def moderator(db_session: AsyncSession, tenant: Tenant) -> User:
    user, _ = await create_member(db_session, tenant, role=MembershipRole.MODERATOR)
    return user


@pytest.fixture
async def member(db_session: AsyncSession, tenant: Tenant) -> User:
    user, _ = await create_member(db_session, tenant)
    return user


@pytest.fixture
async def outsider(db_session: AsyncSession) -> User:
    """A registered user with no membership anywhere."""
    return await create_user(db_session)


@pytest.fixture
async def super_admin(db_session: AsyncSession) -> User:
    return await create_user(db_session, super_admin=True)

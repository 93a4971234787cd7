"""Pytest configuration for all tests."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from simpledata.core.logging import get_logger
from simpledata.domain.services.collection_service import CollectionService
from simpledata.domain.services.project_service import ProjectService
from simpledata.infrastructure.api.middleware import rate_limit_storage
from simpledata.infrastructure.persistence import models  # noqa: F401
from simpledata.infrastructure.persistence.database import Base, register_sqlite_functions
from simpledata.infrastructure.persistence.memory_store import InMemoryDocumentStore

logger = get_logger(__name__)

ACCOUNT_ID = "acct_test"
OTHER_ACCOUNT_ID = "acct_other"


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database with the filter SQL functions
    registered on its single connection.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    register_sqlite_functions(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database dependency."""
    from simpledata.infrastructure.api.app import app
    from simpledata.infrastructure.persistence.database import get_db_session

    app.dependency_overrides[get_db_session] = lambda: db_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides = {}


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    rate_limit_storage.reset()
    yield
    rate_limit_storage.reset()


@pytest_asyncio.fixture
async def project(db_session: AsyncSession) -> dict:
    """Create a project owned by ``ACCOUNT_ID`` and return its id and key."""
    api_key, created = await ProjectService(db_session).create_project("Test Project", ACCOUNT_ID)
    return {"id": created.id, "api_key": api_key, "headers": {"x-api-key": api_key}}


@pytest_asyncio.fixture
async def other_project(db_session: AsyncSession) -> dict:
    api_key, created = await ProjectService(db_session).create_project(
        "Other Project", OTHER_ACCOUNT_ID
    )
    return {"id": created.id, "api_key": api_key, "headers": {"x-api-key": api_key}}


@pytest_asyncio.fixture
async def users_collection(db_session: AsyncSession, project: dict) -> str:
    """Create an empty ``users`` collection in ``project``."""
    await CollectionService(db_session).create_collection(project["id"], "users")
    return "users"


@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()

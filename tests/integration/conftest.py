"""Integration test fixtures for database and HTTP client operations.

Each test gets a fresh in-memory SQLite database (through aiosqlite) with
foreign keys enforced. Uses polyfactory for type-safe test data generation.
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from src.tracker import models  # noqa: F401 - registers every table on the metadata
from src.tracker.api.dependencies import get_db_session
from src.tracker.core.db import configure_engine, get_session
from src.tracker.main import create_app
from src.tracker.models import Organization
from src.tracker.repositories import (
    MembershipRepository,
    ProjectRepository,
    TaskRepository,
)
from src.tracker.services import (
    AccessPredicate,
    HierarchyResolver,
    MembershipPropagator,
    ProjectLifecycleManager,
)
from tests.helpers import create_organization

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create a fresh in-memory database with every table."""
    test_engine = configure_engine(
        create_async_engine(
            TEST_DATABASE_URL,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session configured like the application's.

    autoflush is off and expire_on_commit is off, as in production.
    Setup helpers only flush; commit when a second session must see the rows.
    """
    async with get_session(engine) as session:
        yield session


@pytest.fixture
async def org(db_session: AsyncSession) -> Organization:
    org = await create_organization(db_session)
    await db_session.commit()
    return org


@pytest.fixture
async def other_org(db_session: AsyncSession) -> Organization:
    org = await create_organization(db_session)
    await db_session.commit()
    return org


# --- Repositories and services wired to the test session ---


@pytest.fixture
def project_repo(db_session: AsyncSession) -> ProjectRepository:
    return ProjectRepository(db_session)


@pytest.fixture
def membership_repo(db_session: AsyncSession) -> MembershipRepository:
    return MembershipRepository(db_session)


@pytest.fixture
def task_repo(db_session: AsyncSession) -> TaskRepository:
    return TaskRepository(db_session)


@pytest.fixture
def resolver(project_repo, membership_repo) -> HierarchyResolver:
    return HierarchyResolver(project_repo, membership_repo)


@pytest.fixture
def propagator(project_repo, membership_repo, resolver, db_session) -> MembershipPropagator:
    return MembershipPropagator(project_repo, membership_repo, resolver, db_session)


@pytest.fixture
def access(membership_repo, task_repo) -> AccessPredicate:
    return AccessPredicate(membership_repo, task_repo)


@pytest.fixture
def lifecycle(
    project_repo, membership_repo, task_repo, resolver, propagator, db_session
) -> ProjectLifecycleManager:
    return ProjectLifecycleManager(
        project_repo,
        membership_repo,
        task_repo,
        resolver,
        propagator,
        db_session,
    )


# --- HTTP ---


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    """Create test client whose requests run against the test database."""
    app = create_app()

    async def _override_db_session() -> AsyncGenerator[AsyncSession]:
        async with get_session(engine) as session:
            yield session

    app.dependency_overrides[get_db_session] = _override_db_session
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

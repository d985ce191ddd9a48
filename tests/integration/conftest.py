"""Integration test fixtures for database and HTTP client operations.

Each test gets its own SQLite database file, created from the model
metadata, so tests never share state. Uses polyfactory for test data.

Set TEST_DATABASE_URL (postgresql+asyncpg://...) to run the same suite
against PostgreSQL instead. Every table in that database is dropped and
recreated for each test. Tests marked ``postgres`` only run in that mode.
"""

from collections.abc import AsyncGenerator
from uuid import UUID

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

from src.projecthub import models  # noqa: F401 - registers tables on the metadata
from src.projecthub.core import redis as redis_core
from src.projecthub.core.cache import ActorCache
from src.projecthub.core.db import get_session_factory, make_session_factory
from src.projecthub.core.health import reset_health_cache
from src.projecthub.main import app
from src.projecthub.models import Project, User
from src.projecthub.repositories import (
    ProjectRepository,
    ProjectStatusHistoryRepository,
    UserRepository,
)
from src.projecthub.schemas.actor import Actor
from src.projecthub.services import (
    NotificationDispatcher,
    ProjectService,
    ProjectWorkflowService,
)
from tests.helpers import TEST_DATABASE_URL, actor_for, create_project_row, create_user


class FakeImageStorage:
    """In-memory stand-in for S3ImageStorage."""

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_uploads = False

    async def upload_image(
        self, project_id: UUID, filename: str, content: bytes, content_type: str
    ) -> str:
        if self.fail_uploads:
            raise RuntimeError("storage unavailable")
        url = f"https://images.test/projects/{project_id}/{len(self.objects)}_{filename}"
        self.objects[url] = content
        return url

    async def delete_object(self, reference: str) -> None:
        self.deleted.append(reference)
        self.objects.pop(reference, None)


@pytest.fixture(autouse=True)
async def _reset_shared_state() -> AsyncGenerator[None]:
    """Reset Redis and health cache state between tests."""
    redis_core.reset_redis_state()
    reset_health_cache()
    yield
    await redis_core.close_redis()
    reset_health_cache()


def pytest_collection_modifyitems(config, items):
    if TEST_DATABASE_URL:
        return
    skip_postgres = pytest.mark.skip(reason="TEST_DATABASE_URL is not set")
    for item in items:
        if "postgres" in item.keywords:
            item.add_marker(skip_postgres)


@pytest.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine]:
    """Fresh database per test with every table created."""
    if TEST_DATABASE_URL:
        test_engine = create_async_engine(TEST_DATABASE_URL, poolclass=NullPool)
        async with test_engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)
            await conn.run_sync(SQLModel.metadata.create_all)
    else:
        test_engine = create_async_engine(
            f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool
        )
        async with test_engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine

    if TEST_DATABASE_URL:
        async with test_engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return make_session_factory(engine)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    The session does NOT auto-commit. Tests must explicitly call
    `await session.commit()` to persist changes.
    """
    async with session_factory() as session:
        yield session


# --- Users ---


@pytest.fixture
async def student(db_session: AsyncSession) -> User:
    return await create_user(db_session, full_name="Sam Student")


@pytest.fixture
async def other_student(db_session: AsyncSession) -> User:
    return await create_user(db_session, full_name="Olive Other")


@pytest.fixture
async def teacher(db_session: AsyncSession) -> User:
    return await create_user(db_session, role="teacher", full_name="Tess Teacher")


@pytest.fixture
async def co_teacher(db_session: AsyncSession) -> User:
    return await create_user(db_session, role="teacher", full_name="Cole Cosupervisor")


@pytest.fixture
async def admin(db_session: AsyncSession) -> User:
    return await create_user(db_session, role="admin", full_name="Ada Admin")


@pytest.fixture
def student_actor(student: User) -> Actor:
    return actor_for(student)


@pytest.fixture
def teacher_actor(teacher: User) -> Actor:
    return actor_for(teacher)


@pytest.fixture
def admin_actor(admin: User) -> Actor:
    return actor_for(admin)


@pytest.fixture
async def project(db_session: AsyncSession, student: User, teacher: User) -> Project:
    """Pending project owned by student and supervised by teacher."""
    return await create_project_row(db_session, student, teacher)


# --- Services ---


@pytest.fixture
def dispatcher(session_factory: async_sessionmaker[AsyncSession]) -> NotificationDispatcher:
    return NotificationDispatcher(session_factory)


@pytest.fixture
def image_storage() -> FakeImageStorage:
    return FakeImageStorage()


@pytest.fixture
def workflow(
    db_session: AsyncSession, dispatcher: NotificationDispatcher
) -> ProjectWorkflowService:
    return ProjectWorkflowService(
        ProjectRepository(db_session),
        ProjectStatusHistoryRepository(db_session),
        db_session,
        dispatcher=dispatcher,
    )


@pytest.fixture
def project_service(
    db_session: AsyncSession,
    dispatcher: NotificationDispatcher,
    image_storage: FakeImageStorage,
) -> ProjectService:
    return ProjectService(
        ProjectRepository(db_session),
        ProjectStatusHistoryRepository(db_session),
        UserRepository(db_session),
        db_session,
        dispatcher=dispatcher,
        storage=image_storage,
    )


# --- HTTP client ---


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    image_storage: FakeImageStorage,
) -> AsyncGenerator[AsyncClient]:
    """HTTP client against the app, bound to the per-test database.

    ASGITransport does not run the lifespan, so the startup components are
    installed on app.state here.
    """
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.state.actor_cache = ActorCache(ttl_seconds=300)
    app.state.image_storage = image_storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()

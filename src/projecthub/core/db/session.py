"""Database session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from src.projecthub.core.db.engine import get_engine


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Build the session factory used by request handlers and tests."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def get_session(
    engine: AsyncEngine | None = None,
) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session.

    Args:
        engine: Optional engine override for testing.

    Yields:
        AsyncSession bound to the engine.
    """
    if engine is None:
        engine = get_engine()

    async with make_session_factory(engine)() as session:
        yield session


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the application engine.

    Used as a FastAPI dependency; tests override it to point at a throwaway database.
    """
    return make_session_factory(get_engine())

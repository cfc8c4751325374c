"""Database session management and the transaction primitive."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from src.tracker.core.db.engine import get_engine

_ATOMIC_KEY = "tracker.atomic"


@asynccontextmanager
async def get_session(engine: AsyncEngine | None = None) -> AsyncGenerator[AsyncSession]:
    """Create a database session.

    Args:
        engine: Optional engine override for testing.

    Yields:
        AsyncSession bound to the engine. Commits are left to the service layer.
    """
    if engine is None:
        engine = get_engine()

    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with session_factory() as session:
        yield session


@asynccontextmanager
async def atomic(session: AsyncSession) -> AsyncGenerator[AsyncSession]:
    """Run a block as one store transaction.

    The outermost block commits on success and rolls back on any error,
    re-raising it unmodified. Blocks opened while another is active join
    it, so an operation composed of smaller atomic operations commits once.
    """
    if session.info.get(_ATOMIC_KEY):
        yield session
        return

    session.info[_ATOMIC_KEY] = True
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        session.info.pop(_ATOMIC_KEY, None)


def in_atomic_block(session: AsyncSession) -> bool:
    """Whether an atomic block is currently open on this session."""
    return bool(session.info.get(_ATOMIC_KEY))

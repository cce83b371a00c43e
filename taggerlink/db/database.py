"""
Settings store database.

One async engine per process, pointed at ``settings.database_url``. Every
request that touches feature settings gets its own session, committed when
the request finishes, and a KeyValueStore bound to that session.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from taggerlink.config import settings
from taggerlink.db.storage import SessionStore
from taggerlink.models.db import Base

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped session. Commits on success, rolls back on database errors.

    A settings read can write (the first read persists the computed enabled
    state), so even GET requests commit.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise


async def get_store(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SessionStore:
    """Feature settings store bound to the request's session."""
    return SessionStore(session)


async def init_db() -> None:
    """Create the stored_values table if missing. Called from app startup."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

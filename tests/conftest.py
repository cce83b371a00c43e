import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from taggerlink.bridge.bus import bus
from taggerlink.bridge.channel import reset_channel
from taggerlink.models.db import Base
from taggerlink.models.tagger import TaggerPayload
from taggerlink.tagger import frame as frame_module


@pytest.fixture(autouse=True)
def reset_tagger_channel():
    """Reset process-wide channel state between tests.

    The memoized setup task belongs to the event loop of the test that
    created it, so every test starts with a fresh channel, an empty bus
    and no frames.
    """
    reset_channel()
    bus.clear()
    frame_module._frames.clear()
    yield
    reset_channel()
    bus.clear()
    frame_module._frames.clear()


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
def lookup_result() -> TaggerPayload:
    """Tagger response with one tag per type and one relationship per bucket."""
    return {
        "illustrationId": "illustration-id",
        "oracleId": "oracle-id",
        "taggings": [
            {"tag": {"name": "Tag 1", "type": "ILLUSTRATION_TAG"}},
            {"tag": {"name": "Tag 2", "type": "ORACLE_CARD_TAG"}},
            {"tag": {"name": "Tag 3", "type": "PRINTING_TAG"}},
        ],
        "relationships": [
            {
                "foreignKey": "illustrationId",
                "relatedId": "related-id",
                "contentName": "Depicts Relationship",
                "relatedName": "Depicted Relationship",
                "classifier": "DEPICTS",
                "classifierInverse": "DEPICTED_IN",
            },
            {
                "foreignKey": "oracleId",
                "relatedId": "related-id",
                "contentName": "Better Than Relationship",
                "relatedName": "Worse Than Relationship",
                "classifier": "BETTER_THAN",
                "classifierInverse": "WORSE_THAN",
            },
        ],
    }

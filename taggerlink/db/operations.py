"""
Key-value operations.

Thin async accessors over the stored_values table. Callers own the
transaction; these functions only flush.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from taggerlink.models.db import StoredValueDB


async def get_value(session: AsyncSession, key: str) -> Any | None:
    """
    Get the value stored under a key.

    Returns None if nothing is stored.
    """
    row = await session.get(StoredValueDB, key)
    if row is None:
        return None
    return row.value


async def set_value(session: AsyncSession, key: str, value: Any) -> None:
    """Insert or replace the value stored under a key."""
    await session.merge(StoredValueDB(key=key, value=value))
    await session.flush()

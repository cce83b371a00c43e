"""
Key-value store boundary used by the feature settings layer.
"""

from typing import Any, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from taggerlink.db.operations import get_value, set_value


class KeyValueStore(Protocol):
    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any) -> None: ...


class SessionStore:
    """KeyValueStore bound to one database session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, key: str) -> Any | None:
        return await get_value(self.session, key)

    async def set(self, key: str, value: Any) -> None:
        await set_value(self.session, key, value)

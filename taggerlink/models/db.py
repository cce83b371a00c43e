"""
SQLAlchemy ORM models for persistent storage.

Feature settings and auxiliary feature data share one key-value table.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class StoredValueDB(Base):
    """
    A single stored value.

    Keys are feature ids for settings records and "{feature_id}:{data_key}"
    for auxiliary feature data.
    """

    __tablename__ = "stored_values"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<StoredValueDB(key={self.key})>"

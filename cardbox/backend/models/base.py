"""
Declarative base and shared columns for cardbox tables.

Timestamps are stored as naive UTC datetimes.
"""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from cardbox.backend.core.utils import utc_now


class Base(DeclarativeBase):
    pass


class IntegerIdMixin:
    """
    Integer primary key assigned by the database.

    Ids are never reused: SQLite tables opt into AUTOINCREMENT through
    `sqlite_autoincrement`, other backends use their identity sequence.
    """

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)


class TimestampMixin:
    """created_at / updated_at, with updated_at indexed for listing order."""

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now, onupdate=utc_now, nullable=False, index=True,
    )

"""
Card Model.

Database model for cards - tasks, notes and goals with tags.
"""

from datetime import datetime
from enum import StrEnum

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from cardbox.backend.models.base import Base, IntegerIdMixin, TimestampMixin


class CardType(StrEnum):
    TASK = "task"
    NOTE = "note"
    GOAL = "goal"


class CardStatus(StrEnum):
    TODO = "todo"
    DOING = "doing"
    DONE = "done"


class Card(IntegerIdMixin, TimestampMixin, Base):
    """
    Card database model.

    `tags` holds the JSON text produced by the tag codec, never a list.
    Use cardbox.backend.core.tag_codec to read or write it.
    """

    __tablename__ = "cards"
    __table_args__ = {"sqlite_autoincrement": True}

    title: Mapped[str] = mapped_column(
        String(120),
        nullable=False,
    )
    content: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    type: Mapped[str] = mapped_column(
        String(16),
        default=CardType.TASK.value,
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(16),
        default=CardStatus.TODO.value,
        nullable=False,
    )
    tags: Mapped[str] = mapped_column(
        Text,
        default="[]",
        nullable=False,
    )
    due_date: Mapped[datetime | None] = mapped_column(
        DateTime,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Card(id={self.id}, type={self.type!r}, title={self.title!r})>"

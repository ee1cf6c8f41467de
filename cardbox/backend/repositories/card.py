"""
Card Repository.

Data access layer for cards. `CardStore` is the persistence contract the
service depends on; `CardRepository` implements it on SQLAlchemy.

Tags cross this boundary already encoded (see core.tag_codec). Ids are
integers that the caller has already validated.
"""

from datetime import datetime
from typing import Any, Protocol

from sqlalchemy import select

from cardbox.backend.core.utils import utc_now
from cardbox.backend.models.card import Card
from cardbox.backend.repositories.base import BaseRepository


class CardStore(Protocol):
    """Contract for card persistence."""

    async def create(self, **fields: Any) -> Card: ...
    async def list_all(self) -> list[Card]: ...
    async def get_by_id(self, id: int) -> Card: ...
    async def update(self, id: int, **fields: Any) -> Card: ...
    async def delete(self, id: int) -> None: ...


class CardRepository(BaseRepository[Card]):
    """
    Repository for Card model.

    Inherits get/update/delete from BaseRepository; update and delete
    raise NotFoundError for unknown ids.
    """

    model = Card

    async def create(self, **fields: Any) -> Card:
        """
        Insert a card.

        The id is assigned by the database; created_at and updated_at are
        set to the same instant.
        """
        now: datetime = utc_now()
        fields.setdefault("created_at", now)
        fields.setdefault("updated_at", now)
        return await super().create(**fields)

    async def list_all(self) -> list[Card]:
        """Get every card, most recently updated first."""
        result = await self.session.execute(
            select(Card).order_by(Card.updated_at.desc(), Card.id.desc())
        )
        return list(result.scalars().all())

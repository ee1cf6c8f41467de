"""
Card Service.

Business logic layer for cards. Validates raw request data, encodes tags
for storage, calls the card store, decodes tags on the way out and
filters listings.
"""

from enum import Enum
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from cardbox.backend.core.card_filter import filter_cards
from cardbox.backend.core.field_change import resolve
from cardbox.backend.core.tag_codec import MAX_TAGS, encode_tags
from cardbox.backend.core.utils import utc_now
from cardbox.backend.repositories.card import CardRepository, CardStore
from cardbox.backend.schemas.card import (
    CardChanges,
    CardQuery,
    CardResponse,
    validate_create,
    validate_update,
)
from cardbox.backend.services.base import BaseService


def _changes_to_columns(changes: CardChanges) -> dict[str, Any]:
    """Map supplied changes to column values, encoding tags."""
    columns: dict[str, Any] = {}
    for name, change in changes.supplied().items():
        value = resolve(change)
        if name == "tags":
            value = encode_tags(value)
        elif isinstance(value, Enum):
            value = value.value
        columns[name] = value
    return columns


class CardService(BaseService):
    """
    Service for card business logic.

    Every method takes input as it arrives from the request and returns
    CardResponse objects with tags decoded.
    """

    def __init__(self, session: AsyncSession, repo: CardStore | None = None) -> None:
        super().__init__(session)
        self.repo: CardStore = repo or CardRepository(session)

    async def create_card(self, payload: Any) -> CardResponse:
        """
        Create a new card.

        Args:
            payload: Request body mapping

        Returns:
            Created card. Tags echo the request as sent, not re-read from
            storage, so only the first MAX_TAGS of them are persisted.

        Raises:
            ValidationError: If the payload violates the create contract
        """
        data = validate_create(payload)
        tags = list(data.tags)

        self._log_operation(
            "Creating card",
            type=data.type.value,
            tag_count=len(tags),
            dropped_tags=max(len(tags) - MAX_TAGS, 0),
        )

        card = await self._execute_db_operation(
            "create_card",
            self.repo.create(
                title=data.title,
                content=data.content,
                type=data.type.value,
                status=data.status.value,
                tags=encode_tags(tags),
                due_date=data.due_date,
            ),
        )

        self._log_debug("Card created", card_id=card.id)
        return CardResponse.from_model(card, tags=tags)

    async def list_cards(self, query: CardQuery | None = None) -> list[CardResponse]:
        """
        List cards, most recently updated first, narrowed by the query.

        Args:
            query: Optional list filters

        Returns:
            Matching cards
        """
        query = query or CardQuery()
        cards = await self._execute_db_operation("list_cards", self.repo.list_all())
        decoded = [CardResponse.from_model(card) for card in cards]
        matched = filter_cards(decoded, query)

        self._log_debug(
            "Listed cards",
            total=len(decoded),
            matched=len(matched),
            filters=query.model_dump(exclude_none=True),
        )
        return matched

    async def update_card(self, card_id: int, payload: Any) -> CardResponse:
        """
        Apply a partial update.

        Fields absent from the payload are left unchanged; content or
        dueDate sent as null are cleared.

        Args:
            card_id: Card ID to update
            payload: Request body mapping

        Returns:
            Updated card

        Raises:
            ValidationError: If the payload violates the update contract
            NotFoundError: If card not found
        """
        changes = validate_update(payload)
        columns = _changes_to_columns(changes)

        if not columns:
            # Nothing to write, return the card as stored
            card = await self._execute_db_operation(
                "get_card",
                self.repo.get_by_id(card_id),
            )
            return CardResponse.from_model(card)

        columns["updated_at"] = utc_now()

        self._log_operation(
            "Updating card",
            card_id=card_id,
            fields=sorted(changes.supplied()),
        )

        card = await self._execute_db_operation(
            "update_card",
            self.repo.update(card_id, **columns),
        )
        return CardResponse.from_model(card)

    async def delete_card(self, card_id: int) -> None:
        """
        Permanently delete a card.

        Args:
            card_id: Card ID to delete

        Raises:
            NotFoundError: If card not found
        """
        self._log_operation("Deleting card", card_id=card_id)

        await self._execute_db_operation(
            "delete_card",
            self.repo.delete(card_id),
        )

"""
Unit test fixtures. Nothing here touches a database.
"""

from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest

from cardbox.backend.models.card import Card
from cardbox.backend.repositories.card import CardRepository

CARD_DEFAULTS: dict[str, Any] = {
    "id": 1,
    "title": "Card",
    "content": None,
    "type": "task",
    "status": "todo",
    "tags": "[]",
    "due_date": None,
    "created_at": datetime(2026, 1, 1, 12, 0),
    "updated_at": datetime(2026, 1, 1, 12, 0),
}


@pytest.fixture
def mock_db_session() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def mock_card_store() -> AsyncMock:
    """CardStore double; list_all() yields no cards unless told otherwise."""
    store = create_autospec(CardRepository, instance=True)
    store.list_all.return_value = []
    return store


@pytest.fixture
def make_card():
    """Factory for detached Card rows: make_card(id=3, tags='["a"]')."""

    def _make(**overrides: Any) -> Card:
        return Card(**{**CARD_DEFAULTS, **overrides})

    return _make


@pytest.fixture
def mock_logger() -> MagicMock:
    return MagicMock()

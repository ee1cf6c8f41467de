"""
Unit Tests for BaseService: storage error wrapping and log helpers.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy.exc import IntegrityError, OperationalError

from cardbox.backend.core.exceptions import DatabaseError, NotFoundError
from cardbox.backend.services.base import BaseService


async def _returns(value):
    return value


async def _raises(exc: Exception):
    raise exc


@pytest.fixture
def service() -> BaseService:
    svc = BaseService(AsyncMock())
    svc._logger = MagicMock()
    return svc


def test_exposes_session():
    session = AsyncMock()

    assert BaseService(session).session is session


class TestExecuteDbOperation:

    @pytest.mark.asyncio
    async def test_result_passes_through(self, service):
        assert await service._execute_db_operation("list_cards", _returns([1, 2])) == [1, 2]
        service._logger.error.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "storage_error",
        [
            OperationalError("SELECT 1", {}, Exception("database is locked")),
            IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed: cards.title")),
        ],
        ids=["operational", "integrity"],
    )
    async def test_storage_failure_becomes_database_error(self, service, storage_error):
        with pytest.raises(DatabaseError) as exc_info:
            await service._execute_db_operation("create_card", _raises(storage_error))

        assert exc_info.value.message == "Database operation failed: create_card"
        assert exc_info.value.__cause__ is storage_error
        service._logger.error.assert_called_once()
        assert service._logger.error.call_args.kwargs["extra"]["operation"] == "create_card"

    @pytest.mark.asyncio
    async def test_not_found_is_not_wrapped(self, service):
        with pytest.raises(NotFoundError):
            await service._execute_db_operation(
                "update_card", _raises(NotFoundError("Card 1 not found", resource_id=1)),
            )
        service._logger.error.assert_not_called()


class TestLogHelpers:

    def test_info_tagged_with_service(self, service):
        service._log_operation("Card deleted", card_id=3)

        service._logger.info.assert_called_once_with(
            "Card deleted", extra={"service": "BaseService", "card_id": 3},
        )

    def test_debug_tagged_with_service(self, service):
        service._log_debug("Cards filtered", total=2)

        service._logger.debug.assert_called_once_with(
            "Cards filtered", extra={"service": "BaseService", "total": 2},
        )

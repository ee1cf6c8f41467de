"""
Integration fixtures: the full app over httpx, backed by the test database.
"""

from collections.abc import AsyncGenerator
from typing import Any
from unittest.mock import patch

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cardbox.backend.core.database import get_db_session


@pytest.fixture
async def client(
    db_session: AsyncSession,
    db_session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """
    Client for an app whose requests all share the test's db_session.

    The readiness check opens its own sessions, so get_session_factory is
    pointed at the test engine as well. Unhandled errors come back as 500
    responses instead of being re-raised into the test.
    """
    from cardbox.backend.main import create_app

    async def _test_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app = create_app()
    app.dependency_overrides[get_db_session] = _test_session

    with patch(
        "cardbox.backend.core.database.get_session_factory",
        return_value=db_session_factory,
    ):
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as test_client:
            yield test_client

    app.dependency_overrides.clear()


class ApiAssertions:
    """Checks for the {"success", "data", "error", "metadata"} envelope."""

    @staticmethod
    def _status(response: httpx.Response, expected: int) -> dict[str, Any]:
        assert response.status_code == expected, (
            f"expected {expected}, got {response.status_code}: {response.text}"
        )
        return response.json()

    def assert_success(self, response: httpx.Response, expected_status: int = 200) -> dict[str, Any]:
        body = self._status(response, expected_status)
        assert body["success"] is True, body
        assert body["error"] is None, body
        return body

    def assert_error(
        self,
        response: httpx.Response,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        body = self._status(response, expected_status)
        assert body["success"] is False, body
        assert body["data"] is None, body
        if expected_code is not None:
            assert body["error"]["code"] == expected_code, body
        return body

    def assert_validation_error(
        self,
        response: httpx.Response,
        field: str | None = None,
    ) -> dict[str, Any]:
        """A 400 VAL_VALIDATION_ERROR, optionally naming `field`."""
        body = self.assert_error(response, 400, "VAL_VALIDATION_ERROR")
        if field is not None:
            assert body["error"]["details"]["field"] == field, body
        return body


@pytest.fixture
def api() -> ApiAssertions:
    return ApiAssertions()

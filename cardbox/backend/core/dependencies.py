"""
Request-scoped dependencies for the card endpoints.
"""

import uuid
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from cardbox.backend.core.database import get_db_session

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


async def get_request_id(request: Request) -> str:
    """
    The id RequestContextMiddleware put on request.state, so the envelope
    metadata and the X-Request-ID header agree. Outside the middleware the
    caller's header is used, or a fresh uuid4.
    """
    assigned = getattr(request.state, "request_id", None)
    return assigned or request.headers.get("x-request-id") or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]

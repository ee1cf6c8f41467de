"""
Cards API Endpoints.

REST API endpoints for card management. Request bodies are taken as raw
JSON and validated by the card service, so malformed fields come back as
400 VAL_VALIDATION_ERROR with the offending field named.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Query

from cardbox.backend.core.dependencies import DbSession, RequestId
from cardbox.backend.schemas.base import ApiResponse
from cardbox.backend.schemas.card import CardQuery, CardResponse, parse_card_id
from cardbox.backend.services.card import CardService

router = APIRouter()

JsonBody = Annotated[Any, Body(examples=[{"title": "Ship v1", "tags": ["release"]}])]


@router.get(
    "",
    response_model=ApiResponse[list[CardResponse]],
    summary="List cards",
    description=(
        "List all cards, most recently updated first. Optional filters "
        "combine with AND: q (text in title or content, case-insensitive), "
        "type, status, tag."
    ),
)
async def list_cards(
    db: DbSession,
    request_id: RequestId,
    q: str | None = Query(default=None, description="Text to search in title or content"),
    card_type: str | None = Query(default=None, alias="type", description="task, note or goal"),
    status: str | None = Query(default=None, description="todo, doing or done"),
    tag: str | None = Query(default=None, description="Tag the card must carry"),
) -> ApiResponse[list[CardResponse]]:
    """List cards with optional filters."""
    service = CardService(db)
    cards = await service.list_cards(CardQuery(q=q, type=card_type, status=status, tag=tag))
    return ApiResponse.wrap(cards, request_id)


@router.post(
    "",
    response_model=ApiResponse[CardResponse],
    status_code=201,
    summary="Create a card",
    description=(
        "Create a card. Only the first 12 tags are stored; the response "
        "echoes the tags as sent."
    ),
)
async def create_card(
    payload: JsonBody,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CardResponse]:
    """Create a new card."""
    service = CardService(db)
    card = await service.create_card(payload)
    return ApiResponse.wrap(card, request_id)


@router.patch(
    "/{card_id}",
    response_model=ApiResponse[CardResponse],
    summary="Update a card",
    description=(
        "Update an existing card. Only provided fields change; content or "
        "dueDate sent as null are cleared."
    ),
)
async def update_card(
    card_id: str,
    payload: JsonBody,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CardResponse]:
    """Update a card."""
    service = CardService(db)
    card = await service.update_card(parse_card_id(card_id), payload)
    return ApiResponse.wrap(card, request_id)


@router.delete(
    "/{card_id}",
    status_code=204,
    summary="Delete a card",
    description="Permanently delete a card.",
)
async def delete_card(
    card_id: str,
    db: DbSession,
    request_id: RequestId,
) -> None:
    """Delete a card."""
    service = CardService(db)
    await service.delete_card(parse_card_id(card_id))

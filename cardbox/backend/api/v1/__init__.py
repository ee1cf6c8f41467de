"""Routes mounted under the versioned API prefix."""

from fastapi import APIRouter

from cardbox.backend.api.v1.endpoints import cards

router = APIRouter()
router.include_router(cards.router, prefix="/cards", tags=["cards"])

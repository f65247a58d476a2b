"""
Health check endpoint.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from deckscribe.services.collection_store import CollectionStore, get_collection_store

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    collection_loaded: bool = False
    unique_cards: int = 0


@router.get("/health", response_model=HealthResponse)
async def health(
    store: Annotated[CollectionStore, Depends(get_collection_store)],
) -> HealthResponse:
    """
    Liveness check.

    Also reports whether a collection is loaded.
    """
    return HealthResponse(
        status="healthy",
        collection_loaded=store.counts.has_data(),
        unique_cards=store.counts.unique_cards(),
    )

"""
Scryfall card metadata fetcher.

Looks cards up by name through Scryfall's collection endpoint, which accepts
at most 75 identifiers per request. Larger requests are split into batches
that run concurrently and are merged in submission order.

API: https://scryfall.com/docs/api/cards/collection
"""

import asyncio
import logging

import httpx

from deckscribe.config import MAX_BATCH_SIZE, settings
from deckscribe.models.card_data import CardMetadata
from deckscribe.models.identity import name_to_id

logger = logging.getLogger(__name__)

USER_AGENT = "Deckscribe/1.0"


class CardDataFetchError(Exception):
    """Raised when fetching card metadata fails."""

    pass


def build_batches(identities: list[str], batch_size: int = MAX_BATCH_SIZE) -> list[list[str]]:
    """
    Split identities into request batches.

    Args:
        identities: Card identities to look up
        batch_size: Maximum identities per request

    Returns:
        Batches in order, none of them empty. 160 identities with a batch
        size of 75 give batches of 75, 75 and 10.
    """
    return [identities[i : i + batch_size] for i in range(0, len(identities), batch_size)]


async def fetch_card_batch(
    identities: list[str],
    client: httpx.AsyncClient,
) -> dict[str, CardMetadata]:
    """
    Fetch metadata for a single batch.

    Returns:
        Metadata keyed by the identity of the canonical card name. Cards
        Scryfall could not find are simply absent.

    Raises:
        CardDataFetchError: If the request fails
    """
    payload = {"identifiers": [{"name": identity} for identity in identities]}

    try:
        response = await client.post(
            f"{settings.scryfall_api_url}/cards/collection",
            json=payload,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise CardDataFetchError(
            f"Failed to fetch card data: HTTP {e.response.status_code}"
        ) from e
    except httpx.RequestError as e:
        raise CardDataFetchError(f"Failed to fetch card data: {e}") from e

    try:
        data = response.json()
    except ValueError as e:
        raise CardDataFetchError(f"Failed to fetch card data: invalid JSON ({e})") from e
    if not isinstance(data, dict):
        raise CardDataFetchError("Failed to fetch card data: unexpected response payload")

    not_found = data.get("not_found") or []
    if not_found:
        logger.debug("Scryfall could not find %d cards", len(not_found))

    cards: dict[str, CardMetadata] = {}
    for card in data.get("data") or []:
        if not isinstance(card, dict):
            continue
        metadata = CardMetadata.from_scryfall(card)
        if metadata.name:
            cards[name_to_id(metadata.name)] = metadata
    return cards


async def _fetch_batches(
    batches: list[list[str]],
    client: httpx.AsyncClient,
) -> list[dict[str, CardMetadata]]:
    """
    Run every batch concurrently, results in batch order.

    The first failure cancels the batches still in flight and is re-raised
    on its own.
    """
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(fetch_card_batch(batch, client)) for batch in batches]
    except ExceptionGroup as eg:
        raise eg.exceptions[0]

    return [task.result() for task in tasks]


async def fetch_card_metadata(
    card_names: list[str],
    client: httpx.AsyncClient | None = None,
) -> dict[str, CardMetadata]:
    """
    Fetch metadata for any number of cards.

    All batches must succeed: if one fails the whole fetch fails, and the
    caller decides how to degrade.

    Args:
        card_names: Display names; normalized and de-duplicated here
        client: Optional httpx client for connection reuse

    Returns:
        Metadata keyed by card identity. A duplicate identity across batches
        keeps the value from the later batch.

    Raises:
        CardDataFetchError: If any batch fails
    """
    identities = list(dict.fromkeys(name_to_id(name) for name in card_names if name))
    if not identities:
        return {}

    batches = build_batches(identities)
    logger.debug("Fetching %d cards in %d batches", len(identities), len(batches))

    if client is not None:
        results = await _fetch_batches(batches, client)
    else:
        async with httpx.AsyncClient(timeout=settings.request_timeout) as own_client:
            results = await _fetch_batches(batches, own_client)

    card_data_by_id: dict[str, CardMetadata] = {}
    for result in results:
        card_data_by_id.update(result)
    return card_data_by_id

"""Tests for Scryfall card metadata fetching."""

import asyncio
import json

import httpx
import pytest
import respx

from deckscribe.models.card_data import CardMetadata
from deckscribe.services import card_fetcher
from deckscribe.services.card_fetcher import (
    USER_AGENT,
    CardDataFetchError,
    build_batches,
    fetch_card_metadata,
)

COLLECTION_URL = "https://api.scryfall.com/cards/collection"


def scryfall_card(name: str, **overrides) -> dict:
    card = {
        "object": "card",
        "name": name,
        "type_line": "Instant",
        "cmc": 1.0,
        "color_identity": ["R"],
        "prices": {"usd": "2.00", "eur": "1.50", "tix": "0.02"},
        "scryfall_uri": f"https://scryfall.com/card/{name.lower().replace(' ', '-')}",
        "image_uris": {"large": f"https://cards.scryfall.io/large/{name}.jpg"},
    }
    card.update(overrides)
    return card


def echo_identifiers(request: httpx.Request) -> httpx.Response:
    """Answer a collection request with one card per requested name."""
    identifiers = json.loads(request.content)["identifiers"]
    cards = [scryfall_card(identifier["name"].title()) for identifier in identifiers]
    return httpx.Response(200, json={"object": "list", "not_found": [], "data": cards})


class TestBuildBatches:
    def test_splits_into_full_batches_then_remainder(self) -> None:
        identities = [f"card {i}" for i in range(160)]

        batches = build_batches(identities)

        assert [len(batch) for batch in batches] == [75, 75, 10]
        assert [i for batch in batches for i in batch] == identities

    def test_exact_multiple(self) -> None:
        assert [len(b) for b in build_batches(["a"] * 150)] == [75, 75]

    def test_small_and_empty(self) -> None:
        assert build_batches(["a", "b"]) == [["a", "b"]]
        assert build_batches([]) == []


class TestFetchCardMetadata:
    @respx.mock
    async def test_fetches_and_keys_by_identity(self) -> None:
        """Results are keyed by the identity of the returned card name."""
        route = respx.post(COLLECTION_URL).mock(
            return_value=httpx.Response(
                200,
                json={
                    "object": "list",
                    "not_found": [{"name": "mystery card"}],
                    "data": [
                        scryfall_card("Lightning Bolt"),
                        scryfall_card("Fire // Ice", cmc=4.0, color_identity=["U", "R"]),
                    ],
                },
            )
        )

        cards = await fetch_card_metadata(["Lightning Bolt", "Fire // Ice", "Mystery Card"])

        assert set(cards) == {"lightning bolt", "fire"}
        assert cards["fire"].name == "Fire // Ice"
        assert cards["fire"].color_identity == ("U", "R")
        assert route.call_count == 1

    @respx.mock
    async def test_sends_normalized_identifiers(self) -> None:
        route = respx.post(COLLECTION_URL).mock(side_effect=echo_identifiers)

        await fetch_card_metadata(["Lightning Bolt", "LIGHTNING BOLT", "Fire // Ice"])

        request = route.calls.last.request
        assert json.loads(request.content) == {
            "identifiers": [{"name": "lightning bolt"}, {"name": "fire"}]
        }
        assert request.headers["User-Agent"] == USER_AGENT

    @respx.mock
    async def test_large_requests_are_batched(self) -> None:
        route = respx.post(COLLECTION_URL).mock(side_effect=echo_identifiers)
        names = [f"Card {i}" for i in range(160)]

        cards = await fetch_card_metadata(names)

        sizes = sorted(
            len(json.loads(call.request.content)["identifiers"]) for call in route.calls
        )
        assert sizes == [10, 75, 75]
        assert len(cards) == 160
        assert list(cards)[0] == "card 0"
        assert list(cards)[-1] == "card 159"

    @respx.mock
    async def test_no_names_no_requests(self) -> None:
        route = respx.post(COLLECTION_URL).mock(side_effect=echo_identifiers)

        assert await fetch_card_metadata([]) == {}
        assert await fetch_card_metadata(["", ""]) == {}
        assert route.call_count == 0

    @respx.mock
    async def test_uses_given_client(self) -> None:
        respx.post(COLLECTION_URL).mock(side_effect=echo_identifiers)

        async with httpx.AsyncClient() as client:
            cards = await fetch_card_metadata(["Sol Ring"], client=client)

        assert cards["sol ring"].name == "Sol Ring"

    @respx.mock
    async def test_raises_on_http_error(self) -> None:
        """HTTP errors are wrapped in CardDataFetchError."""
        respx.post(COLLECTION_URL).mock(return_value=httpx.Response(503))

        with pytest.raises(CardDataFetchError, match="HTTP 503"):
            await fetch_card_metadata(["Lightning Bolt"])

    @respx.mock
    async def test_raises_on_non_json_body(self) -> None:
        """A gateway page instead of JSON is a fetch failure."""
        respx.post(COLLECTION_URL).mock(
            return_value=httpx.Response(200, text="<html>gateway</html>")
        )

        with pytest.raises(CardDataFetchError, match="invalid JSON"):
            await fetch_card_metadata(["Lightning Bolt"])

    @respx.mock
    async def test_raises_on_unexpected_payload(self) -> None:
        respx.post(COLLECTION_URL).mock(
            return_value=httpx.Response(200, json=["not", "an", "object"])
        )

        with pytest.raises(CardDataFetchError, match="unexpected response payload"):
            await fetch_card_metadata(["Lightning Bolt"])

    @respx.mock
    async def test_skips_malformed_card_entries(self) -> None:
        respx.post(COLLECTION_URL).mock(
            return_value=httpx.Response(
                200, json={"data": ["junk", None, scryfall_card("Lightning Bolt")]}
            )
        )

        cards = await fetch_card_metadata(["Lightning Bolt"])

        assert list(cards) == ["lightning bolt"]

    @respx.mock
    async def test_raises_on_network_error(self) -> None:
        respx.post(COLLECTION_URL).mock(side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(CardDataFetchError, match="Failed to fetch card data"):
            await fetch_card_metadata(["Lightning Bolt"])

    @respx.mock
    async def test_one_failed_batch_fails_everything(self) -> None:
        responses = iter([httpx.Response(200, json={"data": []}), httpx.Response(500)])
        respx.post(COLLECTION_URL).mock(side_effect=lambda request: next(responses))

        with pytest.raises(CardDataFetchError):
            await fetch_card_metadata([f"Card {i}" for i in range(80)])

    async def test_failed_batch_cancels_the_others(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        cancelled: list[str] = []

        async def fake_batch(
            identities: list[str], client: httpx.AsyncClient
        ) -> dict[str, CardMetadata]:
            if identities[0] == "card 0":
                await asyncio.sleep(0)
                raise CardDataFetchError("Failed to fetch card data: HTTP 500")
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.append(identities[0])
                raise
            return {}

        monkeypatch.setattr(card_fetcher, "fetch_card_batch", fake_batch)

        async with httpx.AsyncClient() as client:
            with pytest.raises(CardDataFetchError, match="HTTP 500"):
                await fetch_card_metadata([f"Card {i}" for i in range(160)], client=client)

        assert sorted(cancelled) == ["card 150", "card 75"]


class TestFromScryfall:
    def test_single_faced_card(self) -> None:
        metadata = CardMetadata.from_scryfall(scryfall_card("Lightning Bolt"))

        assert metadata.type_line == "Instant"
        assert metadata.cmc == 1.0
        assert metadata.price("usd") == 2.0
        assert metadata.purchase_uri == "https://scryfall.com/card/lightning-bolt"
        assert metadata.image_uri == "https://cards.scryfall.io/large/Lightning Bolt.jpg"

    def test_double_faced_card_uses_face_images(self) -> None:
        card = scryfall_card(
            "Delver of Secrets // Insectile Aberration",
            card_faces=[
                {"image_uris": {"large": "https://img/front.jpg"}},
                {"image_uris": {"large": "https://img/back.jpg"}},
            ],
        )
        del card["image_uris"]

        metadata = CardMetadata.from_scryfall(card)

        assert metadata.image_uris == ("https://img/front.jpg", "https://img/back.jpg")
        assert metadata.image_uri == "https://img/front.jpg"

    def test_missing_fields(self) -> None:
        metadata = CardMetadata.from_scryfall({"name": "Oddity", "prices": {"usd": None}})

        assert metadata.cmc == 0.0
        assert metadata.color_identity == ()
        assert metadata.image_uris == ()
        assert metadata.price("usd") is None

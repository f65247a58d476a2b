"""Tests for health check endpoint."""

import pytest
from httpx import ASGITransport, AsyncClient

from deckscribe.main import app
from deckscribe.models.collection import CollectionCounts
from deckscribe.services.collection_store import CollectionStore, get_collection_store


@pytest.fixture
def store() -> CollectionStore:
    return CollectionStore()


@pytest.fixture
async def client(store: CollectionStore):
    app.dependency_overrides[get_collection_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


def test_app_title() -> None:
    assert app.title == "Deckscribe"


class TestHealthEndpoint:
    async def test_health_returns_healthy(self, client: AsyncClient) -> None:
        """Liveness check returns healthy."""
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["collection_loaded"] is False
        assert data["unique_cards"] == 0

    async def test_health_reports_collection(
        self, client: AsyncClient, store: CollectionStore
    ) -> None:
        store.counts = CollectionCounts({"forest": 10, "sol ring": 1})

        response = await client.get("/health")

        data = response.json()
        assert data["collection_loaded"] is True
        assert data["unique_cards"] == 2

# tests/test_routes.py
import random

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

from tarot_api.core.dependencies import get_card_catalog, get_card_sampler, get_redis_client
from tarot_api.data.database import get_db
from tarot_api.main import app
from tarot_api.services.card_services import CardCatalog
from tarot_api.services.draw_services import RandomCardSampler


@pytest.fixture
def client(session_factory, fake_redis):
    """Client wired to the seeded test database and the fake Redis; lifespan is not run."""

    async def override_get_db():
        async with session_factory() as db:
            yield db

    async def override_get_redis_client():
        yield fake_redis

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis_client] = override_get_redis_client
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "message" in response.json()


def test_list_cards(client):
    response = client.get("/api/cards")

    assert response.status_code == 200
    assert len(response.json()) == 22


def test_random_cards(client):
    response = client.get("/api/cards/random", params={"count": 3})

    assert response.status_code == 200
    data = response.json()
    assert len({card["id"] for card in data["cards"]}) == 3
    assert data["cosmic_message"] == "✨ 3 cards reveal the threads of your fate"


@pytest.mark.parametrize("count", [0, 23])
def test_random_cards_rejects_bad_count(client, count):
    response = client.get("/api/cards/random", params={"count": count})

    assert response.status_code == 400


def test_short_search(client):
    response = client.get("/api/cards/search", params={"q": "a"})

    assert response.status_code == 200
    assert response.json()["short_query"] is True


def test_card_lookup(client):
    fool = client.get("/api/cards/arcana/0").json()

    response = client.get(f"/api/cards/{fool['id']}")

    assert response.status_code == 200
    assert response.json()["name"] == "The Fool"


@pytest.mark.parametrize("path", ["/api/cards/9999", "/api/cards/arcana/99", "/api/readings/missing", "/api/users/404"])
def test_missing_resources_return_404(client, path):
    assert client.get(path).status_code == 404


def test_create_and_fetch_reading(client):
    response = client.post("/api/readings", json={"spread_type": "THREE_CARD", "question": "나의 직업운은?"})

    assert response.status_code == 200
    reading = response.json()
    assert reading["status"] == "COMPLETED"
    assert [drawn["position_name"] for drawn in reading["drawn_cards"]] == ["과거", "현재", "미래"]

    fetched = client.get(f"/api/readings/{reading['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["id"] == reading["id"]


def test_unknown_spread_returns_400(client):
    response = client.post("/api/readings", json={"spread_type": "FIVE_CARD"})

    assert response.status_code == 400


def test_reading_stats(client):
    client.post("/api/readings", json={"spread_type": "SINGLE"})

    daily = client.get("/api/readings/stats/daily").json()
    assert daily["total_readings"] == 1
    assert daily["single_card"] == 1

    overall = client.get("/api/readings/stats")
    assert overall.status_code == 200
    assert overall.json()["total_readings"] == 1


def test_user_flow(client):
    user = client.post("/api/users", json={"username": "seeker"}).json()
    client.post("/api/readings", json={"spread_type": "SINGLE", "user_id": user["id"]})

    stats = client.get(f"/api/users/{user['id']}/stats")
    history = client.get(f"/api/readings/user/{user['id']}")

    assert stats.status_code == 200
    assert stats.json()["total_readings"] == 1
    assert history.json()["total"] == 1

    duplicate = client.post("/api/users", json={"username": "seeker"})
    assert duplicate.status_code == 400


def test_update_user_profile(client):
    user = client.post("/api/users", json={"username": "seeker"}).json()

    response = client.put(f"/api/users/{user['id']}", json={"preferred_language": "en"})

    assert response.status_code == 200
    assert response.json()["preferred_language"] == "en"
    assert response.json()["updated_at"] is not None
    assert client.put("/api/users/404", json={"display_name": "Nobody"}).status_code == 404


def test_random_cards_use_injected_sampler(client):
    def seeded_sampler(catalog: CardCatalog = Depends(get_card_catalog)):
        return RandomCardSampler(catalog, rng=random.Random(3))

    app.dependency_overrides[get_card_sampler] = seeded_sampler

    first = client.get("/api/cards/random", params={"count": 5}).json()["cards"]
    second = client.get("/api/cards/random", params={"count": 5}).json()["cards"]

    assert [card["id"] for card in first] == [card["id"] for card in second]

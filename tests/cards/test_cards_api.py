from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient

from services.cards.app.api import deps
from services.cards.app.config import BackendSettings, CardsSettings
from services.cards.app.main import create_app


@pytest.fixture
async def client():
    app = create_app(CardsSettings())
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def empty_client(tmp_path):
    settings = CardsSettings(backend=BackendSettings(seed_path=tmp_path / "missing.json"))
    app = create_app(settings)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.mark.asyncio
async def test_list_seeds_from_fixture_on_first_read(client):
    response = await client.get("/cards")
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert len(data["cards"]) == 14
    assert data["cards"][0] == {
        "id": "1",
        "title": "Slack",
        "description": "Send workflow notifications and alerts to team channels.",
        "color": "#4A154B",
        "iconUrl": "https://cdn.simpleicons.org/slack",
    }
    assert "iconUrl" not in data["cards"][10]


@pytest.mark.asyncio
async def test_create_card_trims_and_defaults_color(empty_client):
    response = await empty_client.post("/cards", json={"title": "  A ", "description": " B"})
    assert response.status_code == 201, response.text
    data = response.json()
    assert data["success"] is True
    card = data["card"]
    assert card["title"] == "A"
    assert card["description"] == "B"
    assert card["color"] == "#000000"
    assert "iconUrl" not in card
    assert card["id"]

    listing = (await empty_client.get("/cards")).json()
    assert listing["cards"] == [card]


@pytest.mark.asyncio
async def test_create_card_keeps_icon_and_color(empty_client):
    response = await empty_client.post(
        "/cards",
        json={"title": "Linear", "description": "Issues", "iconUrl": "https://example.com/i.svg", "color": "#5E6AD2"},
    )
    assert response.status_code == 201
    card = response.json()["card"]
    assert card["iconUrl"] == "https://example.com/i.svg"
    assert card["color"] == "#5E6AD2"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"description": "no title"},
        {"title": "no description"},
        {"title": "   ", "description": "blank title"},
        {"title": "blank description", "description": ""},
    ],
)
async def test_create_card_requires_title_and_description(empty_client, body):
    response = await empty_client.post("/cards", json=body)
    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert data["code"] == "validation_error"
    assert data["error"]

    listing = (await empty_client.get("/cards")).json()
    assert listing["cards"] == []


@pytest.mark.asyncio
async def test_create_card_rejects_malformed_body(empty_client):
    response = await empty_client.post("/cards", json=["not", "an", "object"])
    assert response.status_code == 400
    assert response.json()["code"] == "validation_error"


@pytest.mark.asyncio
async def test_delete_card_removes_it(client):
    await client.get("/cards")
    response = await client.delete("/cards", params={"id": "1"})
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["card"]["id"] == "1"

    ids = [card["id"] for card in (await client.get("/cards")).json()["cards"]]
    assert "1" not in ids
    assert len(ids) == 13


@pytest.mark.asyncio
async def test_delete_unknown_card_returns_404(client):
    await client.get("/cards")
    response = await client.delete("/cards", params={"id": "does-not-exist"})
    assert response.status_code == 404
    data = response.json()
    assert data["success"] is False
    assert data["code"] == "not_found"
    assert "does-not-exist" in data["error"]


@pytest.mark.asyncio
async def test_delete_without_id_returns_400(client):
    response = await client.delete("/cards")
    assert response.status_code == 400
    assert response.json()["code"] == "validation_error"


@pytest.mark.asyncio
async def test_seeding_happens_only_once(client):
    cards = (await client.get("/cards")).json()["cards"]
    for card in cards:
        await client.delete("/cards", params={"id": card["id"]})

    assert (await client.get("/cards")).json()["cards"] == []


@pytest.mark.asyncio
async def test_create_before_first_read_skips_seeding(client):
    created = (await client.post("/cards", json={"title": "A", "description": "B"})).json()["card"]
    listing = (await client.get("/cards")).json()
    assert listing["cards"] == [created]


@pytest.mark.asyncio
async def test_healthcheck(client):
    response = await client.get("/healthz")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_create_card_uses_injected_default_color(tmp_path):
    settings = CardsSettings(backend=BackendSettings(seed_path=tmp_path / "missing.json", default_color="#123456"))
    app = create_app(settings)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/cards", json={"title": "A", "description": "B"})

    assert response.status_code == 201
    assert response.json()["card"]["color"] == "#123456"


@pytest.mark.asyncio
async def test_routes_wait_for_injected_simulated_latency(tmp_path, monkeypatch):
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    monkeypatch.setattr(deps, "asyncio", SimpleNamespace(sleep=fake_sleep))
    settings = CardsSettings(backend=BackendSettings(seed_path=tmp_path / "missing.json", simulated_latency_ms=250))
    app = create_app(settings)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        await client.get("/cards")
        await client.post("/cards", json={"title": "A", "description": "B"})

    assert delays == [0.25, 0.25]


@pytest.mark.asyncio
async def test_no_latency_by_default(empty_client, monkeypatch):
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    monkeypatch.setattr(deps, "asyncio", SimpleNamespace(sleep=fake_sleep))
    await empty_client.get("/cards")

    assert delays == []

import time

import anyio
import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from soccer_klout.api import create_app
from soccer_klout.config import Settings
from soccer_klout.providers import MOCK_PLAYERS, MockPlayerSource, PlayerDataProvider, RemotePlayerSource


@pytest.fixture
def app(cache):
    return create_app(Settings(), provider=PlayerDataProvider(MockPlayerSource(), cache))


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "OK"
    assert "timestamp" in body
    assert body["cache"]["keyCount"] == 0


@pytest.mark.anyio
async def test_search(client: AsyncClient):
    resp = await client.get("/api/players", params={"name": "ronaldo"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["totalCount"] == 1
    assert body["results"][0]["name"] == "Cristiano Ronaldo"
    assert body["results"][0]["matchScore"] == 100
    assert body["results"][0]["shirtNumber"] == 7
    assert "aliases" not in body["results"][0]


@pytest.mark.anyio
@pytest.mark.parametrize("params", [{}, {"name": ""}, {"name": "   "}])
async def test_search_requires_name(client: AsyncClient, params):
    resp = await client.get("/api/players", params=params)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Player name is required", "code": "INVALID_REQUEST"}


@pytest.mark.anyio
async def test_player_stats(client: AsyncClient):
    resp = await client.get("/api/players/1/stats")
    assert resp.status_code == 200
    body = resp.json()
    assert body["profile"]["name"] == "Lionel Messi"
    assert body["stats"]["socialMentions"] == 5_000_000
    assert isinstance(body["stats"]["goals"], int)
    assert isinstance(body["stats"]["socialMentions"], int)


@pytest.mark.anyio
async def test_player_stats_rejects_non_numeric_id(client: AsyncClient):
    resp = await client.get("/api/players/abc/stats")
    assert resp.status_code == 400
    assert resp.json()["code"] == "INVALID_REQUEST"


@pytest.mark.anyio
async def test_player_stats_not_found(client: AsyncClient):
    resp = await client.get("/api/players/999/stats")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Player with ID 999 not found", "code": "PLAYER_NOT_FOUND"}


@pytest.mark.anyio
async def test_klout_defaults_normalized_against_top_players(client: AsyncClient):
    resp = await client.get("/api/players/2/klout")
    assert resp.status_code == 200
    body = resp.json()
    assert body["playerId"] == "2"
    assert body["playerName"] == "Cristiano Ronaldo"
    # Ronaldo has the largest raw score in the reference pool.
    assert body["normalizedInfluence"] == 100
    assert body["influence"] == 890 * 3 + 270 * 2 + 1150 + 6_000_000 * 0.5
    assert set(body["breakdown"]) == {"goalsScore", "assistsScore", "appearancesScore", "socialScore"}
    assert "rank" not in body


@pytest.mark.anyio
async def test_klout_with_position_and_league(client: AsyncClient):
    resp = await client.get(
        "/api/players/3/klout",
        params={"position": "Forward", "league": "Premier_League"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["breakdown"]["goalsScore"] == pytest.approx(186 * 3.75)
    assert 0 < body["normalizedInfluence"] < 100


@pytest.mark.anyio
async def test_klout_blank_id_is_invalid(client: AsyncClient):
    resp = await client.get("/api/players/%20/klout")
    assert resp.status_code == 400
    assert resp.json()["code"] == "INVALID_REQUEST"


@pytest.mark.anyio
async def test_klout_unknown_player(client: AsyncClient):
    resp = await client.get("/api/players/77/klout")
    assert resp.status_code == 404
    assert resp.json()["code"] == "PLAYER_NOT_FOUND"


@pytest.mark.anyio
async def test_leaderboard(client: AsyncClient):
    resp = await client.get("/api/players/leaderboard/top", params={"limit": 5})
    assert resp.status_code == 200
    entries = resp.json()
    assert [entry["rank"] for entry in entries] == [1, 2, 3, 4, 5]
    assert entries[0]["player"]["name"] == "Cristiano Ronaldo"
    assert entries[0]["influence"]["normalizedInfluence"] == 100
    assert entries[0]["influence"]["rank"] == 1
    normalized = [entry["influence"]["normalizedInfluence"] for entry in entries]
    assert normalized == sorted(normalized, reverse=True)


@pytest.mark.anyio
@pytest.mark.parametrize("limit,expected", [("2", 2), ("abc", 5), ("-3", 5), ("500", 5), ("2.9", 2), ("3abc", 3), (" 4", 4)])
async def test_leaderboard_limit_parsing(client: AsyncClient, limit, expected):
    resp = await client.get("/api/players/leaderboard/top", params={"limit": limit})
    assert resp.status_code == 200
    assert len(resp.json()) == expected


@pytest.mark.anyio
async def test_leaderboard_with_filters(client: AsyncClient):
    resp = await client.get(
        "/api/players/leaderboard/top",
        params={"limit": 3, "position": "Goalkeeper", "league": "Serie_A"},
    )
    assert resp.status_code == 200
    entries = resp.json()
    assert len(entries) == 3
    # Social mentions still dominate under the combined weights.
    assert entries[0]["player"]["id"] == "2"


@pytest.mark.anyio
async def test_compare(client: AsyncClient):
    resp = await client.post("/api/players/compare", json={"playerIds": ["1", "3"]})
    assert resp.status_code == 200
    body = resp.json()
    assert [player["profile"]["id"] for player in body["players"]] == ["1", "3"]
    messi_raw = 807 * 3 + 318 * 2 + 1000 + 5_000_000 * 0.5
    assert body["maxInfluence"] == messi_raw
    assert body["players"][0]["influenceScore"]["normalizedInfluence"] == 100
    metrics = body["metrics"]
    assert metrics["maxInfluence"] == 100
    assert metrics["bestBreakdown"]["byGoals"]["playerId"] == "1"


@pytest.mark.anyio
@pytest.mark.parametrize(
    "payload",
    [
        {"playerIds": ["1"]},
        {"playerIds": ["1", "2", "3", "4", "5", "1"]},
        {"playerIds": []},
        {"playerIds": "1,2"},
        {},
        ["1", "2"],
    ],
)
async def test_compare_rejects_bad_payloads(client: AsyncClient, payload):
    resp = await client.post("/api/players/compare", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {
        "error": "Please provide 2-5 player IDs for comparison",
        "code": "INVALID_REQUEST",
    }


@pytest.mark.anyio
async def test_compare_rejects_malformed_json(client: AsyncClient):
    resp = await client.post(
        "/api/players/compare",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["code"] == "INVALID_REQUEST"


@pytest.mark.anyio
async def test_compare_rejects_deeply_nested_json(client: AsyncClient):
    depth = 100_000
    resp = await client.post(
        "/api/players/compare",
        content=b"[" * depth + b"]" * depth,
        headers={"content-type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["code"] == "INVALID_REQUEST"


@pytest.mark.anyio
async def test_compare_unknown_player(client: AsyncClient):
    resp = await client.post("/api/players/compare", json={"playerIds": ["1", "999"]})
    assert resp.status_code == 404
    assert resp.json()["code"] == "PLAYER_NOT_FOUND"


@pytest.mark.anyio
async def test_unknown_route(client: AsyncClient):
    resp = await client.get("/api/nothing/here")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not found", "code": "NOT_FOUND", "path": "/api/nothing/here"}


@pytest.mark.anyio
async def test_repeat_requests_hit_cache(client: AsyncClient, cache):
    await client.get("/api/players/1/stats")
    await client.get("/api/players/1/stats")
    stats = cache.stats()
    assert stats.hits >= 1
    assert cache.has("player:1")


class _ExplodingProvider(PlayerDataProvider):
    def search_players(self, name):
        raise RuntimeError("database on fire")


@pytest.mark.anyio
async def test_unhandled_errors_become_500(cache):
    app = create_app(Settings(), provider=_ExplodingProvider(MockPlayerSource(), cache))
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        resp = await client.get("/api/players", params={"name": "messi"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "database on fire", "code": "INTERNAL_SERVER_ERROR"}


@pytest.mark.anyio
@pytest.mark.parametrize("method,path", [("GET", "/api/players/compare"), ("POST", "/api/health")])
async def test_wrong_method_is_not_found(client: AsyncClient, method, path):
    resp = await client.request(method, path)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not found", "code": "NOT_FOUND", "path": path}


UPSTREAM_DELAY = 1.0


def _slow_upstream(request: httpx.Request) -> httpx.Response:
    time.sleep(UPSTREAM_DELAY)
    name = request.url.params.get("name", "")
    players = [p for p in MOCK_PLAYERS if name.lower() in p["name"].lower()]
    return httpx.Response(200, json={"players": players})


@pytest.mark.anyio
async def test_slow_upstream_does_not_block_other_requests(cache):
    upstream = httpx.Client(base_url="http://upstream", transport=httpx.MockTransport(_slow_upstream))
    source = RemotePlayerSource("http://upstream", client=upstream)
    app = create_app(Settings(), provider=PlayerDataProvider(source, cache))
    latencies = {}

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:

        async def search():
            resp = await client.get("/api/players", params={"name": "messi"})
            assert resp.status_code == 200

        async def health():
            await anyio.sleep(0.1)
            started = time.perf_counter()
            resp = await client.get("/api/health")
            latencies["health"] = time.perf_counter() - started
            assert resp.status_code == 200

        async with anyio.create_task_group() as tg:
            tg.start_soon(search)
            tg.start_soon(health)

    source.close()
    assert latencies["health"] < UPSTREAM_DELAY / 2

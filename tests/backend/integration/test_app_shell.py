import pytest

from app.config import settings


pytestmark = pytest.mark.asyncio


@pytest.fixture
def static_dir(tmp_path, monkeypatch):
    (tmp_path / "index.html").write_text("<html>shell</html>")
    (tmp_path / "js").mkdir()
    (tmp_path / "js" / "app.js").write_text("console.log('hi')")
    monkeypatch.setattr(settings, "static_dir", str(tmp_path))
    return tmp_path


async def test_healthz(client):
    resp = await client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


async def test_unknown_route_serves_shell(client, static_dir):
    resp = await client.get("/ideas/123/anything")
    assert resp.status_code == 200
    assert "shell" in resp.text


async def test_existing_asset_is_served(client, static_dir):
    resp = await client.get("/js/app.js")
    assert resp.status_code == 200
    assert "console.log" in resp.text


async def test_path_traversal_falls_back_to_shell(client, static_dir):
    resp = await client.get("/..%2F..%2Fetc%2Fpasswd")
    assert resp.status_code == 200
    assert "shell" in resp.text


async def test_unknown_api_route_is_404(client, static_dir):
    resp = await client.get("/api/v1/does-not-exist")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"


async def test_no_static_dir_is_404(client, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "static_dir", str(tmp_path / "missing"))
    resp = await client.get("/somewhere")
    assert resp.status_code == 404


async def test_board_responses_are_documented_with_envelopes(client):
    resp = await client.get("/openapi.json")
    assert resp.status_code == 200
    schemas = resp.json()["components"]["schemas"]
    for name in ("LeaderboardResponse", "IdeaCreatedResponse", "VoteResponse", "StatsResponse", "MeResponse"):
        assert name in schemas
    assert "IdeaOut" in schemas

import math
from datetime import datetime, timezone

import pytest
from httpx import AsyncClient

from bloodlink.db import serialize
from bloodlink.errors import is_missing
from bloodlink.main import create_app

pytestmark = pytest.mark.anyio


# --------------------------
# Error responses
# --------------------------
async def test_malformed_json_is_a_bad_request(test_client: AsyncClient):
    r = await test_client.post(
        "/api/donors", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid JSON payload"}


async def test_non_object_body_is_a_bad_request(test_client: AsyncClient):
    r = await test_client.post("/api/contact", json=["name", "email", "message"])
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid JSON payload"}


async def test_empty_body_fails_required_fields(test_client: AsyncClient):
    r = await test_client.post("/api/requests")
    assert r.status_code == 400
    assert r.json() == {"error": "Please fill all required fields"}


async def test_unknown_api_path(test_client: AsyncClient):
    r = await test_client.get("/api/volunteers")
    assert r.status_code == 404
    assert r.json() == {"error": "Not Found"}


async def test_records_cannot_be_deleted(test_client: AsyncClient):
    r = await test_client.delete("/api/donors")
    assert r.status_code == 405
    assert "error" in r.json()


# --------------------------
# Status routes and CORS
# --------------------------
async def test_health(test_client: AsyncClient):
    r = await test_client.get("/api/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


async def test_root_status_outside_production(test_client: AsyncClient):
    r = await test_client.get("/")
    assert r.status_code == 200
    assert r.text == "Blood donation API is running"

    # no SPA fallback in development
    assert (await test_client.get("/donate")).status_code == 404


async def test_cors_allows_any_origin_by_default(test_client: AsyncClient):
    r = await test_client.get("/api/donors", headers={"Origin": "https://example.org"})
    assert r.headers["access-control-allow-origin"] == "*"


async def test_cors_single_origin(settings, mock_db, open_client):
    settings.cors_origin = "https://blood.example.org"
    app = create_app(settings)
    async with open_client(app, mock_db) as ac:
        ok = await ac.get("/api/donors", headers={"Origin": "https://blood.example.org"})
        assert ok.headers["access-control-allow-origin"] == "https://blood.example.org"

        other = await ac.get("/api/donors", headers={"Origin": "https://evil.example.com"})
        assert "access-control-allow-origin" not in other.headers


# --------------------------
# Production frontend
# --------------------------
@pytest.fixture
def frontend(tmp_path):
    root = tmp_path / "frontend"
    (root / "assets").mkdir(parents=True)
    (root / "index.html").write_text("<html>bloodlink</html>")
    (root / "assets" / "app.js").write_text("console.log('app')")
    return root


@pytest.fixture
async def prod_client(settings, mock_db, frontend, open_client):
    settings.environment = "production"
    settings.frontend_dir = frontend
    app = create_app(settings)
    async with open_client(app, mock_db) as ac:
        yield ac


async def test_production_serves_entry_document(prod_client: AsyncClient):
    for path in ("/", "/donate", "/requests/new"):
        r = await prod_client.get(path)
        assert r.status_code == 200, path
        assert r.text == "<html>bloodlink</html>"


async def test_production_serves_static_files(prod_client: AsyncClient):
    r = await prod_client.get("/assets/app.js")
    assert r.status_code == 200
    assert r.text == "console.log('app')"


async def test_production_leaves_api_alone(prod_client: AsyncClient):
    assert (await prod_client.get("/api/donors")).json() == []

    r = await prod_client.get("/api/nothing-here")
    assert r.status_code == 404
    assert r.json() == {"error": "Not Found"}


async def test_missing_entry_document_is_a_server_error(prod_client: AsyncClient, frontend):
    (frontend / "index.html").unlink()
    r = await prod_client.get("/donate")
    assert r.status_code == 500
    assert r.text == "Frontend file not found."


async def test_production_head_on_static_file(prod_client: AsyncClient):
    r = await prod_client.head("/assets/app.js")
    assert r.status_code == 200
    assert r.text == ""


async def test_missing_asset_falls_back_to_entry_document(prod_client: AsyncClient):
    r = await prod_client.get("/assets/missing.js")
    assert r.status_code == 200
    assert r.text == "<html>bloodlink</html>"


async def test_missing_frontend_directory_is_a_server_error(settings, mock_db, open_client, tmp_path):
    settings.environment = "production"
    settings.frontend_dir = tmp_path / "not-built"
    app = create_app(settings)
    async with open_client(app, mock_db) as ac:
        r = await ac.get("/donate")
        assert r.status_code == 500
        assert r.text == "Frontend file not found."
        assert (await ac.get("/api/health")).status_code == 200


# --------------------------
# Helpers
# --------------------------
@pytest.mark.parametrize("value", [None, False, "", 0, 0.0, math.nan])
def test_is_missing(value):
    assert is_missing(value)


@pytest.mark.parametrize("value", [True, "0", " ", 1, -1, 0.5, 10 ** 400, [], {}])
def test_is_present(value):
    assert not is_missing(value)


def test_serialize_renders_ids_and_timestamps():
    doc = {
        "_id": "65f0c0ffee",
        "name": "A",
        "createdAt": datetime(2024, 3, 1, 9, 30, 15, 123456, tzinfo=timezone.utc),
        "lastDonationDate": datetime(2024, 1, 15),
    }
    out = serialize(doc)
    assert out == {
        "id": "65f0c0ffee",
        "name": "A",
        "createdAt": "2024-03-01T09:30:15.123Z",
        "lastDonationDate": "2024-01-15T00:00:00.000Z",
    }

"""Tests for the admin reload endpoint and the health check."""

import pytest
from httpx import ASGITransport, AsyncClient

RELOAD_URL = "/api/blog/admin/reload"
ADMIN_HEADERS = {"X-Admin-Key": "test-admin-key"}


@pytest.mark.asyncio
async def test_reload_requires_key(client):
    response = await client.post(RELOAD_URL, headers={"X-Admin-Key": "wrong"})

    assert response.status_code == 403
    assert response.json()["detail"] == "Invalid admin key"


@pytest.mark.asyncio
async def test_reload_missing_header(client):
    response = await client.post(RELOAD_URL)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_reload_rejected_when_no_key_configured(test_settings, blog):
    from inkwell.main import create_app

    app = create_app(test_settings.model_copy(update={"admin_key": ""}), blog)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        response = await client.post(RELOAD_URL, headers={"X-Admin-Key": ""})

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_reload_picks_up_new_articles(client, populated_dir):
    (populated_dir / "2025-6-1-summer.md").write_text("# Summer\n\nSun.")

    response = await client.post(RELOAD_URL, headers=ADMIN_HEADERS)

    assert response.status_code == 200
    assert response.json()["articles"] == 6
    assert response.json()["published"] == 4

    listing = await client.get("/api/blog/articles")
    assert listing.json()["articles"][0]["key"] == "summer"


@pytest.mark.asyncio
async def test_failed_reload_keeps_serving_old_articles(client, populated_dir):
    (populated_dir / "2025-6-1-untitled.md").write_text("No title here.")

    response = await client.post(RELOAD_URL, headers=ADMIN_HEADERS)

    assert response.status_code == 422
    assert "2025-6-1-untitled.md" in response.json()["detail"]

    listing = await client.get("/api/blog/articles")
    assert listing.json()["total"] == 3


@pytest.mark.asyncio
async def test_concurrent_reload_is_rejected(client, blog):
    with blog._reload_lock:
        response = await client.post(RELOAD_URL, headers=ADMIN_HEADERS)

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_health_ok(client):
    response = await client.get("/api/blog/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["articles"] == 5
    assert data["published"] == 3
    assert data["reloading"] is False


@pytest.mark.asyncio
async def test_health_before_first_load(test_settings, populated_dir):
    from inkwell.main import create_app
    from inkwell.services.blog import Blog

    app = create_app(test_settings, Blog(populated_dir))
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        response = await client.get("/api/blog/health")

    assert response.status_code == 503
    assert response.json()["status"] == "loading"

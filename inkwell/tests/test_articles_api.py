"""Tests for the article and topic endpoints."""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from inkwell.models.article import Article


@pytest.mark.asyncio
async def test_list_articles(client):
    response = await client.get("/api/blog/articles")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert [a["key"] for a in data["articles"]] == ["zig-intro", "rust-tips", "holidays"]
    first = data["articles"][0]
    assert first["title"] == "Zig Intro"
    assert first["published"] == "2024-03-05"
    assert first["read_minutes"] >= 1
    assert "content" not in first


@pytest.mark.asyncio
async def test_list_articles_pagination(client):
    response = await client.get("/api/blog/articles", params={"limit": 1, "offset": 1})

    data = response.json()
    assert data["total"] == 3
    assert [a["key"] for a in data["articles"]] == ["rust-tips"]


@pytest.mark.asyncio
async def test_list_articles_invalid_limit(client):
    response = await client.get("/api/blog/articles", params={"limit": 0})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_articles_by_topic_slug(client):
    response = await client.get("/api/blog/articles", params={"topic": "programming"})

    data = response.json()
    assert data["topic"] == "Programming"
    assert [a["key"] for a in data["articles"]] == ["zig-intro", "rust-tips"]


@pytest.mark.asyncio
async def test_list_articles_unknown_topic(client):
    response = await client.get("/api/blog/articles", params={"topic": "secret-plans"})

    assert response.status_code == 200
    data = response.json()
    assert data == {"articles": [], "total": 0, "topic": None}


@pytest.mark.asyncio
async def test_get_article_with_suggestion(client):
    response = await client.get("/api/blog/articles/zig-intro")

    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Zig Intro"
    assert data["content"] == "<p>Zig is small.</p>"
    assert data["next"] == "rust-tips"
    assert data["suggestion"]["key"] == "rust-tips"


@pytest.mark.asyncio
async def test_get_teaser_and_description(client):
    response = await client.get("/api/blog/articles/rust-tips")

    data = response.json()
    assert data["teaser"] == "<p>Borrowing made easy.</p>"
    assert data["description"] == "Borrowing made easy."
    assert "The rest of the article." in data["content"]


@pytest.mark.asyncio
async def test_get_draft_by_key(client):
    response = await client.get("/api/blog/articles/unfinished")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "draft"
    assert data["published"] is None


@pytest.mark.asyncio
async def test_get_article_not_found(client):
    response = await client.get("/api/blog/articles/nonexistent")

    assert response.status_code == 404
    assert "not found" in response.json()["detail"].lower()


@pytest.mark.asyncio
async def test_get_suggestion(client):
    response = await client.get("/api/blog/articles/rust-tips/suggestion")

    assert response.status_code == 200
    # Only other article about Programming
    assert response.json()["key"] == "zig-intro"


@pytest.mark.asyncio
async def test_get_suggestion_unknown_article(client):
    response = await client.get("/api/blog/articles/nonexistent/suggestion")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_no_suggestion_available(test_settings, tmp_path):
    from inkwell.main import create_app
    from inkwell.services.blog import Blog

    solo_dir = tmp_path / "solo"
    solo_dir.mkdir()
    (solo_dir / "2024-1-1-only.md").write_text("# Only\n\nAlone.")
    blog = Blog(solo_dir)
    blog.load()
    app = create_app(test_settings, blog)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        detail = await client.get("/api/blog/articles/only")
        suggestion = await client.get("/api/blog/articles/only/suggestion")

    assert detail.status_code == 200
    assert detail.json()["suggestion"] is None
    assert suggestion.status_code == 404
    assert suggestion.json()["detail"] == "No suggestion available"


@pytest.mark.asyncio
async def test_broken_next_link_is_surfaced(app, client, mocker):
    orphan = Article(
        key="orphan", title="Orphan", published=date(2024, 1, 1), next="missing"
    )
    mocker.patch.object(app.state.blog, "get", return_value=orphan)

    response = await client.get("/api/blog/articles/orphan")

    assert response.status_code == 500
    assert "missing" in response.json()["detail"]


@pytest.mark.asyncio
async def test_list_topics(client):
    response = await client.get("/api/blog/topics")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 4
    assert data["topics"][0] == {"topic": "Programming", "slug": "programming", "count": 2}
    assert {t["topic"] for t in data["topics"]} == {"Programming", "Life", "Rust", "Zig"}

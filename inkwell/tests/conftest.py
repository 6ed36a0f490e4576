"""Shared fixtures for inkwell tests."""

from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from inkwell.config import Settings
from inkwell.services.blog import Blog


def write_doc(directory: Path, filename: str, text: str) -> Path:
    """Write a source document and return its path."""
    path = directory / filename
    path.write_text(text, encoding="utf-8")
    return path


def article_text(title: str, body: str = "Some text.", front_matter: str = "") -> str:
    """Markdown for a minimal article, with optional front matter."""
    text = f"# {title}\n\n{body}\n"
    if front_matter:
        text = f"{front_matter}\n--start--\n{text}"
    return text


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Settings are cached per process; don't leak them between tests."""
    yield
    from inkwell.config import get_settings

    get_settings.cache_clear()


@pytest.fixture
def content_dir(tmp_path) -> Path:
    directory = tmp_path / "blog"
    directory.mkdir()
    return directory


@pytest.fixture
def populated_dir(content_dir) -> Path:
    """A small blog: three published articles, a draft and a timeless one."""
    write_doc(
        content_dir,
        "2024-1-2-rust-tips.md",
        article_text(
            "Rust Tips",
            "Borrowing made easy. --snip-- The rest of the article.",
            "topics: [Rust, Programming]",
        ),
    )
    write_doc(
        content_dir,
        "2023-12-24-holidays.md",
        article_text("Holidays", "Snow and cookies.", "topics: [Life]"),
    )
    write_doc(
        content_dir,
        "2024-3-5-zig-intro.md",
        article_text(
            "Zig Intro",
            "Zig is small.",
            "topics: [Programming, Zig]\nnext: rust-tips",
        ),
    )
    write_doc(
        content_dir,
        "draft-unfinished.md",
        article_text("Unfinished", "Work in progress.", "topics: [Secret Plans]"),
    )
    write_doc(content_dir, "timeless-about-me.md", article_text("About Me", "Hi!"))
    write_doc(content_dir, "notes.txt", "not an article")
    write_doc(content_dir, "README.md", "# Readme\n")
    return content_dir


@pytest.fixture
def blog(populated_dir) -> Blog:
    blog = Blog(populated_dir)
    blog.load()
    return blog


@pytest.fixture
def test_settings(populated_dir) -> Settings:
    """Settings with safe test defaults."""
    return Settings(
        content_dir=populated_dir,
        admin_key="test-admin-key",
        random_seed=42,
        cors_origins=["http://localhost:3000"],
    )


@pytest.fixture
def app(test_settings, blog):
    from inkwell.main import create_app

    return create_app(test_settings, blog)


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client

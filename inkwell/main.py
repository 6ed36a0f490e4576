"""
Inkwell API

Read-only JSON access to the blog: articles, topics, suggestions, plus an
admin-triggered reload. Page rendering happens elsewhere.
"""

import logging
import random
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from inkwell.config import Settings, get_settings
from inkwell.logging_config import configure_logging
from inkwell.middleware import RequestIDMiddleware, SecurityHeadersMiddleware
from inkwell.routers import admin, articles, topics
from inkwell.services.blog import Blog
from inkwell.services.suggestions import Recommender

logger = logging.getLogger(__name__)

API_PREFIX = "/api/blog"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load all articles before serving the first request."""
    blog: Blog = app.state.blog
    if not blog.is_loaded:
        await run_in_threadpool(blog.load)
    yield


def create_app(settings: Settings | None = None, blog: Blog | None = None) -> FastAPI:
    """Build the app around one blog and one recommender.

    Both are created here and handed to routes through ``app.state``; a
    pre-built *blog* can be passed in (it is loaded on startup if needed).
    """
    settings = settings or get_settings()
    blog = blog or Blog.from_settings(settings)

    app = FastAPI(
        title="Inkwell API",
        description="Articles, topics and reading suggestions of the blog",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.blog = blog
    app.state.recommender = Recommender(blog, random.Random(settings.random_seed))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "X-Admin-Key", "X-Request-ID"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    # Added last so it wraps everything else
    app.add_middleware(RequestIDMiddleware)

    app.include_router(articles.router, prefix=API_PREFIX)
    app.include_router(topics.router, prefix=API_PREFIX)
    app.include_router(admin.router, prefix=API_PREFIX)

    @app.get(f"{API_PREFIX}/health")
    async def health_check(request: Request) -> JSONResponse:
        """Health check reporting whether articles are loaded."""
        current: Blog = request.app.state.blog
        snapshot = current.snapshot
        result: dict[str, Any] = {
            "status": "ok" if current.is_loaded else "loading",
            "service": "inkwell-api",
            "version": "0.1.0",
            "articles": len(snapshot.articles),
            "published": len(snapshot.published_keys),
            "reloading": current.is_reloading,
        }
        return JSONResponse(content=result, status_code=200 if current.is_loaded else 503)

    return app


def _create_default_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)
    return create_app(settings)


app = _create_default_app()

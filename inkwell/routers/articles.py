"""Article endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from inkwell.dependencies import get_blog, get_recommender
from inkwell.errors import BrokenNextLinkError
from inkwell.models.article import Article, ArticleDetail, ArticleIndex, ArticleSummary
from inkwell.services.blog import Blog
from inkwell.services.suggestions import Recommender

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/articles", tags=["articles"])


def _suggest(recommender: Recommender, article: Article) -> Article | None:
    try:
        return recommender.suggest(article)
    except BrokenNextLinkError as e:
        logger.error("Broken next link: %s", e)
        raise HTTPException(status_code=500, detail=str(e)) from e


@router.get("", response_model=ArticleIndex)
async def list_articles(
    topic: str | None = Query(
        default=None,
        description="Only articles about this topic (canonical slug, e.g. 'deep-learning')",
    ),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    blog: Blog = Depends(get_blog),
):
    """Published articles, newest first, optionally filtered by topic."""
    resolved: str | None = None
    if topic is None:
        articles = blog.list()
    else:
        resolved = blog.resolve_topic(topic)
        articles = blog.list_by_topic(resolved) if resolved is not None else []

    page = articles[offset : offset + limit]
    return ArticleIndex(
        articles=[ArticleSummary.from_article(a) for a in page],
        total=len(articles),
        topic=resolved,
    )


@router.get("/{key}", response_model=ArticleDetail)
async def get_article(
    key: str,
    blog: Blog = Depends(get_blog),
    recommender: Recommender = Depends(get_recommender),
):
    """A single article by key, with the suggested article to read next."""
    article = blog.get(key)
    if article is None:
        raise HTTPException(status_code=404, detail="Article not found")
    return ArticleDetail.from_article(article, _suggest(recommender, article))


@router.get("/{key}/suggestion", response_model=ArticleSummary)
async def get_suggestion(
    key: str,
    blog: Blog = Depends(get_blog),
    recommender: Recommender = Depends(get_recommender),
):
    """Only the suggested follow-up for an article."""
    article = blog.get(key)
    if article is None:
        raise HTTPException(status_code=404, detail="Article not found")
    suggestion = _suggest(recommender, article)
    if suggestion is None:
        raise HTTPException(status_code=404, detail="No suggestion available")
    return ArticleSummary.from_article(suggestion)

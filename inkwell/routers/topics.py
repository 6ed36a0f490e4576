"""Topic endpoints."""

from fastapi import APIRouter, Depends

from inkwell.dependencies import get_blog
from inkwell.models.article import TopicEntry, TopicIndex, canonicalize_topic
from inkwell.services.blog import Blog

router = APIRouter(prefix="/topics", tags=["topics"])


@router.get("", response_model=TopicIndex)
async def list_topics(blog: Blog = Depends(get_blog)):
    """Topics of published articles, most used first."""
    topics = [
        TopicEntry(topic=t.topic, slug=canonicalize_topic(t.topic), count=t.count)
        for t in blog.topics_list()
    ]
    return TopicIndex(topics=topics, total=len(topics))

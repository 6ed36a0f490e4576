"""Article data models."""

from datetime import date, timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


def canonicalize_topic(topic: str) -> str:
    """URL-safe form of a topic: lower-case, spaces replaced by hyphens.

    Only used for matching path segments; stored topics keep their spelling.
    """
    return topic.lower().replace(" ", "-")


def display_minutes(duration: timedelta) -> int:
    """Round a reading duration to whole minutes, never less than one."""
    return max(1, int(duration.total_seconds() / 60 + 0.5))


class ArticleStatus(str, Enum):
    """How a document is classified by its file name."""

    PUBLISHED = "published"
    DRAFT = "draft"
    TIMELESS = "timeless"


class Article(BaseModel):
    """A fully rendered article. Immutable once loaded."""

    model_config = ConfigDict(frozen=True)

    key: str
    title: str
    status: ArticleStatus = ArticleStatus.PUBLISHED
    published: date | None = None
    read_duration: timedelta = timedelta(0)
    topics: tuple[str, ...] = ()
    description: str = ""
    teaser: str = ""
    content: str = ""
    next: str | None = None

    @model_validator(mode="after")
    def _check_publish_date(self) -> "Article":
        """Only published articles carry a date."""
        if self.status is ArticleStatus.PUBLISHED and self.published is None:
            raise ValueError(f"published article '{self.key}' needs a publish date")
        if self.status is not ArticleStatus.PUBLISHED and self.published is not None:
            raise ValueError(f"{self.status.value} article '{self.key}' can't have a date")
        return self

    @property
    def read_minutes(self) -> int:
        return display_minutes(self.read_duration)

    def matches_topic(self, topic: str) -> bool:
        """Whether the article is tagged with *topic* (raw or canonical form)."""
        canonical = canonicalize_topic(topic)
        return any(t == topic or canonicalize_topic(t) == canonical for t in self.topics)


class TopicCount(BaseModel):
    """Number of published articles tagged with a topic."""

    model_config = ConfigDict(frozen=True)

    topic: str
    count: int


# ---------------------------------------------------------------------------
# API response models
# ---------------------------------------------------------------------------


class ArticleSummary(BaseModel):
    """Article data for listings (no full content)."""

    key: str
    title: str
    status: ArticleStatus
    published: date | None = None
    read_minutes: int
    topics: list[str] = []
    description: str
    teaser: str

    @classmethod
    def from_article(cls, article: Article) -> "ArticleSummary":
        return cls(
            key=article.key,
            title=article.title,
            status=article.status,
            published=article.published,
            read_minutes=article.read_minutes,
            topics=list(article.topics),
            description=article.description,
            teaser=article.teaser,
        )


class ArticleDetail(ArticleSummary):
    """Full article data, with the recommended follow-up."""

    content: str
    next: str | None = None
    suggestion: ArticleSummary | None = None

    @classmethod
    def from_article(
        cls, article: Article, suggestion: Article | None = None
    ) -> "ArticleDetail":
        summary = ArticleSummary.from_article(article)
        return cls(
            **summary.model_dump(),
            content=article.content,
            next=article.next,
            suggestion=ArticleSummary.from_article(suggestion) if suggestion else None,
        )


class ArticleIndex(BaseModel):
    """Article listing, newest first."""

    articles: list[ArticleSummary]
    total: int
    topic: str | None = None


class TopicEntry(BaseModel):
    """A topic with its URL slug and article count."""

    topic: str
    slug: str
    count: int


class TopicIndex(BaseModel):
    """All topics of published articles, most used first."""

    topics: list[TopicEntry]
    total: int


class ReloadResult(BaseModel):
    """Statistics of a completed reload."""

    articles: int
    published: int
    topics: int
    duration_ms: float = Field(..., ge=0)

"""Article repository — loads every document and serves read-only snapshots.

A load scans the content directory, turns each document into an
:class:`Article` and assembles a :class:`BlogSnapshot`. The snapshot is only
published once it is completely built, by replacing a single reference, so
readers always see either the old or the new blog and never a mix. If any
document fails to load, nothing is published and the old snapshot stays.
"""

import logging
import threading
import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from inkwell.config import Settings
from inkwell.errors import BrokenNextLinkError, MissingTitleError, ReloadInProgressError
from inkwell.models.article import (
    Article,
    ReloadResult,
    TopicCount,
    canonicalize_topic,
)
from inkwell.services.front_matter import split_front_matter
from inkwell.services.reading_time import BYTES_PER_SECOND, estimate_read_duration
from inkwell.services.renderer import HtmlSerializer, find_title, parse
from inkwell.services.scanner import SourceDocument, scan_documents
from inkwell.services.teaser import describe, split_teaser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlogSnapshot:
    """Everything readers need, built in one go and never modified."""

    articles: Mapping[str, Article]
    published_keys: tuple[str, ...]
    topics: tuple[TopicCount, ...]

    @classmethod
    def empty(cls) -> "BlogSnapshot":
        return cls(articles=MappingProxyType({}), published_keys=(), topics=())


def build_article(
    document: SourceDocument, bytes_per_second: float = BYTES_PER_SECOND
) -> Article:
    """Turn one source document into a rendered article.

    Raises:
        FrontMatterError: If the configuration block is malformed.
        MissingTitleError: If the document has no level-1 heading.
    """
    config, body = split_front_matter(document.text, document.path)
    teaser_source, content_source = split_teaser(body)

    tree = parse(content_source, extended=True)
    title = find_title(tree)
    if title is None:
        raise MissingTitleError("document has no level-1 heading", document.path)

    serializer = HtmlSerializer()
    teaser = serializer.render(parse(teaser_source))

    return Article(
        key=document.key,
        title=title,
        status=document.name.status,
        published=document.name.published,
        read_duration=estimate_read_duration(
            body, config.read_minutes, bytes_per_second
        ),
        topics=tuple(config.topics),
        description=describe(teaser, config.description),
        teaser=teaser,
        content=serializer.render(tree),
        next=config.next,
    )


def count_topics(published: Iterable[Article]) -> tuple[TopicCount, ...]:
    """Count how many articles carry each topic, most common first.

    Topics repeated within one article count once. Ties keep the order in
    which topics were first seen.
    """
    counts: dict[str, int] = {}
    for article in published:
        for topic in dict.fromkeys(article.topics):
            counts[topic] = counts.get(topic, 0) + 1
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return tuple(TopicCount(topic=topic, count=count) for topic, count in ranked)


def build_snapshot(
    documents: Iterable[SourceDocument], bytes_per_second: float = BYTES_PER_SECOND
) -> BlogSnapshot:
    """Build a complete snapshot from source documents.

    Documents sharing a key overwrite each other; the last one wins.

    Raises:
        LoadError: If any document can't be turned into an article, or a
            ``next`` override names an article that doesn't exist.
    """
    articles: dict[str, Article] = {}
    paths: dict[str, Path] = {}
    for document in documents:
        if document.key in articles:
            logger.warning(
                "Duplicate article key '%s': %s replaces %s",
                document.key,
                document.path.name,
                paths[document.key].name,
            )
        articles[document.key] = build_article(document, bytes_per_second)
        paths[document.key] = document.path

    for article in articles.values():
        if article.next is not None and article.next not in articles:
            raise BrokenNextLinkError(article.key, article.next, paths.get(article.key))

    # sorted() is stable, so same-day articles keep their enumeration order
    published = sorted(
        (a for a in articles.values() if a.published is not None),
        key=lambda a: a.published,
    )

    return BlogSnapshot(
        articles=MappingProxyType(articles),
        published_keys=tuple(a.key for a in published),
        topics=count_topics(published),
    )


class Blog:
    """All articles of the blog, reloadable from the content directory.

    Usage::

        blog = Blog(Path("blog"))
        blog.load()
        latest = blog.list()[0]
    """

    def __init__(
        self,
        content_dir: Path,
        suffix: str = ".md",
        bytes_per_second: float = BYTES_PER_SECOND,
    ) -> None:
        self._content_dir = Path(content_dir)
        self._suffix = suffix
        self._bytes_per_second = bytes_per_second
        self._snapshot = BlogSnapshot.empty()
        self._reload_lock = threading.Lock()
        self._loaded = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "Blog":
        return cls(
            settings.content_dir,
            suffix=settings.document_suffix,
            bytes_per_second=settings.read_bytes_per_second,
        )

    @property
    def snapshot(self) -> BlogSnapshot:
        return self._snapshot

    @property
    def published_keys(self) -> tuple[str, ...]:
        """Keys of published articles, oldest first."""
        return self._snapshot.published_keys

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def is_reloading(self) -> bool:
        return self._reload_lock.locked()

    def load(self, blocking: bool = True) -> ReloadResult:
        """Rescan all documents and publish the result.

        Only one load runs at a time. With ``blocking=False`` a load that
        finds another one in progress fails immediately instead of waiting.

        Raises:
            LoadError: If any document fails to load. The previously
                published snapshot stays in place.
            ReloadInProgressError: If ``blocking`` is False and another load
                is running.
        """
        if not self._reload_lock.acquire(blocking=blocking):
            raise ReloadInProgressError("a reload is already in progress")
        try:
            started = time.monotonic()
            documents = scan_documents(self._content_dir, self._suffix)
            snapshot = build_snapshot(documents, self._bytes_per_second)
            self._snapshot = snapshot
            self._loaded = True
        finally:
            self._reload_lock.release()

        result = ReloadResult(
            articles=len(snapshot.articles),
            published=len(snapshot.published_keys),
            topics=len(snapshot.topics),
            duration_ms=(time.monotonic() - started) * 1000,
        )
        logger.info(
            "Loaded %d articles (%d published, %d topics) in %.1f ms",
            result.articles,
            result.published,
            result.topics,
            result.duration_ms,
        )
        return result

    reload = load

    def get(self, key: str) -> Article | None:
        """The article with *key*, including drafts and timeless ones."""
        return self._snapshot.articles.get(key)

    def topics_list(self) -> list[TopicCount]:
        """Topics of published articles with their counts, most used first."""
        return list(self._snapshot.topics)

    def resolve_topic(self, slug: str) -> str | None:
        """The stored spelling of the topic whose canonical form is *slug*."""
        for entry in self._snapshot.topics:
            if canonicalize_topic(entry.topic) == slug:
                return entry.topic
        return None

    def list_by_topic(self, topic: str) -> list[Article]:
        """Published articles tagged with *topic*, newest first."""
        return [article for article in self.list() if article.matches_topic(topic)]

    # Defined last: inside the class body the name shadows the builtin.
    def list(self) -> list[Article]:
        """Published articles, newest first."""
        snapshot = self._snapshot
        return [snapshot.articles[key] for key in reversed(snapshot.published_keys)]

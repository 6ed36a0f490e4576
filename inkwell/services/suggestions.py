"""Recommendation engine — picks the article to read next.

The choice follows a fallback chain, first match wins:

1. the article's explicit ``next`` override,
2. a random published article sharing at least one topic,
3. a random published article,
4. nothing, when the article is the only published one.
"""

import logging
import random
import threading

from inkwell.errors import BrokenNextLinkError
from inkwell.models.article import Article
from inkwell.services.blog import Blog

logger = logging.getLogger(__name__)


class Recommender:
    """Suggests follow-up articles from the blog's current snapshot."""

    def __init__(self, blog: Blog, rng: random.Random | None = None) -> None:
        self._blog = blog
        self._rng = rng or random.Random()
        self._rng_lock = threading.Lock()

    def _choose(self, candidates: list[Article]) -> Article:
        with self._rng_lock:
            return self._rng.choice(candidates)

    def suggest(self, article: Article) -> Article | None:
        """The article to read after *article*, or None if there is none.

        Raises:
            BrokenNextLinkError: If ``article.next`` names an unknown article.
        """
        snapshot = self._blog.snapshot

        if article.next is not None:
            suggestion = snapshot.articles.get(article.next)
            if suggestion is None:
                raise BrokenNextLinkError(article.key, article.next)
            return suggestion

        others = [
            snapshot.articles[key]
            for key in snapshot.published_keys
            if key != article.key
        ]
        if not others:
            logger.warning("No other published article to suggest after '%s'", article.key)
            return None

        topics = set(article.topics)
        related = [other for other in others if topics.intersection(other.topics)]
        return self._choose(related or others)

    def suggest_for_key(self, key: str) -> Article | None:
        """Like :meth:`suggest`, looking the article up first. None if unknown."""
        article = self._blog.get(key)
        if article is None:
            return None
        return self.suggest(article)

"""Error types raised while loading and querying the blog."""

from pathlib import Path


class InkwellError(Exception):
    """Base class for all blog engine errors."""

    pass


class LoadError(InkwellError):
    """A document could not be turned into an article.

    Any LoadError aborts the whole reload; the previously published
    snapshot stays in place.
    """

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{self.path.name}: {message}"
        super().__init__(message)


class DocumentReadError(LoadError):
    """The document file could not be read."""

    pass


class DocumentDecodeError(LoadError):
    """The document bytes are not valid UTF-8."""

    pass


class FrontMatterError(LoadError):
    """The configuration block before ``--start--`` is malformed."""

    pass


class MissingTitleError(LoadError):
    """The document has no level-1 heading to take the title from."""

    pass


class BrokenNextLinkError(LoadError):
    """An explicit ``next`` override names an article that doesn't exist."""

    def __init__(self, key: str, next_key: str, path: Path | str | None = None) -> None:
        self.key = key
        self.next_key = next_key
        super().__init__(
            f"article '{key}' points to unknown next article '{next_key}'", path
        )


class ReloadInProgressError(InkwellError):
    """A reload was requested while another one is still running."""

    pass

"""Document scanner — finds article sources and classifies them by file name.

File names follow one of three grammars (extension stripped):

    2024-3-5-some-key    published on 2024-03-05
    draft-some-key       draft, not listed
    timeless-some-key    timeless, retrievable but not listed

Anything else in the directory is ignored.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from inkwell.errors import DocumentDecodeError, DocumentReadError
from inkwell.models.article import ArticleStatus

logger = logging.getLogger(__name__)

_DATED_RE = re.compile(r"^(\d+)-(\d+)-(\d+)-(.+)$")
_DRAFT_PREFIX = "draft-"
_TIMELESS_PREFIX = "timeless-"


@dataclass(frozen=True)
class DocumentName:
    """What a file name says about the article inside."""

    key: str
    status: ArticleStatus
    published: date | None = None


@dataclass(frozen=True)
class SourceDocument:
    """A classified document together with its decoded text."""

    path: Path
    name: DocumentName
    text: str

    @property
    def key(self) -> str:
        return self.name.key


def parse_document_name(stem: str) -> DocumentName | None:
    """Classify a file name (without extension), or None if it isn't an article."""
    match = _DATED_RE.match(stem)
    if match:
        year, month, day, key = match.groups()
        try:
            published = date(int(year), int(month), int(day))
        except (ValueError, OverflowError):
            logger.warning("Skipping %s: %s-%s-%s is not a valid date", stem, year, month, day)
            return None
        return DocumentName(key=key, status=ArticleStatus.PUBLISHED, published=published)

    if stem.startswith(_DRAFT_PREFIX) and len(stem) > len(_DRAFT_PREFIX):
        return DocumentName(key=stem[len(_DRAFT_PREFIX):], status=ArticleStatus.DRAFT)

    if stem.startswith(_TIMELESS_PREFIX) and len(stem) > len(_TIMELESS_PREFIX):
        return DocumentName(
            key=stem[len(_TIMELESS_PREFIX):], status=ArticleStatus.TIMELESS
        )

    return None


def read_document(path: Path) -> str:
    """Read a document as UTF-8 text.

    Raises:
        DocumentReadError: If the file can't be read.
        DocumentDecodeError: If the content isn't valid UTF-8.
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise DocumentReadError(f"could not read document: {e}", path) from e
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DocumentDecodeError(f"document is not valid UTF-8: {e}", path) from e


def scan_documents(directory: Path, suffix: str = ".md") -> list[SourceDocument]:
    """Enumerate and read all article documents in *directory*.

    Files are visited in sorted name order so that ties in later sorting
    are resolved the same way on every load.

    Raises:
        DocumentReadError: If the directory or a document can't be read.
        DocumentDecodeError: If a document isn't valid UTF-8.
    """
    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        raise DocumentReadError(f"could not list documents: {e}", directory) from e

    documents: list[SourceDocument] = []
    for path in entries:
        if not path.is_file() or path.suffix != suffix:
            continue
        name = parse_document_name(path.stem)
        if name is None:
            logger.debug("Ignoring non-article file %s", path.name)
            continue
        documents.append(SourceDocument(path=path, name=name, text=read_document(path)))

    logger.info("Found %d article documents in %s", len(documents), directory)
    return documents

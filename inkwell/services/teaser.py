"""Teaser splitting — the part of an article shown in listings."""

from inkwell.services.html_text import strip_tags

SNIP_MARKER = "--snip--"


def split_teaser(body: str) -> tuple[str, str]:
    """Split a Markdown body into ``(teaser, content)`` sources.

    The teaser is everything before the first ``--snip--``; the content is
    the whole body with every marker removed. Without a marker both are the
    full body.
    """
    teaser = body.split(SNIP_MARKER, 1)[0]
    content = body.replace(SNIP_MARKER, "")
    return teaser, content


def describe(teaser_html: str, explicit: str | None = None) -> str:
    """Plain-text description: the explicit one, or the teaser without tags."""
    if explicit is not None:
        return explicit
    return strip_tags(teaser_html)

"""Front-matter extraction — splits the YAML config block from the Markdown body."""

import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from inkwell.errors import FrontMatterError
from inkwell.models.front_matter import FrontMatter

START_MARKER = "--start--"

_START_LINE_RE = re.compile(r"^--start--[ \t]*\r?$", re.MULTILINE)


def split_front_matter(
    text: str, path: Path | None = None
) -> tuple[FrontMatter, str]:
    """Split *text* into its configuration and its Markdown body.

    Everything before the last ``--start--`` line is the configuration;
    without such a line the config is empty and the whole text is body.

    Raises:
        FrontMatterError: If the configuration block is malformed.
    """
    markers = list(_START_LINE_RE.finditer(text))
    if not markers:
        return FrontMatter(), text

    last = markers[-1]
    raw_config = text[: last.start()]
    body = text[last.end():]
    if body.startswith("\n"):
        body = body[1:]

    return parse_front_matter(raw_config, path), body


def parse_front_matter(raw: str, path: Path | None = None) -> FrontMatter:
    """Parse and validate a YAML configuration block."""
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise FrontMatterError(f"invalid front matter: {e}", path) from e

    if data is None:
        return FrontMatter()
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"front matter must be a mapping, got {type(data).__name__}", path
        )

    try:
        return FrontMatter.model_validate(data)
    except ValidationError as e:
        raise FrontMatterError(f"invalid front matter: {e}", path) from e

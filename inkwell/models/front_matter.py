"""Front-matter configuration model."""

from pydantic import BaseModel, ConfigDict, PositiveInt


class FrontMatter(BaseModel):
    """Per-article configuration written above the ``--start--`` line."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    topics: list[str] = []
    next: str | None = None
    description: str | None = None
    read_minutes: PositiveInt | None = None

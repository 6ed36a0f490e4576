"""Reading-time estimation from document size."""

from datetime import timedelta

# Measured once against the existing articles and the time it took to read them.
BYTES_PER_SECOND = 20.1


def estimate_read_duration(
    body: str,
    override_minutes: int | None = None,
    bytes_per_second: float = BYTES_PER_SECOND,
) -> timedelta:
    """How long *body* takes to read, unless an explicit override is given."""
    if override_minutes is not None:
        return timedelta(minutes=override_minutes)
    return timedelta(seconds=len(body.encode("utf-8")) / bytes_per_second)

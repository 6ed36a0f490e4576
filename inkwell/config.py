"""Application configuration via environment variables."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # Source documents
    content_dir: Path = Path("blog")
    document_suffix: str = ".md"

    # Empirically measured once from the existing articles; not recomputed
    read_bytes_per_second: float = 20.1

    # Protects POST /admin/reload
    admin_key: str = ""

    # Fixed seed makes suggestions reproducible (tests, previews)
    random_seed: int | None = None

    model_config = {"env_file": ".env", "env_prefix": "INKWELL_", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()

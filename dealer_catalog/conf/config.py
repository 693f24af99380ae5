"""Configuration for the dealer catalog.

Reads environment variables (and an optional `.env` file) for preload
patterns, search limits and logging.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Runtime configuration loaded from environment."""

    PRELOAD_GLOBS: str = Field(
        default="data/*.jsonl,data/*.json",
        description=(
            "Comma-separated file paths or glob patterns loaded at startup "
            "(e.g. 'exports/products-*.jsonl,exports/*.json')."
        ),
    )
    INFER_DEALER_FROM_FILENAME: bool = Field(
        default=True,
        description="Infer dealer id from 'products-<dealer>-*' file names when none is given.",
    )

    DEFAULT_SEARCH_LIMIT: int = Field(
        default=50, ge=1, description="Page size used when a search does not pass a limit."
    )
    MAX_SEARCH_LIMIT: int = Field(
        default=200, ge=1, description="Largest page size a search may request."
    )
    SAMPLE_SKU_COUNT: int = Field(
        default=10, ge=0, description="Number of SKUs listed in the catalog summary."
    )

    LOAD_WORKERS: int = Field(
        default=4, ge=1, description="Files read and parsed in parallel during one load call."
    )

    LOG_LEVEL: str = Field(default="INFO", description="Minimum log level.")
    LOG_JSON: bool = Field(default=False, description="Emit JSON log lines instead of pretty text.")

    @model_validator(mode="after")
    def _validate_search_limits(self) -> "Settings":
        if self.DEFAULT_SEARCH_LIMIT > self.MAX_SEARCH_LIMIT:
            raise ValueError("DEFAULT_SEARCH_LIMIT must be <= MAX_SEARCH_LIMIT")
        return self

    @property
    def preload_patterns(self) -> list[str]:
        """PRELOAD_GLOBS split into individual patterns."""
        return [part.strip() for part in self.PRELOAD_GLOBS.split(",") if part.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[arg-type]


settings = get_settings()

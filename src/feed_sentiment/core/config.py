"""Centralized runtime settings."""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogFormat(StrEnum):
    """Supported logging formats."""

    JSON = "json"
    CONSOLE = "console"


class Settings(BaseSettings):
    """Global configuration loaded from env vars and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    corpus_path: Path = Path("./resources/sample_feed.txt")
    corpus_encoding: str = "utf-8"
    lexicon_path: Path = Path("./resources/vader_lexicon.txt")
    stopwords_path: Path = Path("./resources/SmartStoplist.txt")
    source_label: str = "feed"

    display_max_chars: Annotated[int, Field(ge=4)] = 100
    progress_every: Annotated[int, Field(ge=0)] = 100
    score_workers: Annotated[int, Field(ge=1, le=32)] = 1
    positive_threshold: Annotated[float, Field(ge=-1.0, le=1.0)] = 0.1
    negative_threshold: Annotated[float, Field(ge=-1.0, le=1.0)] = -0.1

    log_level: str = "INFO"
    log_format: LogFormat = LogFormat.CONSOLE

    @property
    def resource_paths(self) -> dict[str, Path]:
        """Input resources keyed by role, for diagnostics."""
        return {
            "corpus": self.corpus_path,
            "lexicon": self.lexicon_path,
            "stopwords": self.stopwords_path,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings singleton."""
    return Settings()

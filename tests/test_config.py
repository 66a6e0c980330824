"""Tests for centralized configuration."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from feed_sentiment.core.config import LogFormat, Settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.lexicon_path == Path("./resources/vader_lexicon.txt")
        assert settings.stopwords_path == Path("./resources/SmartStoplist.txt")
        assert settings.display_max_chars == 100
        assert settings.progress_every == 100
        assert settings.score_workers == 1
        assert settings.positive_threshold == 0.1
        assert settings.negative_threshold == -0.1
        assert settings.log_format == LogFormat.CONSOLE

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SOURCE_LABEL", "Potus")
        monkeypatch.setenv("DISPLAY_MAX_CHARS", "40")
        monkeypatch.setenv("LOG_FORMAT", "json")
        settings = Settings()
        assert settings.source_label == "Potus"
        assert settings.display_max_chars == 40
        assert settings.log_format == LogFormat.JSON

    def test_bounds(self) -> None:
        with pytest.raises(ValidationError):
            Settings(display_max_chars=3)
        with pytest.raises(ValidationError):
            Settings(score_workers=0)
        with pytest.raises(ValidationError):
            Settings(progress_every=-1)

    def test_resource_paths(self, tmp_path: Path) -> None:
        settings = Settings(corpus_path=tmp_path / "feed.txt")
        assert settings.resource_paths["corpus"] == tmp_path / "feed.txt"
        assert set(settings.resource_paths) == {"corpus", "lexicon", "stopwords"}

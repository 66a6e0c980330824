from __future__ import annotations

from pathlib import Path

import pytest

from feed_sentiment.core.config import Settings
from feed_sentiment.data.lexicon import LexiconStore, clear_caches

LEXICON_ROWS = [
    "great\t0.8\t0.6\t[1, 1]",
    "day\t0.2\t0.4\t[0, 0]",
    "terrible\t-0.6\t0.5\t[-1, -1]",
]
STOPWORDS = ["the", "of", "a"]


@pytest.fixture(autouse=True)
def _fresh_resource_caches():
    clear_caches()
    yield
    clear_caches()


@pytest.fixture
def store() -> LexiconStore:
    return LexiconStore.from_entries(
        {"great": 0.8, "terrible": -0.6, "day": 0.2},
        STOPWORDS,
    )


@pytest.fixture
def resource_dir(tmp_path: Path) -> Path:
    (tmp_path / "lexicon.txt").write_text("\n".join(LEXICON_ROWS) + "\n", encoding="utf-8")
    (tmp_path / "stopwords.txt").write_text("\n".join(STOPWORDS) + "\n", encoding="utf-8")
    (tmp_path / "feed.txt").write_text(
        "great day\nterrible news\n\nthe of a\n", encoding="utf-8"
    )
    return tmp_path


@pytest.fixture
def settings(resource_dir: Path) -> Settings:
    return Settings(
        corpus_path=resource_dir / "feed.txt",
        lexicon_path=resource_dir / "lexicon.txt",
        stopwords_path=resource_dir / "stopwords.txt",
        source_label="Potus",
        progress_every=0,
    )

"""Stop-word and lexicon loading.

Both resources are plain text files read once per process. Missing files degrade
to empty collections with a warning so a run can still produce a (neutral)
report.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

from feed_sentiment.core.config import Settings
from feed_sentiment.core.logging import get_logger

logger = get_logger("data.lexicon")

_EMPTY_WEIGHTS: Mapping[str, float] = MappingProxyType({})
_WEIGHT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


@lru_cache(maxsize=None)
def _load_stopwords_cached(path: Path, encoding: str) -> frozenset[str]:
    if not path.exists():
        logger.warning("stopwords_missing", path=str(path))
        return frozenset()
    try:
        with path.open("r", encoding=encoding, errors="replace") as fh:
            words = {line.strip().lower() for line in fh}
    except OSError as exc:
        logger.error("stopwords_unreadable", path=str(path), error=str(exc))
        return frozenset()
    words.discard("")
    logger.info("stopwords_loaded", path=str(path), count=len(words))
    return frozenset(words)


def load_stopwords(path: str | Path, encoding: str = "utf-8") -> frozenset[str]:
    """Load a newline-delimited stop-word list (memoized per path)."""
    return _load_stopwords_cached(Path(path).resolve(), encoding)


def parse_lexicon_lines(lines: Iterable[str], source: str = "<memory>") -> dict[str, float]:
    """Parse ``word<TAB>weight[<TAB>...]`` rows into a word -> weight dict.

    Rows with fewer than two columns are ignored. Rows whose weight is not a
    finite number are dropped with a warning; they are never defaulted to zero.
    """
    weights: dict[str, float] = {}
    for line_number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue
        parts = line.split("\t")
        if len(parts) < 2:
            logger.debug("lexicon_row_skipped", source=source, line=line_number)
            continue
        word = parts[0].strip().lower()
        if not word:
            continue
        raw_weight = parts[1].strip()
        # Plain decimal only: float() would also take "1_5", "nan" or "infinity".
        weight = float(raw_weight) if _WEIGHT_RE.fullmatch(raw_weight) else math.nan
        if not math.isfinite(weight):
            logger.warning(
                "lexicon_invalid_weight",
                source=source,
                line=line_number,
                word=parts[0],
                value=parts[1],
            )
            continue
        weights[word] = weight
    return weights


@lru_cache(maxsize=None)
def _load_lexicon_cached(path: Path, encoding: str) -> Mapping[str, float]:
    if not path.exists():
        logger.warning("lexicon_missing", path=str(path))
        return _EMPTY_WEIGHTS
    try:
        with path.open("r", encoding=encoding, errors="replace") as fh:
            weights = parse_lexicon_lines(fh, source=str(path))
    except OSError as exc:
        logger.error("lexicon_unreadable", path=str(path), error=str(exc))
        return _EMPTY_WEIGHTS
    logger.info("lexicon_loaded", path=str(path), words=len(weights))
    return MappingProxyType(weights)


def load_lexicon(path: str | Path, encoding: str = "utf-8") -> Mapping[str, float]:
    """Load a tab-delimited lexicon (memoized per path, read-only result)."""
    return _load_lexicon_cached(Path(path).resolve(), encoding)


def clear_caches() -> None:
    """Forget memoized resources (tests and long-lived processes reloading files)."""
    _load_stopwords_cached.cache_clear()
    _load_lexicon_cached.cache_clear()


@dataclass(frozen=True)
class LexiconStore:
    """Immutable scoring context: word weights plus the stop-word set.

    Built once at startup and handed to the scorer. Safe to share between
    threads since nothing mutates it after construction.
    """

    weights: Mapping[str, float] = field(default_factory=lambda: _EMPTY_WEIGHTS)
    stopwords: frozenset[str] = frozenset()

    @classmethod
    def from_entries(
        cls, weights: Mapping[str, float], stopwords: Iterable[str] = ()
    ) -> LexiconStore:
        """Build a store from in-memory data, normalizing keys like the file loaders."""
        normalized = {str(word).strip().lower(): float(w) for word, w in weights.items()}
        normalized.pop("", None)
        stops = frozenset(s.strip().lower() for s in stopwords if s and s.strip())
        return cls(weights=MappingProxyType(normalized), stopwords=stops)

    @classmethod
    def from_settings(cls, settings: Settings) -> LexiconStore:
        return cls(
            weights=load_lexicon(settings.lexicon_path),
            stopwords=load_stopwords(settings.stopwords_path),
        )

    def weight(self, word: str) -> float | None:
        return self.weights.get(word)

    def is_stopword(self, word: str) -> bool:
        return word in self.stopwords

    def __len__(self) -> int:
        return len(self.weights)

"""Lexicon-based sentiment scoring.

A message scores as the unweighted mean of the lexicon weights of its
non-stop-word tokens. Text is lowercased first, then everything that is not an
ASCII letter or whitespace is removed, then it is split on whitespace runs.
Messages without any lexicon token score exactly 0.0.
"""

from __future__ import annotations

import re
from collections.abc import Collection, Mapping
from dataclasses import dataclass
from typing import Literal

from feed_sentiment.data.lexicon import LexiconStore
from feed_sentiment.scoring.scored_text import ScoredText

_NON_LETTER_RE = re.compile(r"[^a-zA-Z\s]", re.ASCII)
_WHITESPACE_RE = re.compile(r"\s+", re.ASCII)

TokenKind = Literal["stopword", "lexicon", "unknown"]


@dataclass(frozen=True)
class TokenVerdict:
    """How a single token was treated while scoring."""

    token: str
    kind: TokenKind
    weight: float | None = None


def normalize_text(text: str) -> str:
    """Lowercase, then strip digits, punctuation and non-ASCII letters."""
    return _NON_LETTER_RE.sub("", text.lower())


def tokenize(text: str) -> list[str]:
    return [tok for tok in _WHITESPACE_RE.split(normalize_text(text)) if tok]


def score_text(
    text: str | None,
    lexicon: Mapping[str, float],
    stopwords: Collection[str],
) -> float:
    """Return the mean lexicon weight of the message tokens (unclamped).

    Stop-words are skipped even when the lexicon has them. Tokens found in
    neither collection contribute nothing and are not counted.
    """
    if text is None or not text.strip():
        return 0.0

    total = 0.0
    valid_words = 0
    for token in tokenize(text):
        if token in stopwords:
            continue
        weight = lexicon.get(token)
        if weight is None:
            continue
        total += weight
        valid_words += 1

    if valid_words == 0:
        return 0.0
    return total / valid_words


def score_record(text: str | None, store: LexiconStore) -> ScoredText:
    """Score a message once and wrap it with its clamped sentiment."""
    record = ScoredText(text)
    record.sentiment = score_text(record.text, store.weights, store.stopwords)
    return record


def explain_text(text: str | None, store: LexiconStore) -> list[TokenVerdict]:
    """Per-token breakdown of how ``score_text`` treats a message."""
    if text is None:
        return []
    verdicts: list[TokenVerdict] = []
    for token in tokenize(text):
        if store.is_stopword(token):
            verdicts.append(TokenVerdict(token, "stopword"))
            continue
        weight = store.weight(token)
        if weight is None:
            verdicts.append(TokenVerdict(token, "unknown"))
        else:
            verdicts.append(TokenVerdict(token, "lexicon", weight))
    return verdicts

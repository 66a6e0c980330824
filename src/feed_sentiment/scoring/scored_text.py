"""Scored message value object."""

from __future__ import annotations

import math
from enum import StrEnum
from functools import total_ordering

SENTIMENT_MIN = -1.0
SENTIMENT_MAX = 1.0


class SentimentLabel(StrEnum):
    """Polarity of a single message or of a corpus average."""

    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    NEUTRAL = "NEUTRAL"


def clamp_sentiment(value: float) -> float:
    """Clamp a raw score into [-1, 1]. Idempotent."""
    if value < SENTIMENT_MIN:
        return SENTIMENT_MIN
    if value > SENTIMENT_MAX:
        return SENTIMENT_MAX
    return value


@total_ordering
class ScoredText:
    """Original message text paired with its clamped sentiment.

    Ordered by sentiment, then by text, so sorting is deterministic even when
    many messages share a score. Equal when both text and sentiment match.
    """

    __slots__ = ("_text", "_sentiment")

    def __init__(self, text: str | None, sentiment: float = 0.0) -> None:
        self._text = text if text is not None else ""
        self._sentiment = 0.0
        self.sentiment = sentiment

    @property
    def text(self) -> str:
        return self._text

    @property
    def sentiment(self) -> float:
        return self._sentiment

    @sentiment.setter
    def sentiment(self, value: float) -> None:
        value = float(value)
        if math.isnan(value):
            raise ValueError("sentiment must be a number, got NaN")
        self._sentiment = clamp_sentiment(value)

    @property
    def is_positive(self) -> bool:
        return self._sentiment > 0

    @property
    def is_negative(self) -> bool:
        return self._sentiment < 0

    @property
    def is_neutral(self) -> bool:
        # Exact comparison: the scorer's "no sentiment words" result is exactly 0.0.
        return self._sentiment == 0.0

    @property
    def category(self) -> SentimentLabel:
        if self.is_positive:
            return SentimentLabel.POSITIVE
        if self.is_negative:
            return SentimentLabel.NEGATIVE
        return SentimentLabel.NEUTRAL

    def _key(self) -> tuple[float, str]:
        return (self._sentiment, self._text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScoredText):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ScoredText):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"ScoredText(text={self._text!r}, sentiment={self._sentiment!r})"

from __future__ import annotations

import math

import pytest

from feed_sentiment.scoring.scored_text import ScoredText, SentimentLabel, clamp_sentiment


class TestClamp:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(-3.0, -1.0), (-1.0, -1.0), (-0.25, -0.25), (0.0, 0.0), (0.99, 0.99), (1.0, 1.0), (7.5, 1.0)],
    )
    def test_clamp_range(self, raw: float, expected: float) -> None:
        assert clamp_sentiment(raw) == expected

    @pytest.mark.parametrize("raw", [-5.0, -0.3, 0.0, 0.4, 2.0])
    def test_clamp_idempotent(self, raw: float) -> None:
        once = clamp_sentiment(raw)
        assert clamp_sentiment(once) == once


class TestScoredText:
    def test_starts_neutral(self) -> None:
        record = ScoredText("hello")
        assert record.sentiment == 0.0
        assert record.is_neutral

    def test_none_text_becomes_empty(self) -> None:
        assert ScoredText(None).text == ""

    def test_assignment_clamps(self) -> None:
        record = ScoredText("x")
        record.sentiment = 2.4
        assert record.sentiment == 1.0
        record.sentiment = -9
        assert record.sentiment == -1.0
        assert ScoredText("y", 1.5).sentiment == 1.0

    def test_nan_is_rejected(self) -> None:
        record = ScoredText("x", 0.3)
        with pytest.raises(ValueError):
            record.sentiment = math.nan
        assert record.sentiment == 0.3

    def test_categories(self) -> None:
        assert ScoredText("a", 0.01).category is SentimentLabel.POSITIVE
        assert ScoredText("b", -0.01).category is SentimentLabel.NEGATIVE
        assert ScoredText("c", 0.0).category is SentimentLabel.NEUTRAL
        tiny = ScoredText("d", 1e-12)
        assert tiny.is_positive and not tiny.is_neutral

    def test_equality(self) -> None:
        assert ScoredText("same", 0.5) == ScoredText("same", 0.5)
        assert ScoredText("same", 0.5) != ScoredText("same", 0.4)
        assert ScoredText("same", 0.5) != ScoredText("other", 0.5)
        assert hash(ScoredText("same", 0.5)) == hash(ScoredText("same", 0.5))
        assert ScoredText("same", 0.5) != "same"

    def test_ordering_by_sentiment_then_text(self) -> None:
        a = ScoredText("zzz", -0.5)
        b = ScoredText("aaa", 0.5)
        assert a < b
        assert b > a
        tie_low = ScoredText("apple", 0.2)
        tie_high = ScoredText("banana", 0.2)
        assert tie_low < tie_high
        assert sorted([b, tie_high, a, tie_low]) == [a, tie_low, tie_high, b]

    def test_compare_with_none_raises(self) -> None:
        with pytest.raises(TypeError):
            _ = ScoredText("x") < None  # type: ignore[operator]

    def test_repr(self) -> None:
        assert repr(ScoredText("hi", 0.25)) == "ScoredText(text='hi', sentiment=0.25)"

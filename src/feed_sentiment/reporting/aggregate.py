"""Corpus-level aggregation of scored messages.

Everything is computed in a single pass by ``SentimentTally``. Partial tallies
from concurrent workers merge deterministically: extremes carry the input index
of their record and ties go to the earliest one.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from feed_sentiment.core.config import Settings
from feed_sentiment.scoring.scored_text import ScoredText, SentimentLabel

if TYPE_CHECKING:
    from feed_sentiment.data.corpus import Corpus

DEFAULT_POSITIVE_THRESHOLD = 0.1
DEFAULT_NEGATIVE_THRESHOLD = -0.1


def classify_average(
    average: float,
    positive_threshold: float = DEFAULT_POSITIVE_THRESHOLD,
    negative_threshold: float = DEFAULT_NEGATIVE_THRESHOLD,
) -> SentimentLabel:
    if average > positive_threshold:
        return SentimentLabel.POSITIVE
    if average < negative_threshold:
        return SentimentLabel.NEGATIVE
    return SentimentLabel.NEUTRAL


@dataclass(frozen=True)
class IndexedRecord:
    """A scored record tagged with its position in the input."""

    index: int
    record: ScoredText


@dataclass
class SentimentTally:
    """Running sums, category counts and extremes over scored records."""

    total: float = 0.0
    count: int = 0
    positive: int = 0
    negative: int = 0
    neutral: int = 0
    maximum: IndexedRecord | None = None
    minimum: IndexedRecord | None = None

    @classmethod
    def from_records(cls, records: Iterable[ScoredText]) -> SentimentTally:
        tally = cls()
        for index, record in enumerate(records):
            tally.add(index, record)
        return tally

    def add(self, index: int, record: ScoredText) -> None:
        sentiment = record.sentiment
        self.total += sentiment
        self.count += 1
        if record.is_positive:
            self.positive += 1
        elif record.is_negative:
            self.negative += 1
        else:
            self.neutral += 1

        # Strict comparison keeps the first record seen on ties.
        if self.maximum is None or sentiment > self.maximum.record.sentiment:
            self.maximum = IndexedRecord(index, record)
        if self.minimum is None or sentiment < self.minimum.record.sentiment:
            self.minimum = IndexedRecord(index, record)

    def merge(self, other: SentimentTally) -> SentimentTally:
        """Combine two partial tallies. Result does not depend on argument order."""
        return SentimentTally(
            total=self.total + other.total,
            count=self.count + other.count,
            positive=self.positive + other.positive,
            negative=self.negative + other.negative,
            neutral=self.neutral + other.neutral,
            maximum=_pick_extreme(self.maximum, other.maximum, highest=True),
            minimum=_pick_extreme(self.minimum, other.minimum, highest=False),
        )


def _pick_extreme(
    left: IndexedRecord | None, right: IndexedRecord | None, *, highest: bool
) -> IndexedRecord | None:
    if left is None:
        return right
    if right is None:
        return left
    a, b = left.record.sentiment, right.record.sentiment
    if a == b:
        return left if left.index <= right.index else right
    if highest:
        return left if a > b else right
    return left if a < b else right


@dataclass(frozen=True)
class OverallSentiment:
    total: float
    count: int
    average: float
    label: SentimentLabel


@dataclass(frozen=True)
class CategoryCounts:
    positive: int = 0
    negative: int = 0
    neutral: int = 0

    @property
    def total(self) -> int:
        return self.positive + self.negative + self.neutral

    def percentages(self) -> dict[str, float] | None:
        """Share of each category in percent, or None when there is nothing to divide."""
        total = self.total
        if total == 0:
            return None
        return {
            "positive": self.positive * 100.0 / total,
            "negative": self.negative * 100.0 / total,
            "neutral": self.neutral * 100.0 / total,
        }


@dataclass(frozen=True)
class Extremes:
    most_positive: ScoredText
    most_negative: ScoredText

    @property
    def max_sentiment(self) -> float:
        return self.most_positive.sentiment

    @property
    def min_sentiment(self) -> float:
        return self.most_negative.sentiment


def overall_from_tally(
    tally: SentimentTally,
    positive_threshold: float = DEFAULT_POSITIVE_THRESHOLD,
    negative_threshold: float = DEFAULT_NEGATIVE_THRESHOLD,
) -> OverallSentiment | None:
    if tally.count == 0:
        return None
    average = tally.total / tally.count
    return OverallSentiment(
        total=tally.total,
        count=tally.count,
        average=average,
        label=classify_average(average, positive_threshold, negative_threshold),
    )


def extremes_from_tally(tally: SentimentTally) -> Extremes | None:
    if tally.maximum is None or tally.minimum is None:
        return None
    return Extremes(most_positive=tally.maximum.record, most_negative=tally.minimum.record)


def overall_sentiment(records: Iterable[ScoredText]) -> OverallSentiment | None:
    return overall_from_tally(SentimentTally.from_records(records))


def category_counts(records: Iterable[ScoredText]) -> CategoryCounts:
    tally = SentimentTally.from_records(records)
    return CategoryCounts(tally.positive, tally.negative, tally.neutral)


def find_extremes(records: Iterable[ScoredText]) -> Extremes | None:
    return extremes_from_tally(SentimentTally.from_records(records))


@dataclass(frozen=True)
class CorpusReport:
    """Aggregated view of one analysis run."""

    lines_seen: int
    analyzed: int
    failed: int = 0
    overall: OverallSentiment | None = None
    categories: CategoryCounts = field(default_factory=CategoryCounts)
    extremes: Extremes | None = None

    @property
    def is_empty(self) -> bool:
        return self.analyzed == 0

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "lines_seen": self.lines_seen,
            "analyzed": self.analyzed,
            "failed": self.failed,
            "overall": None,
            "categories": {
                "positive": self.categories.positive,
                "negative": self.categories.negative,
                "neutral": self.categories.neutral,
                "percentages": self.categories.percentages(),
            },
            "extremes": None,
        }
        if self.overall is not None:
            out["overall"] = {
                "total": self.overall.total,
                "average": self.overall.average,
                "label": str(self.overall.label),
            }
        if self.extremes is not None:
            out["extremes"] = {
                "most_positive": {
                    "sentiment": self.extremes.max_sentiment,
                    "text": self.extremes.most_positive.text,
                },
                "most_negative": {
                    "sentiment": self.extremes.min_sentiment,
                    "text": self.extremes.most_negative.text,
                },
            }
        return out


def build_report(corpus: Corpus, settings: Settings | None = None) -> CorpusReport:
    """Aggregate an analyzed corpus into a report."""
    positive_threshold = settings.positive_threshold if settings else DEFAULT_POSITIVE_THRESHOLD
    negative_threshold = settings.negative_threshold if settings else DEFAULT_NEGATIVE_THRESHOLD

    tally = corpus.tally
    return CorpusReport(
        lines_seen=corpus.lines_seen,
        analyzed=tally.count,
        failed=len(corpus.failures),
        overall=overall_from_tally(tally, positive_threshold, negative_threshold),
        categories=CategoryCounts(tally.positive, tally.negative, tally.neutral),
        extremes=extremes_from_tally(tally),
    )

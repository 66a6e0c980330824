"""Reporting package."""

from feed_sentiment.reporting.aggregate import (
    CategoryCounts,
    CorpusReport,
    Extremes,
    OverallSentiment,
    SentimentTally,
    build_report,
    category_counts,
    classify_average,
    find_extremes,
    overall_sentiment,
)
from feed_sentiment.reporting.render import render_report, report_to_frame, truncate_text

__all__ = [
    "CategoryCounts",
    "CorpusReport",
    "Extremes",
    "OverallSentiment",
    "SentimentTally",
    "build_report",
    "category_counts",
    "classify_average",
    "find_extremes",
    "overall_sentiment",
    "render_report",
    "report_to_frame",
    "truncate_text",
]

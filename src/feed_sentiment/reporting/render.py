"""Console and tabular renderings of a corpus report."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd

from feed_sentiment.reporting.aggregate import CorpusReport

if TYPE_CHECKING:
    from feed_sentiment.data.corpus import Corpus

ELLIPSIS = "..."
DEFAULT_MAX_CHARS = 100

REPORT_COLUMNS = ["line", "label", "text", "sentiment", "category"]


def truncate_text(text: str, max_chars: int = DEFAULT_MAX_CHARS) -> str:
    """Cut ``text`` to ``max_chars`` characters, the last three being an ellipsis."""
    if len(text) <= max_chars:
        return text
    return text[: max_chars - len(ELLIPSIS)] + ELLIPSIS


def render_report(report: CorpusReport, max_chars: int = DEFAULT_MAX_CHARS) -> list[str]:
    lines = [f"Analyzed: {report.analyzed}/{report.lines_seen} lines"]
    if report.failed:
        lines.append(f"Failed records: {report.failed}")
    lines.append("")

    if report.overall is None:
        lines.append("No messages available for analysis.")
        return lines

    overall = report.overall
    lines.extend(
        [
            "=== RESULTS ===",
            f"Messages analyzed: {overall.count}",
            f"Total sentiment: {overall.total:.6f}",
            f"Average sentiment: {overall.average:.6f}",
            f"Overall rating: {overall.label}",
        ]
    )

    counts = report.categories
    pct = counts.percentages()
    if pct is not None:
        lines.extend(
            [
                "",
                "=== DETAILED STATISTICS ===",
                f"Positive messages: {counts.positive} ({pct['positive']:.1f}%)",
                f"Negative messages: {counts.negative} ({pct['negative']:.1f}%)",
                f"Neutral messages: {counts.neutral} ({pct['neutral']:.1f}%)",
            ]
        )

    if report.extremes is not None:
        ext = report.extremes
        lines.extend(
            [
                "",
                f"Most positive message ({ext.max_sentiment:.6f}):",
                f'"{truncate_text(ext.most_positive.text, max_chars)}"',
                "",
                f"Most negative message ({ext.min_sentiment:.6f}):",
                f'"{truncate_text(ext.most_negative.text, max_chars)}"',
            ]
        )
    return lines


def report_to_frame(corpus: Corpus) -> pd.DataFrame:
    """One row per analyzed entry, in input order."""
    rows = [
        {
            "line": entry.line_number,
            "label": entry.label,
            "text": entry.record.text,
            "sentiment": entry.record.sentiment,
            "category": str(entry.record.category),
        }
        for entry in corpus.entries
    ]
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)

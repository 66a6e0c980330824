"""Corpus reading and batch scoring.

One message per line. Blank lines are skipped but still counted as seen. A line
that fails to score is logged and recorded as a failure; the batch carries on.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from feed_sentiment.core.config import Settings
from feed_sentiment.core.logging import get_logger
from feed_sentiment.data.lexicon import LexiconStore
from feed_sentiment.reporting.aggregate import SentimentTally
from feed_sentiment.scoring.scored_text import ScoredText
from feed_sentiment.scoring.scorer import score_record

logger = get_logger("data.corpus")

RecordScorer = Callable[[str, LexiconStore], ScoredText]


class CorpusNotFoundError(FileNotFoundError):
    """The corpus resource is missing or unreadable; the run cannot proceed."""


@dataclass(frozen=True)
class CorpusEntry:
    index: int
    line_number: int
    record: ScoredText
    label: str


@dataclass(frozen=True)
class RecordFailure:
    line_number: int
    text: str
    error: str


@dataclass
class Corpus:
    """Analyzed messages in input order, one entry per input record."""

    entries: list[CorpusEntry] = field(default_factory=list)
    failures: list[RecordFailure] = field(default_factory=list)
    lines_seen: int = 0
    tally: SentimentTally = field(default_factory=SentimentTally)

    @property
    def records(self) -> list[ScoredText]:
        return [entry.record for entry in self.entries]

    def __len__(self) -> int:
        return len(self.entries)


def read_corpus_lines(path: str | Path, encoding: str = "utf-8") -> list[str]:
    """Read every line of the corpus (line endings stripped).

    Only ``\\n``, ``\\r`` and ``\\r\\n`` end a line; form feeds or U+2028 inside a
    message stay part of it.
    """
    corpus_path = Path(path)
    if not corpus_path.is_file():
        raise CorpusNotFoundError(f"Corpus not found: {corpus_path}")
    try:
        with corpus_path.open("r", encoding=encoding, errors="replace") as fh:
            return [line.rstrip("\n") for line in fh]
    except OSError as exc:
        raise CorpusNotFoundError(f"Corpus unreadable: {corpus_path} ({exc})") from exc


@dataclass(frozen=True)
class _PendingLine:
    line_number: int
    text: str


@dataclass
class _ChunkResult:
    scored: list[tuple[int, ScoredText]] = field(default_factory=list)
    failures: list[RecordFailure] = field(default_factory=list)
    tally: SentimentTally = field(default_factory=SentimentTally)


def _score_chunk(
    chunk: Sequence[_PendingLine],
    store: LexiconStore,
    scorer: RecordScorer,
    label: str,
    progress_every: int = 0,
) -> _ChunkResult:
    result = _ChunkResult()
    for pending in chunk:
        try:
            record = scorer(pending.text, store)
        except Exception as exc:
            logger.warning("record_failed", line=pending.line_number, error=str(exc))
            result.failures.append(RecordFailure(pending.line_number, pending.text, str(exc)))
            continue
        result.scored.append((pending.line_number, record))
        # Line numbers give a total input order shared by every chunk.
        result.tally.add(pending.line_number, record)
        if progress_every and len(result.scored) % progress_every == 0:
            logger.info("analysis_progress", analyzed=len(result.scored), label=label)
    return result


def _chunks(items: Sequence[_PendingLine], n_chunks: int) -> list[Sequence[_PendingLine]]:
    size = max(1, -(-len(items) // n_chunks))
    return [items[i : i + size] for i in range(0, len(items), size)]


def analyze_lines(
    lines: Iterable[str],
    store: LexiconStore,
    *,
    label: str = "feed",
    progress_every: int = 100,
    max_workers: int = 1,
    scorer: RecordScorer = score_record,
) -> Corpus:
    """Score each non-blank line and tally the results.

    With ``max_workers > 1`` contiguous chunks are scored on a thread pool and
    their partial tallies merged; the outcome matches the sequential run.
    """
    corpus = Corpus()
    pending: list[_PendingLine] = []
    for line_number, raw in enumerate(lines, start=1):
        corpus.lines_seen += 1
        text = raw.strip()
        if text:
            pending.append(_PendingLine(line_number, text))

    if max_workers <= 1 or len(pending) < 2:
        chunk_results = [_score_chunk(pending, store, scorer, label, progress_every)]
    else:
        chunks = _chunks(pending, max_workers)
        chunk_results = []
        analyzed = 0
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = [pool.submit(_score_chunk, chunk, store, scorer, label) for chunk in chunks]
            for future in as_completed(futures):
                chunk = future.result()
                chunk_results.append(chunk)
                logger.debug("analysis_chunk_done", scored=len(chunk.scored), label=label)
                done_before, analyzed = analyzed, analyzed + len(chunk.scored)
                if progress_every:
                    first = (done_before // progress_every + 1) * progress_every
                    for milestone in range(first, analyzed + 1, progress_every):
                        logger.info("analysis_progress", analyzed=milestone, label=label)

    for chunk in chunk_results:
        corpus.tally = corpus.tally.merge(chunk.tally)

    scored = sorted((item for chunk in chunk_results for item in chunk.scored), key=lambda item: item[0])
    corpus.entries = [
        CorpusEntry(index, line_number, record, label)
        for index, (line_number, record) in enumerate(scored)
    ]
    corpus.failures = sorted(
        (f for chunk in chunk_results for f in chunk.failures), key=lambda f: f.line_number
    )
    logger.info(
        "analysis_complete",
        label=label,
        analyzed=len(corpus.entries),
        lines_seen=corpus.lines_seen,
        failed=len(corpus.failures),
    )
    return corpus


def analyze_corpus(settings: Settings, store: LexiconStore | None = None) -> Corpus:
    """Read the configured corpus and score it. Raises ``CorpusNotFoundError``."""
    lexicon_store = store if store is not None else LexiconStore.from_settings(settings)
    lines = read_corpus_lines(settings.corpus_path, encoding=settings.corpus_encoding)
    return analyze_lines(
        lines,
        lexicon_store,
        label=settings.source_label,
        progress_every=settings.progress_every,
        max_workers=settings.score_workers,
    )

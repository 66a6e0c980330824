"""CLI entrypoint for feed-sentiment."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from feed_sentiment.core.config import get_settings
from feed_sentiment.core.logging import get_logger, setup_logging

app = typer.Typer(
    name="feed-sentiment",
    help="Lexicon-based sentiment scoring for message feeds",
    add_completion=False,
)

logger = get_logger("cli")


@app.callback()
def main(
    log_level: str | None = typer.Option(None, "--log-level", "-l", help="Logging level (overrides LOG_LEVEL)"),
) -> None:
    setup_logging(level=log_level)


@app.command()
def info() -> None:
    settings = get_settings()
    typer.echo("=" * 50)
    typer.echo("Feed Sentiment - Active Configuration")
    typer.echo("=" * 50)
    typer.echo(f"Corpus: {settings.corpus_path} ({settings.corpus_encoding})")
    typer.echo(f"Lexicon: {settings.lexicon_path}")
    typer.echo(f"Stopwords: {settings.stopwords_path}")
    typer.echo(f"Source label: {settings.source_label}")
    typer.echo(f"Display max chars: {settings.display_max_chars}")
    typer.echo(f"Progress every: {settings.progress_every}")
    typer.echo(f"Score workers: {settings.score_workers}")
    typer.echo(
        f"Thresholds: positive > {settings.positive_threshold}, "
        f"negative < {settings.negative_threshold}"
    )
    for role, path in settings.resource_paths.items():
        status = "found" if path.exists() else "missing"
        typer.echo(f"  {role:10s}: {status}")


@app.command()
def analyze(
    corpus: Path | None = typer.Argument(None, help="Message file, one message per line"),
    lexicon: Path | None = typer.Option(None, help="Tab-delimited lexicon (overrides LEXICON_PATH)"),
    stopwords: Path | None = typer.Option(None, help="Stop-word list (overrides STOPWORDS_PATH)"),
    label: str | None = typer.Option(None, help="Source label attached to every message"),
    max_chars: int | None = typer.Option(None, min=4, help="Display cap for example messages"),
    progress_every: int | None = typer.Option(None, min=0, help="Log progress every N messages (0 disables)"),
    workers: int | None = typer.Option(None, min=1, max=32, help="Scoring threads"),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    output: Path | None = typer.Option(None, help="Write per-message scores to this CSV file"),
) -> None:
    """Score every message of a corpus and print the aggregate report."""
    from feed_sentiment.data.corpus import CorpusNotFoundError, analyze_corpus
    from feed_sentiment.data.lexicon import LexiconStore
    from feed_sentiment.reporting import build_report, render_report, report_to_frame

    settings = get_settings()
    overrides = {
        "corpus_path": corpus,
        "lexicon_path": lexicon,
        "stopwords_path": stopwords,
        "source_label": label,
        "display_max_chars": max_chars,
        "progress_every": progress_every,
        "score_workers": workers,
    }
    effective_settings = settings.model_copy(
        update={key: value for key, value in overrides.items() if value is not None}
    )

    store = LexiconStore.from_settings(effective_settings)
    try:
        result = analyze_corpus(effective_settings, store)
    except CorpusNotFoundError as exc:
        logger.error("corpus_missing", path=str(effective_settings.corpus_path), error=str(exc))
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    report = build_report(result, effective_settings)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        report_to_frame(result).to_csv(output, index=False)
        logger.info("scores_written", path=str(output), rows=len(result))

    if as_json:
        typer.echo(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
        return

    for line in render_report(report, max_chars=effective_settings.display_max_chars):
        typer.echo(line)


@app.command()
def explain(
    text: str = typer.Argument(..., help="Message to break down"),
    lexicon: Path | None = typer.Option(None, help="Tab-delimited lexicon (overrides LEXICON_PATH)"),
    stopwords: Path | None = typer.Option(None, help="Stop-word list (overrides STOPWORDS_PATH)"),
) -> None:
    """Show how each token of a message contributes to its score."""
    from feed_sentiment.data.lexicon import LexiconStore
    from feed_sentiment.scoring.scorer import explain_text, score_record

    settings = get_settings()
    overrides = {"lexicon_path": lexicon, "stopwords_path": stopwords}
    effective_settings = settings.model_copy(
        update={key: value for key, value in overrides.items() if value is not None}
    )
    store = LexiconStore.from_settings(effective_settings)

    typer.echo(f"Text: {text}")
    typer.echo("Tokens:")
    for verdict in explain_text(text, store):
        if verdict.kind == "stopword":
            typer.echo(f"  {verdict.token} -> stopword (ignored)")
        elif verdict.kind == "lexicon":
            typer.echo(f"  {verdict.token} -> {verdict.weight}")
        else:
            typer.echo(f"  {verdict.token} -> not in lexicon")
    record = score_record(text, store)
    typer.echo(f"Sentiment: {record.sentiment:.6f} ({record.category})")


if __name__ == "__main__":
    app()

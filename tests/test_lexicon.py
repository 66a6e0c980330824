from __future__ import annotations

from pathlib import Path

import pytest
from structlog.testing import capture_logs

from feed_sentiment.core.config import Settings
from feed_sentiment.data.lexicon import (
    LexiconStore,
    load_lexicon,
    load_stopwords,
    parse_lexicon_lines,
)


def test_load_stopwords_trims_lowercases_and_drops_blanks(tmp_path: Path) -> None:
    path = tmp_path / "stop.txt"
    path.write_text("  The\nOF\n\n   \na\n", encoding="utf-8")
    assert load_stopwords(path) == frozenset({"the", "of", "a"})


def test_missing_stopwords_degrade_to_empty(tmp_path: Path) -> None:
    with capture_logs() as logs:
        words = load_stopwords(tmp_path / "nope.txt")
    assert words == frozenset()
    assert any(entry["event"] == "stopwords_missing" for entry in logs)


def test_load_lexicon_ignores_extra_columns(tmp_path: Path) -> None:
    path = tmp_path / "lex.txt"
    path.write_text("Great\t0.8\t0.6\t[1, 1]\nday\t0.2\n", encoding="utf-8")
    lexicon = load_lexicon(path)
    assert dict(lexicon) == {"great": 0.8, "day": 0.2}


def test_invalid_weight_row_is_dropped_with_warning() -> None:
    with capture_logs() as logs:
        weights = parse_lexicon_lines(
            [
                "good\t1.9",
                "broken\tabc",
                "odd\tnan",
                "bad\t-2.5",
                "grouped\t1_5",
                "huge\t1e999",
                "arabic\t\u0661",
                "sci\t2.5e-1",
                "bare\t.5",
            ]
        )
    assert weights == {"good": 1.9, "bad": -2.5, "sci": 0.25, "bare": 0.5}
    invalid = [entry for entry in logs if entry["event"] == "lexicon_invalid_weight"]
    assert [entry["line"] for entry in invalid] == [2, 3, 5, 6, 7]
    assert invalid[0]["word"] == "broken"


def test_short_and_blank_rows_are_skipped() -> None:
    assert parse_lexicon_lines(["", "lonely", "  ", "ok\t0.5"]) == {"ok": 0.5}


def test_duplicate_word_keeps_last_weight() -> None:
    assert parse_lexicon_lines(["meh\t0.1", "MEH\t-0.3"]) == {"meh": -0.3}


def test_missing_lexicon_degrades_to_empty(tmp_path: Path) -> None:
    with capture_logs() as logs:
        lexicon = load_lexicon(tmp_path / "missing.txt")
    assert len(lexicon) == 0
    assert any(entry["event"] == "lexicon_missing" for entry in logs)


def test_lexicon_is_read_once_and_read_only(tmp_path: Path) -> None:
    path = tmp_path / "lex.txt"
    path.write_text("good\t1.0\n", encoding="utf-8")
    first = load_lexicon(path)
    path.write_text("good\t-1.0\n", encoding="utf-8")
    second = load_lexicon(str(path))
    assert second is first
    assert second["good"] == 1.0
    with pytest.raises(TypeError):
        first["new"] = 1.0  # type: ignore[index]


def test_stopwords_are_memoized(tmp_path: Path) -> None:
    path = tmp_path / "stop.txt"
    path.write_text("the\n", encoding="utf-8")
    assert load_stopwords(path) is load_stopwords(path)


class TestLexiconStore:
    def test_from_entries_normalizes(self) -> None:
        store = LexiconStore.from_entries({" Great ": 0.8, "": 9.0}, ["The", " ", ""])
        assert dict(store.weights) == {"great": 0.8}
        assert store.stopwords == frozenset({"the"})
        assert store.weight("great") == 0.8
        assert store.weight("nope") is None
        assert store.is_stopword("the")
        assert len(store) == 1

    def test_from_settings(self, settings: Settings) -> None:
        store = LexiconStore.from_settings(settings)
        assert store.weights["terrible"] == -0.6
        assert store.stopwords == frozenset({"the", "of", "a"})

    def test_empty_store(self) -> None:
        store = LexiconStore()
        assert len(store) == 0
        assert store.stopwords == frozenset()

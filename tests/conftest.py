"""Shared test fixtures for bayes-text-classifier tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from bayes_classifier import BayesClassifier

LANGUAGE_DOCS = [
    ("Chinese Beijing Chinese", "chinese"),
    ("Chinese Chinese Shanghai", "chinese"),
    ("Chinese Macao", "chinese"),
    ("Tokyo Japan Chinese", "japanese"),
]

SENTIMENT_DOCS = [
    ("amazing, awesome movie!! Yeah!!", "positive"),
    ("Sweet, this is incredibly, amazing, perfect, great!!", "positive"),
    ("terrible, shitty thing. Damn. Sucks!!", "negative"),
    ("I dont really know what to make of this.", "neutral"),
]


@pytest.fixture
def classifier() -> BayesClassifier:
    """A fresh, untrained classifier."""
    return BayesClassifier()


@pytest.fixture
def language_classifier() -> BayesClassifier:
    """Classifier trained on the textbook Chinese/Japanese example."""
    return BayesClassifier().learn_batch(LANGUAGE_DOCS)


@pytest.fixture
def sentiment_classifier() -> BayesClassifier:
    """Classifier trained on a few short sentiment phrases."""
    return BayesClassifier().learn_batch(SENTIMENT_DOCS)


@pytest.fixture
def tsv_corpus(tmp_path: Path) -> Path:
    """A small TSV corpus file."""
    file = tmp_path / "reviews.tsv"
    file.write_text(
        "".join(f"{category}\t{text}\n" for text, category in SENTIMENT_DOCS),
        encoding="utf-8",
    )
    return file


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove BAYES_* variables and restore them after the test."""
    for key in ("BAYES_MODEL_PATH", "BAYES_LOG_LEVEL"):
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)

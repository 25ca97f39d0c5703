"""Command-line interface for the Naive Bayes text classifier.

Provides ``train``, ``classify``, ``inspect``, ``stats`` and ``prune``
commands with rich terminal output using the ``click`` and ``rich``
libraries. The model file defaults to ``BAYES_MODEL_PATH`` (see
:mod:`bayes_classifier.config`).

Usage::

    bayes-classifier train reviews.tsv --model sentiment.json
    bayes-classifier classify "awesome, cool, amazing!! Yay." --model sentiment.json
    bayes-classifier inspect positive --top 10
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .classifier import BayesClassifier
from .config import load_settings
from .corpus import read_corpus
from .logging_ import setup_logging
from .models import ProbabilityFormat, SerializationError

console = Console()

_USER_ERRORS = (
    FileNotFoundError,
    ValueError,
    SerializationError,
    OSError,
)


def _fail(exc: BaseException) -> NoReturn:
    console.print(f"[bold red]Error:[/] {exc}")
    sys.exit(1)


def _model_path(ctx: click.Context, model: Path | None) -> Path:
    if model is not None:
        return model
    return Path(ctx.obj["settings"].model_path)


def _load_model(path: Path) -> BayesClassifier:
    """Load a saved model, exiting with an error if it does not exist."""
    if not path.exists():
        _fail(FileNotFoundError(f"Model file not found: {path}. Run 'train' first."))
    try:
        return BayesClassifier.load(path)
    except _USER_ERRORS as e:
        # json.JSONDecodeError is a ValueError
        _fail(e)


_model_option = click.option(
    "--model", "-m", type=click.Path(dir_okay=False, path_type=Path), default=None,
    help="Model JSON file (default: $BAYES_MODEL_PATH or model.json).",
)


@click.group()
@click.version_option(package_name="bayes-text-classifier")
@click.option("--log-level", default=None,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="Logging level (default: $BAYES_LOG_LEVEL or WARNING).")
@click.pass_context
def main(ctx: click.Context, log_level: str | None) -> None:
    """Multinomial Naive Bayes text classifier.

    Train a model from labeled text, then categorize new documents.
    """
    settings = load_settings()
    setup_logging(log_level or settings.log_level)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@main.command()
@click.argument("corpus", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@_model_option
@click.option("--fresh", is_flag=True, help="Start from an empty model instead of updating.")
@click.pass_context
def train(ctx: click.Context, corpus: Path, model: Path | None, fresh: bool) -> None:
    """Learn every labeled document in CORPUS (.tsv, .jsonl or .txt).

    Example: bayes-classifier train reviews.tsv --model sentiment.json
    """
    path = _model_path(ctx, model)
    classifier = BayesClassifier() if fresh or not path.exists() else _load_model(path)

    with console.status("[bold blue]Training...", spinner="dots"):
        try:
            documents = read_corpus(corpus)
            classifier.learn_batch(doc.as_pair() for doc in documents)
            classifier.save(path)
        except _USER_ERRORS as e:
            _fail(e)

    console.print(
        f"Learned [bold]{len(documents)}[/] documents from {corpus.name}. "
        f"Model has {len(classifier.categories)} categories, "
        f"{classifier.vocabulary_size} tokens."
    )
    console.print(f"[dim]Model saved to {path}[/]")


@main.command()
@click.argument("text")
@_model_option
@click.option("--scale", "-s", type=click.Choice([f.value for f in ProbabilityFormat]),
              default=ProbabilityFormat.PERCENTAGE.value, help="Score scale.")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
@click.pass_context
def classify(ctx: click.Context, text: str, model: Path | None, scale: str, output: str) -> None:
    """Categorize TEXT and show the score of every category.

    Example: bayes-classifier classify "awesome, cool, amazing!! Yay."
    """
    classifier = _load_model(_model_path(ctx, model))

    category = classifier.categorize(text)
    scores = classifier.probabilities(text, scale)

    if output == "json":
        click.echo(json.dumps({"category": category, "scale": scale, "scores": scores}, indent=2))
        return

    if category is None:
        console.print("[yellow]No category:[/] the model has not been trained.")
        return

    table = Table(title=f"Scores ({scale})")
    table.add_column("Category", style="cyan")
    table.add_column("Score", justify="right")
    for name, score in sorted(scores.items(), key=lambda x: x[1], reverse=True):
        style = "bold green" if name == category else ""
        value = f"{score:.2f}%" if scale == ProbabilityFormat.PERCENTAGE.value else f"{score:.6g}"
        table.add_row(name, value, style=style)

    console.print(Panel(f"[bold]{category}[/]", title="Category", border_style="green"))
    console.print(table)


@main.command()
@click.argument("category")
@_model_option
@click.option("--top", "-n", type=click.IntRange(min=1), default=20, show_default=True,
              help="Number of tokens to show.")
@click.pass_context
def inspect(ctx: click.Context, category: str, model: Path | None, top: int) -> None:
    """Show the most frequent tokens learned for CATEGORY."""
    classifier = _load_model(_model_path(ctx, model))

    counts = classifier.get_word_frequency_count(category)
    if counts is None:
        _fail(ValueError(f"Unknown category: {category}. Known: {classifier.categories}"))

    table = Table(title=f"Most frequent tokens: {category}")
    table.add_column("#", justify="right", width=4)
    table.add_column("Token", style="cyan")
    table.add_column("Count", justify="right")
    for i, (token, count) in enumerate(list(counts.items())[:top], 1):
        table.add_row(str(i), token, str(count))

    console.print(table)
    if len(counts) > top:
        console.print(f"[dim]({len(counts) - top} more)[/]")


@main.command()
@_model_option
@click.pass_context
def stats(ctx: click.Context, model: Path | None) -> None:
    """Summarize a saved model."""
    classifier = _load_model(_model_path(ctx, model))

    table = Table(title="Model statistics")
    table.add_column("Category", style="cyan")
    table.add_column("Documents", justify="right")
    table.add_column("Distinct tokens", justify="right")
    for name in classifier.categories:
        counts = classifier.get_word_frequency_count(name) or {}
        table.add_row(name, str(classifier.doc_count(name)), str(len(counts)))

    console.print(table)
    console.print(
        f"Documents: {classifier.total_documents} | "
        f"Vocabulary: {classifier.vocabulary_size}"
    )


@main.command()
@_model_option
@click.option("--min-frequency", type=click.IntRange(min=0), required=True,
              help="Minimum token frequency to keep.")
@click.pass_context
def prune(ctx: click.Context, model: Path | None, min_frequency: int) -> None:
    """Normalize the vocabulary of a saved model and save it back."""
    path = _model_path(ctx, model)
    classifier = _load_model(path)

    before = classifier.vocabulary_size
    try:
        classifier.prune(min_frequency).save(path)
    except _USER_ERRORS as e:
        _fail(e)

    console.print(f"Vocabulary: {before} -> {classifier.vocabulary_size} tokens")


if __name__ == "__main__":
    main()

"""Readers for labeled training corpora.

Supports TSV, JSON Lines and plain text files. Each reader yields
:class:`LabeledDocument` records that can be fed straight into
:meth:`BayesClassifier.learn_batch`.

Formats:
- ``.tsv``: one ``category<TAB>text`` record per line
- ``.jsonl``: one ``{"category": ..., "text": ...}`` object per line
- ``.txt``: the whole file is one document labeled with the file stem
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class LabeledDocument:
    """A single training example."""

    text: str
    category: str
    line: int | None = None

    def as_pair(self) -> tuple[str, str]:
        return self.text, self.category


class CorpusReader(ABC):
    """Base class for labeled corpus formats.

    A reader claims a set of file extensions and turns one corpus file into
    a stream of :class:`LabeledDocument`. Records keep their file order so
    the classifier sees them in the same sequence on every run.
    """

    supported_extensions: tuple[str, ...] = ()

    def can_handle(self, path: Path) -> bool:
        """True if the corpus file's extension belongs to this format."""
        return path.suffix.lower() in self.supported_extensions

    @abstractmethod
    def read(self, path: Path) -> Iterator[LabeledDocument]:
        """Iterate over the training examples stored in ``path``.

        Raises:
            FileNotFoundError: If there is no corpus at ``path``.
            ValueError: If a record has no category or no text.
        """
        ...

    def _validate_path(self, path: Path) -> None:
        if not path.exists():
            raise FileNotFoundError(f"Corpus file not found: {path}")
        if not self.can_handle(path):
            raise ValueError(
                f"Unsupported file extension '{path.suffix}' for a "
                f"{self.__class__.__name__} corpus; expected one of "
                f"{', '.join(self.supported_extensions)}"
            )


class TsvCorpusReader(CorpusReader):
    """Reader for ``category<TAB>text`` lines. Blank lines are skipped."""

    supported_extensions = (".tsv", ".tab")

    def read(self, path: Path) -> Iterator[LabeledDocument]:
        self._validate_path(path)
        with open(path, "r", encoding="utf-8") as f:
            for lineno, raw in enumerate(f, 1):
                line = raw.rstrip("\r\n")
                if not line.strip():
                    continue
                category, sep, text = line.partition("\t")
                if not sep or not category.strip():
                    raise ValueError(
                        f"{path.name}:{lineno}: expected 'category<TAB>text'"
                    )
                yield LabeledDocument(text=text, category=category.strip(), line=lineno)


class JsonlCorpusReader(CorpusReader):
    """Reader for JSON Lines records with ``category`` and ``text`` keys."""

    supported_extensions = (".jsonl", ".ndjson")

    def read(self, path: Path) -> Iterator[LabeledDocument]:
        self._validate_path(path)
        with open(path, "r", encoding="utf-8") as f:
            for lineno, raw in enumerate(f, 1):
                if not raw.strip():
                    continue
                try:
                    record = json.loads(raw)
                except json.JSONDecodeError as exc:
                    raise ValueError(f"{path.name}:{lineno}: invalid JSON: {exc}") from exc

                if not isinstance(record, dict):
                    raise ValueError(f"{path.name}:{lineno}: expected a JSON object")
                category = record.get("category")
                text = record.get("text")
                if not isinstance(category, str) or not category:
                    raise ValueError(f"{path.name}:{lineno}: missing 'category'")
                if not isinstance(text, str):
                    raise ValueError(f"{path.name}:{lineno}: missing 'text'")
                yield LabeledDocument(text=text, category=category, line=lineno)


class TextCorpusReader(CorpusReader):
    """Reader for a plain text file labeled by its file name.

    ``positive.txt`` yields one document in category ``positive``.
    """

    supported_extensions = (".txt", ".text")

    def read(self, path: Path) -> Iterator[LabeledDocument]:
        self._validate_path(path)
        text = path.read_text(encoding="utf-8", errors="replace")
        yield LabeledDocument(text=text, category=path.stem)


def get_reader(path: Path) -> CorpusReader:
    """Pick the corpus format for ``path`` from its extension.

    Raises:
        ValueError: If the extension is not a known corpus format.
    """
    readers: list[CorpusReader] = [
        TsvCorpusReader(),
        JsonlCorpusReader(),
        TextCorpusReader(),
    ]
    for reader in readers:
        if reader.can_handle(path):
            return reader

    supported = {ext for r in readers for ext in r.supported_extensions}

    raise ValueError(
        f"No corpus reader available for '{path.suffix}'. "
        f"Supported formats: {', '.join(sorted(supported))}"
    )


def read_corpus(path: str | Path) -> list[LabeledDocument]:
    """Read every labeled document from a corpus file.

    Args:
        path: Path to a ``.tsv``, ``.jsonl`` or ``.txt`` file.

    Returns:
        List of LabeledDocument in file order.
    """
    path = Path(path)
    documents = list(get_reader(path).read(path))
    logger.info("Read %d documents from %s", len(documents), path)
    return documents

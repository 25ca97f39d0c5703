"""Multinomial Naive Bayes text classifier.

Learns incrementally from tokenized documents and predicts the most likely
category, or a score for every known category, for new documents.

Features:
- Incremental training: every ``learn`` call updates aggregate counters
- Laplace (add-1) smoothing with a vocabulary shared by all categories
- Log, probability and percentage output scales (max-shifted softmax)
- Flat JSON serialization of the learned model
- Pluggable tokenizer (raw text or self-tokenizing objects)

Example::

    classifier = BayesClassifier()
    classifier.learn("amazing, awesome movie!! Yeah!!", "positive")
    classifier.learn("terrible, shitty thing. Damn. Sucks!!", "negative")

    classifier.categorize("awesome, cool, amazing!! Yay.")  # "positive"
    classifier.probabilities("awesome", ProbabilityFormat.PERCENTAGE)

    payload = classifier.to_json()
    restored = BayesClassifier().from_serialized_state(payload)
"""

from __future__ import annotations

import copy
import json
import logging
import math
import os
from abc import ABC, abstractmethod
from collections import Counter
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Optional, Union

from .models import STATE_KEYS, ProbabilityFormat, SerializationError
from .tokenizers import DefaultTokenizer, Document, Tokenizer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Classifier interface
# ---------------------------------------------------------------------------

class Classifier(ABC):
    """Abstract interface shared by text classifiers."""

    @abstractmethod
    def learn(self, document: Document, category: str) -> "Classifier":
        """Teach the classifier that ``document`` belongs to ``category``."""
        ...

    @abstractmethod
    def categorize(self, document: Document) -> Optional[str]:
        """Return the most likely category, or None if nothing is known."""
        ...

    @abstractmethod
    def probabilities(
        self,
        document: Document,
        fmt: Union[ProbabilityFormat, str] = ProbabilityFormat.LOG,
    ) -> dict[str, float]:
        """Return a score for every known category."""
        ...

    @abstractmethod
    def from_serialized_state(self, state: Union[dict, str, bytes]) -> "Classifier":
        """Replace the learned state with a serialized one."""
        ...

    @abstractmethod
    def to_json(self) -> str:
        """Serialize the learned state to JSON text."""
        ...

    @abstractmethod
    def reset(self) -> "Classifier":
        """Discard all learned state."""
        ...


# ---------------------------------------------------------------------------
# Multinomial Naive Bayes
# ---------------------------------------------------------------------------

class BayesClassifier(Classifier):
    """Multinomial Naive Bayes classifier with Laplace smoothing.

    All learned state is aggregate counters: documents per category, token
    occurrences per category and the global vocabulary. Instances are not
    safe for concurrent training; concurrent reads of a model nobody is
    training are fine.

    Args:
        tokenizer: Tokenizer used for both training and inference.
            Defaults to :class:`DefaultTokenizer`.
    """

    def __init__(self, tokenizer: Optional[Tokenizer] = None) -> None:
        self.tokenizer: Tokenizer = tokenizer or DefaultTokenizer()

        self._categories: dict[str, bool] = {}
        self._doc_count: dict[str, int] = {}
        self._total_documents = 0
        self._vocabulary: dict[str, bool] = {}
        self._vocabulary_size = 0
        self._word_count: dict[str, int] = {}
        self._word_frequency_count: dict[str, dict[str, int]] = {}

    # -- inspection ---------------------------------------------------------

    @property
    def categories(self) -> list[str]:
        """Known categories in the order they were first learned."""
        return list(self._categories)

    @property
    def total_documents(self) -> int:
        """Number of documents learned across all categories."""
        return self._total_documents

    @property
    def vocabulary_size(self) -> int:
        """Number of distinct tokens seen across all categories."""
        return self._vocabulary_size

    @property
    def is_trained(self) -> bool:
        """Whether at least one document has been learned."""
        return self._total_documents > 0

    def doc_count(self, category: str) -> int:
        """Number of training documents labeled ``category`` (0 if unknown)."""
        return self._doc_count.get(category, 0)

    def get_word_frequency_count(self, category: str) -> Optional[dict[str, int]]:
        """Return the token frequency table for a category.

        Entries are ordered by descending frequency.

        Args:
            category: Category label.

        Returns:
            A copy of the ``{token: count}`` mapping, or None if the
            category has never been learned.
        """
        table = self._word_frequency_count.get(category)
        if table is None:
            return None
        return dict(table)

    # -- training -----------------------------------------------------------

    def learn(self, document: Document, category: str) -> "BayesClassifier":
        """Update the model with one labeled document.

        Args:
            document: Raw text or a self-tokenizing object.
            category: Category label.

        Returns:
            Self (for method chaining).
        """
        self._initialize_category(category)

        self._doc_count[category] += 1
        self._total_documents += 1

        tokens = self.tokenizer.tokenize(document)
        frequency_table = self._frequency_table(tokens)

        counts = self._word_frequency_count[category]
        for token, frequency in frequency_table.items():
            if token not in self._vocabulary:
                self._vocabulary[token] = True
                self._vocabulary_size += 1

            counts[token] = counts.get(token, 0) + frequency
            self._word_count[category] += frequency

        # Most frequent first; sorted() is stable, so ties keep insertion order.
        self._word_frequency_count[category] = dict(
            sorted(counts.items(), key=lambda item: item[1], reverse=True)
        )

        logger.debug(
            "Learned document for %r: %d tokens, %d distinct",
            category, len(tokens), len(frequency_table),
        )
        return self

    def learn_batch(self, examples: Iterable[tuple[Document, str]]) -> "BayesClassifier":
        """Learn every ``(document, category)`` pair in order.

        Args:
            examples: Iterable of labeled documents.

        Returns:
            Self (for method chaining).
        """
        for document, category in examples:
            self.learn(document, category)
        return self

    # -- inference ----------------------------------------------------------

    def probabilities(
        self,
        document: Document,
        fmt: Union[ProbabilityFormat, str] = ProbabilityFormat.LOG,
    ) -> dict[str, float]:
        """Score every known category for a document.

        Log scores are the log prior plus the sum of log token
        likelihoods. They compare categories for one document but are not
        comparable across documents. The probability scales shift every
        score by the maximum before exponentiating, so long documents do not
        underflow to zero.

        Args:
            document: Raw text or a self-tokenizing object.
            fmt: Output scale, a :class:`ProbabilityFormat` or its value.

        Returns:
            Dict of ``{category: score}`` in learning order. Empty if the
            model is untrained.

        Raises:
            ValueError: If ``fmt`` is not a known format.
        """
        fmt = ProbabilityFormat(fmt)

        if self._total_documents == 0:
            return {}

        frequency_table = self._frequency_table(self.tokenizer.tokenize(document))

        scores: dict[str, float] = {}
        for category in self._categories:
            scores[category] = self._log_score(category, frequency_table)

        if fmt is ProbabilityFormat.LOG or not scores:
            return scores

        max_score = max(scores.values())
        shifted = {cat: math.exp(s - max_score) for cat, s in scores.items()}
        total = sum(shifted.values())

        # NaN or zero total: leave the log scores as they are
        if not total > 0:
            return scores

        scale = 100.0 if fmt is ProbabilityFormat.PERCENTAGE else 1.0
        return {cat: value / total * scale for cat, value in shifted.items()}

    def categorize(self, document: Document) -> Optional[str]:
        """Return the category with the highest log score.

        Ties go to the category learned first.

        Args:
            document: Raw text or a self-tokenizing object.

        Returns:
            The chosen category, or None if the model is untrained.
        """
        max_score = -math.inf
        chosen: Optional[str] = None

        if self._total_documents > 0:
            for category, score in self.probabilities(document).items():
                if score > max_score:
                    max_score = score
                    chosen = category

        return chosen

    def categorize_batch(self, documents: Iterable[Document]) -> list[Optional[str]]:
        """Categorize several documents."""
        return [self.categorize(document) for document in documents]

    def token_probability(self, token: str, category: str) -> float:
        """Smoothed P(token | category).

        Uses add-1 smoothing over the global vocabulary:
        ``(count(token, category) + 1) / (word_count(category) + |V|)``.
        The result is strictly positive for unseen tokens.

        Args:
            token: Token string.
            category: Category label.

        Returns:
            Probability of the token under the category.
        """
        occurrences = self._word_frequency_count.get(category, {}).get(token, 0)
        denominator = self._word_count.get(category, 0) + self._vocabulary_size
        # Only an empty vocabulary gets here; such a model has no token evidence.
        if denominator <= 0:
            denominator = 1
        return (occurrences + 1) / denominator

    # -- state management ---------------------------------------------------

    def reset(self) -> "BayesClassifier":
        """Discard all learned state.

        Returns:
            Self (for method chaining).
        """
        self._categories = {}
        self._doc_count = {}
        self._total_documents = 0
        self._vocabulary = {}
        self._vocabulary_size = 0
        self._word_count = {}
        self._word_frequency_count = {}
        logger.info("Classifier state reset")
        return self

    def prune(self, min_frequency: int) -> "BayesClassifier":
        """Normalize the vocabulary to the tokens still held by any category.

        ``min_frequency`` is accepted for a frequency-threshold pass that is
        not applied yet: no per-category entry is removed, only
        ``vocabulary`` and ``vocabulary_size`` are rebuilt.

        Args:
            min_frequency: Minimum token frequency to keep.

        Returns:
            Self (for method chaining).
        """
        vocabulary: dict[str, bool] = {}
        for counts in self._word_frequency_count.values():
            for token in counts:
                vocabulary[token] = True

        logger.info(
            "Pruned vocabulary (min_frequency=%d): %d -> %d tokens",
            min_frequency, self._vocabulary_size, len(vocabulary),
        )
        self._vocabulary = vocabulary
        self._vocabulary_size = len(vocabulary)
        return self

    # -- serialization ------------------------------------------------------

    def to_serialized_state(self) -> dict[str, Any]:
        """Return the learned state as a flat, JSON-serializable dict.

        Keys are exactly those in :data:`STATE_KEYS`; categories and
        vocabulary are ``{key: true}`` maps.
        """
        return {
            "categories": dict(self._categories),
            "docCount": dict(self._doc_count),
            "totalDocuments": self._total_documents,
            "vocabulary": dict(self._vocabulary),
            "vocabularySize": self._vocabulary_size,
            "wordCount": dict(self._word_count),
            "wordFrequencyCount": copy.deepcopy(self._word_frequency_count),
        }

    def to_json(self) -> str:
        """Serialize the learned state to JSON text.

        Raises:
            SerializationError: If the state cannot be encoded.
        """
        try:
            payload = json.dumps(self.to_serialized_state(), ensure_ascii=False, allow_nan=False)
            payload.encode("utf-8")
            return payload
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"Failed to serialize classifier: {exc}") from exc

    def from_serialized_state(self, state: Union[dict, str, bytes]) -> "BayesClassifier":
        """Replace the learned state with a serialized one.

        The model is reset first, then every recognized key present in
        ``state`` is copied; missing or unknown keys are ignored. If JSON
        decoding fails the model is left empty, so callers needing the old
        state must snapshot it beforehand.

        Args:
            state: A dict from :meth:`to_serialized_state` or its JSON text.

        Returns:
            Self (for method chaining).

        Raises:
            json.JSONDecodeError: If ``state`` is malformed JSON text.
            SerializationError: If ``state`` does not decode to an object.
        """
        self.reset()

        if isinstance(state, (str, bytes, bytearray)):
            state = json.loads(state)

        if not isinstance(state, dict):
            raise SerializationError(
                f"Serialized state must be a JSON object, got {type(state).__name__}"
            )

        if "categories" in state:
            self._categories = _as_key_map(state["categories"])
        if "docCount" in state:
            self._doc_count = {k: int(v) for k, v in _as_mapping(state["docCount"]).items()}
        if "totalDocuments" in state:
            self._total_documents = int(state["totalDocuments"])
        if "vocabulary" in state:
            self._vocabulary = _as_key_map(state["vocabulary"])
        if "vocabularySize" in state:
            self._vocabulary_size = int(state["vocabularySize"])
        if "wordCount" in state:
            self._word_count = {k: int(v) for k, v in _as_mapping(state["wordCount"]).items()}
        if "wordFrequencyCount" in state:
            self._word_frequency_count = {
                category: {token: int(n) for token, n in _as_mapping(counts).items()}
                for category, counts in _as_mapping(state["wordFrequencyCount"]).items()
            }

        for category in self._categories:
            self._doc_count.setdefault(category, 0)
            self._word_count.setdefault(category, 0)
            self._word_frequency_count.setdefault(category, {})

        logger.info(
            "Loaded classifier state: %d categories, %d documents, %d tokens",
            len(self._categories), self._total_documents, self._vocabulary_size,
        )
        return self

    def save(self, path: str | Path) -> None:
        """Save the learned state to a JSON file.

        Args:
            path: File path to save to. Parent directories are created.
                An existing file is only replaced once the new state has
                been written in full.

        Raises:
            SerializationError: If the state cannot be encoded.
        """
        payload = self.to_json()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(f".{path.name}.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()
        logger.info("Saved classifier to %s", path)

    @classmethod
    def load(cls, path: str | Path, tokenizer: Optional[Tokenizer] = None) -> "BayesClassifier":
        """Load a classifier from a JSON file written by :meth:`save`.

        Args:
            path: Path to the saved model file.
            tokenizer: Tokenizer for the new instance.

        Returns:
            BayesClassifier ready for prediction or further training.
        """
        with open(path, "r", encoding="utf-8") as f:
            payload = f.read()
        return cls(tokenizer=tokenizer).from_serialized_state(payload)

    # -- helpers ------------------------------------------------------------

    def _initialize_category(self, category: str) -> None:
        if category not in self._categories:
            self._doc_count[category] = 0
            self._word_count[category] = 0
            self._word_frequency_count[category] = {}
            self._categories[category] = True

    def _log_score(self, category: str, frequency_table: Counter[str]) -> float:
        """Unnormalized log posterior of a category for one document."""
        doc_count = self._doc_count.get(category, 0)
        if doc_count <= 0:
            return -math.inf

        score = math.log(doc_count / self._total_documents)
        for token, frequency in frequency_table.items():
            score += frequency * math.log(self.token_probability(token, category))
        return score

    @staticmethod
    def _frequency_table(tokens: Iterable[str]) -> Counter[str]:
        return Counter(str(token) for token in tokens)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(categories={len(self._categories)}, "
            f"documents={self._total_documents}, vocabulary={self._vocabulary_size})"
        )


def _as_mapping(value: Any) -> dict:
    # Some writers encode an empty map as [].
    if isinstance(value, dict):
        return value
    if isinstance(value, list) and not value:
        return {}
    raise SerializationError(f"Expected a JSON object, got {type(value).__name__}")


def _as_key_map(value: Any) -> dict[str, bool]:
    """Accept ``{key: true}`` maps or plain lists as set encodings."""
    if isinstance(value, dict):
        return {str(key): True for key in value}
    if isinstance(value, (list, tuple, set)):
        return {str(key): True for key in value}
    raise SerializationError(f"Expected a set encoding, got {type(value).__name__}")

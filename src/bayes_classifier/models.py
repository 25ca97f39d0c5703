"""Shared types for the Naive Bayes classifier."""

from __future__ import annotations

from enum import Enum


class ProbabilityFormat(str, Enum):
    """Output scale for per-category scores."""

    LOG = "log"
    PROBABILITY = "probability"
    PERCENTAGE = "percentage"


# Serialized model fields, in wire order.
STATE_KEYS: tuple[str, ...] = (
    "categories",
    "docCount",
    "totalDocuments",
    "vocabulary",
    "vocabularySize",
    "wordCount",
    "wordFrequencyCount",
)


class SerializationError(RuntimeError):
    """Raised when a model state cannot be encoded or is not a JSON object."""

"""Bayes Text Classifier -- multinomial Naive Bayes for short texts."""

__version__ = "1.0.0"

from .classifier import BayesClassifier, Classifier
from .corpus import (
    CorpusReader,
    JsonlCorpusReader,
    LabeledDocument,
    TextCorpusReader,
    TsvCorpusReader,
    get_reader,
    read_corpus,
)
from .models import STATE_KEYS, ProbabilityFormat, SerializationError
from .tokenizers import DefaultTokenizer, Document, Tokenizable, Tokenizer

__all__ = [
    # Core
    "BayesClassifier",
    "Classifier",
    "ProbabilityFormat",
    "SerializationError",
    "STATE_KEYS",
    # Tokenization
    "Tokenizer",
    "DefaultTokenizer",
    "Tokenizable",
    "Document",
    # Training corpora
    "CorpusReader",
    "TsvCorpusReader",
    "JsonlCorpusReader",
    "TextCorpusReader",
    "LabeledDocument",
    "get_reader",
    "read_corpus",
]

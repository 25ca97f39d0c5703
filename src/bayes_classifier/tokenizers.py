"""Tokenizers that turn documents into token lists for the classifier.

A document is either raw text or an object that knows how to tokenize
itself (anything implementing :class:`Tokenizable`). Tokenizers only
decide how *text* is split; self-tokenizing objects are always asked to
produce their own tokens.
"""

from __future__ import annotations

import unicodedata
from abc import ABC, abstractmethod
from itertools import groupby
from typing import Any, Protocol, Union, runtime_checkable


@runtime_checkable
class Tokenizable(Protocol):
    """An object that produces its own token sequence."""

    def tokenize(self, argument: Any = None) -> list[str]:
        ...


Document = Union[str, Tokenizable]


class Tokenizer(ABC):
    """Abstract base class for tokenizers.

    Subclasses implement :meth:`tokenize_text`; dispatch between raw text
    and :class:`Tokenizable` objects is handled here.
    """

    def tokenize(self, document: Document, argument: Any = None) -> list[str]:
        """Convert a document into an ordered list of tokens.

        Args:
            document: Raw text or a self-tokenizing object.
            argument: Optional tokenizer argument, forwarded to
                ``tokenize_text`` or to the object's own ``tokenize``.

        Returns:
            List of token strings.

        Raises:
            TypeError: If the document is neither text nor tokenizable.
        """
        if isinstance(document, str):
            return self.tokenize_text(document, argument)
        if isinstance(document, Tokenizable):
            if argument is None:
                return list(document.tokenize())
            return list(document.tokenize(argument))
        raise TypeError(
            f"Cannot tokenize {type(document).__name__}: expected str or an "
            "object with a tokenize() method"
        )

    @abstractmethod
    def tokenize_text(self, text: str, argument: Any = None) -> list[str]:
        """Split raw text into tokens."""
        ...


class DefaultTokenizer(Tokenizer):
    """Lowercase the text and keep maximal runs of alphabetic characters.

    Text is NFC-normalized first. Digits of any script, superscripts,
    fractions, punctuation and symbols act as separators and are dropped, so
    ``"Testing123 with $pecial ch@racters"`` becomes
    ``["testing", "with", "pecial", "ch", "racters"]``.
    """

    def tokenize_text(self, text: str, argument: Any = None) -> list[str]:
        text = unicodedata.normalize("NFC", text.lower())
        return ["".join(run) for is_alpha, run in groupby(text, str.isalpha) if is_alpha]

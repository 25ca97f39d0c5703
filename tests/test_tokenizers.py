"""Tests for the tokenizer layer."""

from __future__ import annotations

import pytest

from bayes_classifier.tokenizers import DefaultTokenizer, Tokenizable, Tokenizer


class WordObject:
    """A self-tokenizing object using the default alphabetic policy."""

    def __init__(self, content: str) -> None:
        self.content = content

    def tokenize(self, argument=None) -> list[str]:
        tokens = DefaultTokenizer().tokenize_text(self.content)
        if argument is not None:
            tokens = tokens[:argument]
        return tokens


class NoArgumentObject:
    def tokenize(self) -> list[str]:
        return ["fixed", "tokens"]


class WhitespaceTokenizer(Tokenizer):
    def tokenize_text(self, text, argument=None):
        return text.split()


@pytest.fixture
def tokenizer() -> DefaultTokenizer:
    return DefaultTokenizer()


# ---------------------------------------------------------------------------
# DefaultTokenizer
# ---------------------------------------------------------------------------


class TestDefaultTokenizer:
    """Lowercased runs of alphabetic characters."""

    def test_simple_text(self, tokenizer: DefaultTokenizer) -> None:
        assert tokenizer.tokenize("Hello world!") == ["hello", "world"]

    def test_mixed_case_and_punctuation(self, tokenizer: DefaultTokenizer) -> None:
        assert tokenizer.tokenize("Hello, World! This is a TEST.") == [
            "hello", "world", "this", "is", "a", "test",
        ]

    def test_digits_and_symbols_are_dropped(self, tokenizer: DefaultTokenizer) -> None:
        assert tokenizer.tokenize("Testing123 with $pecial ch@racters") == [
            "testing", "with", "pecial", "ch", "racters",
        ]

    def test_underscore_separates(self, tokenizer: DefaultTokenizer) -> None:
        assert tokenizer.tokenize("snake_case") == ["snake", "case"]

    def test_no_token_contains_a_digit(self, tokenizer: DefaultTokenizer) -> None:
        tokens = tokenizer.tokenize("a1b2c3 4567 x9y")
        assert tokens == ["a", "b", "c", "x", "y"]

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("x² and half½ and ३4", ["x", "and", "half", "and"]),
            ("Ⅻ chapters, ١٢٣ pages", ["chapters", "pages"]),
        ],
    )
    def test_numeric_characters_of_any_script_separate(
        self, tokenizer: DefaultTokenizer, text: str, expected: list[str]
    ) -> None:
        tokens = tokenizer.tokenize(text)
        assert tokens == expected
        assert all(ch.isalpha() for token in tokens for ch in token)

    def test_decomposed_accents_are_composed(self, tokenizer: DefaultTokenizer) -> None:
        assert tokenizer.tokenize("Cafe\u0301 ole\u0301") == ["café", "olé"]

    def test_multilingual_text(self, tokenizer: DefaultTokenizer) -> None:
        assert tokenizer.tokenize("Hola cómo estás") == ["hola", "cómo", "estás"]

    def test_non_latin_script(self, tokenizer: DefaultTokenizer) -> None:
        assert tokenizer.tokenize("Привет, МИР") == ["привет", "мир"]

    def test_empty_string(self, tokenizer: DefaultTokenizer) -> None:
        assert tokenizer.tokenize("") == []

    def test_only_separators(self, tokenizer: DefaultTokenizer) -> None:
        assert tokenizer.tokenize("123 !!! $$$") == []


# ---------------------------------------------------------------------------
# Self-tokenizing objects
# ---------------------------------------------------------------------------


class TestTokenizableDispatch:
    """Objects with a tokenize() method produce their own tokens."""

    def test_object_tokens_are_used(self, tokenizer: DefaultTokenizer) -> None:
        assert tokenizer.tokenize(WordObject("Hello tokenizable world")) == [
            "hello", "tokenizable", "world",
        ]

    def test_object_with_punctuation(self, tokenizer: DefaultTokenizer) -> None:
        assert tokenizer.tokenize(WordObject("Multiple Words, with Punctuation!")) == [
            "multiple", "words", "with", "punctuation",
        ]

    def test_empty_object(self, tokenizer: DefaultTokenizer) -> None:
        assert tokenizer.tokenize(WordObject("")) == []

    def test_multilingual_object(self, tokenizer: DefaultTokenizer) -> None:
        assert tokenizer.tokenize(WordObject("Hablamos español y English too")) == [
            "hablamos", "español", "y", "english", "too",
        ]

    def test_argument_is_forwarded(self, tokenizer: DefaultTokenizer) -> None:
        assert tokenizer.tokenize(WordObject("one two three"), 2) == ["one", "two"]

    def test_object_without_argument_parameter(self, tokenizer: DefaultTokenizer) -> None:
        assert tokenizer.tokenize(NoArgumentObject()) == ["fixed", "tokens"]

    def test_object_bypasses_text_policy(self) -> None:
        """A custom tokenizer never re-splits an object's own tokens."""
        tokens = WhitespaceTokenizer().tokenize(WordObject("Hello, World"))
        assert tokens == ["hello", "world"]

    def test_protocol_check(self) -> None:
        assert isinstance(WordObject("x"), Tokenizable)
        assert not isinstance(42, Tokenizable)

    def test_unsupported_input_raises(self, tokenizer: DefaultTokenizer) -> None:
        with pytest.raises(TypeError, match="Cannot tokenize int"):
            tokenizer.tokenize(42)  # type: ignore[arg-type]


class TestCustomTokenizer:
    def test_subclass_controls_text_policy(self) -> None:
        assert WhitespaceTokenizer().tokenize("Hello, World") == ["Hello,", "World"]

    def test_base_class_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            Tokenizer()  # type: ignore[abstract]

"""Unit tests for the input parser."""

from src.catalog.schema import SemanticIntent
from src.discovery.parser import (
    detect_semantic_intents,
    lemmatize,
    normalize,
    parse,
)


class TestNormalize:
    """Test text normalization."""

    def test_lowercases_and_collapses_whitespace(self):
        assert normalize("  Hello   WORLD!! ") == "hello world!!"

    def test_unifies_curly_quotes(self):
        assert normalize("I’m a plumber") == "i'm a plumber"

    def test_drops_stray_symbols(self):
        assert normalize("50% off (today)!") == "50 off today!"


class TestLemmatize:
    """Test inflection stripping."""

    def test_ing_prefers_known_verbs(self):
        assert lemmatize("scheduling") == "schedule"
        assert lemmatize("booking") == "book"

    def test_plurals(self):
        assert lemmatize("invoices") == "invoice"
        assert lemmatize("companies") == "company"

    def test_double_s_is_not_a_plural(self):
        assert lemmatize("business") == "business"

    def test_irregulars(self):
        assert lemmatize("built") == "build"
        assert lemmatize("paid") == "pay"


class TestSemanticIntents:
    """Test semantic intent detection."""

    def test_detects_in_pattern_order(self):
        intents = detect_semantic_intents("track my appointments and send invoices")

        assert intents == [
            SemanticIntent.TRACKING,
            SemanticIntent.SCHEDULING,
            SemanticIntent.COMMUNICATING,
            SemanticIntent.BILLING,
        ]

    def test_no_intents_in_plain_text(self):
        assert detect_semantic_intents("hello there") == []


class TestParse:
    """Test the full parse."""

    def test_extracts_actions_and_nouns(self):
        parsed = parse("I want to track jobs and invoices")

        assert "track" in parsed.actions
        assert "job" in parsed.nouns
        assert "invoice" in parsed.actions

    def test_keeps_original_text(self):
        parsed = parse("Track JOBS")

        assert parsed.original == "Track JOBS"
        assert parsed.normalized == "track jobs"

    def test_tokens_are_indexed(self):
        parsed = parse("send quotes fast")

        assert [t.index for t in parsed.tokens] == [0, 1, 2]
        assert all(0.0 <= t.importance <= 1.0 for t in parsed.tokens)

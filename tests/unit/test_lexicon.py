"""Unit tests for tokenization, stemming and keyword extraction"""

import pytest

from catalog_service.core.knowledge.keywords import MAX_KEYWORDS, extract_keywords
from catalog_service.core.knowledge.lexicon import (
    STOP_WORDS,
    is_stop_word,
    salient_tokens,
    stem,
    tokenize,
)


@pytest.mark.unit
class TestTokenize:
    """Test word tokenization"""

    def test_lowercases_and_splits_on_non_word_characters(self):
        """Happy path: punctuation separates tokens"""
        assert tokenize("Hello, World! It's Q2-2024") == ["hello", "world", "it", "s", "q2", "2024"]

    def test_empty_text(self):
        """Edge case: empty and None text yield no tokens"""
        assert tokenize("") == []
        assert tokenize(None) == []

    def test_underscore_is_part_of_a_word(self):
        """Edge case: \\w includes underscores"""
        assert tokenize("snake_case value") == ["snake_case", "value"]


@pytest.mark.unit
class TestStem:
    """Test Porter stemming"""

    def test_plural_and_verb_forms(self):
        """Happy path: inflections reduce to a shared stem"""
        assert stem("campaigns") == stem("campaign")
        assert stem("launching") == stem("launch")
        assert stem("features") == stem("feature")

    def test_stem_is_case_insensitive(self):
        """Edge case: uppercase input stems like lowercase"""
        assert stem("Campaigns") == stem("campaigns")

    def test_short_tokens_unchanged(self):
        """Edge case: two-character tokens are not stemmed"""
        assert stem("q2") == "q2"
        assert stem("ui") == "ui"


@pytest.mark.unit
class TestSalientTokens:
    """Test salient token selection"""

    def test_drops_short_tokens_and_stop_words(self):
        """Happy path: only tokens longer than three characters that are not stop words"""
        tokens = salient_tokens("The new logo would be about branding and colors")
        assert tokens == ["logo", "branding", "colors"]

    def test_keeps_order_and_duplicates(self):
        """Happy path: salient tokens keep text order and repeats"""
        assert salient_tokens("report budget report") == ["report", "budget", "report"]

    def test_stop_word_list(self):
        """Sanity check: common English function words are stop words"""
        for word in ("about", "would", "should", "their", "which"):
            assert is_stop_word(word)
            assert word in STOP_WORDS
        assert not is_stop_word("campaign")


@pytest.mark.unit
class TestExtractKeywords:
    """Test keyword extraction"""

    def test_keywords_in_text_order(self):
        """Happy path: keywords follow first appearance in the text"""
        assert extract_keywords("Quarterly marketing review for the sales team") == [
            "quarterly", "marketing", "review", "sales", "team",
        ]

    def test_duplicates_are_kept(self):
        """Edge case: keywords are not de-duplicated"""
        assert extract_keywords("budget budget budget") == ["budget", "budget", "budget"]

    def test_capped_at_twenty(self):
        """Edge case: at most twenty keywords"""
        text = " ".join(f"word{i:02d}" for i in range(30))
        keywords = extract_keywords(text)
        assert len(keywords) == MAX_KEYWORDS == 20
        assert keywords[0] == "word00"
        assert keywords[-1] == "word19"

    def test_no_salient_words(self):
        """Edge case: text of stop words and short tokens has no keywords"""
        assert extract_keywords("it is on the way to a b c") == []
        assert extract_keywords("") == []

"""Unit tests for rule-table classification"""

import pytest

from catalog_service.config.rules import ClassificationRules
from catalog_service.core.knowledge.classifier import (
    Classification,
    Classifier,
    best_label,
    derive_tags,
    match_score,
)
from catalog_service.core.knowledge.lexicon import stem, tokenize


def stems_of(text):
    return {stem(token) for token in tokenize(text)}


@pytest.mark.unit
class TestMatchScore:
    """Test trigger word scoring"""

    def test_counts_each_trigger_word_once(self):
        """Happy path: repeated text words do not inflate the score"""
        stems = stems_of("campaign campaign campaigns launch")
        assert match_score(stems, ("campaign", "launch", "promotion")) == 2

    def test_trigger_words_are_stemmed(self):
        """Happy path: inflected text matches base trigger words"""
        assert match_score(stems_of("new features released"), ("feature", "release")) == 2

    def test_multi_word_triggers_never_match(self):
        """Edge case: a trigger containing a space is compared whole"""
        assert match_score(stems_of("a new product"), ("new product",)) == 0


@pytest.mark.unit
class TestBestLabel:
    """Test label selection within one table"""

    TABLE = (
        ("First", ("alpha", "beta")),
        ("Second", ("gamma", "delta")),
    )

    def test_highest_score_wins(self):
        """Happy path: the label with more matching triggers wins"""
        assert best_label(stems_of("alpha gamma delta"), self.TABLE, "Default") == ("Second", 2)

    def test_earlier_label_wins_ties(self):
        """Edge case: equal scores keep the first declared label"""
        assert best_label(stems_of("alpha gamma"), self.TABLE, "Default") == ("First", 1)

    def test_default_on_no_match(self):
        """Edge case: zero score falls back to the default"""
        assert best_label(stems_of("nothing here"), self.TABLE, "Default") == ("Default", 0)


@pytest.mark.unit
class TestDeriveTags:
    """Test tag derivation"""

    def test_first_ten_then_deduplicated(self):
        """Happy path: tags are taken from the first ten salient tokens, then de-duplicated"""
        text = " ".join(["alpha"] * 10 + ["omega"])
        assert derive_tags(text) == ["alpha"]

    def test_capped_at_ten(self):
        """Edge case: never more than ten tags"""
        text = " ".join(f"term{i:02d}" for i in range(15))
        tags = derive_tags(text)
        assert len(tags) == 10
        assert tags == [f"term{i:02d}" for i in range(10)]

    def test_excludes_stop_words_and_short_tokens(self):
        """Edge case: stop words and tokens of three characters or fewer are skipped"""
        assert derive_tags("about the new logo") == ["logo"]


@pytest.mark.unit
class TestClassifier:
    """Test document classification with the packaged rule tables"""

    def test_campaign_launch_example(self, classifier):
        """Happy path: campaign document classified over all three tables"""
        result = classifier.categorize(
            "Untitled", "", "Q2 campaign launch for new product feature release"
        )
        # Campaign and Product tie at 2; Campaign is declared first
        assert result.category == "Campaign"
        # launch + release outscore the single q2 hit
        assert result.project == "Product Launch"
        assert result.team == "Marketing"
        assert result.tags == ["untitled", "campaign", "launch", "product", "feature", "release"]

    def test_fallback_labels(self, classifier):
        """Edge case: no trigger words gives the fallback labels and still derives tags"""
        result = classifier.categorize("Zebra notes", "", "giraffes wander slowly")
        assert result == Classification(
            category="Uncategorized",
            project="General",
            team="General",
            tags=["zebra", "notes", "giraffes", "wander", "slowly"],
        )

    def test_empty_input(self, classifier):
        """Edge case: empty title, description and content"""
        result = classifier.categorize("", "", "")
        assert (result.category, result.project, result.team) == ("Uncategorized", "General", "General")
        assert result.tags == []

    def test_case_and_inflection_insensitive(self, classifier):
        """Happy path: uppercase and plural words still trigger"""
        result = classifier.categorize("BRAND GUIDELINES", "", "")
        assert result.category == "Brand"

    def test_description_contributes(self, classifier):
        """Happy path: description words are scored"""
        result = classifier.categorize("Untitled", "sales pipeline revenue forecast", "")
        assert result.category == "Sales"
        assert result.team == "Sales"

    def test_deterministic(self, classifier):
        """Sanity check: identical input yields identical output"""
        args = ("Brand refresh", "Design mockups for the logo", "typography colors layout")
        assert classifier.categorize(*args) == classifier.categorize(*args)

    def test_custom_rules(self):
        """Happy path: classifier uses injected tables and defaults"""
        rules = ClassificationRules(
            categories=(("Finance", ("invoice", "budget")),),
            projects=(("Audit", ("audit",)),),
            teams=(("Accounting", ("ledger",)),),
            default_category="Misc",
            default_project="None",
            default_team="Everyone",
        )
        result = Classifier(rules).categorize("Invoices", "", "yearly audit")
        assert (result.category, result.project, result.team) == ("Finance", "Audit", "Everyone")

"""Unit tests for classification rule loading and settings"""

import pytest

from catalog_service.config.rules import (
    DEFAULT_RULES_PATH,
    ClassificationRules,
    load_classification_rules,
)
from catalog_service.config.settings import Settings


@pytest.mark.unit
class TestLoadClassificationRules:
    """Test loading rule tables from YAML"""

    def test_packaged_defaults(self):
        """Happy path: shipped tables load in declaration order"""
        rules = load_classification_rules()

        assert DEFAULT_RULES_PATH.exists()
        assert [label for label, _ in rules.categories] == [
            "Campaign", "Brand", "Content", "Strategy", "Analytics",
            "Sales", "Product", "Event", "Research", "Design",
        ]
        assert [label for label, _ in rules.projects][0] == "Q1 Campaign"
        assert [label for label, _ in rules.teams][0] == "Marketing"
        assert (rules.default_category, rules.default_project, rules.default_team) == (
            "Uncategorized", "General", "General",
        )

    def test_rules_are_immutable(self):
        """Sanity check: loaded tables cannot be reassigned"""
        rules = load_classification_rules()
        assert isinstance(rules.categories, tuple)
        with pytest.raises(AttributeError):
            rules.categories = ()

    def test_custom_file(self, tmp_path):
        """Happy path: custom YAML with lowercased triggers and fallback"""
        path = tmp_path / "rules.yaml"
        path.write_text(
            "fallback:\n"
            "  category: Misc\n"
            "categories:\n"
            "  Finance: [Invoice, budget]\n"
            "projects:\n"
            "  Audit: [audit]\n"
            "teams:\n"
            "  Accounting: [ledger]\n",
            encoding="utf-8",
        )

        rules = load_classification_rules(str(path))

        assert rules == ClassificationRules(
            categories=(("Finance", ("invoice", "budget")),),
            projects=(("Audit", ("audit",)),),
            teams=(("Accounting", ("ledger",)),),
            default_category="Misc",
        )

    def test_missing_section(self, tmp_path):
        """Error case: a missing table is rejected"""
        path = tmp_path / "rules.yaml"
        path.write_text("categories:\n  Finance: [invoice]\nprojects:\n  Audit: [audit]\n", encoding="utf-8")

        with pytest.raises(ValueError, match="teams"):
            load_classification_rules(path)

    def test_label_without_triggers(self, tmp_path):
        """Error case: a label must list trigger words"""
        path = tmp_path / "rules.yaml"
        path.write_text(
            "categories:\n  Finance: []\nprojects:\n  Audit: [audit]\nteams:\n  Ops: [ops]\n",
            encoding="utf-8",
        )

        with pytest.raises(ValueError, match="categories.Finance"):
            load_classification_rules(path)


@pytest.mark.unit
class TestSettings:
    """Test environment-driven settings"""

    def test_defaults(self, monkeypatch):
        """Happy path: defaults when nothing is configured"""
        monkeypatch.delenv("DEFAULT_PAGE_SIZE", raising=False)
        settings = Settings(_env_file=None)
        assert settings.default_page_size == 20
        assert settings.max_page_size == 100
        assert settings.suggestion_limit == 8
        assert settings.max_upload_size == 10 * 1024 * 1024

    def test_environment_override(self, monkeypatch):
        """Happy path: environment variables override defaults, case-insensitively"""
        monkeypatch.setenv("default_page_size", "5")
        monkeypatch.setenv("CLASSIFICATION_RULES_PATH", "/etc/catalog/rules.yaml")
        settings = Settings(_env_file=None)
        assert settings.default_page_size == 5
        assert settings.classification_rules_path == "/etc/catalog/rules.yaml"

"""Classification rule tables loaded from YAML."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_RULES_PATH = Path(__file__).parent / "classification_rules.yaml"

# (label, (trigger words...)) pairs in declaration order
RuleTable = Tuple[Tuple[str, Tuple[str, ...]], ...]


@dataclass(frozen=True)
class ClassificationRules:
    """Immutable keyword tables for category, project and team labels."""

    categories: RuleTable
    projects: RuleTable
    teams: RuleTable
    default_category: str = "Uncategorized"
    default_project: str = "General"
    default_team: str = "General"


def _parse_table(raw, section: str) -> RuleTable:
    if not isinstance(raw, dict) or not raw:
        raise ValueError(f"Rule section '{section}' must be a non-empty mapping")

    table = []
    for label, words in raw.items():
        if not isinstance(words, list) or not words:
            raise ValueError(f"Rule '{section}.{label}' must list at least one trigger word")
        table.append((str(label), tuple(str(word).lower() for word in words)))
    return tuple(table)


def load_classification_rules(path: Optional[Union[str, Path]] = None) -> ClassificationRules:
    """Load rule tables from a YAML file.

    Args:
        path: YAML file with ``categories``, ``projects`` and ``teams``
            mappings and an optional ``fallback`` block. Defaults to the
            tables shipped with the package.

    Returns:
        Parsed, immutable rule tables

    Raises:
        ValueError: If a section is missing or malformed
    """
    rules_path = Path(path) if path else DEFAULT_RULES_PATH
    with open(rules_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    fallback = data.get("fallback") or {}
    rules = ClassificationRules(
        categories=_parse_table(data.get("categories"), "categories"),
        projects=_parse_table(data.get("projects"), "projects"),
        teams=_parse_table(data.get("teams"), "teams"),
        default_category=fallback.get("category", "Uncategorized"),
        default_project=fallback.get("project", "General"),
        default_team=fallback.get("team", "General"),
    )
    logger.info(
        f"Loaded classification rules from {rules_path}: "
        f"{len(rules.categories)} categories, {len(rules.projects)} projects, "
        f"{len(rules.teams)} teams"
    )
    return rules

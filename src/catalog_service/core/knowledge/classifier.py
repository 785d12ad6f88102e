"""Rule-table document classification.

Scores a document's text against keyword tables for category, project and
team. A label scores one point per distinct trigger word whose stem occurs
in the text; the strictly highest score wins, so earlier-declared labels win
ties. A best score of zero falls back to the table's default label.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Set, Tuple

from ...config.rules import ClassificationRules, RuleTable
from .lexicon import salient_tokens, stem, tokenize

logger = logging.getLogger(__name__)

MAX_TAGS = 10


@dataclass(frozen=True)
class Classification:
    """Labels and tags inferred for a document."""

    category: str
    project: str
    team: str
    tags: List[str] = field(default_factory=list)


def match_score(stems: Set[str], trigger_words: Iterable[str]) -> int:
    """Count trigger words whose stem is present in the stemmed text."""
    return sum(1 for word in trigger_words if stem(word.lower()) in stems)


def best_label(stems: Set[str], table: RuleTable, default: str) -> Tuple[str, int]:
    """Pick the highest-scoring label of a table, or the default on no hit."""
    best, best_score = default, 0
    for label, trigger_words in table:
        score = match_score(stems, trigger_words)
        if score > best_score:
            best, best_score = label, score
    return best, best_score


def derive_tags(text: str) -> List[str]:
    """First ten salient tokens, de-duplicated in first-occurrence order."""
    return list(dict.fromkeys(salient_tokens(text)[:MAX_TAGS]))


class Classifier:
    """Deterministic keyword classifier over immutable rule tables."""

    def __init__(self, rules: ClassificationRules):
        self.rules = rules

    def categorize(self, title: str, description: str, content: str) -> Classification:
        """Infer category, project, team and tags.

        Args:
            title: Document title (or file name when untitled)
            description: Free-text description, may be empty
            content: Extracted text, may be empty

        Returns:
            Classification with fallback labels where nothing matched
        """
        text = f"{title or ''} {description or ''} {content or ''}".lower()
        stems = {stem(token) for token in tokenize(text)}

        category, category_score = best_label(
            stems, self.rules.categories, self.rules.default_category
        )
        project, _ = best_label(stems, self.rules.projects, self.rules.default_project)
        team, _ = best_label(stems, self.rules.teams, self.rules.default_team)

        logger.debug(
            f"Classified '{title}' as category={category} (score {category_score}), "
            f"project={project}, team={team}"
        )
        return Classification(
            category=category,
            project=project,
            team=team,
            tags=derive_tags(text),
        )

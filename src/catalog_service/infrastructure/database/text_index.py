"""Text relevance scoring over the indexed document fields.

Scores follow MongoDB text-index semantics: query and field text are
tokenized, stop words are dropped and tokens are stemmed. For every indexed
field and every query term it contains ``count`` times among ``n`` field
tokens, the document gains ``weight * freq * (0.5 * count / n + 0.5)``, where
``freq`` halves for each repeated occurrence (1 + 1/2 + 1/4 ...).

On SQLite the same stems are stored in an FTS5 table, which narrows the
candidates of a query before they are scored here.
"""

from collections import Counter
from typing import Dict, Iterable, List, Set, Union

from ...core.knowledge.lexicon import is_stop_word, stem, tokenize

# title, description, content and tags are weighted equally
FIELD_WEIGHTS: Dict[str, float] = {
    "title": 1.0,
    "description": 1.0,
    "content": 1.0,
    "tags": 1.0,
}

INDEXED_FIELDS = tuple(FIELD_WEIGHTS)


def field_stems(text: Union[str, Iterable[str], None]) -> List[str]:
    """Stemmed, non stop-word tokens of a field value, in order."""
    if text is not None and not isinstance(text, str):
        text = " ".join(text)
    return [stem(token) for token in tokenize(text or "") if not is_stop_word(token)]


def query_terms(query: str) -> Set[str]:
    """Distinct stemmed, non stop-word terms of a search query."""
    return set(field_stems(query))


def index_row(fields: Dict[str, Union[str, Iterable[str], None]]) -> Dict[str, str]:
    """Space-joined stems per indexed field, as stored in the full-text table."""
    return {name: " ".join(field_stems(fields.get(name))) for name in INDEXED_FIELDS}


def match_expression(terms: Set[str]) -> str:
    """FTS5 query matching documents that contain any of the terms."""
    return " OR ".join(f'"{term}"' for term in sorted(terms))


def field_score(text: str, terms: Set[str], weight: float = 1.0) -> float:
    stems = field_stems(text)
    if not stems:
        return 0.0

    counts = Counter(s for s in stems if s in terms)
    score = 0.0
    for count in counts.values():
        freq = sum(1 / 2 ** i for i in range(count))
        coeff = 0.5 * count / len(stems) + 0.5
        score += weight * freq * coeff
    return score


def text_score(terms: Set[str], fields: Dict[str, Union[str, Iterable[str]]]) -> float:
    """Relevance of a document's indexed fields for a set of query terms."""
    if not terms:
        return 0.0

    score = 0.0
    for name, weight in FIELD_WEIGHTS.items():
        score += field_score(fields.get(name) or "", terms, weight)
    return score

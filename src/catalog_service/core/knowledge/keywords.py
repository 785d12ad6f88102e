"""Keyword extraction for stored documents and suggestion mining."""

from typing import List

from .lexicon import salient_tokens

MAX_KEYWORDS = 20


def extract_keywords(text: str) -> List[str]:
    """Extract the leading salient terms of a text.

    Terms are kept unstemmed and in their original order. Unlike tags,
    repeated terms are not collapsed.

    Args:
        text: Arbitrary text (title, description and content combined)

    Returns:
        Up to 20 lowercase terms
    """
    return salient_tokens(text)[:MAX_KEYWORDS]

"""Word tokenization, Porter stemming and the English stop-word list."""

from functools import lru_cache
from typing import FrozenSet, List

from nltk.stem import PorterStemmer
from nltk.tokenize import RegexpTokenizer

_tokenizer = RegexpTokenizer(r"\w+")
_stemmer = PorterStemmer()

STOP_WORDS: FrozenSet[str] = frozenset({
    "a", "about", "above", "after", "again", "against", "all", "also", "am",
    "an", "and", "another", "any", "are", "aren", "as", "at", "be", "because",
    "been", "before", "being", "below", "between", "both", "but", "by", "came",
    "can", "cannot", "come", "could", "couldn", "did", "didn", "do", "does",
    "doesn", "doing", "don", "down", "during", "each", "few", "for", "from",
    "further", "get", "got", "had", "hadn", "has", "hasn", "have", "haven",
    "having", "he", "her", "here", "hers", "herself", "him", "himself", "his",
    "how", "i", "if", "in", "into", "is", "isn", "it", "its", "itself", "just",
    "like", "ll", "make", "many", "me", "might", "more", "most", "much", "must",
    "mustn", "my", "myself", "needn", "never", "no", "nor", "not", "now", "of",
    "off", "on", "once", "only", "or", "other", "our", "ours", "ourselves",
    "out", "over", "own", "re", "said", "same", "see", "shan", "she", "should",
    "shouldn", "since", "so", "some", "still", "such", "take", "than", "that",
    "the", "their", "theirs", "them", "themselves", "then", "there", "these",
    "they", "this", "those", "through", "to", "too", "under", "until", "up",
    "very", "was", "wasn", "way", "we", "well", "were", "weren", "what", "when",
    "where", "which", "while", "who", "whom", "why", "will", "with", "won",
    "would", "wouldn", "you", "your", "yours", "yourself", "yourselves",
})


def tokenize(text: str) -> List[str]:
    """Lowercase text and split it into word tokens."""
    if not text:
        return []
    return _tokenizer.tokenize(text.lower())


@lru_cache(maxsize=50000)
def stem(token: str) -> str:
    """Reduce a token to its Porter stem (e.g. campaigns -> campaign)."""
    return _stemmer.stem(token.lower())


def is_stop_word(token: str) -> bool:
    return token in STOP_WORDS


def salient_tokens(text: str) -> List[str]:
    """Tokens longer than three characters that are not stop words, in order."""
    return [
        token for token in tokenize(text)
        if len(token) > 3 and not is_stop_word(token)
    ]

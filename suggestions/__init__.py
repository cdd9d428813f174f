"""Category suggestion engine: keyword and learned-pattern matchers."""

from suggestions.normalize import normalize_description
from suggestions.keywords import (
    KeywordDictionary,
    KeywordDictionaryError,
    default_keyword_dictionary,
    load_keyword_dictionary,
)
from suggestions.fuzzy import levenshtein_distance, match_keywords
from suggestions.learned import find_learned_patterns

__all__ = [
    "normalize_description",
    "KeywordDictionary",
    "KeywordDictionaryError",
    "default_keyword_dictionary",
    "load_keyword_dictionary",
    "levenshtein_distance",
    "match_keywords",
    "find_learned_patterns",
]

"""Keyword dictionary for category suggestions.

The dictionary maps category slugs (lowercase-with-dashes, e.g. ``food-dining``)
to ordered keyword lists, plus a parallel slug to display-name mapping. Display
names must equal an existing Category.name for a keyword match to surface.

Dictionaries are validated when they are built, so a malformed config fails
loudly at load time instead of silently producing no matches later.
"""

import re
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from suggestions.normalize import normalize_description

DEFAULT_KEYWORDS_FILE = Path(__file__).parent / "keywords.yaml"

_SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class KeywordDictionaryError(ValueError):
    """Raised when a keyword dictionary is structurally invalid."""


class _DictionaryConfig(BaseModel):
    """Schema for the keyword dictionary config."""

    model_config = ConfigDict(extra="forbid")

    keywords: Dict[str, List[str]]
    names: Dict[str, str]

    @field_validator("keywords")
    @classmethod
    def _check_keywords(cls, value: Dict[str, List[str]]) -> Dict[str, List[str]]:
        cleaned = {}
        for slug, keyword_list in value.items():
            if not _SLUG_RE.match(slug):
                raise ValueError(f"Invalid slug {slug!r}: use lowercase-with-dashes")
            if not keyword_list:
                raise ValueError(f"Slug {slug!r} has no keywords")
            normalized = [normalize_description(k) for k in keyword_list]
            if not all(normalized):
                raise ValueError(f"Slug {slug!r} contains a blank keyword")
            cleaned[slug] = normalized
        return cleaned

    @field_validator("names")
    @classmethod
    def _check_names(cls, value: Dict[str, str]) -> Dict[str, str]:
        for slug, name in value.items():
            if not name.strip():
                raise ValueError(f"Slug {slug!r} has a blank display name")
        return value

    @model_validator(mode="after")
    def _check_parallel(self) -> "_DictionaryConfig":
        missing = [slug for slug in self.keywords if slug not in self.names]
        if missing:
            raise ValueError(f"No display name for slug(s): {', '.join(missing)}")
        orphans = [slug for slug in self.names if slug not in self.keywords]
        if orphans:
            raise ValueError(f"Display name without keywords for slug(s): {', '.join(orphans)}")
        return self


class KeywordDictionary:
    """Immutable slug -> keywords and slug -> display name mapping.

    Iteration order is the insertion order of the keyword mapping, which is
    also the order keyword suggestions are returned in.

    Raises:
        KeywordDictionaryError: If the mappings are malformed.
    """

    def __init__(
        self,
        keywords: Mapping[str, Sequence[str]],
        names: Mapping[str, str],
    ):
        for slug, words in keywords.items():
            if isinstance(words, str) or not isinstance(words, Sequence):
                raise KeywordDictionaryError(f"Keywords for slug {slug!r} must be a list")

        try:
            config = _DictionaryConfig(
                keywords={slug: list(words) for slug, words in keywords.items()},
                names=dict(names),
            )
        except ValidationError as e:
            raise KeywordDictionaryError(f"Invalid keyword dictionary: {e}") from e

        self._keywords = MappingProxyType(
            {slug: tuple(words) for slug, words in config.keywords.items()}
        )
        self._names = MappingProxyType(dict(config.names))

    @classmethod
    def from_mapping(cls, data) -> "KeywordDictionary":
        """Build a dictionary from parsed config data with ``keywords`` and ``names``."""
        if not isinstance(data, Mapping):
            raise KeywordDictionaryError(
                "Keyword dictionary must be a mapping with 'keywords' and 'names'"
            )
        unknown = set(data) - {"keywords", "names"}
        if unknown:
            raise KeywordDictionaryError(
                f"Unknown keyword dictionary section(s): {', '.join(sorted(unknown))}"
            )
        keywords = data.get("keywords")
        names = data.get("names")
        if not isinstance(keywords, Mapping) or not isinstance(names, Mapping):
            raise KeywordDictionaryError(
                "Keyword dictionary 'keywords' and 'names' must both be mappings"
            )
        return cls(keywords, names)

    @property
    def keywords(self) -> Mapping[str, Tuple[str, ...]]:
        return self._keywords

    @property
    def names(self) -> Mapping[str, str]:
        return self._names

    @property
    def slugs(self) -> List[str]:
        return list(self._keywords)

    def items(self) -> Iterator[Tuple[str, Tuple[str, ...]]]:
        """Yield (slug, keywords) pairs in dictionary order."""
        return iter(self._keywords.items())

    def name_for_slug(self, slug: str) -> Optional[str]:
        """Return the category display name for a slug, or None."""
        return self._names.get(slug)

    def __len__(self) -> int:
        return len(self._keywords)

    def __contains__(self, slug) -> bool:
        return slug in self._keywords

    def __repr__(self) -> str:
        return f"KeywordDictionary(slugs={self.slugs!r})"


def load_keyword_dictionary(path: Path) -> KeywordDictionary:
    """Load and validate a keyword dictionary from a YAML file.

    Args:
        path: YAML file with top-level ``keywords`` and ``names`` mappings.

    Returns:
        The validated KeywordDictionary.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        KeywordDictionaryError: If the YAML is invalid or malformed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Keyword dictionary not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise KeywordDictionaryError(f"Invalid YAML in {path}: {e}") from e

    return KeywordDictionary.from_mapping(data)


@lru_cache(maxsize=1)
def default_keyword_dictionary() -> KeywordDictionary:
    """Return the built-in keyword dictionary, loaded once per process."""
    return load_keyword_dictionary(DEFAULT_KEYWORDS_FILE)


def slugify_category_name(name: str) -> str:
    """Convert a category display name to a slug ("Food & Dining" -> "food-dining")."""
    slug = name.strip().lower().replace("&", "")
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")

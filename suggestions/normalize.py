"""Description normalization shared by matching and pattern storage."""

from typing import Optional


def normalize_description(text: Optional[str]) -> str:
    """Lowercase and trim a transaction description.

    Pattern lookups and keyword matching both go through this function, so
    anything stored as a pattern key must be normalized here first.

    Args:
        text: Raw description. None is treated as empty.

    Returns:
        Normalized description; empty string for blank input.
    """
    if not text:
        return ""
    return text.lower().strip()

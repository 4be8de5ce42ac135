"""Word-boundary rules for turning type names into keys and titles."""

from __future__ import annotations

import re
from typing import Pattern, Tuple

# Applied in order; each pattern captures the two sides of a word boundary.
BOUNDARY_RULES: Tuple[Tuple[str, Pattern[str]], ...] = (
    ("lower-or-digit to upper", re.compile(r"([a-z0-9])([A-Z])")),
    ("acronym to word", re.compile(r"([A-Z]+)([A-Z][a-z])")),
)

_SEPARATORS = re.compile(r"[-_]+")


def split_words(name: str, separator: str) -> str:
    """Insert ``separator`` at every boundary listed in ``BOUNDARY_RULES``."""
    result = name
    for _, pattern in BOUNDARY_RULES:
        result = pattern.sub(rf"\1{separator}\2", result)
    return result


def derive_key(type_name: str) -> str:
    """Return the manifest key for a type name.

    >>> derive_key("FHECounter")
    'fhe-counter'
    >>> derive_key("ERC7984Example")
    'erc7984-example'
    """
    return split_words(type_name, "-").lower()


def derive_title(type_name: str) -> str:
    """Return a human title using the same boundaries as :func:`derive_key`."""
    return split_words(type_name, " ")


def category_display_name(category_id: str) -> str:
    """Render a folder name such as ``deep-dive`` as ``Deep Dive``."""
    words = [word for word in _SEPARATORS.split(category_id) if word]
    return " ".join(word[:1].upper() + word[1:] for word in words)


__all__ = [
    "BOUNDARY_RULES",
    "category_display_name",
    "derive_key",
    "derive_title",
    "split_words",
]

"""Defensive string helpers shared by the analyzers.

Every helper accepts ``None`` and treats it as the empty string so a record
with a null field can never raise inside a string operation.
"""

import re
from typing import Optional

import Levenshtein

_PUNCTUATION = re.compile(r"[^\w\s()]")
_WHITESPACE = re.compile(r"\s+")
_TRAILING_PARENTHETICAL = re.compile(r"\s*\([^)]*\)\s*$")
_ITEM_WORD_SPLIT = re.compile(r"[\s,—–\-]+")


def safe_str(value: Optional[str]) -> str:
    return value if isinstance(value, str) else ""


def safe_lower(value: Optional[str]) -> str:
    """Lowercase and trim, mapping ``None`` to ``""``."""
    return safe_str(value).lower().strip()


def title_key(title: Optional[str]) -> str:
    """Key used for exact-duplicate grouping: case-folded and trimmed."""
    return safe_lower(title)


def normalize_title(title: Optional[str]) -> str:
    """Fold punctuation (except parentheses) to spaces and collapse whitespace.

    "Pink Tower — Introduction" -> "pink tower introduction"
    """
    folded = _PUNCTUATION.sub(" ", safe_str(title).lower())
    return _WHITESPACE.sub(" ", folded).strip()


def strip_parenthetical(title: str) -> str:
    """Drop one trailing parenthetical clause: "foo (bar)" -> "foo"."""
    return _TRAILING_PARENTHETICAL.sub("", title).strip()


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def significant_words(text: str, min_length: int = 3, item_name: bool = False) -> list[str]:
    """Split into words of at least ``min_length`` characters.

    Inventory names also split on commas and dashes ("Pink Tower - Large").
    """
    splitter = _ITEM_WORD_SPLIT if item_name else _WHITESPACE
    return [w for w in splitter.split(text) if len(w) >= min_length]


def edit_distance(a: str, b: str, max_distance: Optional[int] = None) -> int:
    """Levenshtein distance with unit insertion, deletion and substitution costs.

    When ``max_distance`` is given, any distance of at least ``max_distance``
    is reported as exactly ``max_distance``; values below the bound are exact.
    """
    if max_distance is None:
        return Levenshtein.distance(a, b)
    if max_distance < 1:
        return 0 if a == b else max_distance
    return Levenshtein.distance(a, b, score_cutoff=max_distance - 1)

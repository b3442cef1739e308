"""Shared utilities: logging setup and defensive text helpers."""

from .text import (
    edit_distance,
    normalize_title,
    safe_lower,
    safe_str,
    strip_parenthetical,
    title_key,
)

__all__ = [
    "edit_distance",
    "normalize_title",
    "safe_lower",
    "safe_str",
    "strip_parenthetical",
    "title_key",
]

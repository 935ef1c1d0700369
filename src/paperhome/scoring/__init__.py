"""Relevance scoring for journal candidates."""

from .boost import apply_field_boost, fields_overlap, is_field_match
from .similarity import best_match, normalize_term, score, term_match

__all__ = [
    "score",
    "normalize_term",
    "term_match",
    "best_match",
    "fields_overlap",
    "is_field_match",
    "apply_field_boost",
]

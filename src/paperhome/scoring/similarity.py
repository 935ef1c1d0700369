"""
Keyword-to-scope similarity scoring.

Curated scope vocabularies rarely use the exact wording an extraction
model produces, so instead of a strict set overlap each query term is
credited with its best fuzzy match against the journal's scope terms:

    exact match            -> 1.0
    substring either way   -> 0.75
    shared sub-word        -> 0.3

The per-term credits are summed and folded into a Dice coefficient
``2 * matched / (len(query) + len(scope))``, amplified 1.2x and clamped
to 0-100.
"""

import logging
import math
import re
from typing import List, Sequence

logger = logging.getLogger(__name__)

EXACT_MATCH = 1.0
PARTIAL_MATCH = 0.75
WORD_MATCH = 0.3

MIN_TERM_LENGTH = 3
# 1.2x amplification expressed in percent
AMPLIFIED_PERCENT = 120

_STRIP_PATTERN = re.compile(r"[^a-z0-9 ]")


def normalize_term(term: str) -> str:
    """Lowercase, trim and drop everything outside ``[a-z0-9 ]``.

    Internal spaces survive so multi-word phrases can still be compared
    word by word.

    >>> normalize_term("  Media & Communication-Studies ")
    'media  communicationstudies'
    """
    return _STRIP_PATTERN.sub("", term.lower().strip())


def _words_overlap(query_term: str, scope_term: str) -> bool:
    scope_words = scope_term.split()
    for query_word in query_term.split():
        for scope_word in scope_words:
            if query_word in scope_word or scope_word in query_word:
                return True
    return False


def term_match(query_term: str, scope_term: str) -> float:
    """Credit for a single pair of already normalized terms."""
    if not query_term or not scope_term:
        return 0.0
    if query_term == scope_term:
        return EXACT_MATCH
    if query_term in scope_term or scope_term in query_term:
        return PARTIAL_MATCH
    if _words_overlap(query_term, scope_term):
        return WORD_MATCH
    return 0.0


def best_match(query_term: str, scope_terms: Sequence[str]) -> float:
    """Highest credit a query term earns against any scope term.

    Every scope term is visited: an exact match later in the list must
    win over an earlier partial one.
    """
    best = 0.0
    for scope_term in scope_terms:
        best = max(best, term_match(query_term, scope_term))
    return best


def score(query_terms: Sequence[str], scope_terms: Sequence[str]) -> int:
    """Relevance of a journal scope to a keyword list, 0-100.

    Args:
        query_terms: Keywords extracted from the paper
        scope_terms: Topical terms describing the journal

    Returns:
        Integer score in [0, 100]; 0 when either side is empty after
        normalization and filtering

    Example:
        >>> score(["media", "broadcasting"], ["Media Studies"])
        60
    """
    targets: List[str] = [
        t for t in (normalize_term(q) for q in query_terms) if len(t) >= MIN_TERM_LENGTH
    ]
    scopes: List[str] = [normalize_term(s) for s in scope_terms]

    if not targets or not scopes:
        return 0

    # fsum keeps the total independent of term order
    intersection = math.fsum(best_match(t, scopes) for t in targets)

    # Terms are counted with duplicates
    union_size = len(targets) + len(scopes)
    similarity = 2 * intersection / union_size

    # One multiplication, so exact .5 values stay exact
    value = min(similarity * AMPLIFIED_PERCENT, 100.0)
    # Half-up rounding keeps .5 boundaries stable across platforms
    return int(math.floor(value + 0.5))

"""
Field-match boosting.

A journal whose broad subject area textually overlaps the paper's
research field is lifted: by a fixed bonus when its keywords already
matched, or to a baseline when they did not match at all.
"""

from typing import Optional

from paperhome.core.models import Candidate, CandidateSource


def fields_overlap(left: Optional[str], right: Optional[str]) -> bool:
    """Case-insensitive substring overlap in either direction.

    An empty value is a substring of anything, so a query without a
    research field overlaps every subject label.
    """
    a = (left or "").strip().lower()
    b = (right or "").strip().lower()
    return a in b or b in a


def is_field_match(candidate: Candidate, field: str) -> bool:
    """Check a candidate's subject labels against the query field.

    Curated journals are matched on their broad field. External journals
    carry their subject areas as scope terms, and any of them may satisfy
    the match; one without subject areas never matches.
    """
    if candidate.source == CandidateSource.EXTERNAL:
        return any(fields_overlap(area, field) for area in candidate.scope)
    return fields_overlap(candidate.broad_field, field)


def apply_field_boost(base: int, matched: bool, baseline: int, boost: int = 20) -> int:
    """Adjust a base similarity score for a field match.

    Args:
        base: Similarity score in [0, 100]
        matched: Whether the field-match test passed
        baseline: Score granted when ``base`` is 0 but the field matched
        boost: Bonus added to a non-zero ``base``

    Returns:
        Boosted score, never below ``base`` and never above 100
    """
    if not matched:
        return base
    if base == 0:
        return baseline
    return min(base + boost, 100)

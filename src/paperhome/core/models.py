"""Core data models for PaperHome."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CandidateSource(str, Enum):
    """Which candidate pool a journal came from."""

    LOCAL = "local"
    EXTERNAL = "external"


class Query(BaseModel):
    """A recommendation request: research field plus extracted keywords.

    ``keywords`` accepts a list, a single string or nothing; the result is
    always a list of stripped, non-blank terms in their original order.

    Attributes:
        field: Free-text research field (may be empty)
        keywords: Ordered keyword terms (may be empty)
    """

    field: str = ""
    keywords: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator("field", mode="before")
    @classmethod
    def coerce_field(cls, v: Any) -> Any:
        """Treat a missing field as empty."""
        return "" if v is None else v

    @field_validator("keywords", mode="before")
    @classmethod
    def coerce_keywords(cls, v: Any) -> Any:
        """Normalize absent or scalar keywords into a list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("keywords")
    @classmethod
    def drop_blank_keywords(cls, v: List[str]) -> List[str]:
        return [k.strip() for k in v if k and k.strip()]

    @property
    def is_empty(self) -> bool:
        """True when neither a field nor any non-blank keyword was given."""
        return not self.field and not self.keywords


class Candidate(BaseModel):
    """A journal considered for recommendation.

    Attributes:
        identifier: Unique within its pool (ISSN for external journals)
        name: Display name
        publisher: Display publisher
        broad_field: Coarse subject label
        scope: Specific topical terms the journal publishes on
        source: Pool the candidate came from
        secondary_metric: Citation metric, used only to break ties
        issn: Print ISSN when known
        rank: Display label such as "SINTA 2" or "CiteScore: 4.1"
        url: Outbound link to the journal profile
        sjr: SCImago Journal Rank when known
        avg_processing_time: Display string for review turnaround
    """

    identifier: str
    name: str
    publisher: str = "Unknown"
    broad_field: str = ""
    scope: List[str] = Field(default_factory=list)
    source: CandidateSource = CandidateSource.LOCAL
    secondary_metric: Optional[float] = None

    issn: Optional[str] = None
    rank: str = "N/A"
    url: Optional[str] = None
    sjr: Optional[float] = None
    avg_processing_time: str = "Varies"

    model_config = ConfigDict(frozen=True)

    @field_validator("scope", mode="before")
    @classmethod
    def coerce_scope(cls, v: Any) -> Any:
        """Curated entries sometimes list a single focus as a bare string."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v


class ScoredCandidate(Candidate):
    """A candidate with its per-query relevance score.

    Derived for a single query and never cached.
    """

    match_score: int = Field(..., ge=0, le=100)

    @classmethod
    def from_candidate(cls, candidate: Candidate, match_score: int) -> "ScoredCandidate":
        return cls(**candidate.model_dump(), match_score=match_score)


class ResultSet(BaseModel):
    """Ranked national and international recommendations for one query."""

    national: List[ScoredCandidate] = Field(default_factory=list)
    international: List[ScoredCandidate] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.national) + len(self.international)

    def to_response(self) -> Dict[str, List[Dict[str, Any]]]:
        """Serialize to the JSON-ready response body."""
        return {
            "national": [c.model_dump(mode="json") for c in self.national],
            "international": [c.model_dump(mode="json") for c in self.international],
        }

"""
PaperHome: journal recommendations for research papers.

Ranks national journals from a curated directory and international
journals from Elsevier Scopus against a paper's research field and
keywords.
"""

__version__ = "0.3.0"

from paperhome.core.config import AppConfig
from paperhome.core.models import Candidate, CandidateSource, Query, ResultSet, ScoredCandidate
from paperhome.ranking.orchestrator import RankingOrchestrator
from paperhome.service import RecommendationService, ServiceResponse

__all__ = [
    "__version__",
    "AppConfig",
    "Query",
    "Candidate",
    "CandidateSource",
    "ScoredCandidate",
    "ResultSet",
    "RankingOrchestrator",
    "RecommendationService",
    "ServiceResponse",
]

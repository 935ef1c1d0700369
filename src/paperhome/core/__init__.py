"""
Core functionality for PaperHome.

This package contains the data models and configuration shared by the
ranking engine and its collaborators.
"""

from .config import (
    AppConfig,
    DirectoryConfig,
    LLMConfig,
    ProviderConfig,
    RankingConfig,
    load_config,
    load_config_from_dict,
)
from .models import Candidate, CandidateSource, Query, ResultSet, ScoredCandidate

__all__ = [
    # Models
    "Query",
    "Candidate",
    "CandidateSource",
    "ScoredCandidate",
    "ResultSet",
    # Configuration
    "AppConfig",
    "ProviderConfig",
    "RankingConfig",
    "DirectoryConfig",
    "LLMConfig",
    "load_config",
    "load_config_from_dict",
]

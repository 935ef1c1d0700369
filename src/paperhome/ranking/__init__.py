"""Journal ranking engine."""

from .orchestrator import RankingOrchestrator, sort_international, sort_national

__all__ = ["RankingOrchestrator", "sort_national", "sort_international"]

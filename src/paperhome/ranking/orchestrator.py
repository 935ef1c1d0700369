"""
Journal ranking orchestration.

Two candidate pools are ranked for every query:

* national: journals from the local curated directory, looked up by
  research field;
* international: journals behind the top external search hits, each
  resolved to metadata by its own detail call.

Both pools are scored with the same keyword similarity and field-match
boost, then sorted. The pools share nothing, so they run side by side;
inside the international pool the detail calls fan out over a small
thread pool and are collected in search-result order. A collaborator
that fails only empties (or thins) its own pool.
"""

import concurrent.futures
import logging
from typing import List, Optional, Sequence

from paperhome.core.config import AppConfig
from paperhome.core.models import Candidate, Query, ResultSet, ScoredCandidate
from paperhome.directory.local import BaseDirectory, LocalDirectory
from paperhome.providers.scopus import ScopusProvider, distinct_identifiers
from paperhome.scoring.boost import apply_field_boost, is_field_match
from paperhome.scoring.similarity import score
from paperhome.utils.logging import PerformanceLogger

logger = logging.getLogger(__name__)


def sort_national(candidates: Sequence[ScoredCandidate]) -> List[ScoredCandidate]:
    """Highest score first; ties keep directory order."""
    return sorted(candidates, key=lambda c: -c.match_score)


def sort_international(candidates: Sequence[ScoredCandidate]) -> List[ScoredCandidate]:
    """Highest score first, then highest citation metric."""
    return sorted(candidates, key=lambda c: (-c.match_score, -(c.secondary_metric or 0.0)))


class RankingOrchestrator:
    """Ranks national and international journals for a query.

    The orchestrator keeps only read-only collaborators and
    configuration, so one instance serves any number of concurrent
    requests.

    Example:
        >>> orchestrator = RankingOrchestrator.from_config(AppConfig.from_env())
        >>> results = orchestrator.rank(Query(field="Communication", keywords=["media"]))
        >>> top = results.national[0]
    """

    def __init__(
        self,
        config: AppConfig,
        directory: BaseDirectory,
        provider: Optional[ScopusProvider] = None,
    ):
        self.config = config
        self.directory = directory
        self.provider = provider if provider is not None and provider.is_configured else None

        if self.provider is None:
            logger.info("External API credential not configured; international ranking disabled")

    @classmethod
    def from_config(cls, config: AppConfig) -> "RankingOrchestrator":
        """Build the orchestrator and its collaborators from configuration."""
        directory = LocalDirectory.from_config(config.directory)
        provider = ScopusProvider(config.scopus) if config.scopus.is_configured else None
        return cls(config, directory, provider)

    def rank(self, query: Query) -> ResultSet:
        """Rank both candidate pools for a query.

        An empty query returns an empty result without calling any
        collaborator.
        """
        if query.is_empty:
            logger.debug("Empty query; skipping ranking")
            return ResultSet()

        if self.provider is None:
            return ResultSet(national=self.rank_national(query))

        with concurrent.futures.ThreadPoolExecutor(
            max_workers=2, thread_name_prefix="paperhome-pool"
        ) as executor:
            national = executor.submit(self.rank_national, query)
            international = executor.submit(self.rank_international, query)
            return ResultSet(national=national.result(), international=international.result())

    def rank_national(self, query: Query) -> List[ScoredCandidate]:
        """Score and sort the local directory candidates for the query field."""
        with PerformanceLogger("National ranking", logger):
            try:
                candidates = self.directory.lookup(query.field)
            except Exception as e:
                logger.error(f"Local directory lookup failed for '{query.field}': {e}")
                return []

            baseline = self.config.ranking.national_field_baseline
            scored = [self.score_candidate(c, query, baseline) for c in candidates]
            logger.info(f"Ranked {len(scored)} national journals")
            return sort_national(scored)

    def rank_international(self, query: Query) -> List[ScoredCandidate]:
        """Search, enrich, score and sort external candidates."""
        if self.provider is None:
            return []

        settings = self.config.ranking
        with PerformanceLogger("International ranking", logger):
            try:
                hits = self.provider.search_identifiers(
                    query, count=settings.search_count, top_keywords=settings.top_keywords
                )
            except Exception as e:
                logger.error(f"External search failed: {e}")
                return []

            identifiers = distinct_identifiers(hits, limit=settings.max_detail_fetches)
            candidates = self.fetch_details(identifiers)

            baseline = settings.international_field_baseline
            scored = [self.score_candidate(c, query, baseline) for c in candidates]
            logger.info(
                f"Ranked {len(scored)} international journals "
                f"({len(identifiers) - len(scored)} detail fetches failed)"
            )
            return sort_international(scored)

    def fetch_details(self, identifiers: Sequence[str]) -> List[Candidate]:
        """Resolve identifiers concurrently, keeping their order.

        Each fetch is isolated: an exception, an empty result or missing
        the shared deadline drops that identifier only.
        """
        if not identifiers or self.provider is None:
            return []

        settings = self.config.ranking
        executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=min(settings.max_workers, len(identifiers)),
            thread_name_prefix="paperhome-detail",
        )
        try:
            futures = [executor.submit(self.provider.fetch_detail, i) for i in identifiers]
            done, _ = concurrent.futures.wait(futures, timeout=settings.detail_timeout)

            results: List[Candidate] = []
            for identifier, future in zip(identifiers, futures):
                if future not in done:
                    logger.warning(
                        f"Detail fetch for {identifier} timed out after {settings.detail_timeout}s"
                    )
                    continue
                error = future.exception()
                if error is not None:
                    logger.error(f"Detail fetch for {identifier} failed: {error}")
                    continue
                candidate = future.result()
                if candidate is not None:
                    results.append(candidate)
            return results
        finally:
            # Do not wait for stragglers past the deadline
            executor.shutdown(wait=False, cancel_futures=True)

    def score_candidate(self, candidate: Candidate, query: Query, baseline: int) -> ScoredCandidate:
        """Keyword similarity plus field-match boost for one candidate."""
        base = score(query.keywords, candidate.scope)
        match_score = apply_field_boost(
            base,
            is_field_match(candidate, query.field),
            baseline=baseline,
            boost=self.config.ranking.field_boost,
        )
        return ScoredCandidate.from_candidate(candidate, match_score)

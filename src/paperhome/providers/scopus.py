"""
Elsevier Scopus provider implementation.

Scopus supplies the international candidate pool in two steps: a
document search narrowed to journal sources yields ISSNs, and each ISSN
is then resolved through the serial title API into journal metadata
(CiteScore, SJR, subject areas, profile link).

API Documentation: https://dev.elsevier.com/api_docs.html
"""

import logging
from typing import Iterable, List, Optional

from pydantic import ValidationError

from paperhome.core.config import ProviderConfig
from paperhome.core.models import Candidate, CandidateSource, Query
from paperhome.providers.base import BaseProvider
from paperhome.providers.schemas import SearchResponse, SerialEntry, SerialResponse
from paperhome.utils.exceptions import ProviderError

logger = logging.getLogger(__name__)

PROFILE_LINK_REF = "scopus-source"
SOURCE_URL = "https://www.scopus.com/sourceid/{source_id}"
ISSN_URL = "https://portal.issn.org/resource/ISSN/{issn}"


def _clean_term(term: str) -> str:
    return term.replace('"', "").strip()


def build_search_query(query: Query, top_keywords: int = 3) -> Optional[str]:
    """Translate a Query into Scopus advanced search syntax.

    The field is required, at least one of the first ``top_keywords``
    keywords is required, and only journal sources are searched:

        TITLE-ABS-KEY("Communication") AND TITLE-ABS-KEY("media" OR "film") AND SRCTYPE(j)

    Without a field or without any usable keyword there is no search.

    Args:
        query: Recommendation query
        top_keywords: Number of leading keywords to use

    Returns:
        The query string, or None when a required part is missing
    """
    field = _clean_term(query.field)
    keywords = [k for k in (_clean_term(k) for k in query.keywords) if k][:top_keywords]
    if not field or not keywords:
        return None

    joined = " OR ".join(f'"{k}"' for k in keywords)
    return f'TITLE-ABS-KEY("{field}") AND TITLE-ABS-KEY({joined}) AND SRCTYPE(j)'


def distinct_identifiers(identifiers: Iterable[str], limit: Optional[int] = None) -> List[str]:
    """Deduplicate identifiers keeping the first occurrence.

    Args:
        identifiers: Identifiers in search-result order
        limit: Keep at most this many distinct identifiers

    Returns:
        Distinct identifiers in their original order
    """
    seen = set()
    result: List[str] = []
    for identifier in identifiers:
        identifier = (identifier or "").strip()
        if not identifier or identifier in seen:
            continue
        seen.add(identifier)
        result.append(identifier)
        if limit is not None and len(result) >= limit:
            break
    return result


def _format_issn(issn: str) -> str:
    if len(issn) == 8 and "-" not in issn:
        return f"{issn[:4]}-{issn[4:]}"
    return issn


def profile_url(entry: SerialEntry, identifier: str) -> str:
    """Outbound link for a journal.

    Prefers the ``scopus-source`` link relation, then a Scopus source
    page built from the source id, then the ISSN portal record.
    """
    link = entry.link_for(PROFILE_LINK_REF)
    if link:
        return link
    if entry.source_id:
        return SOURCE_URL.format(source_id=entry.source_id)
    return ISSN_URL.format(issn=_format_issn(identifier))


def entry_to_candidate(entry: SerialEntry, identifier: str) -> Candidate:
    """Map a serial title record onto an international Candidate."""
    subject_areas = entry.subject_areas
    cite_score = entry.cite_score
    sjr = entry.sjr

    return Candidate(
        identifier=identifier,
        name=entry.title,
        publisher=entry.publisher,
        broad_field=subject_areas[0] if subject_areas else "",
        scope=subject_areas,
        source=CandidateSource.EXTERNAL,
        secondary_metric=cite_score if cite_score is not None else 0.0,
        issn=identifier,
        rank=f"CiteScore: {cite_score if cite_score is not None else 'N/A'}",
        url=profile_url(entry, identifier),
        sjr=sjr if sjr is not None else 0.0,
        avg_processing_time="Varies",
    )


class ScopusProvider(BaseProvider):
    """Provider for the Elsevier Scopus search and serial title APIs.

    Without an API key the provider reports itself as unconfigured and
    the international pool is skipped.

    Example:
        >>> provider = ScopusProvider(ProviderConfig(api_key="..."))
        >>> issns = provider.search_identifiers(Query(field="Communication", keywords=["media"]))
        >>> journal = provider.fetch_detail(issns[0])
    """

    SEARCH_PATH = "/search/scopus"
    SERIAL_PATH = "/serial/title/issn/{issn}"

    def __init__(self, config: ProviderConfig):
        super().__init__(config)
        self.base_url = config.base_url.rstrip("/")

    @property
    def name(self) -> str:
        return "scopus"

    def _auth_headers(self):
        if self.config.api_key:
            return {"X-ELS-APIKey": self.config.api_key}
        return {}

    def search_identifiers(
        self, query: Query, count: int = 8, top_keywords: int = 3
    ) -> List[str]:
        """Search journal articles and return the ISSNs of their sources.

        Args:
            query: Recommendation query
            count: Number of search results to request
            top_keywords: Number of leading keywords used in the search

        Returns:
            ISSNs in relevance order, duplicates included

        Raises:
            ProviderError: When the search call fails or returns a non-success status
        """
        search_text = build_search_query(query, top_keywords=top_keywords)
        if not search_text:
            logger.debug("Nothing to search for on Scopus")
            return []

        params = {
            "query": search_text,
            "count": count,
            "sort": "relevancy",
        }
        logger.debug(f"Scopus search: {search_text}")

        data = self._make_request(f"{self.base_url}{self.SEARCH_PATH}", params=params)

        try:
            response = SearchResponse.model_validate(data)
        except ValidationError as e:
            raise ProviderError(self.name, f"Unexpected search response: {e}")

        identifiers = response.identifiers()
        logger.info(f"Scopus search returned {len(identifiers)} hits with an ISSN")
        return identifiers

    def fetch_detail(self, identifier: str) -> Optional[Candidate]:
        """Resolve one ISSN into journal metadata.

        Makes exactly one request. Every failure is logged and reported
        as None; nothing is raised.

        Args:
            identifier: Journal ISSN

        Returns:
            The enriched Candidate, or None
        """
        url = f"{self.base_url}{self.SERIAL_PATH.format(issn=identifier)}"

        try:
            data = self._make_request(url)
            entry = SerialResponse.model_validate(data).first_entry
        except ProviderError as e:
            logger.warning(f"Failed to fetch details for ISSN {identifier}: {e}")
            return None
        except ValidationError as e:
            logger.warning(f"Malformed serial record for ISSN {identifier}: {e}")
            return None
        except Exception:
            logger.exception(f"Unexpected error fetching details for ISSN {identifier}")
            return None

        if entry is None:
            logger.info(f"No serial record for ISSN {identifier}")
            return None

        return entry_to_candidate(entry, identifier)

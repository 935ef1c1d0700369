"""
Request handling for journal recommendations.

``RecommendationService.handle`` turns a raw request body into a
status code and JSON-ready body:

    200  {"national": [...], "international": [...]}
    400  {"error": "<what was wrong with the request>"}
    500  {"error": "Internal Server Error"}

Collaborator outages never produce an error response; they only shrink
the affected list.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Union

from pydantic import ValidationError

from paperhome.core.config import AppConfig
from paperhome.core.models import Query, ResultSet
from paperhome.ranking.orchestrator import RankingOrchestrator
from paperhome.utils.exceptions import InputError, InternalError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


@dataclass(frozen=True)
class ServiceResponse:
    """Status code plus JSON-ready body."""

    status_code: int
    body: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.body, indent=indent, ensure_ascii=False)


def parse_query(payload: Union[str, bytes, Dict[str, Any], None]) -> Query:
    """Validate a request body into a Query.

    Args:
        payload: Decoded JSON object, or the raw JSON text

    Returns:
        The normalized Query

    Raises:
        InputError: If the body is missing, not JSON, not an object or has bad types
    """
    if payload is None:
        raise InputError("Request body is required")

    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except ValueError as e:
            raise InputError(f"Request body is not valid JSON: {e}")

    if not isinstance(payload, dict):
        raise InputError("Request body must be a JSON object")

    try:
        return Query(field=payload.get("field"), keywords=payload.get("keywords"))
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise InputError(f"Invalid request: {first.get('msg')}", field=location or None)


class RecommendationService:
    """Entry point shared by the CLI and any HTTP front end."""

    def __init__(self, orchestrator: RankingOrchestrator):
        self.orchestrator = orchestrator

    @classmethod
    def from_config(cls, config: AppConfig) -> "RecommendationService":
        return cls(RankingOrchestrator.from_config(config))

    def recommend(self, query: Query) -> ResultSet:
        """Rank journals for an already validated query.

        Raises:
            InternalError: On any unexpected failure while ranking
        """
        try:
            return self.orchestrator.rank(query)
        except Exception as e:
            logger.exception(f"Ranking failed for field={query.field!r} keywords={query.keywords!r}")
            raise InternalError(cause=e) from e

    def handle(self, payload: Union[str, bytes, Dict[str, Any], None]) -> ServiceResponse:
        """Process one recommendation request end to end."""
        try:
            query = parse_query(payload)
        except InputError as e:
            logger.info(f"Rejected request: {e}")
            return ServiceResponse(400, {"error": e.message})

        if query.is_empty:
            return ServiceResponse(200, ResultSet().to_response())

        try:
            result = self.recommend(query)
            body = result.to_response()
        except InternalError:
            return ServiceResponse(500, {"error": INTERNAL_ERROR_MESSAGE})
        except Exception:
            logger.exception("Failed to serialize ranking result")
            return ServiceResponse(500, {"error": INTERNAL_ERROR_MESSAGE})

        return ServiceResponse(200, body)

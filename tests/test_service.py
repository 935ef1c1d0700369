"""
Tests for request handling.
"""

import json
import unittest
from unittest.mock import MagicMock

from paperhome.core.models import Candidate, CandidateSource, Query, ResultSet, ScoredCandidate
from paperhome.service import RecommendationService, ServiceResponse, parse_query
from paperhome.utils.exceptions import InputError, InternalError


def scored(identifier: str, match_score: int, source=CandidateSource.LOCAL) -> ScoredCandidate:
    candidate = Candidate(
        identifier=identifier,
        name=f"Journal {identifier}",
        broad_field="Communication Studies",
        scope=["Media Studies"],
        source=source,
    )
    return ScoredCandidate.from_candidate(candidate, match_score)


class TestParseQuery(unittest.TestCase):
    def test_keyword_list(self):
        query = parse_query({"field": "Law", "keywords": ["court", " ", "judge "]})
        self.assertEqual(query, Query(field="Law", keywords=["court", "judge"]))

    def test_single_keyword_string(self):
        self.assertEqual(parse_query({"keywords": "media"}).keywords, ["media"])

    def test_missing_keys(self):
        self.assertEqual(parse_query({"field": "Law"}).keywords, [])
        self.assertEqual(parse_query({"keywords": ["media"]}).field, "")
        self.assertTrue(parse_query({}).is_empty)

    def test_raw_json_text(self):
        query = parse_query('{"field": "Education", "keywords": ["e-learning"]}')
        self.assertEqual(query.field, "Education")
        self.assertEqual(query.keywords, ["e-learning"])

    def test_rejected_bodies(self):
        for body in (None, "not json", "[1, 2]", ["field"], b"{", {"keywords": [1, 2]}, {"field": 3}):
            with self.assertRaises(InputError):
                parse_query(body)


class TestRecommendationService(unittest.TestCase):
    def setUp(self):
        self.orchestrator = MagicMock()
        self.service = RecommendationService(self.orchestrator)

    def test_empty_query_short_circuits(self):
        response = self.service.handle({"field": "", "keywords": []})

        self.assertEqual(response, ServiceResponse(200, {"national": [], "international": []}))
        self.orchestrator.rank.assert_not_called()

    def test_blank_keywords_count_as_no_keywords(self):
        self.assertTrue(parse_query({"field": "", "keywords": [""]}).is_empty)

        response = self.service.handle({"field": "  ", "keywords": ["", "   "]})

        self.assertEqual(response, ServiceResponse(200, {"national": [], "international": []}))
        self.orchestrator.rank.assert_not_called()

    def test_success_body_contains_candidate_fields_and_score(self):
        self.orchestrator.rank.return_value = ResultSet(
            national=[scored("n1", 80)],
            international=[scored("1234-5678", 60, CandidateSource.EXTERNAL)],
        )

        response = self.service.handle({"field": "Communication", "keywords": "media"})

        self.assertTrue(response.ok)
        self.orchestrator.rank.assert_called_once_with(Query(field="Communication", keywords=["media"]))
        national = response.body["national"][0]
        self.assertEqual(national["identifier"], "n1")
        self.assertEqual(national["match_score"], 80)
        self.assertEqual(national["scope"], ["Media Studies"])
        self.assertEqual(national["source"], "local")
        self.assertEqual(response.body["international"][0]["source"], "external")
        # Serializable as-is
        self.assertEqual(json.loads(response.to_json()), response.body)

    def test_bad_input_is_a_client_error(self):
        response = self.service.handle("{broken")

        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.body)
        self.orchestrator.rank.assert_not_called()

    def test_internal_failure_is_generic_server_error(self):
        self.orchestrator.rank.side_effect = RuntimeError("sorting exploded")

        with self.assertLogs("paperhome.service", level="ERROR") as logs:
            response = self.service.handle({"field": "Law", "keywords": ["court"]})

        self.assertEqual(response, ServiceResponse(500, {"error": "Internal Server Error"}))
        self.assertIn("sorting exploded", "\n".join(logs.output))

    def test_recommend_wraps_unexpected_errors(self):
        self.orchestrator.rank.side_effect = KeyError("boom")

        with self.assertLogs("paperhome.service", level="ERROR"):
            with self.assertRaises(InternalError) as ctx:
                self.service.recommend(Query(field="Law"))

        self.assertIsInstance(ctx.exception.cause, KeyError)

    def test_partial_results_are_not_errors(self):
        self.orchestrator.rank.return_value = ResultSet(national=[scored("n1", 50)])

        response = self.service.handle({"field": "Communication"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.body["international"], [])


if __name__ == '__main__':
    unittest.main()

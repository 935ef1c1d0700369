"""
Tests for the Scopus provider.
"""

import unittest
from unittest.mock import MagicMock, patch

import requests

from paperhome.core.config import ProviderConfig
from paperhome.core.models import CandidateSource, Query
from paperhome.providers import get_provider
from paperhome.providers.scopus import ScopusProvider, build_search_query, distinct_identifiers
from paperhome.utils.exceptions import (
    AuthenticationError,
    NetworkError,
    ProviderError,
    RateLimitError,
)

SERIAL_PAYLOAD = {
    "serial-metadata-response": {
        "entry": [
            {
                "dc:title": "Journal of Communication",
                "dc:publisher": "Oxford University Press",
                "source-id": "12345",
                "prism:issn": "00219916",
                "subject-area": [
                    {"@code": "3315", "@abbrev": "SOCI", "$": "Communication"},
                    {"@code": "3312", "@abbrev": "SOCI", "$": "Sociology and Political Science"},
                ],
                "citeScoreYearInfoList": {
                    "citeScoreCurrentMetric": "9.1",
                    "citeScoreCurrentMetricYear": "2023",
                },
                "SJRList": {"SJR": [{"@year": "2023", "$": "2.5"}]},
                "link": [
                    {"@ref": "self", "@href": "https://api.elsevier.com/content/serial/title/issn/00219916"},
                    {"@ref": "scopus-source", "@href": "https://www.scopus.com/source/sourceInfo.url?sourceId=12345"},
                ],
            }
        ]
    }
}


class TestSearchQuery(unittest.TestCase):
    def test_field_and_top_three_keywords(self):
        query = Query(field="Communication", keywords=["media", "film", "radio", "television"])
        self.assertEqual(
            build_search_query(query),
            'TITLE-ABS-KEY("Communication") AND TITLE-ABS-KEY("media" OR "film" OR "radio") '
            "AND SRCTYPE(j)",
        )

    def test_quotes_are_stripped(self):
        query = Query(field='"Law"', keywords=['"court"', '""'])
        self.assertEqual(
            build_search_query(query),
            'TITLE-ABS-KEY("Law") AND TITLE-ABS-KEY("court") AND SRCTYPE(j)',
        )

    def test_field_and_keyword_are_both_required(self):
        self.assertIsNone(build_search_query(Query(keywords=["media"])))
        self.assertIsNone(build_search_query(Query(field="Law")))
        self.assertIsNone(build_search_query(Query(field="Law", keywords=['""'])))
        self.assertIsNone(build_search_query(Query()))


class TestDistinctIdentifiers(unittest.TestCase):
    def test_first_occurrence_wins(self):
        self.assertEqual(distinct_identifiers(["B", "A", "B", " A ", "C"]), ["B", "A", "C"])

    def test_limit_counts_distinct_values(self):
        self.assertEqual(distinct_identifiers(["A", "A", "B", "C", "D"], limit=2), ["A", "B"])

    def test_blank_values_dropped(self):
        self.assertEqual(distinct_identifiers(["", "A", None]), ["A"])


class TestScopusProvider(unittest.TestCase):
    def setUp(self):
        self.config = ProviderConfig(api_key="secret", timeout=5)
        self.provider = ScopusProvider(self.config)

    def test_registry_lookup(self):
        self.assertIsInstance(get_provider("scopus", self.config), ScopusProvider)
        self.assertIsInstance(get_provider("Elsevier", self.config), ScopusProvider)
        with self.assertRaises(ValueError):
            get_provider("openalex", self.config)

    def test_configuration_requires_key(self):
        self.assertTrue(self.provider.is_configured)
        self.assertFalse(ScopusProvider(ProviderConfig()).is_configured)
        self.assertFalse(ScopusProvider(ProviderConfig(api_key="  ")).is_configured)
        self.assertFalse(ScopusProvider(ProviderConfig(api_key="x", enabled=False)).is_configured)

    def test_search_identifiers(self):
        self.provider._make_request = MagicMock(return_value={
            "search-results": {
                "opensearch:totalResults": "3",
                "entry": [
                    {"prism:issn": "00219916", "prism:publicationName": "Journal of Communication"},
                    {"prism:eIssn": "14602466"},
                    {"prism:publicationName": "No ISSN Proceedings"},
                    {"prism:issn": "00219916"},
                ],
            }
        })

        query = Query(field="Communication", keywords=["media"])
        identifiers = self.provider.search_identifiers(query, count=8)

        self.assertEqual(identifiers, ["00219916", "14602466", "00219916"])
        url = self.provider._make_request.call_args.args[0]
        params = self.provider._make_request.call_args.kwargs["params"]
        self.assertEqual(url, "https://api.elsevier.com/content/search/scopus")
        self.assertEqual(params["count"], 8)
        self.assertEqual(params["sort"], "relevancy")
        self.assertIn("SRCTYPE(j)", params["query"])

    def test_search_empty_result_set(self):
        # Scopus reports an empty result as a single error entry
        self.provider._make_request = MagicMock(return_value={
            "search-results": {"entry": [{"@_fa": "true", "error": "Result set was empty"}]}
        })
        self.assertEqual(self.provider.search_identifiers(Query(field="Law", keywords=["court"])), [])

    def test_search_skipped_without_field_or_keywords(self):
        self.provider._make_request = MagicMock()
        self.assertEqual(self.provider.search_identifiers(Query()), [])
        self.assertEqual(self.provider.search_identifiers(Query(keywords=["media"])), [])
        self.assertEqual(self.provider.search_identifiers(Query(field="Law")), [])
        self.provider._make_request.assert_not_called()

    def test_search_errors_propagate(self):
        self.provider._make_request = MagicMock(side_effect=NetworkError("scopus", "HTTP 503"))
        with self.assertRaises(ProviderError):
            self.provider.search_identifiers(Query(field="Law", keywords=["court"]))

    def test_fetch_detail(self):
        self.provider._make_request = MagicMock(return_value=SERIAL_PAYLOAD)

        journal = self.provider.fetch_detail("00219916")

        self.provider._make_request.assert_called_once_with(
            "https://api.elsevier.com/content/serial/title/issn/00219916"
        )
        self.assertEqual(journal.identifier, "00219916")
        self.assertEqual(journal.name, "Journal of Communication")
        self.assertEqual(journal.publisher, "Oxford University Press")
        self.assertEqual(journal.broad_field, "Communication")
        self.assertEqual(journal.scope, ["Communication", "Sociology and Political Science"])
        self.assertEqual(journal.source, CandidateSource.EXTERNAL)
        self.assertEqual(journal.secondary_metric, 9.1)
        self.assertEqual(journal.sjr, 2.5)
        self.assertEqual(journal.rank, "CiteScore: 9.1")
        self.assertEqual(journal.url, "https://www.scopus.com/source/sourceInfo.url?sourceId=12345")

    def test_fetch_detail_defaults(self):
        self.provider._make_request = MagicMock(return_value={
            "serial-metadata-response": {"entry": [{"dc:title": "Sparse Journal", "dc:publisher": None}]}
        })

        journal = self.provider.fetch_detail("12345678")

        self.assertEqual(journal.publisher, "Unknown")
        self.assertEqual(journal.scope, [])
        self.assertEqual(journal.broad_field, "")
        self.assertEqual(journal.secondary_metric, 0.0)
        self.assertEqual(journal.sjr, 0.0)
        self.assertEqual(journal.rank, "CiteScore: N/A")
        self.assertEqual(journal.url, "https://portal.issn.org/resource/ISSN/1234-5678")

    def test_fetch_detail_single_objects_and_source_id_link(self):
        self.provider._make_request = MagicMock(return_value={
            "serial-metadata-response": {
                "entry": {
                    "dc:title": "Solo Journal",
                    "source-id": 98765,
                    "subject-area": {"$": "Education"},
                    "SJRList": {"SJR": {"$": "not a number"}},
                    "link": {"@ref": "self", "@href": "https://api.example/self"},
                }
            }
        })

        journal = self.provider.fetch_detail("11112222")

        self.assertEqual(journal.scope, ["Education"])
        self.assertEqual(journal.sjr, 0.0)
        self.assertEqual(journal.url, "https://www.scopus.com/sourceid/98765")

    def test_fetch_detail_failures_return_none(self):
        failures = [
            NetworkError("scopus", "HTTP 404", status_code=404),
            AuthenticationError("scopus"),
            RuntimeError("boom"),
        ]
        for failure in failures:
            self.provider._make_request = MagicMock(side_effect=failure)
            self.assertIsNone(self.provider.fetch_detail("00000000"))

    def test_fetch_detail_unusable_payloads_return_none(self):
        payloads = [
            {},
            {"serial-metadata-response": {"entry": []}},
            {"serial-metadata-response": {"entry": [{"dc:publisher": "No Title Press"}]}},
        ]
        for payload in payloads:
            self.provider._make_request = MagicMock(return_value=payload)
            self.assertIsNone(self.provider.fetch_detail("00000000"))


class TestMakeRequest(unittest.TestCase):
    def setUp(self):
        self.provider = ScopusProvider(ProviderConfig(api_key="secret", timeout=5))

    def _response(self, status_code, payload=None, headers=None):
        response = MagicMock()
        response.status_code = status_code
        response.ok = status_code < 400
        response.headers = headers or {}
        response.json.return_value = payload if payload is not None else {}
        return response

    @patch("paperhome.providers.base.requests.get")
    def test_sends_key_and_timeout(self, mock_get):
        mock_get.return_value = self._response(200, {"ok": True})

        data = self.provider._make_request("https://example.org/x", params={"a": 1})

        self.assertEqual(data, {"ok": True})
        kwargs = mock_get.call_args.kwargs
        self.assertEqual(kwargs["headers"]["X-ELS-APIKey"], "secret")
        self.assertEqual(kwargs["headers"]["Accept"], "application/json")
        self.assertEqual(kwargs["timeout"], 5)
        self.assertEqual(kwargs["params"], {"a": 1})

    @patch("paperhome.providers.base.requests.get")
    def test_status_codes_map_to_errors(self, mock_get):
        cases = [
            (429, RateLimitError),
            (401, AuthenticationError),
            (403, AuthenticationError),
            (404, NetworkError),
            (500, NetworkError),
        ]
        for status, error in cases:
            mock_get.return_value = self._response(status, headers={"Retry-After": "30"})
            with self.assertRaises(error):
                self.provider._make_request("https://example.org/x")

    @patch("paperhome.providers.base.requests.get")
    def test_rate_limit_carries_retry_after(self, mock_get):
        mock_get.return_value = self._response(429, headers={"Retry-After": "30"})
        with self.assertRaises(RateLimitError) as ctx:
            self.provider._make_request("https://example.org/x")
        self.assertEqual(ctx.exception.retry_after, 30)

    @patch("paperhome.providers.base.requests.get")
    def test_transport_errors(self, mock_get):
        mock_get.side_effect = requests.exceptions.Timeout()
        with self.assertRaises(NetworkError):
            self.provider._make_request("https://example.org/x")

        mock_get.side_effect = requests.exceptions.ConnectionError("refused")
        with self.assertRaises(NetworkError):
            self.provider._make_request("https://example.org/x")

        mock_get.side_effect = requests.exceptions.TooManyRedirects()
        with self.assertRaises(ProviderError):
            self.provider._make_request("https://example.org/x")

    @patch("paperhome.providers.base.requests.get")
    def test_invalid_json(self, mock_get):
        response = self._response(200)
        response.json.side_effect = ValueError("Expecting value")
        mock_get.return_value = response
        with self.assertRaises(ProviderError):
            self.provider._make_request("https://example.org/x")

        mock_get.return_value = self._response(200, ["not", "an", "object"])
        with self.assertRaises(ProviderError):
            self.provider._make_request("https://example.org/x")


if __name__ == '__main__':
    unittest.main()

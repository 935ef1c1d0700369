"""
Tests for paper analysis.
"""

import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

import docx

from paperhome.analysis.client import LLMClient
from paperhome.analysis.engine import AnalysisEngine
from paperhome.analysis.models import PaperAnalysis
from paperhome.analysis.text import extract_text
from paperhome.core.config import LLMConfig
from paperhome.core.models import Query
from paperhome.utils.exceptions import AnalysisError, ConfigurationError


class TestPaperAnalysis(unittest.TestCase):
    def test_to_query(self):
        analysis = PaperAnalysis(
            field="Communication",
            keywords=["media literacy", " ", "youth "],
            summary="A study.",
        )
        self.assertEqual(
            analysis.to_query(), Query(field="Communication", keywords=["media literacy", "youth"])
        )


class TestExtractText(unittest.TestCase):
    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_plain_text(self):
        path = self.test_dir / "paper.txt"
        path.write_text("  Media literacy among students.  ", encoding="utf-8")
        self.assertEqual(extract_text(path), "Media literacy among students.")

    def test_truncation(self):
        path = self.test_dir / "paper.md"
        path.write_text("x" * 100, encoding="utf-8")
        self.assertEqual(len(extract_text(path, max_chars=10)), 10)

    def test_word_document(self):
        path = self.test_dir / "paper.docx"
        document = docx.Document()
        document.add_paragraph("Media literacy among students.")
        document.add_paragraph("Broadcasting in rural Indonesia.")
        document.save(str(path))

        text = extract_text(path)

        self.assertIn("Media literacy among students.", text)
        self.assertIn("Broadcasting in rural Indonesia.", text)

    def test_rejections(self):
        empty = self.test_dir / "empty.txt"
        empty.write_text("   ", encoding="utf-8")
        legacy_doc = self.test_dir / "paper.doc"
        legacy_doc.write_bytes(b"\xd0\xcf\x11\xe0")
        broken_docx = self.test_dir / "broken.docx"
        broken_docx.write_bytes(b"PK")
        broken_pdf = self.test_dir / "broken.pdf"
        broken_pdf.write_bytes(b"not a pdf")

        for path in (self.test_dir / "missing.txt", empty, legacy_doc, broken_docx, broken_pdf):
            with self.assertRaises(AnalysisError):
                extract_text(path)


class TestLLMClient(unittest.TestCase):
    def test_requires_key_without_injected_client(self):
        with self.assertRaises(ConfigurationError):
            LLMClient(LLMConfig())

    def test_parse_uses_structured_output(self):
        openai_client = MagicMock()
        expected = PaperAnalysis(field="Law", keywords=["court"])
        openai_client.beta.chat.completions.parse.return_value.choices = [
            MagicMock(message=MagicMock(parsed=expected))
        ]
        client = LLMClient(LLMConfig(model="test-model"), client=openai_client)

        result = client.parse("system", "user", PaperAnalysis)

        self.assertEqual(result, expected)
        kwargs = openai_client.beta.chat.completions.parse.call_args.kwargs
        self.assertEqual(kwargs["model"], "test-model")
        self.assertIs(kwargs["response_format"], PaperAnalysis)
        self.assertEqual(kwargs["messages"][1], {"role": "user", "content": "user"})


class TestAnalysisEngine(unittest.TestCase):
    def setUp(self):
        self.llm = MagicMock()
        self.engine = AnalysisEngine(LLMConfig(max_chars=50), client=self.llm)

    def test_analyze_text(self):
        expected = PaperAnalysis(field="Education", keywords=["e-learning"])
        self.llm.parse.return_value = expected

        self.assertEqual(self.engine.analyze_text("y" * 500), expected)

        system_prompt, user_prompt, model = self.llm.parse.call_args.args
        self.assertIs(model, PaperAnalysis)
        self.assertTrue(user_prompt.endswith("y" * 50))
        self.assertNotIn("y" * 51, user_prompt)

    def test_model_failure_returns_none(self):
        self.llm.parse.side_effect = RuntimeError("quota exceeded")
        with self.assertLogs("paperhome.analysis.engine", level="ERROR"):
            self.assertIsNone(self.engine.analyze_text("text"))

    def test_analyze_file(self):
        test_dir = Path(tempfile.mkdtemp())
        try:
            path = test_dir / "paper.txt"
            path.write_text("Court decisions in Indonesia", encoding="utf-8")
            self.llm.parse.return_value = PaperAnalysis(field="Law", keywords=["court"])

            self.assertEqual(self.engine.analyze_file(path).field, "Law")
            self.assertIn("Court decisions in Indonesia", self.llm.parse.call_args.args[1])
        finally:
            shutil.rmtree(test_dir)


if __name__ == '__main__':
    unittest.main()

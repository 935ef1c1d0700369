import logging
from pathlib import Path
from typing import Optional

from paperhome.analysis.client import LLMClient
from paperhome.analysis.models import PaperAnalysis
from paperhome.analysis.text import extract_text
from paperhome.core.config import LLMConfig

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """
You are an academic editor helping a researcher choose where to submit a paper.
Analyze the provided paper text and extract:
1. The broad research field (e.g., Computer Science, Education, Law).
2. Five primary keywords, most important first.
3. A short abstract-style summary if the paper does not state one clearly.

Keep keywords short noun phrases (e.g., "media literacy", not "the study of media literacy").
"""


class AnalysisEngine:
    def __init__(self, config: LLMConfig, client: Optional[LLMClient] = None):
        self.config = config
        self.client = client or LLMClient(config)

    def analyze_text(self, text: str) -> Optional[PaperAnalysis]:
        """
        Extract field, keywords and summary from paper text.
        """
        text = text[: self.config.max_chars]
        try:
            return self.client.parse(SYSTEM_PROMPT, f"Analyze this paper:\n\n{text}", PaperAnalysis)
        except Exception as e:
            logger.error(f"Analysis failed: {e}")
            return None

    def analyze_file(self, path: Path) -> Optional[PaperAnalysis]:
        """Extract text from a paper file and analyze it.

        Raises:
            AnalysisError: If the text cannot be extracted
        """
        text = extract_text(path, max_chars=self.config.max_chars)
        return self.analyze_text(text)

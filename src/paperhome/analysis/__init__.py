"""Paper analysis: text extraction and field/keyword extraction."""

from .engine import AnalysisEngine
from .models import PaperAnalysis
from .text import extract_text

__all__ = ["AnalysisEngine", "PaperAnalysis", "extract_text"]

"""
Paper text extraction.

PDFs are read with PyMuPDF, Word documents (.docx) with python-docx,
and plain text and markdown are decoded as UTF-8. Anything else,
including legacy binary .doc files, is rejected.
"""

import logging
from pathlib import Path

import docx
import pymupdf

from paperhome.utils.exceptions import AnalysisError

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = {".txt", ".md", ".markdown", ".text"}


def extract_text(path: Path, max_chars: int = 30000) -> str:
    """Extract the text of a paper, truncated to ``max_chars``.

    Raises:
        AnalysisError: If the file is missing, unsupported or unreadable
    """
    path = Path(path)
    if not path.exists():
        raise AnalysisError(f"File not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".pdf":
        text = _read_pdf(path)
    elif suffix == ".docx":
        text = _read_docx(path)
    elif suffix in TEXT_SUFFIXES:
        text = path.read_text(encoding="utf-8", errors="replace")
    else:
        raise AnalysisError(f"Unsupported document type: {suffix or 'unknown'}", path=str(path))

    text = text.strip()
    if not text:
        raise AnalysisError("No text could be extracted", path=str(path))

    if len(text) > max_chars:
        logger.debug(f"Truncating {path.name} from {len(text)} to {max_chars} chars")
        text = text[:max_chars]
    return text


def _read_pdf(path: Path) -> str:
    try:
        with pymupdf.open(str(path)) as doc:
            return "\n".join(page.get_text() for page in doc)
    except Exception as e:
        raise AnalysisError(f"Failed to parse PDF: {e}", path=str(path)) from e


def _read_docx(path: Path) -> str:
    try:
        document = docx.Document(str(path))
    except Exception as e:
        raise AnalysisError(f"Failed to parse Word document: {e}", path=str(path)) from e
    return "\n".join(paragraph.text for paragraph in document.paragraphs)

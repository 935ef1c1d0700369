"""
Local curated journal directory.

The national candidate pool comes from a curated YAML list of journals
(SINTA-accredited Indonesian journals ship with the package). The list
is parsed once when the directory is built and never modified
afterwards; lookups only read it.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml
from pydantic import ValidationError
from rapidfuzz import fuzz

from paperhome.core.config import DirectoryConfig
from paperhome.core.models import Candidate, CandidateSource
from paperhome.scoring.boost import fields_overlap
from paperhome.utils.exceptions import DirectoryError

logger = logging.getLogger(__name__)

DEFAULT_DIRECTORY_PATH = Path(__file__).resolve().parent.parent / "data" / "national_journals.yml"


class BaseDirectory(ABC):
    """Interface for a source of national journal candidates."""

    @abstractmethod
    def lookup(self, field: str) -> List[Candidate]:
        """Return the raw candidates for a research field.

        An unknown field yields an empty list, never an error.
        """


class LocalDirectory(BaseDirectory):
    """Curated directory backed by an in-memory list of journals.

    Example:
        >>> directory = LocalDirectory.from_file()
        >>> [j.name for j in directory.lookup("Law")][:1]
        ['Indonesia Law Review']
    """

    def __init__(self, journals: Iterable[Candidate], fuzzy_threshold: int = 85):
        self._journals: Tuple[Candidate, ...] = tuple(journals)
        self.fuzzy_threshold = fuzzy_threshold

        identifiers = [j.identifier for j in self._journals]
        if len(identifiers) != len(set(identifiers)):
            raise DirectoryError("Duplicate journal identifiers in directory")

    @classmethod
    def from_file(
        cls, path: Optional[Path] = None, fuzzy_threshold: int = 85
    ) -> "LocalDirectory":
        """Load a directory from a YAML file.

        Args:
            path: Directory file; the bundled SINTA list when None
            fuzzy_threshold: Minimum rapidfuzz score for a fuzzy field match

        Raises:
            DirectoryError: If the file is missing or malformed
        """
        path = Path(path) if path else DEFAULT_DIRECTORY_PATH

        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except OSError as e:
            raise DirectoryError(f"Cannot read directory file: {e}", path=str(path)) from e
        except yaml.YAMLError as e:
            raise DirectoryError(f"Invalid directory YAML: {e}", path=str(path)) from e

        entries = raw.get("journals") if isinstance(raw, dict) else None
        if not isinstance(entries, list):
            raise DirectoryError("Directory file must contain a 'journals' list", path=str(path))

        journals = []
        for index, entry in enumerate(entries):
            try:
                journals.append(_entry_to_candidate(entry))
            except (ValidationError, TypeError, KeyError) as e:
                raise DirectoryError(
                    f"Invalid journal entry #{index}: {e}", path=str(path)
                ) from e

        logger.info(f"Loaded {len(journals)} journals from {path}")
        return cls(journals, fuzzy_threshold=fuzzy_threshold)

    @classmethod
    def from_config(cls, config: DirectoryConfig) -> "LocalDirectory":
        return cls.from_file(config.path, fuzzy_threshold=config.fuzzy_threshold)

    @property
    def journals(self) -> Tuple[Candidate, ...]:
        return self._journals

    def lookup(self, field: str) -> List[Candidate]:
        """Find journals whose broad field matches the research field.

        Substring matches come first, then fuzzy matches; each group keeps
        file order. An empty field returns the whole directory.
        """
        field = (field or "").strip()
        if not field:
            return list(self._journals)

        direct: List[Candidate] = []
        fuzzy: List[Candidate] = []
        for journal in self._journals:
            if journal.broad_field and fields_overlap(journal.broad_field, field):
                direct.append(journal)
            elif self._is_fuzzy_match(journal.broad_field, field):
                fuzzy.append(journal)

        logger.debug(
            f"Directory lookup '{field}': {len(direct)} direct, {len(fuzzy)} fuzzy matches"
        )
        return direct + fuzzy

    def _is_fuzzy_match(self, broad_field: str, field: str) -> bool:
        if not broad_field:
            return False
        ratio = fuzz.token_set_ratio(broad_field.lower(), field.lower())
        if ratio >= self.fuzzy_threshold:
            logger.debug(f"Fuzzy field match: '{field}' -> '{broad_field}' ({ratio:.0f}%)")
            return True
        return False

    def __len__(self) -> int:
        return len(self._journals)


def _entry_to_candidate(entry: Dict[str, Any]) -> Candidate:
    """Map one curated YAML entry onto a Candidate."""
    return Candidate(
        identifier=str(entry["id"]),
        name=entry["name"],
        publisher=entry.get("publisher") or "Unknown",
        broad_field=entry.get("broad_field") or "",
        scope=entry.get("specific_focus"),
        source=CandidateSource.LOCAL,
        issn=entry.get("issn"),
        rank=entry.get("rank") or "N/A",
        url=entry.get("url"),
        avg_processing_time=entry.get("avg_processing_time") or "Varies",
    )
